#
# PROJECT: chainrule-surface-renderer
# MODULE: chainrule_renderer/__main__.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import sys

from .cli import main

sys.exit(main())
