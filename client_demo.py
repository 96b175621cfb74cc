#!/usr/bin/env python3
#
# PROJECT: chainrule-surface-renderer
# MODULE: client_demo.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import sys
import os

# Ensure local package is importable when run from a checkout
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from chainrule_renderer.cli import main


if __name__ == "__main__":
    sys.exit(main())
