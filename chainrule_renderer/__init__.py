#
# PROJECT: chainrule-surface-renderer
# MODULE: chainrule_renderer/__init__.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

from .math_utils import Vec3
from .config import RenderConfig, Palette
from .color import Color, parse_hex_color
from .camera import Camera, CameraState
from .projection import Point2D, Projection
from .surfaces import ScalarField, SURFACES, get_surface
from .mesh import SurfaceMesh, Triangle
from .rasterizer import light_intensity, depth_sort, shade_triangles
from .annotations import arrow_commands
from .scene import Scene, Style
from .canvas import DrawingSurface, RecordingSurface, TerminalCanvas
from .renderer import FrameState, Renderer, render_frame
from .view import ChainRuleView
