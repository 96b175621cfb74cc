#
# PROJECT: chainrule-surface-renderer
# MODULE: chainrule_renderer/cli.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import argparse
import logging
import math
import sys
from dataclasses import replace

from .color import parse_hex_color
from .config import RenderConfig
from .surfaces import DEFAULT_SURFACE, surface_keys
from .view import ChainRuleView

logger = logging.getLogger(__name__)


def build_parser():
    epilog = """\
examples:
  %(prog)s                                        Interactive paraboloid in the terminal
  %(prog)s --surface saddle --point 1 0.5         Start on the saddle at (1, 0.5)
  %(prog)s --surface waves --direction 0.785      Walk diagonally across sin(x)cos(y)
  %(prog)s --png frame.png                        Render one frame to a PNG and exit
  %(prog)s --png hill.png --surface hill --yaw 0 --pitch 0.6 --no-grid
  %(prog)s --ascii --no-color                     Plain ASCII, monochrome terminal
"""
    parser = argparse.ArgumentParser(
        description="Multivariable chain rule surface viewer",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("--surface", choices=surface_keys(), default=DEFAULT_SURFACE,
                        help=f"Surface to show (default: {DEFAULT_SURFACE})")
    parser.add_argument("--point", type=float, nargs=2, metavar=("X", "Y"),
                        default=(0.0, 0.0), help="Evaluation point (default: 0 0)")
    parser.add_argument("--direction", type=float, default=math.pi / 2,
                        help="Direction of travel in radians (default: pi/2)")
    parser.add_argument("--magnitude", type=float, default=1.0,
                        help="Speed along the direction (default: 1.0)")
    parser.add_argument("--t", type=float, default=math.pi / 4, dest="t_param",
                        help="Curve parameter at the point (default: pi/4)")
    parser.add_argument("--yaw", type=float, default=None,
                        help="Initial camera yaw in radians (default: 0.8)")
    parser.add_argument("--pitch", type=float, default=None,
                        help="Initial camera pitch in radians, clamped to +/-pi/2 (default: 0.3)")
    parser.add_argument("--distance", type=float, default=None,
                        help="Initial camera distance, clamped to [3, 15] (default: 8)")
    parser.add_argument("--resolution", type=int, default=25,
                        help="Surface grid cells per side (default: 25)")
    parser.add_argument("--no-grid", action="store_true", help="Hide the xy-plane grid")
    parser.add_argument("--no-curve", action="store_true", help="Hide the curve")
    parser.add_argument("--no-tangent-plane", action="store_true",
                        help="Hide the tangent plane")
    parser.add_argument("--no-vectors", action="store_true",
                        help="Hide the derivative vectors")
    parser.add_argument("--bg-color", default="#1A1A2E",
                        help="Background color in hex #RRGGBB (default: #1A1A2E)")
    parser.add_argument("--png", metavar="PATH",
                        help="Render a single frame with matplotlib to PATH and exit")
    parser.add_argument("--width", type=int, default=900,
                        help="Image width in pixels for --png (default: 900)")
    parser.add_argument("--height", type=int, default=700,
                        help="Image height in pixels for --png (default: 700)")
    parser.add_argument("--no-color", action="store_true",
                        help="Disable color output in the terminal")
    parser.add_argument("--ascii", action="store_true",
                        help="Use ASCII characters instead of Braille")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level (default: WARNING)")
    parser.add_argument("--log-file",
                        help="Write log records to this file (stderr is hidden while the viewer runs)")
    return parser


def parse_args(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    args.bg_rgb = parse_hex_color(args.bg_color)
    if args.bg_rgb is None:
        parser.error(f"invalid --bg-color {args.bg_color!r}, expected #RRGGBB")
    if args.resolution < 1:
        parser.error("--resolution must be at least 1")
    if args.width <= 0 or args.height <= 0:
        parser.error("--width and --height must be positive")
    return args


def config_from_args(args, base: RenderConfig = None) -> RenderConfig:
    """Apply CLI overrides to a base config (terminal detection by default)."""
    config = base if base is not None else RenderConfig.detect_terminal()
    overrides = {
        'mesh_resolution': args.resolution,
        'palette': replace(config.palette, background=args.bg_rgb),
    }
    if args.yaw is not None:
        overrides['initial_yaw'] = args.yaw
    if args.pitch is not None:
        overrides['initial_pitch'] = args.pitch
    if args.distance is not None:
        overrides['initial_distance'] = args.distance
    if args.no_color:
        overrides['use_color'] = False
    if args.ascii:
        overrides['use_braille'] = False
    return replace(config, **overrides)


def apply_args(view: ChainRuleView, args):
    """Copy the scene settings from parsed arguments onto a view."""
    view.set_function(args.surface)
    view.set_point(*args.point)
    view.set_direction(args.direction, args.magnitude)
    view.set_t(args.t_param)
    if args.no_grid:
        view.toggle_grid()
    if args.no_curve:
        view.toggle_curve()
    if args.no_tangent_plane:
        view.toggle_tangent_plane()
    if args.no_vectors:
        view.toggle_vectors()


def configure_logging(level: str, log_file=None, interactive=False):
    """
    Route log records to log_file, or to stderr for one-shot runs.

    While the curses viewer owns the terminal, stderr writes would land on
    the screen, so an interactive run without a log file gets no output.
    """
    if log_file:
        handler = logging.FileHandler(log_file)
    elif interactive:
        handler = logging.NullHandler()
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(getattr(logging, level))


def render_png(args, config: RenderConfig):
    """Render one frame through matplotlib and save it."""
    from .mpl_surface import MatplotlibSurface

    config = config.for_viewport(args.width, args.height)
    surface = MatplotlibSurface(args.width, args.height, config.palette.background)
    view = ChainRuleView(surface, config)
    apply_args(view, args)
    view.render()
    surface.save(args.png)
    return view


def main(argv=None):
    args = parse_args(argv)
    configure_logging(args.log_level, args.log_file, interactive=not args.png)
    config = config_from_args(args)

    if args.png:
        render_png(args, config)
        return 0

    import curses
    from .demo import main as demo_main

    try:
        curses.wrapper(lambda s: demo_main(s, args, config))
    except KeyboardInterrupt:
        pass
    except Exception:
        # curses.wrapper has already restored the terminal
        logger.exception("viewer crashed")
        raise
    return 0
