#
# PROJECT: chainrule-surface-renderer
# MODULE: chainrule_renderer/demo.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import curses
import logging
import math

from .canvas import TerminalCanvas
from .cli import apply_args
from .config import RenderConfig
from .surfaces import surface_keys
from .terminal import ColorPairs, blit
from .view import ChainRuleView

logger = logging.getLogger(__name__)

KEY_ROTATE_STEP = 10      # pixels of simulated drag per arrow key
KEY_ZOOM_STEP = 50        # wheel units per +/- key
POINT_STEP = 0.1
DIRECTION_STEP = math.pi / 12
MAGNITUDE_STEP = 0.1

HELP = (" arrows:orbit  +/-:zoom  wasd:point  [ ]:direction  , .:magnitude"
        "  n/1-4:surface  g c t v:toggles  b:braille  q:quit ")

# Screen rows above the canvas (the HUD line)
CANVAS_TOP = 1


def cell_to_pixel(col: int, row: int, top: int = CANVAS_TOP):
    """Canvas pixel at the centre of screen cell (col, row)."""
    return col * 2 + 1, (row - top) * 4 + 2


class DemoApp:
    """
    Interactive terminal viewer for the chain-rule surface scene.

    Event driven: the screen is redrawn only after an input event changes
    something.  Mouse clicks pick the evaluation point, the wheel zooms.
    """

    def __init__(self, stdscr, args, config: RenderConfig = None):
        self.stdscr = stdscr
        self.running = True

        # ── Curses setup ────────────────────────────────────────────────
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        stdscr.keypad(True)
        curses.mousemask(curses.ALL_MOUSE_EVENTS)

        self.config = config if config is not None else RenderConfig.detect_terminal()
        self.pairs = ColorPairs(self.config.use_color)
        self.pairs.init()

        self.canvas = None
        self.view = ChainRuleView(config=self.config)
        if args is not None:
            apply_args(self.view, args)
        self.resize()

    def resize(self):
        """Rebuild the canvas for the current terminal size."""
        th, tw = self.stdscr.getmaxyx()
        cols = max(1, tw - 1)
        rows = max(1, th - 2)
        self.canvas = TerminalCanvas.for_terminal(cols, rows, self.config.palette.background)
        self.view.resize(self.canvas.w, self.canvas.h)
        self.view.surface = self.canvas
        logger.debug("canvas %dx%d px for %dx%d cells", self.canvas.w, self.canvas.h, cols, rows)

    # ────────────────────────────────────────────────────────────────────
    # Input
    # ────────────────────────────────────────────────────────────────────
    def handle_key(self, key):
        view = self.view
        keys = surface_keys()

        if key == ord('q'):
            self.running = False
        elif key == curses.KEY_RESIZE:
            self.resize()
        elif key == curses.KEY_MOUSE:
            self.handle_mouse()
        elif key == curses.KEY_UP:
            view.rotate_by(0, KEY_ROTATE_STEP)
        elif key == curses.KEY_DOWN:
            view.rotate_by(0, -KEY_ROTATE_STEP)
        elif key == curses.KEY_RIGHT:
            view.rotate_by(KEY_ROTATE_STEP, 0)
        elif key == curses.KEY_LEFT:
            view.rotate_by(-KEY_ROTATE_STEP, 0)
        elif key in (ord('='), ord('+')):
            view.zoom_by(-KEY_ZOOM_STEP)
        elif key == ord('-'):
            view.zoom_by(KEY_ZOOM_STEP)
        elif key == ord('w'):
            view.set_point(view.point_x, view.point_y + POINT_STEP)
        elif key == ord('s'):
            view.set_point(view.point_x, view.point_y - POINT_STEP)
        elif key == ord('d'):
            view.set_point(view.point_x + POINT_STEP, view.point_y)
        elif key == ord('a'):
            view.set_point(view.point_x - POINT_STEP, view.point_y)
        elif key == ord('['):
            view.set_direction(view.direction_angle - DIRECTION_STEP, view.magnitude)
        elif key == ord(']'):
            view.set_direction(view.direction_angle + DIRECTION_STEP, view.magnitude)
        elif key == ord(','):
            view.set_direction(view.direction_angle, max(0.0, view.magnitude - MAGNITUDE_STEP))
        elif key == ord('.'):
            view.set_direction(view.direction_angle, view.magnitude + MAGNITUDE_STEP)
        elif key == ord('n'):
            idx = keys.index(view.current_function) if view.current_function in keys else -1
            view.set_function(keys[(idx + 1) % len(keys)])
        elif ord('1') <= key < ord('1') + len(keys):
            view.set_function(keys[key - ord('1')])
        elif key == ord('g'):
            view.toggle_grid()
        elif key == ord('c'):
            view.toggle_curve()
        elif key == ord('t'):
            view.toggle_tangent_plane()
        elif key == ord('v'):
            view.toggle_vectors()
        elif key == ord('b'):
            self.config.use_braille = not self.config.use_braille

    def handle_mouse(self):
        try:
            _id, mx, my, _z, bstate = curses.getmouse()
        except curses.error:
            return
        wheel_up = getattr(curses, 'BUTTON4_PRESSED', 0)
        wheel_down = getattr(curses, 'BUTTON5_PRESSED', 0)
        if bstate & wheel_up:
            self.view.zoom_by(-KEY_ZOOM_STEP)
        elif wheel_down and bstate & wheel_down:
            self.view.zoom_by(KEY_ZOOM_STEP)
        elif bstate & (curses.BUTTON1_CLICKED | curses.BUTTON1_PRESSED):
            picked = self.view.pick(*cell_to_pixel(mx, my))
            logger.debug("pick at cell (%d, %d) -> %s", mx, my, picked)

    # ────────────────────────────────────────────────────────────────────
    # Drawing
    # ────────────────────────────────────────────────────────────────────
    def draw(self):
        stdscr = self.stdscr
        self.view.render()

        stdscr.erase()
        blit(stdscr, self.canvas, self.pairs, self.config.use_braille, CANVAS_TOP)

        th, tw = stdscr.getmaxyx()
        v = self.view.chain_rule_values()
        hdr = (f" {self.view.field.display_name}"
               f" | p=({v.x:.2f}, {v.y:.2f}) z={v.z:.3f}"
               f" | dz/dx={v.dzdx:.3f} dz/dy={v.dzdy:.3f}"
               f" | dx/dt={v.dxdt:.3f} dy/dt={v.dydt:.3f}"
               f" | dz/dt={v.dzdt:.3f} ")
        try:
            stdscr.addstr(0, 0, hdr.center(tw - 1, '=')[:tw - 1],
                          curses.color_pair(0) | curses.A_BOLD)
            stdscr.addstr(th - 1, 0, HELP[:tw - 1], curses.color_pair(0))
        except curses.error:
            pass

        stdscr.refresh()

    def run(self):
        self.draw()
        while self.running:
            key = self.stdscr.getch()
            if key == -1:
                continue
            self.handle_key(key)
            if self.running:
                self.draw()


def main(stdscr, args, config: RenderConfig = None):
    """Entry point called from curses.wrapper."""
    app = DemoApp(stdscr, args, config)
    app.run()
