#
# PROJECT: chainrule-surface-renderer
# MODULE: chainrule_renderer/canvas.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import math

from .color import BLACK, Color


class DrawingSurface:
    """
    Minimal immediate-mode 2D drawing contract.

    Paths are built with begin_path/move_to/line_to/close_path and consumed
    by fill() or stroke().  Coordinates are screen pixels, Y down.
    """

    def clear(self):
        raise NotImplementedError

    def begin_path(self):
        raise NotImplementedError

    def move_to(self, x: float, y: float):
        raise NotImplementedError

    def line_to(self, x: float, y: float):
        raise NotImplementedError

    def close_path(self):
        raise NotImplementedError

    def fill(self, color: Color):
        raise NotImplementedError

    def stroke(self, color: Color, width: float = 1.0):
        raise NotImplementedError

    def set_dash(self, pattern):
        raise NotImplementedError

    def fill_circle(self, x: float, y: float, radius: float, color: Color):
        raise NotImplementedError

    def stroke_circle(self, x: float, y: float, radius: float, color: Color,
                      width: float = 1.0):
        raise NotImplementedError

    def draw_text(self, x: float, y: float, text: str, color: Color):
        raise NotImplementedError


class RecordingSurface(DrawingSurface):
    """Records every call as (method, args); replay() re-issues them."""

    def __init__(self):
        self.calls = []

    def _record(self, name, *args):
        self.calls.append((name, args))

    def clear(self):
        self._record('clear')

    def begin_path(self):
        self._record('begin_path')

    def move_to(self, x, y):
        self._record('move_to', x, y)

    def line_to(self, x, y):
        self._record('line_to', x, y)

    def close_path(self):
        self._record('close_path')

    def fill(self, color):
        self._record('fill', color)

    def stroke(self, color, width=1.0):
        self._record('stroke', color, width)

    def set_dash(self, pattern):
        self._record('set_dash', tuple(pattern))

    def fill_circle(self, x, y, radius, color):
        self._record('fill_circle', x, y, radius, color)

    def stroke_circle(self, x, y, radius, color, width=1.0):
        self._record('stroke_circle', x, y, radius, color, width)

    def draw_text(self, x, y, text, color):
        self._record('draw_text', x, y, text, color)

    def names(self):
        return [name for name, _ in self.calls]

    def replay(self, surface: DrawingSurface):
        for name, args in self.calls:
            getattr(surface, name)(*args)


# ─── Terminal cell canvas ───────────────────────────────────────────────

def _clip_segment(x1, y1, x2, y2, w, h):
    """Liang-Barsky clip to [0, w) x [0, h). Returns None when outside."""
    dx = x2 - x1
    dy = y2 - y1
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, x1), (dx, (w - 1) - x1), (-dy, y1), (dy, (h - 1) - y1)):
        if p == 0:
            if q < 0:
                return None
            continue
        r = q / p
        if p < 0:
            if r > t1: return None
            if r > t0: t0 = r
        else:
            if r < t0: return None
            if r < t1: t1 = r
    return (x1 + t0 * dx, y1 + t0 * dy, x1 + t1 * dx, y1 + t1 * dy)


def draw_line_dda(canvas, p1, p2, color: Color, dash=()):
    """
    Draws a line with the DDA algorithm onto a TerminalCanvas.
    dash is an on/off pattern in pixels; empty means solid.
    """
    x1, y1 = p1
    x2, y2 = p2
    if not all(math.isfinite(v) for v in (x1, y1, x2, y2)):
        return
    clipped = _clip_segment(x1, y1, x2, y2, canvas.w, canvas.h)
    if clipped is None:
        return
    x1, y1, x2, y2 = (int(round(v)) for v in clipped)

    dx = x2 - x1
    dy = y2 - y1
    step = max(abs(dx), abs(dy))
    if step == 0:
        canvas.set_pixel(x1, y1, color)
        return

    x_inc = dx / step
    y_inc = dy / step
    period = sum(dash) if dash else 0.0
    seg_len = math.hypot(x_inc, y_inc)

    cx, cy = float(x1), float(y1)
    travelled = 0.0
    for _ in range(step + 1):
        if not period or _dash_on(dash, travelled % period):
            canvas.set_pixel(int(cx), int(cy), color)
        cx += x_inc; cy += y_inc
        travelled += seg_len


def _dash_on(dash, offset):
    on = True
    for length in dash:
        if offset < length:
            return on
        offset -= length
        on = not on
    return on


def fill_polygon(canvas, subpaths, color: Color):
    """Even-odd scanline fill of one or more closed subpaths."""
    edges = []
    for pts in subpaths:
        if len(pts) < 3:
            continue
        for i in range(len(pts)):
            a = pts[i]
            b = pts[(i + 1) % len(pts)]
            if not all(math.isfinite(v) for v in (a[0], a[1], b[0], b[1])):
                return
            if a[1] != b[1]:
                edges.append((a[0], a[1], b[0], b[1]))
    if not edges:
        return

    y_min = max(0, int(math.floor(min(min(e[1], e[3]) for e in edges))))
    y_max = min(canvas.h - 1, int(math.ceil(max(max(e[1], e[3]) for e in edges))))

    covered = set()
    for y in range(y_min, y_max + 1):
        yc = y + 0.5
        xs = []
        for x0, y0, x1, y1 in edges:
            if (y0 <= yc < y1) or (y1 <= yc < y0):
                xs.append(x0 + (yc - y0) * (x1 - x0) / (y1 - y0))
        xs.sort()
        for k in range(0, len(xs) - 1, 2):
            start = max(0, int(math.ceil(xs[k] - 0.5)))
            end = min(canvas.w - 1, int(math.floor(xs[k + 1] - 0.5)))
            for x in range(start, end + 1):
                covered.add((x, y))
    canvas.fill_pixels(covered, color)


class TerminalCanvas(DrawingSurface):
    """
    Drawing surface backed by a grid of 2x4-pixel terminal cells.

    Strokes set individual dots (one Braille dot per pixel) in the stroke
    colour; fills clear the dots they cover and tint the cell background.
    Later operations overwrite earlier ones, matching painter's order.
    Colours with alpha are composited onto the current cell background.
    """

    # Braille dot mapping for 2x4 grid
    #  1 4
    #  2 5
    #  3 6
    #  7 8
    BRAILLE_REMAP = [0x01, 0x02, 0x04, 0x40, 0x08, 0x10, 0x20, 0x80]

    def __init__(self, w: int, h: int, background: Color = BLACK):
        self.w, self.h = int(w), int(h)
        self.background = background
        self._path = []
        self._dash = ()
        self.clear()

    @classmethod
    def for_terminal(cls, cols: int, rows: int, background: Color = BLACK):
        """Canvas whose pixel size exactly covers cols x rows cells."""
        return cls(cols * 2, rows * 4, background)

    @property
    def cols(self):
        return self.w // 2 + 1

    @property
    def rows(self):
        return self.h // 4 + 1

    def clear(self):
        # Grid stores 8-bit dot masks for 2x4 cells
        self.grid = [[0] * self.cols for _ in range(self.rows)]
        # Foreground (dot) colour per cell
        self.c_grid = [[None] * self.cols for _ in range(self.rows)]
        # Background colour per cell
        self.bg_grid = [[self.background] * self.cols for _ in range(self.rows)]
        self.labels = []

    # ── pixel access ─────────────────────────────────────────────────
    def set_pixel(self, x: int, y: int, color: Color):
        if x < 0 or x >= self.w or y < 0 or y >= self.h: return
        cx, cy = x >> 1, y >> 2
        # Bit index 0-7: 0,1,2,3 for left col; 4,5,6,7 for right col
        self.grid[cy][cx] |= (1 << ((y & 3) + (x & 1) * 4))
        self.c_grid[cy][cx] = color.blend_over(self.bg_grid[cy][cx])

    def fill_pixels(self, pixels, color: Color):
        """Cover pixels; each touched cell is tinted once."""
        cells = set()
        for x, y in pixels:
            if x < 0 or x >= self.w or y < 0 or y >= self.h:
                continue
            cx, cy = x >> 1, y >> 2
            self.grid[cy][cx] &= ~(1 << ((y & 3) + (x & 1) * 4))
            cells.add((cx, cy))
        for cx, cy in cells:
            self.bg_grid[cy][cx] = color.blend_over(self.bg_grid[cy][cx])

    # ── path API ─────────────────────────────────────────────────────
    def begin_path(self):
        self._path = []

    def move_to(self, x, y):
        self._path.append([(x, y)])

    def line_to(self, x, y):
        if not self._path:
            self.move_to(x, y)
        else:
            self._path[-1].append((x, y))

    def close_path(self):
        if self._path and len(self._path[-1]) > 1:
            self._path[-1].append(self._path[-1][0])

    def fill(self, color):
        fill_polygon(self, self._path, color)

    def stroke(self, color, width=1.0):
        for pts in self._path:
            for a, b in zip(pts, pts[1:]):
                draw_line_dda(self, a, b, color, self._dash)

    def set_dash(self, pattern):
        self._dash = tuple(pattern)

    def _circle_points(self, x, y, radius, segments=16):
        return [(x + radius * math.cos(2 * math.pi * k / segments),
                 y + radius * math.sin(2 * math.pi * k / segments))
                for k in range(segments)]

    def fill_circle(self, x, y, radius, color):
        # Markers are drawn as dots so they stay visible over fills
        if not all(math.isfinite(v) for v in (x, y, radius)):
            return
        r = max(radius, 0.5)
        y0 = max(0, int(math.floor(y - r)))
        y1 = min(self.h - 1, int(math.ceil(y + r)))
        x0 = max(0, int(math.floor(x - r)))
        x1 = min(self.w - 1, int(math.ceil(x + r)))
        for py in range(y0, y1 + 1):
            for px in range(x0, x1 + 1):
                if (px + 0.5 - x) ** 2 + (py + 0.5 - y) ** 2 <= r * r:
                    self.set_pixel(px, py, color)

    def stroke_circle(self, x, y, radius, color, width=1.0):
        pts = self._circle_points(x, y, radius)
        for a, b in zip(pts, pts[1:] + pts[:1]):
            draw_line_dda(self, a, b, color)

    def draw_text(self, x, y, text, color):
        self.labels.append((int(y) >> 2, int(x) >> 1, text, color))

    # ── cell output ──────────────────────────────────────────────────
    def cells(self, use_braille: bool = True):
        """Yield (row, col, char, fg, bg) for every cell that differs from blank."""
        render = render_cell_braille if use_braille else render_cell_ascii
        for cy, row in enumerate(self.grid):
            for cx, mask in enumerate(row):
                bg = self.bg_grid[cy][cx]
                if mask or bg != self.background:
                    yield cy, cx, render(mask), self.c_grid[cy][cx], bg


def render_cell_ascii(mask: int) -> str:
    """
    Renders a 2x4 cell mask as an ASCII character based on pixel density.
    Used when Braille is unavailable.
    """
    if not mask:
        return ' '
    density = bin(mask).count('1')
    chars = " .:-=+*#%@"
    return chars[density] if density < len(chars) else '@'


def render_cell_braille(mask: int) -> str:
    """Renders a 2x4 cell mask as a Unicode Braille character."""
    if not mask:
        return ' '
    b = sum(TerminalCanvas.BRAILLE_REMAP[i] for i in range(8) if mask & (1 << i))
    return chr(0x2800 + b)
