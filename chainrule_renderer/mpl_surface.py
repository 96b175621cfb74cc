#
# PROJECT: chainrule-surface-renderer
# MODULE: chainrule_renderer/mpl_surface.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import logging

from matplotlib.figure import Figure
from matplotlib.patches import Circle, PathPatch
from matplotlib.path import Path

from .canvas import DrawingSurface
from .color import BLACK, Color

logger = logging.getLogger(__name__)


class MatplotlibSurface(DrawingSurface):
    """
    Drawing surface backed by an off-screen matplotlib figure.

    The axes span exactly [0, width] x [0, height] pixels with Y pointing
    down, so command coordinates map 1:1.  Every operation gets a higher
    zorder than the previous one to keep painter's order.
    """

    def __init__(self, width: int, height: int, background: Color = BLACK, dpi: int = 100):
        self.width = int(width)
        self.height = int(height)
        self.background = background
        self.dpi = dpi
        self.fig = Figure(figsize=(self.width / dpi, self.height / dpi), dpi=dpi,
                          facecolor=background.to_mpl())
        self.ax = self.fig.add_axes([0, 0, 1, 1])
        self._verts = []
        self._codes = []
        self._dash = ()
        self._z = 0
        self._setup_axes()

    def _setup_axes(self):
        ax = self.ax
        ax.set_xlim(0, self.width)
        ax.set_ylim(self.height, 0)
        ax.set_facecolor(self.background.to_mpl())
        ax.set_axis_off()

    def _next_z(self):
        self._z += 1
        return self._z

    def _points(self, px: float) -> float:
        """Pixel length -> points at this figure's dpi."""
        return px * 72.0 / self.dpi

    def clear(self):
        self.ax.cla()
        self._setup_axes()
        self._z = 0

    def begin_path(self):
        self._verts = []
        self._codes = []

    def move_to(self, x, y):
        self._verts.append((x, y))
        self._codes.append(Path.MOVETO)

    def line_to(self, x, y):
        if not self._codes:
            self.move_to(x, y)
            return
        self._verts.append((x, y))
        self._codes.append(Path.LINETO)

    def close_path(self):
        if self._codes:
            self._verts.append(self._verts[-1])
            self._codes.append(Path.CLOSEPOLY)

    def _path(self):
        return Path(self._verts, self._codes)

    def fill(self, color):
        if not self._codes:
            return
        self.ax.add_patch(PathPatch(self._path(), facecolor=color.to_mpl(),
                                    edgecolor='none', zorder=self._next_z()))

    def stroke(self, color, width=1.0):
        if not self._codes:
            return
        lw = self._points(width)
        kwargs = {}
        if self._dash:
            # Dash lengths are in multiples of the line width
            kwargs['linestyle'] = (0, tuple(self._points(d) / max(lw, 1e-6)
                                            for d in self._dash))
        self.ax.add_patch(PathPatch(self._path(), fill=False, edgecolor=color.to_mpl(),
                                    linewidth=lw, capstyle='round', joinstyle='round',
                                    zorder=self._next_z(), **kwargs))

    def set_dash(self, pattern):
        self._dash = tuple(pattern)

    def fill_circle(self, x, y, radius, color):
        self.ax.add_patch(Circle((x, y), radius, facecolor=color.to_mpl(),
                                 edgecolor='none', zorder=self._next_z()))

    def stroke_circle(self, x, y, radius, color, width=1.0):
        self.ax.add_patch(Circle((x, y), radius, fill=False, edgecolor=color.to_mpl(),
                                 linewidth=self._points(width), zorder=self._next_z()))

    def draw_text(self, x, y, text, color):
        self.ax.text(x, y, text, color=color.to_mpl(), fontsize=12,
                     ha='left', va='top', zorder=self._next_z())

    def save(self, path):
        """Write the figure as an image (format from the file extension)."""
        self.fig.savefig(path, dpi=self.dpi, facecolor=self.background.to_mpl())
        logger.info("wrote %s (%dx%d)", path, self.width, self.height)
