#
# PROJECT: chainrule-surface-renderer
# MODULE: chainrule_renderer/commands.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

from dataclasses import dataclass
from typing import Optional, Tuple

from .color import Color

ScreenPoint = Tuple[float, float]


@dataclass(frozen=True)
class Clear:
    """Wipe the whole surface."""

    def draw(self, surface):
        surface.clear()


@dataclass(frozen=True)
class Line:
    start: ScreenPoint
    end: ScreenPoint
    color: Color
    width: float = 1.0
    dash: Tuple[float, ...] = ()

    def draw(self, surface):
        if self.dash:
            surface.set_dash(self.dash)
        surface.begin_path()
        surface.move_to(*self.start)
        surface.line_to(*self.end)
        surface.stroke(self.color, self.width)
        if self.dash:
            surface.set_dash(())


@dataclass(frozen=True)
class Polyline:
    points: Tuple[ScreenPoint, ...]
    color: Color
    width: float = 1.0

    def draw(self, surface):
        if not self.points:
            return
        surface.begin_path()
        surface.move_to(*self.points[0])
        for p in self.points[1:]:
            surface.line_to(*p)
        surface.stroke(self.color, self.width)


@dataclass(frozen=True)
class Polygon:
    """Closed path, filled first then stroked.

    depth is the sort key the polygon was ordered by, when it came out of
    the painter's sort; it is informational and never drawn.
    """
    points: Tuple[ScreenPoint, ...]
    fill: Optional[Color] = None
    stroke: Optional[Color] = None
    width: float = 1.0
    depth: Optional[float] = None

    def draw(self, surface):
        if not self.points:
            return
        surface.begin_path()
        surface.move_to(*self.points[0])
        for p in self.points[1:]:
            surface.line_to(*p)
        surface.close_path()
        if self.fill is not None:
            surface.fill(self.fill)
        if self.stroke is not None:
            surface.stroke(self.stroke, self.width)


@dataclass(frozen=True)
class Circle:
    center: ScreenPoint
    radius: float
    fill: Optional[Color] = None
    stroke: Optional[Color] = None
    width: float = 1.0

    def draw(self, surface):
        x, y = self.center
        if self.fill is not None:
            surface.fill_circle(x, y, self.radius, self.fill)
        if self.stroke is not None:
            surface.stroke_circle(x, y, self.radius, self.stroke, self.width)


@dataclass(frozen=True)
class Text:
    position: ScreenPoint
    text: str
    color: Color

    def draw(self, surface):
        surface.draw_text(self.position[0], self.position[1], self.text, self.color)


def execute(commands, surface):
    """Issue an ordered command list to a drawing surface."""
    for cmd in commands:
        cmd.draw(surface)
