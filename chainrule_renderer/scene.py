#
# PROJECT: chainrule-surface-renderer
# MODULE: chainrule_renderer/scene.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

from dataclasses import dataclass
from typing import Optional, Tuple

from .annotations import arrow_commands
from .color import Color
from .commands import Circle, Clear, Line, Polygon, Polyline, Text
from .math_utils import as_vec3
from .mesh import Triangle
from .rasterizer import shade_triangles


@dataclass(frozen=True)
class Style:
    """Draw style of a world-space primitive."""
    color: Color
    width: float = 1.0
    fill_alpha: float = 0.0
    stroke_alpha: float = 1.0
    dash: Tuple[float, ...] = ()


@dataclass(frozen=True)
class Segment:
    p1: tuple
    p2: tuple
    style: Style

    def to_commands(self, projection, config):
        a = projection.project(self.p1)
        b = projection.project(self.p2)
        return [Line((a.x, a.y), (b.x, b.y),
                     self.style.color.with_alpha(self.style.color.a * self.style.stroke_alpha),
                     self.style.width, self.style.dash)]


@dataclass(frozen=True)
class TriangleBatch:
    """Triangles painted as one depth-sorted group."""
    triangles: Tuple[Triangle, ...]
    style: Style
    shaded: bool = True

    def to_commands(self, projection, config):
        return shade_triangles(self.triangles, projection, self.style.color,
                               fill_alpha=self.style.fill_alpha,
                               stroke_alpha=self.style.stroke_alpha,
                               stroke_width=self.style.width,
                               shaded=self.shaded)


@dataclass(frozen=True)
class Facet:
    """Planar polygon drawn as a single filled, stroked path (not sorted)."""
    points: tuple
    fill: Optional[Color]
    stroke: Optional[Color]
    width: float = 1.0

    def to_commands(self, projection, config):
        pts = tuple((p.x, p.y) for p in map(projection.project, self.points))
        return [Polygon(pts, self.fill, self.stroke, self.width)]


@dataclass(frozen=True)
class Path3D:
    points: tuple
    style: Style

    def to_commands(self, projection, config):
        pts = tuple((p.x, p.y) for p in map(projection.project, self.points))
        return [Polyline(pts, self.style.color, self.style.width)]


@dataclass(frozen=True)
class Arrow:
    start: tuple
    end: tuple
    style: Style

    def to_commands(self, projection, config):
        return arrow_commands(projection, self.start, self.end,
                              self.style.color, self.style.width,
                              config.arrow_head_length, config.arrow_head_angle)


@dataclass(frozen=True)
class Marker:
    """Screen-space disc centred on a projected world point."""
    point: tuple
    radius: float
    fill: Optional[Color]
    stroke: Optional[Color] = None
    width: float = 1.0

    def to_commands(self, projection, config):
        p = projection.project(self.point)
        return [Circle((p.x, p.y), self.radius, self.fill, self.stroke, self.width)]


@dataclass(frozen=True)
class Label:
    """Screen-space text, unaffected by the camera."""
    position: Tuple[float, float]
    text: str
    color: Color

    def to_commands(self, projection, config):
        return [Text(self.position, self.text, self.color)]


class Scene:
    """
    Ordered primitives for one frame.

    Primitives compile to draw commands in submission order; only the
    triangles inside one TriangleBatch are reordered, farthest first.
    A Scene is built fresh for each frame and holds no camera state.
    """

    def __init__(self):
        self.items = []

    def __len__(self):
        return len(self.items)

    def add(self, primitive):
        self.items.append(primitive)
        return primitive

    def add_segment(self, p1, p2, style: Style):
        return self.add(Segment(as_vec3(p1), as_vec3(p2), style))

    def add_triangles(self, triangles, style: Style, shaded: bool = True):
        return self.add(TriangleBatch(tuple(triangles), style, shaded))

    def add_facet(self, points, fill=None, stroke=None, width: float = 1.0):
        return self.add(Facet(tuple(as_vec3(p) for p in points), fill, stroke, width))

    def add_path(self, points, style: Style):
        return self.add(Path3D(tuple(as_vec3(p) for p in points), style))

    def add_arrow(self, start, end, style: Style):
        return self.add(Arrow(as_vec3(start), as_vec3(end), style))

    def add_marker(self, point, radius, fill=None, stroke=None, width: float = 1.0):
        return self.add(Marker(as_vec3(point), radius, fill, stroke, width))

    def add_label(self, position, text, color):
        return self.add(Label(tuple(position), text, color))

    def clear(self):
        """Remove all primitives from the scene."""
        self.items.clear()

    def compile(self, projection, config):
        """Project every primitive; returns the frame's command list."""
        commands = [Clear()]
        for item in self.items:
            commands.extend(item.to_commands(projection, config))
        return commands
