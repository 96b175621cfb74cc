#
# PROJECT: chainrule-surface-renderer
# MODULE: chainrule_renderer/rasterizer.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

"""
Depth-sorted flat-shaded triangle output.

Triangles are ordered with the painter's algorithm: each one is keyed by the
projected depth of its world-space centroid and drawn farthest first, so
nearer faces overdraw farther ones.  This is an approximation; triangles
that overlap on screen at different orientations can be mis-ordered, and no
z-buffer or exact visibility pass corrects that.
"""

import math

from .commands import Polygon
from .projection import Projection

INTENSITY_FLOOR = 0.2
INTENSITY_CEIL = 1.0


def light_intensity(triangle) -> float:
    """
    Flat shading factor for a fixed light biased toward +z.

    0.5 + 0.5 * (nx + ny + 2 nz) / |n|, clamped to [0.2, 1.0].  A degenerate
    triangle (zero-length normal) gets the floor.
    """
    n = triangle.normal()
    length = n.magnitude()
    if length == 0 or not math.isfinite(length):
        return INTENSITY_FLOOR
    value = 0.5 + 0.5 * (n.x + n.y + 2 * n.z) / length
    return max(INTENSITY_FLOOR, min(INTENSITY_CEIL, value))


def depth_sort(triangles, projection: Projection):
    """Return [(depth, triangle)] ordered farthest first (stable)."""
    keyed = [(projection.depth(tri.centroid()), tri) for tri in triangles]
    keyed.sort(key=lambda item: item[0], reverse=True)
    return keyed


def shade_triangles(triangles, projection: Projection, color,
                    fill_alpha: float = 0.6, stroke_alpha: float = 0.3,
                    stroke_width: float = 0.5, shaded: bool = True):
    """
    Depth-sort and shade triangles into an ordered list of Polygon commands.

    Fill opacity is fill_alpha scaled by the light intensity (or fill_alpha
    alone when shaded is False); the stroke uses a fixed stroke_alpha so the
    mesh lines stay visible.  stroke_alpha of 0 drops the stroke.
    """
    stroke = color.with_alpha(stroke_alpha) if stroke_alpha > 0 else None
    commands = []
    for depth, tri in depth_sort(triangles, projection):
        p1 = projection.project(tri.p1)
        p2 = projection.project(tri.p2)
        p3 = projection.project(tri.p3)
        intensity = light_intensity(tri) if shaded else 1.0
        commands.append(Polygon(
            points=((p1.x, p1.y), (p2.x, p2.y), (p3.x, p3.y)),
            fill=color.with_alpha(intensity * fill_alpha),
            stroke=stroke,
            width=stroke_width,
            depth=depth,
        ))
    return commands
