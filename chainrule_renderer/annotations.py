#
# PROJECT: chainrule-surface-renderer
# MODULE: chainrule_renderer/annotations.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import math

from .commands import Line
from .projection import Projection


def arrowhead(tip, angle: float, length: float = 10.0, spread: float = math.pi / 6):
    """
    Screen-space end points of the two arrowhead strokes.

    Each stroke leaves the tip backwards along the shaft, turned by +/- spread.
    """
    x, y = tip
    left = (x - length * math.cos(angle - spread),
            y - length * math.sin(angle - spread))
    right = (x - length * math.cos(angle + spread),
             y - length * math.sin(angle + spread))
    return left, right


def arrow_commands(projection: Projection, start, end, color, width: float = 2.0,
                   head_length: float = 10.0, head_angle: float = math.pi / 6):
    """Shaft plus V arrowhead for a world-space vector, as Line commands.

    The arrowhead is built in 2D after projection and is not depth-sorted;
    it is always emitted right after its shaft.  A zero-length shaft gives
    a degenerate head pointing along +x.
    """
    p1 = projection.project(start)
    p2 = projection.project(end)
    tip = (p2.x, p2.y)
    angle = math.atan2(p2.y - p1.y, p2.x - p1.x)
    left, right = arrowhead(tip, angle, head_length, head_angle)
    return [
        Line((p1.x, p1.y), tip, color, width),
        Line(tip, left, color, width),
        Line(tip, right, color, width),
    ]
