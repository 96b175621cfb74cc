import math

import pytest

from chainrule_renderer.annotations import arrow_commands, arrowhead
from chainrule_renderer.color import parse_hex_color
from chainrule_renderer.commands import Line

CYAN = parse_hex_color('#00d9ff')


def _angle_between(u, v):
    dot = u[0] * v[0] + u[1] * v[1]
    return math.acos(dot / (math.hypot(*u) * math.hypot(*v)))


def test_arrow_is_shaft_then_two_head_strokes(default_projection):
    shaft, left, right = arrow_commands(default_projection, (0, 0, 0), (1, 0, 0), CYAN, 4)
    assert all(isinstance(c, Line) for c in (shaft, left, right))
    tip = shaft.end
    assert left.start == tip and right.start == tip
    start = default_projection.project((0, 0, 0))
    end = default_projection.project((1, 0, 0))
    assert shaft.start == (start.x, start.y)
    assert tip == (end.x, end.y)
    assert {c.color for c in (shaft, left, right)} == {CYAN}
    assert {c.width for c in (shaft, left, right)} == {4}


def test_head_strokes_subtend_thirty_degrees(default_projection):
    shaft, left, right = arrow_commands(default_projection, (0, 0, 0), (1, 0, 0), CYAN)
    tip = shaft.end
    back = (shaft.start[0] - tip[0], shaft.start[1] - tip[1])
    for stroke in (left, right):
        vec = (stroke.end[0] - tip[0], stroke.end[1] - tip[1])
        assert _angle_between(vec, back) == pytest.approx(math.pi / 6, abs=1e-9)
        assert math.hypot(*vec) == pytest.approx(10.0)


def test_head_strokes_fall_on_opposite_sides(default_projection):
    shaft, left, right = arrow_commands(default_projection, (0, 0, 0), (1, 0, 0), CYAN)
    tip = shaft.end
    back = (shaft.start[0] - tip[0], shaft.start[1] - tip[1])

    def side(stroke):
        vx, vy = stroke.end[0] - tip[0], stroke.end[1] - tip[1]
        return back[0] * vy - back[1] * vx

    assert side(left) * side(right) < 0


def test_custom_head_geometry(default_projection):
    shaft, left, _ = arrow_commands(default_projection, (0, 0, 0), (0, 1, 0), CYAN,
                                    head_length=20, head_angle=math.pi / 4)
    vec = (left.end[0] - shaft.end[0], left.end[1] - shaft.end[1])
    back = (shaft.start[0] - shaft.end[0], shaft.start[1] - shaft.end[1])
    assert math.hypot(*vec) == pytest.approx(20)
    assert _angle_between(vec, back) == pytest.approx(math.pi / 4)


def test_zero_length_arrow_is_degenerate_not_an_error(default_projection):
    shaft, left, right = arrow_commands(default_projection, (1, 1, 1), (1, 1, 1), CYAN)
    assert shaft.start == shaft.end
    assert math.hypot(left.end[0] - left.start[0], left.end[1] - left.start[1]) == pytest.approx(10)


def test_arrowhead_along_positive_x():
    left, right = arrowhead((100, 50), 0.0, 10, math.pi / 6)
    assert left == pytest.approx((100 - 10 * math.cos(math.pi / 6), 50 + 5))
    assert right == pytest.approx((100 - 10 * math.cos(math.pi / 6), 50 - 5))
