import math

import pytest

from chainrule_renderer.color import WHITE
from chainrule_renderer.config import Palette, RenderConfig


def test_defaults():
    config = RenderConfig()
    assert (config.width, config.height) == (900, 700)
    assert config.focal_length == 600
    assert (config.min_distance, config.max_distance) == (3, 15)
    assert config.mesh_resolution == 25
    assert config.arrow_head_angle == pytest.approx(math.pi / 6)
    assert config.arrow_head_length == 10
    assert config.palette == Palette()
    assert config.palette.point_outline == WHITE


@pytest.mark.parametrize("overrides", [
    {'width': 0},
    {'height': -5},
    {'focal_length': 0},
    {'mesh_resolution': 0},
    {'min_distance': 0},
    {'min_distance': 10, 'max_distance': 5},
    {'curve_steps': 0},
    {'grid_step': 0},
])
def test_invalid_settings_raise(overrides):
    with pytest.raises(ValueError):
        RenderConfig(**overrides)


def test_for_viewport_scales_pixel_constants():
    config = RenderConfig().for_viewport(450, 350)
    assert (config.width, config.height) == (450, 350)
    assert config.focal_length == pytest.approx(300)
    assert config.arrow_head_length == pytest.approx(5)
    assert config.pick_radius == pytest.approx(15)
    assert config.drop_line_dash == pytest.approx((2.5, 2.5))
    # angles and world-space sizes are unchanged
    assert config.arrow_head_angle == pytest.approx(math.pi / 6)
    assert config.axis_length == 3.0


@pytest.mark.parametrize("env, color, braille", [
    ({'TERM': 'xterm-256color', 'LANG': 'en_US.UTF-8'}, True, True),
    ({'TERM': 'dumb', 'LANG': 'en_US.UTF-8'}, False, True),
    ({'TERM': 'linux', 'LANG': 'en_US.UTF-8'}, True, False),
    ({'TERM': 'xterm', 'LANG': 'C'}, True, False),
    ({}, True, False),
])
def test_detect_terminal(env, color, braille):
    config = RenderConfig.detect_terminal(env)
    assert config.use_color is color
    assert config.use_braille is braille
