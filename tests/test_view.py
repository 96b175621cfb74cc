import math

import pytest

from chainrule_renderer.canvas import RecordingSurface
from chainrule_renderer.renderer import FrameState
from chainrule_renderer.view import ChainRuleView


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def view(surface):
    return ChainRuleView(surface)


def test_initial_state(view):
    assert view.frame_state() == FrameState()


def test_mutators_never_draw(view, surface):
    view.rotate_by(30, -15)
    view.zoom_by(120)
    view.set_function('saddle')
    view.set_point(1.0, -1.0)
    view.set_direction(math.pi / 4, 1.5)
    view.set_t(0.0)
    view.toggle_grid()
    view.toggle_curve()
    view.toggle_tangent_plane()
    view.toggle_vectors()
    assert surface.calls == []


def test_render_draws_to_bound_surface(view, surface):
    view.render()
    assert surface.names()[0] == 'clear'
    assert 'fill' in surface.names()


def test_render_without_surface_raises():
    with pytest.raises(RuntimeError):
        ChainRuleView().render()


def test_unknown_function_is_ignored(view):
    before = view.frame_state()
    assert view.set_function('klein-bottle') is False
    assert view.frame_state() == before
    assert view.set_function('hill') is True
    assert view.frame_state().surface_key == 'hill'


def test_setters_and_toggles_reach_frame_state(view):
    view.set_point(1, 2)
    view.set_direction(0.5, 2.0)
    view.set_t(1.0)
    view.toggle_grid()
    state = view.frame_state()
    assert (state.point_x, state.point_y) == (1.0, 2.0)
    assert (state.direction_angle, state.magnitude) == (0.5, 2.0)
    assert state.t_param == 1.0
    assert state.show_grid is False
    view.toggle_grid()
    assert view.frame_state().show_grid is True


def test_camera_input_is_clamped(view):
    view.zoom_by(1e6)
    assert view.camera.distance == 15.0
    view.rotate_by(0, 1e6)
    assert view.camera.pitch == pytest.approx(math.pi / 2)


def test_project_uses_current_camera(view):
    view.camera.yaw = 0.0
    view.camera.pitch = 0.0
    view.camera.distance = 8.0
    p = view.project((0, 0, 0))
    assert (p.x, p.y, p.depth) == (450.0, 350.0, 8.0)


def test_chain_rule_values(view):
    view.set_point(1.0, 1.0)
    view.set_direction(0.0, 2.0)
    v = view.chain_rule_values()
    assert v.z == 2.0
    assert (v.dzdx, v.dzdy) == (2.0, 2.0)
    assert v.dxdt == pytest.approx(2.0)
    assert v.dydt == pytest.approx(0.0)
    assert v.dzdt == pytest.approx(4.0)


def test_pick_moves_point_to_nearest_domain_sample(view):
    target = view.project((1.0, -0.5, 0.0))
    picked = view.pick(target.x + 1, target.y - 1)
    assert picked == pytest.approx((1.0, -0.5))
    assert (view.point_x, view.point_y) == pytest.approx((1.0, -0.5))


def test_pick_far_from_domain_is_ignored(view):
    view.set_point(0.3, 0.3)
    assert view.pick(-1000, -1000) is None
    assert (view.point_x, view.point_y) == (0.3, 0.3)


def test_resize_keeps_camera_and_settings(view):
    view.rotate_by(10, 0)
    view.set_function('waves')
    view.resize(450, 350)
    assert view.config.width == 450
    assert view.config.focal_length == pytest.approx(300)
    assert view.frame_state().surface_key == 'waves'
    assert view.camera.yaw == pytest.approx(0.9)
