import curses
import math

import pytest

from chainrule_renderer import demo
from chainrule_renderer.config import RenderConfig


class _FakeScreen:
    def __init__(self, rows, cols, keys=()):
        self.rows, self.cols = rows, cols
        self.keys = list(keys)
        self.writes = []
        self.refreshes = 0

    def keypad(self, flag):
        pass

    def getmaxyx(self):
        return self.rows, self.cols

    def erase(self):
        self.writes = []

    def addstr(self, y, x, text, attr=0):
        self.writes.append((y, x, text))

    def refresh(self):
        self.refreshes += 1

    def getch(self):
        return self.keys.pop(0)


@pytest.fixture
def fake_curses(monkeypatch):
    monkeypatch.setattr(curses, 'curs_set', lambda visibility: None)
    monkeypatch.setattr(curses, 'mousemask', lambda mask: (mask, 0))
    monkeypatch.setattr(curses, 'color_pair', lambda n: 0)


@pytest.fixture
def app(fake_curses):
    # Yaw 0, pitch 0: the xy-plane faces the camera
    config = RenderConfig(use_color=False, initial_yaw=0.0, initial_pitch=0.0)
    return demo.DemoApp(_FakeScreen(180, 400), None, config)


def _click(monkeypatch, col, row, bstate=curses.BUTTON1_CLICKED):
    monkeypatch.setattr(curses, 'getmouse', lambda: (0, col, row, 0, bstate))


def test_canvas_fills_screen_below_hud(app):
    assert app.canvas.w == 399 * 2
    assert app.canvas.h == 178 * 4
    assert app.view.surface is app.canvas
    assert app.view.config.height == app.canvas.h


def test_cell_to_pixel_is_cell_centre():
    assert demo.cell_to_pixel(0, demo.CANVAS_TOP) == (1, 2)
    assert demo.cell_to_pixel(10, 5) == (21, (5 - demo.CANVAS_TOP) * 4 + 2)


@pytest.mark.parametrize("key, field, change", [
    (curses.KEY_UP, 'pitch', 0.1),
    (curses.KEY_DOWN, 'pitch', -0.1),
    (curses.KEY_RIGHT, 'yaw', 0.1),
    (curses.KEY_LEFT, 'yaw', -0.1),
    (ord('+'), 'distance', -0.5),
    (ord('='), 'distance', -0.5),
    (ord('-'), 'distance', 0.5),
])
def test_camera_keys(app, key, field, change):
    before = getattr(app.view.camera.state(), field)
    app.handle_key(key)
    assert getattr(app.view.camera.state(), field) == pytest.approx(before + change)


@pytest.mark.parametrize("key, field, expected", [
    (ord('w'), 'point_y', 0.1),
    (ord('s'), 'point_y', -0.1),
    (ord('d'), 'point_x', 0.1),
    (ord('a'), 'point_x', -0.1),
    (ord(']'), 'direction_angle', math.pi / 2 + math.pi / 12),
    (ord('['), 'direction_angle', math.pi / 2 - math.pi / 12),
    (ord('.'), 'magnitude', 1.1),
    (ord(','), 'magnitude', 0.9),
])
def test_scene_keys(app, key, field, expected):
    app.handle_key(key)
    assert getattr(app.view.frame_state(), field) == pytest.approx(expected)


def test_magnitude_never_goes_negative(app):
    for _ in range(15):
        app.handle_key(ord(','))
    assert app.view.magnitude == 0.0


def test_surface_keys_cycle_and_select(app):
    app.handle_key(ord('n'))
    assert app.view.frame_state().surface_key == 'saddle'
    app.handle_key(ord('4'))
    assert app.view.frame_state().surface_key == 'hill'
    app.handle_key(ord('n'))
    assert app.view.frame_state().surface_key == 'paraboloid'
    app.handle_key(ord('5'))
    assert app.view.frame_state().surface_key == 'paraboloid'


@pytest.mark.parametrize("key, flag", [
    (ord('g'), 'show_grid'),
    (ord('c'), 'show_curve'),
    (ord('t'), 'show_tangent_plane'),
    (ord('v'), 'show_vectors'),
])
def test_toggle_keys(app, key, flag):
    app.handle_key(key)
    assert getattr(app.view.frame_state(), flag) is False
    app.handle_key(key)
    assert getattr(app.view.frame_state(), flag) is True


def test_braille_toggle_and_quit(app):
    app.handle_key(ord('b'))
    assert app.config.use_braille is False
    assert app.running
    app.handle_key(ord('q'))
    assert not app.running


def test_resize_key_follows_terminal(app):
    app.stdscr.rows, app.stdscr.cols = 50, 120
    app.handle_key(curses.KEY_RESIZE)
    assert (app.canvas.w, app.canvas.h) == (119 * 2, 48 * 4)
    assert app.view.config.height == 48 * 4


def test_click_moves_point_to_picked_cell(app, monkeypatch):
    target = app.view.project((1.0, -0.5, 0.0))
    col = int(target.x) >> 1
    row = (int(target.y) >> 2) + demo.CANVAS_TOP
    _click(monkeypatch, col, row)
    app.handle_key(curses.KEY_MOUSE)
    assert (app.view.point_x, app.view.point_y) == pytest.approx((1.0, -0.5))

    # The domain marker is blitted on the cell that was clicked
    app.draw()
    assert (row, col) in {(y, x) for y, x, _ in app.stdscr.writes}


def test_click_far_from_domain_is_ignored(app, monkeypatch):
    _click(monkeypatch, 0, demo.CANVAS_TOP)
    app.handle_key(curses.KEY_MOUSE)
    assert (app.view.point_x, app.view.point_y) == (0.0, 0.0)


def test_wheel_zooms(app, monkeypatch):
    _click(monkeypatch, 0, 0, curses.BUTTON4_PRESSED)
    app.handle_key(curses.KEY_MOUSE)
    assert app.view.camera.distance == pytest.approx(7.5)
    if hasattr(curses, 'BUTTON5_PRESSED'):
        _click(monkeypatch, 0, 0, curses.BUTTON5_PRESSED)
        app.handle_key(curses.KEY_MOUSE)
        assert app.view.camera.distance == pytest.approx(8.0)


def test_failed_getmouse_is_ignored(app, monkeypatch):
    def fail():
        raise curses.error("no mouse event")
    monkeypatch.setattr(curses, 'getmouse', fail)
    app.handle_key(curses.KEY_MOUSE)
    assert app.view.camera.distance == 8.0


def test_run_redraws_after_each_event(fake_curses):
    screen = _FakeScreen(40, 100, keys=[-1, ord('n'), ord('q')])
    app = demo.DemoApp(screen, None, RenderConfig(use_color=False))
    app.run()
    # initial frame plus one for 'n'; nothing after 'q'
    assert screen.refreshes == 2
    assert app.view.current_function == 'saddle'
    hud = screen.writes[-2]
    assert hud[0] == 0 and 'x² - y²' in hud[2]
