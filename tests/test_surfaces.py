import pytest

from chainrule_renderer.surfaces import (
    SURFACES, Hill, Paraboloid, Saddle, Waves, get_surface, surface_keys,
)

POINTS = [(0.0, 0.0), (1.0, -0.5), (-1.3, 0.7), (0.25, 1.9), (-2.0, -2.0)]


@pytest.mark.parametrize("key", sorted(SURFACES))
def test_gradients_match_finite_differences(key):
    field = SURFACES[key]
    h = 1e-6
    for x, y in POINTS:
        dfdx = (field.evaluate(x + h, y) - field.evaluate(x - h, y)) / (2 * h)
        dfdy = (field.evaluate(x, y + h) - field.evaluate(x, y - h)) / (2 * h)
        assert field.gradient_x(x, y) == pytest.approx(dfdx, rel=1e-5, abs=1e-6)
        assert field.gradient_y(x, y) == pytest.approx(dfdy, rel=1e-5, abs=1e-6)


def test_builtin_registry():
    assert surface_keys() == ['paraboloid', 'saddle', 'waves', 'hill']
    assert isinstance(get_surface('paraboloid'), Paraboloid)
    assert isinstance(get_surface('saddle'), Saddle)
    assert isinstance(get_surface('waves'), Waves)
    assert isinstance(get_surface('hill'), Hill)


@pytest.mark.parametrize("key", ['nope', '', None, 'Paraboloid', 'plane'])
def test_unknown_key_resolves_to_none(key):
    assert get_surface(key) is None


def test_display_names():
    assert [SURFACES[k].display_name for k in surface_keys()] == [
        'z = x² + y²', 'z = x² - y²', 'z = sin(x)cos(y)', 'z = 3/(1+x²+y²)',
    ]


def test_known_values():
    assert Paraboloid()(1, 2) == 5
    assert Saddle()(1, 2) == -3
    assert Hill()(0, 0) == 3
    assert Waves()(0, 0) == 0
    assert Hill().gradient(1, 0) == pytest.approx((-1.5, 0.0))

