#
# PROJECT: chainrule-surface-renderer
# MODULE: chainrule_renderer/surfaces.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import math
from typing import Dict, Optional


class ScalarField:
    """
    Height function z = f(x, y) together with its partial derivatives.

    Subclasses implement evaluate(), gradient_x() and gradient_y() and set
    display_name.
    """
    key = ''
    display_name = ''

    def evaluate(self, x: float, y: float) -> float:
        raise NotImplementedError

    def gradient_x(self, x: float, y: float) -> float:
        raise NotImplementedError

    def gradient_y(self, x: float, y: float) -> float:
        raise NotImplementedError

    def gradient(self, x: float, y: float):
        return (self.gradient_x(x, y), self.gradient_y(x, y))

    def __call__(self, x: float, y: float) -> float:
        return self.evaluate(x, y)

    def __repr__(self):
        return f"{type(self).__name__}({self.display_name!r})"


class Paraboloid(ScalarField):
    key = 'paraboloid'
    display_name = 'z = x² + y²'

    def evaluate(self, x, y):
        return x * x + y * y

    def gradient_x(self, x, y):
        return 2 * x

    def gradient_y(self, x, y):
        return 2 * y


class Saddle(ScalarField):
    key = 'saddle'
    display_name = 'z = x² - y²'

    def evaluate(self, x, y):
        return x * x - y * y

    def gradient_x(self, x, y):
        return 2 * x

    def gradient_y(self, x, y):
        return -2 * y


class Waves(ScalarField):
    key = 'waves'
    display_name = 'z = sin(x)cos(y)'

    def evaluate(self, x, y):
        return math.sin(x) * math.cos(y)

    def gradient_x(self, x, y):
        return math.cos(x) * math.cos(y)

    def gradient_y(self, x, y):
        return -math.sin(x) * math.sin(y)


class Hill(ScalarField):
    key = 'hill'
    display_name = 'z = 3/(1+x²+y²)'

    def evaluate(self, x, y):
        return 3 / (1 + x * x + y * y)

    def gradient_x(self, x, y):
        return -6 * x / (1 + x * x + y * y) ** 2

    def gradient_y(self, x, y):
        return -6 * y / (1 + x * x + y * y) ** 2


SURFACES: Dict[str, ScalarField] = {
    s.key: s for s in (Paraboloid(), Saddle(), Waves(), Hill())
}

DEFAULT_SURFACE = 'paraboloid'


def get_surface(key) -> Optional[ScalarField]:
    """Look up a built-in surface; None for an unknown key."""
    return SURFACES.get(key)


def surface_keys():
    return list(SURFACES)
