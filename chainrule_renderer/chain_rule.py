#
# PROJECT: chainrule-surface-renderer
# MODULE: chainrule_renderer/chain_rule.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import math
from typing import NamedTuple


class ChainRuleValues(NamedTuple):
    x: float
    y: float
    z: float
    dzdx: float
    dzdy: float
    dxdt: float
    dydt: float
    dzdt: float


def curve_point(t: float, x0: float, y0: float, t0: float,
                angle: float, magnitude: float):
    """Straight-line path through (x0, y0) at t = t0, heading `angle`."""
    x = x0 + magnitude * math.cos(angle) * (t - t0)
    y = y0 + magnitude * math.sin(angle) * (t - t0)
    return x, y


def curve_velocity(angle: float, magnitude: float):
    """(dx/dt, dy/dt) of the path; constant along it."""
    return magnitude * math.cos(angle), magnitude * math.sin(angle)


def chain_rule_values(field, x: float, y: float, angle: float,
                      magnitude: float) -> ChainRuleValues:
    """dz/dt = df/dx * dx/dt + df/dy * dy/dt at (x, y)."""
    z = field.evaluate(x, y)
    dzdx = field.gradient_x(x, y)
    dzdy = field.gradient_y(x, y)
    dxdt, dydt = curve_velocity(angle, magnitude)
    return ChainRuleValues(x, y, z, dzdx, dzdy, dxdt, dydt,
                           dzdx * dxdt + dzdy * dydt)
