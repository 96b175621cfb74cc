#
# PROJECT: chainrule-surface-renderer
# MODULE: chainrule_renderer/math_utils.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import math


class Vec3:
    """Immutable 3-component vector in world space."""
    __slots__ = ('x', 'y', 'z')

    def __init__(self, x: float, y: float, z: float):
        object.__setattr__(self, 'x', float(x))
        object.__setattr__(self, 'y', float(y))
        object.__setattr__(self, 'z', float(z))

    def __setattr__(self, name, value):
        raise AttributeError("Vec3 is immutable")

    def __repr__(self):
        return f"Vec3({self.x:.2f}, {self.y:.2f}, {self.z:.2f})"

    def __eq__(self, other):
        if isinstance(other, Vec3):
            return self.x == other.x and self.y == other.y and self.z == other.z
        return NotImplemented

    def __hash__(self):
        return hash((self.x, self.y, self.z))

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, index):
        if index == 0: return self.x
        if index == 1: return self.y
        if index == 2: return self.z
        raise IndexError("Vec3 index out of range")

    def __sub__(self, other):
        if isinstance(other, Vec3):
            return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def cross(self, other) -> 'Vec3':
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)


def as_vec3(point) -> Vec3:
    """Accept a Vec3 or any (x, y, z) sequence."""
    if isinstance(point, Vec3):
        return point
    return Vec3(point[0], point[1], point[2])


def centroid(*points) -> Vec3:
    """Average of one or more world-space points."""
    n = len(points)
    sx = sy = sz = 0.0
    for p in points:
        sx += p[0]
        sy += p[1]
        sz += p[2]
    return Vec3(sx / n, sy / n, sz / n)


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
