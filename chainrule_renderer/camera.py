#
# PROJECT: chainrule-surface-renderer
# MODULE: chainrule_renderer/camera.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import math
from dataclasses import dataclass

from .math_utils import clamp

PITCH_LIMIT = math.pi / 2


@dataclass(frozen=True)
class CameraState:
    """Frozen camera snapshot used for a single frame."""
    yaw: float = 0.8
    pitch: float = 0.3
    distance: float = 8.0


class Camera:
    """
    Orbiting camera for the surface view.

    Stores the yaw (rotation around the vertical axis) and pitch (rotation
    around the horizontal axis) angles plus the distance added to every
    rotated depth.  The projection reads a frozen snapshot of these values,
    see :meth:`state`.

    Every update re-applies the clamps: pitch stays inside
    [-pi/2, pi/2] so the orbit never flips past vertical, and distance stays
    inside [min_distance, max_distance].
    """
    __slots__ = ('yaw', 'pitch', 'distance', 'min_distance', 'max_distance')

    def __init__(self, yaw: float = 0.8, pitch: float = 0.3, distance: float = 8.0,
                 min_distance: float = 3.0, max_distance: float = 15.0):
        if min_distance <= 0 or max_distance < min_distance:
            raise ValueError(
                f"invalid distance band [{min_distance}, {max_distance}]")
        self.yaw = float(yaw)
        self.pitch = float(pitch)
        self.distance = float(distance)
        self.min_distance = float(min_distance)
        self.max_distance = float(max_distance)
        self.clamp()

    def __repr__(self):
        return (f"Camera(yaw={self.yaw:.3f}, pitch={self.pitch:.3f}, "
                f"distance={self.distance:.2f})")

    @classmethod
    def from_config(cls, config) -> 'Camera':
        return cls(yaw=config.initial_yaw, pitch=config.initial_pitch,
                   distance=config.initial_distance,
                   min_distance=config.min_distance,
                   max_distance=config.max_distance)

    def clamp(self):
        self.pitch = clamp(self.pitch, -PITCH_LIMIT, PITCH_LIMIT)
        self.distance = clamp(self.distance, self.min_distance, self.max_distance)

    def rotate(self, dx: float, dy: float, sensitivity: float = 0.01):
        """Orbit by a pointer drag delta (pixels): dx turns yaw, dy turns pitch."""
        self.yaw += dx * sensitivity
        self.pitch += dy * sensitivity
        self.clamp()

    def zoom(self, delta: float, sensitivity: float = 0.01):
        """Move along the view axis by a wheel delta. Positive = further."""
        self.distance += delta * sensitivity
        self.clamp()

    def state(self) -> CameraState:
        return CameraState(yaw=self.yaw, pitch=self.pitch, distance=self.distance)
