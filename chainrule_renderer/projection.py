#
# PROJECT: chainrule-surface-renderer
# MODULE: chainrule_renderer/projection.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import math
from typing import NamedTuple

from .camera import CameraState


class Point2D(NamedTuple):
    """Projected point: screen position plus camera-space depth."""
    x: float
    y: float
    depth: float


class Projection:
    """
    Perspective projection for one frame.

    Built from a frozen CameraState, the viewport centre and the focal
    constant K.  Rotation is yaw about the vertical axis on (x, z), then pitch
    about the horizontal axis on (y, z); the camera distance is added to the
    resulting depth and screen coordinates are scaled by K / depth with the
    Y axis flipped.

    A point at or behind the camera (depth <= 0) gives nonsense coordinates
    but never raises.
    """
    __slots__ = ('camera', 'center_x', 'center_y', 'focal_length',
                 '_cos_yaw', '_sin_yaw', '_cos_pitch', '_sin_pitch')

    def __init__(self, camera: CameraState, center_x: float, center_y: float,
                 focal_length: float = 600.0):
        self.camera = camera
        self.center_x = float(center_x)
        self.center_y = float(center_y)
        self.focal_length = float(focal_length)
        self._cos_yaw = math.cos(camera.yaw)
        self._sin_yaw = math.sin(camera.yaw)
        self._cos_pitch = math.cos(camera.pitch)
        self._sin_pitch = math.sin(camera.pitch)

    @classmethod
    def for_viewport(cls, camera: CameraState, width: float, height: float,
                     focal_length: float = 600.0) -> 'Projection':
        return cls(camera, width / 2, height / 2, focal_length)

    def to_camera(self, x: float, y: float, z: float):
        """World point -> camera space (x2, y2, depth)."""
        # Yaw: rotate (x, z) around the vertical axis
        x1 = x * self._cos_yaw - z * self._sin_yaw
        z1 = x * self._sin_yaw + z * self._cos_yaw

        # Pitch: rotate (y, z) around the horizontal axis
        y2 = y * self._cos_pitch - z1 * self._sin_pitch
        z2 = y * self._sin_pitch + z1 * self._cos_pitch

        return x1, y2, z2 + self.camera.distance

    def project(self, point) -> Point2D:
        x2, y2, depth = self.to_camera(point[0], point[1], point[2])
        scale = self.focal_length / depth if depth != 0.0 else math.inf
        return Point2D(self.center_x + x2 * scale,
                       self.center_y - y2 * scale,
                       depth)

    def depth(self, point) -> float:
        """Camera-space depth only; cheaper than a full projection."""
        return self.to_camera(point[0], point[1], point[2])[2]
