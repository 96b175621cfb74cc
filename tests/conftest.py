import pytest

from chainrule_renderer.camera import CameraState
from chainrule_renderer.projection import Projection
from chainrule_renderer.surfaces import ScalarField


class _FlatField(ScalarField):
    """z = 0 everywhere."""
    key = 'flat'
    display_name = 'z = 0'

    def evaluate(self, x, y):
        return 0.0

    def gradient_x(self, x, y):
        return 0.0

    def gradient_y(self, x, y):
        return 0.0


@pytest.fixture
def head_on():
    """Camera looking straight down the world z axis from distance 8."""
    return Projection(CameraState(yaw=0.0, pitch=0.0, distance=8.0), 450, 350, 600)


@pytest.fixture
def default_projection():
    return Projection.for_viewport(CameraState(), 900, 700, 600)


@pytest.fixture
def flat_field():
    return _FlatField()
