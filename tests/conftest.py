import pytest

from fractals.base import Viewport
from rendering.service import FrameService
from ui.session import SessionState
from utils.enums import BackendType


@pytest.fixture
def unit_square():
    return Viewport(0.0, 0.0, 1.0, 1.0)


@pytest.fixture
def small_state():
    # Small frame so the pure-Python backend stays fast.
    return SessionState(canvas_width=40, canvas_height=30, resolution=20,
                        accuracy=30, backend=BackendType.PYTHON)


@pytest.fixture
def service():
    return FrameService()
