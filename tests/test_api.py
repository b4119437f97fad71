import pytest
from PIL import Image

from api.render_api import FractalAPI
from fractals.complex_number import ComplexNumber
from fractals.validation import ParameterError
from ui.session import KeyPress, MouseDown, SessionState
from utils.enums import BackendType, FractalMode, GridSampling


@pytest.fixture
def api(small_state):
    return FractalAPI(state=small_state)


def test_builder_applies_settings():
    api = FractalAPI()
    state = (api.configure()
             .resolution(20)
             .accuracy(30)
             .mode("julia")
             .julia_param(0.285, 0.01)
             .palette("Ocean")
             .canvas_size(40, 30)
             .sampling(GridSampling.ACCUMULATE)
             .backend(BackendType.PYTHON)
             .apply())
    assert api.state is state
    assert (state.resolution, state.accuracy) == (20, 30)
    assert state.mode == FractalMode.JULIA
    assert state.julia_param == ComplexNumber(0.285, 0.01)
    assert state.palette == "Ocean"
    assert (state.canvas_width, state.canvas_height) == (40, 30)
    assert state.sampling == GridSampling.ACCUMULATE
    assert state.backend == BackendType.PYTHON


def test_builder_leaves_unset_fields_alone():
    api = FractalAPI()
    state = api.configure().accuracy(50).apply()
    assert state.resolution == SessionState().resolution
    assert state.backend == BackendType.CPU


def test_builder_rejects_invalid_values():
    api = FractalAPI()
    with pytest.raises(ParameterError):
        api.configure().resolution(0).apply()
    assert api.state == SessionState()


def test_dispatch_renders_only_when_needed(api):
    assert api.dispatch(MouseDown(3, 4)) is None
    report = api.dispatch(KeyPress("w"))
    assert report is api.last_report
    assert report.frame.resolution == 25


def test_set_view_moves_viewport(api):
    api.set_view(-1.0, -0.5, 1.0)
    assert api.state.viewport.start == (-1.0, -0.5)
    assert api.state.viewport.width == pytest.approx(1.0)


def test_save_image_renders_when_needed(api, tmp_path):
    path = tmp_path / "out.png"
    api.save_image(str(path))
    assert api.last_report is not None
    with Image.open(path) as image:
        assert image.size == (40, 30)


def test_callbacks_are_forwarded(api):
    logs = []
    api.on_log(logs.append)
    api.render()
    assert len(logs) == 1
