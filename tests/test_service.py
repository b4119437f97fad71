import logging
import re

from coloring.palettes import get_gradient
from fractals.base import SimulationSettings, Viewport
from rendering.events import FrameEvent, LogEvent
from utils.enums import BackendType

TIMING = re.compile(r"^Evaluation took \d+ milliseconds, rendering took \d+ milliseconds$")


def test_run_logs_timing_line(service, caplog):
    settings = SimulationSettings(resolution=8, accuracy=20, backend=BackendType.PYTHON)
    with caplog.at_level(logging.INFO, logger="rendering.service"):
        report = service.run(Viewport(-2.0, -1.0, 1.0, 1.0), settings,
                             get_gradient("Default"), 30, 20)
    messages = [r.getMessage() for r in caplog.records if r.name == "rendering.service"]
    assert any(TIMING.match(m) for m in messages)
    assert report.eval_ms >= 0 and report.render_ms >= 0
    assert report.surface.data.shape == (20, 30, 3)


def test_callbacks_receive_events(service, small_state):
    frames, logs = [], []
    service.on_frame = frames.append
    service.on_log = logs.append

    report = service.run_state(small_state)

    assert len(frames) == 1 and isinstance(frames[0], FrameEvent)
    assert (frames[0].width, frames[0].height) == (40, 30)
    assert frames[0].seq == report.seq
    assert len(logs) == 1 and isinstance(logs[0], LogEvent)
    assert TIMING.match(logs[0].message)
    assert logs[0].level == "info"


def test_sequence_numbers_increase(service, small_state):
    first = service.run_state(small_state)
    second = service.run_state(small_state)
    pinned = service.run_state(small_state, seq=99)
    assert second.seq == first.seq + 1
    assert pinned.seq == 99


def test_frame_reflects_state(service, small_state):
    report = service.run_state(small_state)
    assert report.frame.viewport == small_state.viewport
    assert report.frame.resolution == small_state.resolution
    assert report.frame.accuracy == small_state.accuracy
