from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from coloring.gradient import Color, LinearGradient, BLACK
from coloring.palettes import get_gradient
from fractals.base import SimulationSettings, Viewport
from rendering.events import FrameEvent, LogEvent
from rendering.renderer import render
from rendering.simulator import FrameResult, simulate_settings
from rendering.surface import ArraySurface
from ui.session import SessionState
from utils.coords import PlaneMapper

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameReport:
    frame: FrameResult
    surface: ArraySurface
    eval_ms: float
    render_ms: float
    seq: int


class FrameService:
    """
    Runs one synchronous simulate-then-render cycle per request and reports
    the two timings. Holds no view state between calls; each call carries
    everything it needs.

    Callbacks (optional):
      - on_frame(FrameEvent) after the surface is painted,
      - on_log(LogEvent) for the timing line.
    """

    def __init__(self, background: Color = BLACK) -> None:
        self.background = background
        self._render_seq = 0

        # Callbacks
        self.on_frame: Optional[Callable[[FrameEvent], None]] = None
        self.on_log: Optional[Callable[[LogEvent], None]] = None

    def run(self, viewport: Viewport, settings: SimulationSettings,
            gradient: LinearGradient, canvas_width: int, canvas_height: int,
            seq: Optional[int] = None) -> FrameReport:
        if seq is None:
            self._render_seq += 1
            seq = self._render_seq

        mapper = PlaneMapper(viewport, canvas_width, canvas_height)
        surface = ArraySurface(canvas_width, canvas_height)

        start = time.perf_counter()
        frame = simulate_settings(settings, viewport)
        eval_ms = (time.perf_counter() - start) * 1000.0

        start = time.perf_counter()
        render(frame, gradient, mapper, surface, background=self.background)
        render_ms = (time.perf_counter() - start) * 1000.0

        message = (f"Evaluation took {round(eval_ms)} milliseconds, "
                   f"rendering took {round(render_ms)} milliseconds")
        logger.info(message)
        if self.on_log:
            self.on_log(LogEvent(message, level="info"))
        if self.on_frame:
            self.on_frame(FrameEvent(surface.data, surface.width, surface.height,
                                     seq, eval_ms, render_ms))

        return FrameReport(frame, surface, eval_ms, render_ms, seq)

    def run_state(self, state: SessionState, seq: Optional[int] = None) -> FrameReport:
        return self.run(state.viewport, state.settings, get_gradient(state.palette),
                        state.canvas_width, state.canvas_height, seq=seq)
