from dataclasses import replace
from typing import Optional

from fractals.complex_number import ComplexNumber
from rendering.service import FrameService, FrameReport
from ui.session import (SessionState, InputEvent, SetParameters, Resize,
                        reduce)
from utils.enums import BackendType, FractalMode, GridSampling


class RenderConfigBuilder:
    """
    Builder for configuring a session before the next render.
    """
    def __init__(self, api: "FractalAPI"):
        self.api = api
        self._resolution: Optional[int] = None
        self._accuracy: Optional[int] = None
        self._mode: Optional[FractalMode] = None
        self._julia_param: Optional[ComplexNumber] = None
        self._palette: Optional[str] = None
        self._sampling: Optional[GridSampling] = None
        self._backend: Optional[BackendType] = None
        self._canvas: Optional[tuple] = None

    def resolution(self, value: int) -> 'RenderConfigBuilder':
        self._resolution = value
        return self

    def accuracy(self, value: int) -> 'RenderConfigBuilder':
        self._accuracy = value
        return self

    def mode(self, mode) -> 'RenderConfigBuilder':
        self._mode = mode if isinstance(mode, FractalMode) else FractalMode.from_name(mode)
        return self

    def julia_param(self, real: float, imaginary: float) -> 'RenderConfigBuilder':
        self._julia_param = ComplexNumber(float(real), float(imaginary))
        return self

    def palette(self, name: str) -> 'RenderConfigBuilder':
        self._palette = name
        return self

    def sampling(self, sampling: GridSampling) -> 'RenderConfigBuilder':
        self._sampling = sampling
        return self

    def backend(self, backend: BackendType) -> 'RenderConfigBuilder':
        self._backend = backend
        return self

    def canvas_size(self, width: int, height: int) -> 'RenderConfigBuilder':
        self._canvas = (width, height)
        return self

    def apply(self) -> SessionState:
        state = self.api.state
        if self._canvas:
            state = reduce(state, Resize(*self._canvas))
        state = reduce(state, SetParameters(resolution=self._resolution,
                                            accuracy=self._accuracy,
                                            mode=self._mode,
                                            julia_param=self._julia_param,
                                            palette=self._palette))
        if self._sampling is not None or self._backend is not None:
            state = replace(state,
                            sampling=self._sampling or state.sampling,
                            backend=self._backend or state.backend)
        self.api.state = state
        return state


class FractalAPI:
    """
    Facade over the session reducer and the frame service.
    """
    def __init__(self, state: Optional[SessionState] = None,
                 service: Optional[FrameService] = None):
        self.state: SessionState = state or SessionState()
        self.service: FrameService = service or FrameService()
        self.last_report: Optional[FrameReport] = None

    # ---------- Callbacks --------------------------------
    def on_frame(self, cb): self.service.on_frame = cb
    def on_log(self, cb): self.service.on_log = cb

    # ----------- Facade methods --------------------------
    def dispatch(self, event: InputEvent) -> Optional[FrameReport]:
        """
        Feeds one input event through the reducer and re-renders when the
        event calls for it.

        Args:
            event (InputEvent): The key, mouse or parameter event.

        Returns:
            FrameReport or None: The new frame, if one was rendered.
        """
        self.state = reduce(self.state, event)
        if event.triggers_render:
            return self.render()
        return None

    def set_view(self, start_x: float, start_y: float, view_width: float) -> None:
        """
        Moves the viewport; the height follows the canvas aspect ratio.

        Args:
            start_x (float): Real part of the top-left corner.
            start_y (float): Imaginary part of the top-left corner.
            view_width (float): Width of the viewport on the real axis.
        """
        self.state = reduce(self.state, SetParameters(start_x=start_x, start_y=start_y,
                                                      view_width=view_width))

    def configure(self) -> RenderConfigBuilder:
        """
        Configures the session with a fluent builder pattern.

        Returns:
            RenderConfigBuilder: A builder object for configuring render settings.
        """
        return RenderConfigBuilder(self)

    def render(self) -> FrameReport:
        """
        Runs a synchronous simulate-then-render cycle for the current state.
        """
        self.last_report = self.service.run_state(self.state)
        return self.last_report

    def save_image(self, path: str) -> None:
        """
        Writes the most recent frame to an image file, rendering first if needed.
        """
        report = self.last_report or self.render()
        report.surface.save(path)
