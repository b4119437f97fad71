"""
Immutable viewer state and the input reducer that replaces it.

The reducer is pure: every input event maps the current SessionState to a
new one. Nothing here touches Qt, so the same logic drives the desktop
viewer, scripted sessions and tests.
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import ClassVar, Optional, Tuple

from coloring.palettes import DEFAULT_PALETTE, get_gradient
from fractals.base import Viewport, SimulationSettings, DEFAULT_JULIA_PARAM
from fractals.complex_number import ComplexNumber
from fractals.validation import (ParameterError, validate_canvas_size,
                                 validate_simulation)
from utils.coords import PlaneMapper
from utils.enums import BackendType, FractalMode, GridSampling

MAX_HISTORY = 64
PAN_FRACTION = 0.1
ZOOM_FACTOR = 2.0

# (start_x, start_y, view_width)
ViewTriple = Tuple[float, float, float]
Point = Tuple[float, float]


@dataclass(frozen=True)
class SessionState:
    # View
    start_x: float = -2.0
    start_y: float = -1.0
    view_width: float = 3.5
    canvas_width: int = 800
    canvas_height: int = 600

    # Quality
    resolution: int = 500
    accuracy: int = 200
    quality_step: int = 5

    # Fractal
    mode: FractalMode = FractalMode.MANDELBROT
    julia_param: ComplexNumber = DEFAULT_JULIA_PARAM
    palette: str = DEFAULT_PALETTE
    sampling: GridSampling = GridSampling.INDEXED
    backend: BackendType = BackendType.CPU

    # Region selection (raster coordinates) and rewind stack
    box_start: Point = (0.0, 0.0)
    box_end: Point = (0.0, 0.0)
    history: Tuple[ViewTriple, ...] = field(default=())

    @property
    def aspect(self) -> float:
        return self.canvas_height / self.canvas_width

    @property
    def view_height(self) -> float:
        return self.view_width * self.aspect

    @property
    def end_x(self) -> float:
        return self.start_x + self.view_width

    @property
    def end_y(self) -> float:
        return self.start_y + self.view_height

    @property
    def viewport(self) -> Viewport:
        return Viewport.locked_to_canvas(self.start_x, self.start_y, self.view_width,
                                         self.canvas_width, self.canvas_height)

    @property
    def mapper(self) -> PlaneMapper:
        return PlaneMapper(self.viewport, self.canvas_width, self.canvas_height)

    @property
    def settings(self) -> SimulationSettings:
        return SimulationSettings(resolution=self.resolution, accuracy=self.accuracy,
                                  mode=self.mode, julia_param=self.julia_param,
                                  sampling=self.sampling, backend=self.backend)

    @property
    def selection_rect(self) -> Optional[Tuple[float, float, float, float]]:
        """
        The drag box as (x, y, w, h) in raster pixels, normalised to a positive
        size. Its height is locked to the canvas aspect ratio. None when empty.
        """
        (x0, y0), (x1, _) = self.box_start, self.box_end
        w = x1 - x0
        if abs(w) < 1:
            return None
        h = abs(w) * self.aspect
        x = min(x0, x1)
        y = y0 - h if w < 0 else y0
        return x, y, abs(w), h


# ---------------------------------------------------------------------------
# Input events
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class InputEvent:
    triggers_render: ClassVar[bool] = True


@dataclass(frozen=True)
class KeyPress(InputEvent):
    key: str


@dataclass(frozen=True)
class MouseDown(InputEvent):
    triggers_render: ClassVar[bool] = False
    x: float
    y: float


@dataclass(frozen=True)
class MouseUp(InputEvent):
    triggers_render: ClassVar[bool] = False
    x: float
    y: float


@dataclass(frozen=True)
class SetParameters(InputEvent):
    resolution: Optional[int] = None
    accuracy: Optional[int] = None
    mode: Optional[FractalMode] = None
    julia_param: Optional[ComplexNumber] = None
    palette: Optional[str] = None
    start_x: Optional[float] = None
    start_y: Optional[float] = None
    view_width: Optional[float] = None


@dataclass(frozen=True)
class Resize(InputEvent):
    width: int
    height: int


@dataclass(frozen=True)
class Reset(InputEvent):
    pass


# ---------------------------------------------------------------------------
# Reducer
# ---------------------------------------------------------------------------

def _move_view(state: SessionState, start_x: float, start_y: float,
               view_width: float) -> SessionState:
    # Reject the move up front so a bad zoom never lands in the state.
    Viewport.locked_to_canvas(start_x, start_y, view_width,
                              state.canvas_width, state.canvas_height)
    if (start_x, start_y, view_width) == (state.start_x, state.start_y, state.view_width):
        return state
    history =(state.history + ((state.start_x, state.start_y, state.view_width),))[-MAX_HISTORY:]
    return replace(state, start_x=start_x, start_y=start_y,
                   view_width=view_width, history=history)


def _zoom_about_center(state: SessionState, factor: float) -> SessionState:
    cx = state.start_x + state.view_width / 2
    cy = state.start_y + state.view_height / 2
    new_width = state.view_width / factor
    new_height = new_width * state.aspect
    return _move_view(state, cx - new_width / 2, cy - new_height / 2, new_width)


def _zoom_to_selection(state: SessionState) -> SessionState:
    cleared = replace(state, box_start=(0.0, 0.0), box_end=(0.0, 0.0))
    rect = state.selection_rect
    if rect is None:
        return cleared
    x, y, w, _ = rect
    mapper = state.mapper
    start = mapper.to_plane(x, y)
    end = mapper.to_plane(x + w, y)
    return _move_view(cleared, start.real, start.imaginary, end.real - start.real)


def _rewind(state: SessionState) -> SessionState:
    if not state.history:
        return state
    start_x, start_y, view_width = state.history[-1]
    return replace(state, start_x=start_x, start_y=start_y,
                   view_width=view_width, history=state.history[:-1])


def _step_quality(state: SessionState, attr: str, delta: int) -> SessionState:
    value = getattr(state, attr) + delta
    # Refuse steps that would leave no samples or iterations.
    if value < 1:
        return state
    return replace(state, **{attr: value})


def _on_key(state: SessionState, key: str) -> SessionState:
    step = state.quality_step
    if key == "w":
        return _step_quality(state, "resolution", step)
    if key == "s":
        return _step_quality(state, "resolution", -step)
    if key == "l":
        return _step_quality(state, "accuracy", step)
    if key == "j":
        return _step_quality(state, "accuracy", -step)
    if key == "Enter":
        return _zoom_to_selection(state)
    if key == "Backspace":
        return _rewind(state)
    if key in ("+", "="):
        return _zoom_about_center(state, ZOOM_FACTOR)
    if key == "-":
        return _zoom_about_center(state, 1 / ZOOM_FACTOR)
    if key == "m":
        mode = FractalMode.JULIA if state.mode == FractalMode.MANDELBROT else FractalMode.MANDELBROT
        return replace(state, mode=mode)

    dx = PAN_FRACTION * state.view_width
    dy = PAN_FRACTION * state.view_height
    pans = {
        "ArrowLeft": (-dx, 0.0),
        "ArrowRight": (dx, 0.0),
        "ArrowUp": (0.0, -dy),
        "ArrowDown": (0.0, dy),
    }
    if key in pans:
        ox, oy = pans[key]
        return _move_view(state, state.start_x + ox, state.start_y + oy, state.view_width)
    return state


def _on_set_parameters(state: SessionState, evt: SetParameters) -> SessionState:
    changes = {k: v for k, v in (
        ("resolution", evt.resolution),
        ("accuracy", evt.accuracy),
        ("mode", evt.mode),
        ("julia_param", evt.julia_param),
        ("palette", evt.palette),
    ) if v is not None}

    updated = replace(state, **changes)
    validate_simulation(updated.resolution, updated.accuracy, updated.julia_param,
                        julia_required=updated.mode == FractalMode.JULIA)
    get_gradient(updated.palette)

    if evt.start_x is not None or evt.start_y is not None or evt.view_width is not None:
        start_x = state.start_x if evt.start_x is None else evt.start_x
        start_y = state.start_y if evt.start_y is None else evt.start_y
        view_width = state.view_width if evt.view_width is None else evt.view_width
        updated = _move_view(updated, start_x, start_y, view_width)
    return updated


def reduce(state: SessionState, event: InputEvent) -> SessionState:
    """
    Apply one input event and return the next state. Raises ParameterError
    (or KeyError for unknown palettes) when the event carries invalid values;
    the passed-in state is never modified.
    """
    if isinstance(event, KeyPress):
        return _on_key(state, event.key)
    if isinstance(event, MouseDown):
        return replace(state, box_start=(event.x, event.y), box_end=(event.x, event.y))
    if isinstance(event, MouseUp):
        return replace(state, box_end=(event.x, event.y))
    if isinstance(event, SetParameters):
        return _on_set_parameters(state, event)
    if isinstance(event, Resize):
        validate_canvas_size(event.width, event.height)
        return replace(state, canvas_width=int(event.width), canvas_height=int(event.height),
                       box_start=(0.0, 0.0), box_end=(0.0, 0.0))
    if isinstance(event, Reset):
        defaults = SessionState()
        return _move_view(state, defaults.start_x, defaults.start_y, defaults.view_width)
    raise ParameterError(f"Unsupported input event: {type(event).__name__}")
