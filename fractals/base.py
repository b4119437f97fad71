from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Any, Tuple
from abc import ABC, abstractmethod

import numpy as np

from fractals.complex_number import ComplexNumber
from fractals.validation import (validate_viewport_bounds, validate_canvas_size,
                                 validate_simulation)
from utils.enums import BackendType, FractalMode, GridSampling


DEFAULT_JULIA_PARAM = ComplexNumber(-0.8, 0.156)


@dataclass(frozen=True)
class Viewport:
    """
    Axis-aligned rectangle of the complex plane, stored as its start and end corners.
    Width and height are always positive and finite.
    """
    start_x: float
    start_y: float
    end_x: float
    end_y: float

    def __post_init__(self):
        validate_viewport_bounds(self.start_x, self.start_y, self.end_x, self.end_y)

    @classmethod
    def from_size(cls, start_x: float, start_y: float,
                  width: float, height: float) -> "Viewport":
        return cls(start_x, start_y, start_x + width, start_y + height)

    @classmethod
    def locked_to_canvas(cls, start_x: float, start_y: float, view_width: float,
                         canvas_width: float, canvas_height: float) -> "Viewport":
        """
        Builds a viewport whose height follows the canvas aspect ratio, so square
        pixels cover square regions of the plane.
        """
        validate_canvas_size(canvas_width, canvas_height)
        return cls.from_size(start_x, start_y, view_width,
                             view_width * (canvas_height / canvas_width))

    @property
    def width(self) -> float:
        return self.end_x - self.start_x

    @property
    def height(self) -> float:
        return self.end_y - self.start_y

    @property
    def start(self) -> Tuple[float, float]:
        return self.start_x, self.start_y

    @property
    def end(self) -> Tuple[float, float]:
        return self.end_x, self.end_y

    @property
    def center(self) -> ComplexNumber:
        return ComplexNumber(self.start_x + self.width / 2,
                             self.start_y + self.height / 2)


@dataclass(frozen=True)
class SimulationSettings:
    """
    Parameters for one simulation run.
    Resolution is the sample count per axis, accuracy the iteration budget.
    The Julia parameter is ignored in Mandelbrot mode.
    """
    resolution: int = 500
    accuracy: int = 200
    mode: FractalMode = FractalMode.MANDELBROT
    julia_param: ComplexNumber = field(default=DEFAULT_JULIA_PARAM)
    sampling: GridSampling = GridSampling.INDEXED
    backend: BackendType = BackendType.CPU

    def validate(self) -> None:
        validate_simulation(self.resolution, self.accuracy, self.julia_param,
                            julia_required=self.mode == FractalMode.JULIA)


class Fractal(ABC):
    """
    An abstract base class for escape-time fractal variants.
    """
    name: str

    @abstractmethod
    def escape(self, point: ComplexNumber, max_iter: int) -> int:
        ...

    @abstractmethod
    def build_arg_values(self, xs: np.ndarray, ys: np.ndarray,
                         settings: SimulationSettings) -> Dict[str, Any]:
        ...
