from dataclasses import dataclass
from typing import Dict, Any

import numpy as np

from fractals.base import Fractal, SimulationSettings
from fractals.complex_number import ComplexNumber

ESCAPE_THRESHOLD = 2.0
NEVER_ESCAPES = -1

_ORIGIN = ComplexNumber(0.0, 0.0)


def iterate_escape(z: ComplexNumber, c: ComplexNumber, max_iter: int) -> int:
    """
    Shared core of both variants: iterate z = z*z + c and return the first
    0-based step whose real part reaches the threshold, or -1.

    Only the real part is tested, and only after each update.
    """
    for i in range(max_iter):
        z = z.multiply(z).add(c)
        if z.real >= ESCAPE_THRESHOLD:
            return i
    return NEVER_ESCAPES


def mandelbrot_escape(c: ComplexNumber, max_iter: int) -> int:
    return iterate_escape(_ORIGIN, c, max_iter)


@dataclass
class MandelbrotFractal(Fractal):
    name: str = "mandelbrot"

    def escape(self, point: ComplexNumber, max_iter: int) -> int:
        return mandelbrot_escape(point, max_iter)

    def build_arg_values(self, xs: np.ndarray, ys: np.ndarray,
                         settings: SimulationSettings) -> Dict[str, Any]:
        return {
            "xs": xs,
            "ys": ys,
            "max_iter": int(settings.accuracy),
            "out": np.full((len(ys), len(xs)), NEVER_ESCAPES, dtype=np.int32),
        }
