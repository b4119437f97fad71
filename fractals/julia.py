from dataclasses import dataclass
from typing import Dict, Any

import numpy as np

from fractals.base import Fractal, SimulationSettings, DEFAULT_JULIA_PARAM
from fractals.complex_number import ComplexNumber
from fractals.mandelbrot import iterate_escape, NEVER_ESCAPES


def julia_escape(c: ComplexNumber, param: ComplexNumber, max_iter: int) -> int:
    # The sample point seeds the orbit; the fixed parameter is added each step.
    return iterate_escape(c, param, max_iter)


@dataclass
class JuliaFractal(Fractal):
    param: ComplexNumber = DEFAULT_JULIA_PARAM
    name: str = "julia"

    def escape(self, point: ComplexNumber, max_iter: int) -> int:
        return julia_escape(point, self.param, max_iter)

    def build_arg_values(self, xs: np.ndarray, ys: np.ndarray,
                         settings: SimulationSettings) -> Dict[str, Any]:
        return {
            "xs": xs,
            "ys": ys,
            "param_real": float(self.param.real),
            "param_imag": float(self.param.imaginary),
            "max_iter": int(settings.accuracy),
            "out": np.full((len(ys), len(xs)), NEVER_ESCAPES, dtype=np.int32),
        }
