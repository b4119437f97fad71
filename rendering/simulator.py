"""
Frame simulation: evaluate the escape time of every sample on a grid that
spans a viewport, and collect the results into an immutable FrameResult.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

import numpy as np

from fractals.base import Fractal, SimulationSettings, Viewport, DEFAULT_JULIA_PARAM
from fractals.complex_number import ComplexNumber
from fractals.julia import JuliaFractal
from fractals.mandelbrot import MandelbrotFractal, NEVER_ESCAPES
from kernel_sources import load_kernel
from utils.enums import BackendType, FractalMode, GridSampling

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PointRecord:
    point: ComplexNumber
    escape: int


@dataclass(frozen=True)
class FrameResult:
    """
    Row-major grid (y outer, x inner) of sampled points. A None entry is a
    sample that never escaped within the iteration budget, i.e. is in the set.
    """
    viewport: Viewport
    resolution: int
    accuracy: int
    mode: FractalMode
    julia_param: Optional[ComplexNumber]
    rows: Tuple[Tuple[Optional[PointRecord], ...], ...]

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_counts(self) -> Tuple[int, ...]:
        return tuple(len(row) for row in self.rows)

    def records(self) -> Iterator[PointRecord]:
        for row in self.rows:
            for record in row:
                if record is not None:
                    yield record

    def escape_grid(self) -> np.ma.MaskedArray:
        """Escape counts as a masked array; in-set samples are masked."""
        width = max(self.column_counts, default=0)
        data = np.zeros((self.row_count, width), dtype=np.int32)
        mask = np.ones((self.row_count, width), dtype=bool)
        for y, row in enumerate(self.rows):
            for x, record in enumerate(row):
                if record is not None:
                    data[y, x] = record.escape
                    mask[y, x] = False
        return np.ma.MaskedArray(data, mask=mask)


def make_fractal(mode: FractalMode, julia_param: Optional[ComplexNumber] = None) -> Fractal:
    if mode == FractalMode.MANDELBROT:
        return MandelbrotFractal()
    return JuliaFractal(param=julia_param if julia_param is not None else DEFAULT_JULIA_PARAM)


def sample_axis(start: float, end: float, step: float, count: int,
                sampling: GridSampling) -> np.ndarray:
    """
    Sample coordinates along one axis.

    INDEXED gives exactly `count` samples at start + i*step. ACCUMULATE
    reproduces `v = start; while v < end: v += step`, whose sample count can
    drift by one because of float accumulation.
    """
    if sampling == GridSampling.INDEXED:
        return start + np.arange(count, dtype=np.float64) * step

    values = []
    v = start
    while v < end:
        values.append(v)
        v += step
    return np.array(values, dtype=np.float64)


def sample_grid(viewport: Viewport, resolution: int,
                sampling: GridSampling) -> Tuple[np.ndarray, np.ndarray]:
    x_step = viewport.width / resolution
    y_step = viewport.height / resolution
    xs = sample_axis(viewport.start_x, viewport.end_x, x_step, resolution, sampling)
    ys = sample_axis(viewport.start_y, viewport.end_y, y_step, resolution, sampling)
    return xs, ys


def evaluate_grid(fractal: Fractal, xs: np.ndarray, ys: np.ndarray,
                  settings: SimulationSettings) -> np.ndarray:
    """
    Run the registered escape-grid kernel; returns an int32 (len(ys), len(xs))
    array holding escape indices, -1 where the orbit stayed bounded.
    """
    meta = load_kernel(settings.backend.name, fractal.name)
    args = fractal.build_arg_values(xs, ys, settings)
    meta["func"](*[args[name] for name in meta["arg_order"]])
    return args[meta["output_arg"]]


def simulate(resolution: int, accuracy: int, viewport: Viewport,
             mode: FractalMode = FractalMode.MANDELBROT,
             julia_param: Optional[ComplexNumber] = None, *,
             sampling: GridSampling = GridSampling.INDEXED,
             backend: BackendType = BackendType.CPU) -> FrameResult:
    settings = SimulationSettings(resolution=resolution, accuracy=accuracy, mode=mode,
                                  julia_param=julia_param if julia_param is not None else DEFAULT_JULIA_PARAM,
                                  sampling=sampling, backend=backend)
    return simulate_settings(settings, viewport)


def simulate_settings(settings: SimulationSettings, viewport: Viewport) -> FrameResult:
    settings.validate()
    fractal = make_fractal(settings.mode, settings.julia_param)

    xs, ys = sample_grid(viewport, settings.resolution, settings.sampling)
    escapes = evaluate_grid(fractal, xs, ys, settings)
    logger.debug("Simulated %s grid %dx%d (accuracy=%d, backend=%s)",
                 fractal.name, len(xs), len(ys), settings.accuracy, settings.backend.name)

    xs_f = xs.tolist()
    rows = []
    for y, ci in enumerate(ys.tolist()):
        row_escapes = escapes[y].tolist()
        rows.append(tuple(
            None if n == NEVER_ESCAPES else PointRecord(ComplexNumber(cr, ci), n)
            for cr, n in zip(xs_f, row_escapes)
        ))

    julia_param = settings.julia_param if settings.mode == FractalMode.JULIA else None
    return FrameResult(viewport=viewport, resolution=settings.resolution,
                       accuracy=settings.accuracy, mode=settings.mode,
                       julia_param=julia_param, rows=tuple(rows))
