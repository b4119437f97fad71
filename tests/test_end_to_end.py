import numpy as np
import pytest

from coloring.palettes import get_gradient
from fractals.base import SimulationSettings, Viewport
from fractals.mandelbrot import MandelbrotFractal
from rendering.service import FrameService
from rendering.simulator import evaluate_grid, sample_grid
from utils.enums import BackendType, FractalMode


@pytest.fixture(scope="module")
def default_frame():
    # Canvas height follows the viewport: 500 * 2 / 3.5.
    viewport = Viewport.from_size(-2.0, -1.0, 3.5, 2.0)
    settings = SimulationSettings(resolution=500, accuracy=200,
                                  mode=FractalMode.MANDELBROT, backend=BackendType.CPU)
    report = FrameService().run(viewport, settings, get_gradient("Default"),
                                500, round(500 * 2.0 / 3.5))
    return viewport, settings, report


def test_default_view_frame_shape(default_frame):
    _, _, report = default_frame
    frame = report.frame
    assert frame.row_count == 500
    assert frame.column_counts == (500,) * 500
    assert all(0 <= r.escape < 200 for r in frame.records())
    assert report.surface.data.shape == (286, 500, 3)


def test_default_view_has_set_and_escapees(default_frame):
    _, _, report = default_frame
    grid = report.frame.escape_grid()
    assert grid.mask.any()
    assert (~grid.mask).any()
    # In-set samples leave the background black.
    assert (report.surface.data == 0).all(axis=2).any()


def test_escape_counts_mirror_across_real_axis(default_frame):
    viewport, settings, report = default_frame
    xs, ys = sample_grid(viewport, settings.resolution, settings.sampling)
    upper = evaluate_grid(MandelbrotFractal(), xs, ys, settings)
    lower = evaluate_grid(MandelbrotFractal(), xs, -ys, settings)
    np.testing.assert_array_equal(upper, lower)
    np.testing.assert_array_equal(report.frame.escape_grid().filled(-1), upper)
