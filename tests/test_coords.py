import pytest

from fractals.base import Viewport
from fractals.complex_number import ComplexNumber
from fractals.validation import ParameterError
from utils.coords import PlaneMapper, fractal_to_image_coords, image_to_fractal_coords


def test_corners_map_to_canvas_corners():
    mapper = PlaneMapper(Viewport(-2.0, -1.0, 1.5, 1.625), 800, 600)
    assert mapper.to_raster(ComplexNumber(-2.0, -1.0)) == pytest.approx((0.0, 0.0))
    assert mapper.to_raster(ComplexNumber(1.5, 1.625)) == pytest.approx((800.0, 600.0))


def test_round_trip_through_raster():
    mapper = PlaneMapper(Viewport(-0.75, 0.1, -0.70, 0.14), 640, 480)
    point = ComplexNumber(-0.7312, 0.1234)
    px, py = mapper.to_raster(point)
    back = mapper.to_plane(px, py)
    assert back.real == pytest.approx(point.real, abs=1e-12)
    assert back.imaginary == pytest.approx(point.imaginary, abs=1e-12)


def test_helpers_are_inverse():
    px, py = fractal_to_image_coords(0.5, -0.25, -2.0, -1.0, 200.0, 150.0)
    assert image_to_fractal_coords(px, py, -2.0, -1.0, 200.0, 150.0) == pytest.approx((0.5, -0.25))


def test_point_size_tiles_canvas():
    mapper = PlaneMapper(Viewport(0.0, 0.0, 1.0, 1.0), 20, 10)
    assert mapper.point_size(10) == (2.0, 1.0)


@pytest.mark.parametrize("bounds", [
    (0.0, 0.0, 0.0, 1.0),
    (0.0, 0.0, 1.0, 0.0),
    (1.0, 0.0, 0.0, 1.0),
    (0.0, float("nan"), 1.0, 1.0),
])
def test_degenerate_viewport_is_rejected(bounds):
    with pytest.raises(ParameterError):
        Viewport(*bounds)


@pytest.mark.parametrize("size", [(0, 100), (100, -1)])
def test_bad_canvas_is_rejected(size):
    with pytest.raises(ParameterError):
        PlaneMapper(Viewport(0.0, 0.0, 1.0, 1.0), *size)


def test_locked_viewport_follows_canvas_aspect():
    vp = Viewport.locked_to_canvas(-2.0, -1.0, 3.5, 800, 600)
    assert vp.height == pytest.approx(3.5 * 600 / 800)
    assert vp.end == pytest.approx((1.5, 1.625))


@pytest.mark.parametrize("viewport,canvas", [
    (Viewport.locked_to_canvas(-2.0, -1.0, 3.5, 500, 286), (500, 286)),
    (Viewport(-0.75, 0.1, -0.70, 0.14), (640, 480)),
    (Viewport(1e-3, -5.0, 2e-3, 5.0), (13, 14)),
])
def test_raster_round_trip_over_canvas(viewport, canvas):
    width, height = canvas
    mapper = PlaneMapper(viewport, width, height)
    for px in range(0, width + 1, max(1, width // 13)):
        for py in range(0, height + 1, max(1, height // 13)):
            rx, ry = mapper.to_raster(mapper.to_plane(px, py))
            assert rx == pytest.approx(px, abs=1e-6)
            assert ry == pytest.approx(py, abs=1e-6)
