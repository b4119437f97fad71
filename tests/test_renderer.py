import numpy as np

from coloring.gradient import Color, LinearGradient, BLACK
from coloring.palettes import get_gradient
from fractals.base import Viewport
from rendering.renderer import render
from rendering.simulator import simulate
from rendering.surface import ArraySurface
from utils.coords import PlaneMapper
from utils.enums import BackendType


def _paint(viewport, canvas=(20, 20), resolution=10, accuracy=50, gradient=None):
    frame = simulate(resolution, accuracy, viewport, backend=BackendType.PYTHON)
    surface = ArraySurface(*canvas)
    mapper = PlaneMapper(viewport, *canvas)
    render(frame, gradient or get_gradient("Default"), mapper, surface)
    return surface


def test_immediate_escape_region_is_first_stop():
    # Every sample has real part >= 2.5, so it escapes on step 0.
    surface = _paint(Viewport.from_size(2.5, 2.5, 1.0, 1.0))
    first = get_gradient("Default").color_at(0).to_rgb()
    assert (surface.data == np.array(first, dtype=np.uint8)).all()


def test_in_set_region_stays_background():
    surface = _paint(Viewport(-0.1, -0.1, 0.1, 0.1))
    assert not surface.data.any()


def test_previous_contents_are_cleared():
    viewport = Viewport(-0.1, -0.1, 0.1, 0.1)
    frame = simulate(10, 50, viewport, backend=BackendType.PYTHON)
    surface = ArraySurface(20, 20)
    surface.clear(Color(255, 255, 255))
    render(frame, get_gradient("Default"), PlaneMapper(viewport, 20, 20), surface)
    assert not surface.data.any()


def test_explicit_point_size_and_background():
    viewport = Viewport.from_size(2.5, 2.5, 1.0, 1.0)
    frame = simulate(2, 10, viewport, backend=BackendType.PYTHON)
    surface = ArraySurface(10, 10)
    red = LinearGradient([(255, 0, 0)])
    render(frame, red, PlaneMapper(viewport, 10, 10), surface,
           point_size=(1, 1), background=Color(0, 0, 255))
    # Samples sit at pixels (0, 0), (5, 0), (0, 5) and (5, 5).
    assert surface.pixel(0, 0) == (255, 0, 0)
    assert surface.pixel(5, 5) == (255, 0, 0)
    assert surface.pixel(2, 2) == (0, 0, 255)


def test_surface_rectangles_clip_to_buffer():
    surface = ArraySurface(8, 8)
    surface.fill_rect(-3, 6, 5, 10, Color(9, 9, 9))
    assert surface.pixel(0, 7) == (9, 9, 9)
    assert surface.pixel(2, 7) == (0, 0, 0)
    assert surface.pixel(4, 4) == BLACK.to_rgb()
    # Sub-pixel rectangles still cover one pixel.
    surface.fill_rect(4.2, 4.2, 0.3, 0.3, Color(1, 2, 3))
    assert surface.pixel(4, 4) == (1, 2, 3)


def test_surface_exports_png(tmp_path):
    surface = _paint(Viewport.from_size(2.5, 2.5, 1.0, 1.0), canvas=(16, 12))
    path = tmp_path / "frame.png"
    surface.save(str(path))
    image = surface.to_image()
    assert path.exists()
    assert image.size == (16, 12)
