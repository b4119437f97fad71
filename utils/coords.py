from typing import Tuple

from fractals.base import Viewport
from fractals.complex_number import ComplexNumber
from fractals.validation import validate_canvas_size


def fractal_to_image_coords(fx, fy, start_x, start_y, scale_x, scale_y):
    px = (fx - start_x) * scale_x
    py = (fy - start_y) * scale_y
    return px, py


def image_to_fractal_coords(px, py, start_x, start_y, scale_x, scale_y):
    fx = px / scale_x + start_x
    fy = py / scale_y + start_y
    return fx, fy


class PlaneMapper:
    """
    Affine map between a viewport of the complex plane and a raster of
    canvas_width x canvas_height pixels. Raster y grows with the imaginary part.
    """

    def __init__(self, viewport: Viewport, canvas_width: float, canvas_height: float):
        validate_canvas_size(canvas_width, canvas_height)
        self.viewport = viewport
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        # pixels per plane unit
        self.scale_x = canvas_width / abs(viewport.end_x - viewport.start_x)
        self.scale_y = canvas_height / abs(viewport.end_y - viewport.start_y)

    def to_raster(self, point: ComplexNumber) -> Tuple[float, float]:
        return fractal_to_image_coords(point.real, point.imaginary,
                                       self.viewport.start_x, self.viewport.start_y,
                                       self.scale_x, self.scale_y)

    def to_plane(self, px: float, py: float) -> ComplexNumber:
        fx, fy = image_to_fractal_coords(px, py,
                                         self.viewport.start_x, self.viewport.start_y,
                                         self.scale_x, self.scale_y)
        return ComplexNumber(fx, fy)

    def point_size(self, resolution: int) -> Tuple[float, float]:
        """Size of one sample's rectangle so adjacent samples tile without gaps."""
        return self.canvas_width / resolution, self.canvas_height / resolution
