from __future__ import annotations
from abc import ABC, abstractmethod

import numpy as np
from PIL import Image

from coloring.gradient import Color, BLACK
from fractals.validation import validate_canvas_size


class RasterSurface(ABC):
    """
    A drawing target of known pixel dimensions.
    """
    width: int
    height: int

    @abstractmethod
    def clear(self, color: Color = BLACK) -> None: ...

    @abstractmethod
    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color) -> None: ...


class ArraySurface(RasterSurface):
    """
    RGB surface backed by a (height, width, 3) uint8 numpy buffer.
    Rectangles are snapped to whole pixels and clipped to the buffer.
    """

    def __init__(self, width: int, height: int):
        validate_canvas_size(width, height)
        self.width = int(width)
        self.height = int(height)
        self.data = np.zeros((self.height, self.width, 3), dtype=np.uint8)

    def _span(self, start: float, length: float, limit: int):
        lo = int(round(start))
        hi = int(round(start + length))
        if hi <= lo:
            hi = lo + 1
        return max(0, lo), min(limit, hi)

    def clear(self, color: Color = BLACK) -> None:
        self.data[:, :] = color.to_rgb()

    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color) -> None:
        x0, x1 = self._span(x, w, self.width)
        y0, y1 = self._span(y, h, self.height)
        if x0 < x1 and y0 < y1:
            self.data[y0:y1, x0:x1] = color.to_rgb()

    def pixel(self, x: int, y: int):
        return tuple(int(v) for v in self.data[y, x])

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.data)

    def save(self, path: str) -> None:
        self.to_image().save(path)
