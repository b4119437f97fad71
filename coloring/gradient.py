from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterable, Tuple

from fractals.validation import raise_if_errors, validate_gradient_index

CYCLE_LENGTH = 100


def _channel(value: float) -> int:
    return max(0, min(255, int(value)))


@dataclass(frozen=True)
class Color:
    """
    RGB triple. Channels may hold fractional values while interpolating;
    they are truncated to 0-255 ints only when painted.
    """
    r: float
    g: float
    b: float

    def to_rgb(self) -> Tuple[int, int, int]:
        return _channel(self.r), _channel(self.g), _channel(self.b)

    def __str__(self) -> str:
        return f"rgb({self.r}, {self.g}, {self.b})"


BLACK = Color(0, 0, 0)


class LinearGradient:
    """
    Ordered color stops spread over a cyclic 0-100 scale.

    Index n is reduced modulo 100 once it exceeds 100, then scaled onto the
    stop positions; the two neighbouring stops are blended linearly.
    """

    def __init__(self, colors: Iterable):
        stops = tuple(c if isinstance(c, Color) else Color(*c) for c in colors)
        errors = []
        if not stops:
            errors.append("gradient needs at least one color stop.")
        raise_if_errors(errors, "Gradient")
        self.colors: Tuple[Color, ...] = stops

    def __len__(self) -> int:
        return len(self.colors)

    def __repr__(self) -> str:
        return f"LinearGradient({len(self.colors)} stops)"

    def color_at(self, n: float) -> Color:
        validate_gradient_index(n)
        if n > CYCLE_LENGTH:
            n = n % CYCLE_LENGTH

        last = len(self.colors) - 1
        if last == 0:
            return self.colors[0]

        x = n / (CYCLE_LENGTH / last)
        lo = math.floor(x)
        frac = x - lo
        # Float rounding can push x a hair past the last stop.
        lo = min(lo, last)
        hi = min(math.ceil(x), last)

        color1 = self.colors[lo]
        color2 = self.colors[hi]
        return Color(color1.r + (color2.r - color1.r) * frac,
                     color1.g + (color2.g - color1.g) * frac,
                     color1.b + (color2.b - color1.b) * frac)


def color_at(gradient: LinearGradient, n: float) -> Color:
    return gradient.color_at(n)
