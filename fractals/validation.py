from __future__ import annotations
import math
from numbers import Integral, Real
from typing import List, Optional


class ParameterError(ValueError):
    """Aggregated precondition violation(s) for a simulation or render request."""


def _check_positive_int(name: str, value, errors: List[str]) -> None:
    if isinstance(value, bool) or not isinstance(value, Integral):
        errors.append(f"{name} must be an integer; got {type(value).__name__}.")
    elif value < 1:
        errors.append(f"{name} must be >= 1; got {value}.")


def _check_finite(name: str, value, errors: List[str]) -> bool:
    if isinstance(value, bool) or not isinstance(value, Real):
        errors.append(f"{name} must be a number; got {type(value).__name__}.")
        return False
    if not math.isfinite(value):
        errors.append(f"{name} must be finite; got {value}.")
        return False
    return True


def raise_if_errors(errors: List[str], what: str) -> None:
    if errors:
        raise ParameterError(f"{what} validation failed:\n- " + "\n- ".join(errors))


def validate_viewport_bounds(start_x, start_y, end_x, end_y) -> None:
    """
    Raises ParameterError unless the corners span a finite, non-degenerate rectangle.
    """
    errors: List[str] = []
    ok = all([
        _check_finite("start_x", start_x, errors),
        _check_finite("start_y", start_y, errors),
        _check_finite("end_x", end_x, errors),
        _check_finite("end_y", end_y, errors),
    ])
    if ok:
        if not end_x > start_x:
            errors.append(f"viewport width must be positive; got {end_x - start_x}.")
        if not end_y > start_y:
            errors.append(f"viewport height must be positive; got {end_y - start_y}.")
        if not math.isfinite(end_x - start_x) or not math.isfinite(end_y - start_y):
            errors.append("viewport extent overflows to infinity.")
    raise_if_errors(errors, "Viewport")


def validate_canvas_size(width, height) -> None:
    errors: List[str] = []
    for name, value in (("canvas_width", width), ("canvas_height", height)):
        if _check_finite(name, value, errors) and value <= 0:
            errors.append(f"{name} must be positive; got {value}.")
    raise_if_errors(errors, "Canvas")


def validate_simulation(resolution, accuracy, julia_param=None, *,
                        julia_required: bool = False) -> None:
    """
    Validates the scalar simulation parameters. Raises ParameterError on failure.
    """
    errors: List[str] = []
    _check_positive_int("resolution", resolution, errors)
    _check_positive_int("accuracy", accuracy, errors)

    if julia_required:
        if julia_param is None:
            errors.append("julia_param is required for the Julia variant.")
        else:
            _check_finite("julia_param.real", getattr(julia_param, "real", None), errors)
            _check_finite("julia_param.imaginary", getattr(julia_param, "imaginary", None), errors)

    raise_if_errors(errors, "Simulation")


def validate_gradient_index(n, stop_count: Optional[int] = None) -> None:
    errors: List[str] = []
    if _check_finite("n", n, errors) and n < 0:
        errors.append(f"gradient index must be non-negative; got {n}.")
    if stop_count is not None and stop_count < 1:
        errors.append("gradient needs at least one color stop.")
    raise_if_errors(errors, "Gradient")
