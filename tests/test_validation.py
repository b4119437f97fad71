import pytest

from fractals.base import SimulationSettings
from fractals.validation import (ParameterError, validate_canvas_size,
                                 validate_gradient_index, validate_simulation,
                                 validate_viewport_bounds)
from utils.enums import FractalMode


def test_parameter_error_is_value_error():
    assert issubclass(ParameterError, ValueError)


def test_errors_are_aggregated():
    with pytest.raises(ParameterError) as excinfo:
        validate_simulation(0, -2)
    message = str(excinfo.value)
    assert message.startswith("Simulation validation failed:")
    assert "resolution" in message and "accuracy" in message


@pytest.mark.parametrize("value", [True, 1.0, "10", None])
def test_non_integer_counts_are_rejected(value):
    with pytest.raises(ParameterError):
        validate_simulation(value, 10)


def test_julia_parameter_required_only_for_julia():
    validate_simulation(10, 10, None)
    with pytest.raises(ParameterError):
        validate_simulation(10, 10, None, julia_required=True)


def test_settings_validate_checks_julia_parameter():
    with pytest.raises(ParameterError):
        SimulationSettings(mode=FractalMode.JULIA, julia_param=None).validate()
    SimulationSettings(mode=FractalMode.MANDELBROT, julia_param=None).validate()


def test_viewport_overflow_is_rejected():
    with pytest.raises(ParameterError, match="overflows"):
        validate_viewport_bounds(-1e308, 0.0, 1e308, 1.0)


def test_canvas_and_gradient_checks():
    validate_canvas_size(1, 1)
    with pytest.raises(ParameterError):
        validate_canvas_size(float("inf"), 10)
    validate_gradient_index(0)
    with pytest.raises(ParameterError):
        validate_gradient_index(-0.5)
    with pytest.raises(ParameterError):
        validate_gradient_index(3, stop_count=0)
