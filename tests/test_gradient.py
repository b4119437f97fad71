import pytest

from coloring.gradient import Color, LinearGradient, color_at
from fractals.validation import ParameterError

STOPS = [(0, 7, 100), (32, 107, 203), (237, 255, 255), (255, 170, 0), (0, 2, 0)]


@pytest.fixture
def gradient():
    return LinearGradient(STOPS)


def test_zero_maps_to_first_stop(gradient):
    assert gradient.color_at(0).to_rgb() == STOPS[0]


def test_hundred_maps_to_last_stop(gradient):
    assert gradient.color_at(100).to_rgb() == STOPS[-1]


def test_indices_past_hundred_wrap(gradient):
    assert gradient.color_at(150) == gradient.color_at(50)
    assert gradient.color_at(225) == gradient.color_at(25)


def test_midpoint_between_stops_is_blended():
    g = LinearGradient([(0, 0, 0), (200, 100, 50)])
    assert g.color_at(50) == Color(100.0, 50.0, 25.0)
    assert g.color_at(50).to_rgb() == (100, 50, 25)


def test_stops_land_on_even_positions(gradient):
    # Five stops sit at 0, 25, 50, 75 and 100.
    for i, stop in enumerate(STOPS):
        assert gradient.color_at(i * 25).to_rgb() == stop


def test_single_stop_gradient_is_constant():
    g = LinearGradient([(10, 20, 30)])
    for n in (0, 33, 100, 250):
        assert g.color_at(n).to_rgb() == (10, 20, 30)


def test_negative_index_is_rejected(gradient):
    with pytest.raises(ParameterError):
        gradient.color_at(-1)


def test_empty_gradient_is_rejected():
    with pytest.raises(ParameterError, match="Gradient validation failed"):
        LinearGradient([])


def test_module_level_helper(gradient):
    assert color_at(gradient, 40) == gradient.color_at(40)


def test_color_string_and_clamping():
    assert str(Color(1, 2, 3)) == "rgb(1, 2, 3)"
    assert Color(-5, 300, 12.9).to_rgb() == (0, 255, 12)
