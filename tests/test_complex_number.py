from fractals.complex_number import ComplexNumber, add, multiply


def test_add_is_componentwise():
    a = ComplexNumber(1.5, -2.0)
    b = ComplexNumber(0.5, 3.0)
    assert add(a, b) == ComplexNumber(2.0, 1.0)
    assert a + b == ComplexNumber(2.0, 1.0)


def test_multiply_expands_four_terms():
    # (1 + 2i)(3 + 4i) = 3 + 4i + 6i + 8i^2 = -5 + 10i
    result = multiply(ComplexNumber(1, 2), ComplexNumber(3, 4))
    assert result == ComplexNumber(-5, 10)
    assert ComplexNumber(1, 2) * ComplexNumber(3, 4) == result


def test_i_squared_is_minus_one():
    i = ComplexNumber(0.0, 1.0)
    assert i * i == ComplexNumber(-1.0, 0.0)


def test_values_are_immutable():
    z = ComplexNumber(1.0, 1.0)
    z.add(ComplexNumber(1.0, 1.0))
    assert z == ComplexNumber(1.0, 1.0)


def test_format_uses_sign_of_imaginary_part():
    assert str(ComplexNumber(1.0, 2.0)) == "1.0 + 2.0i"
    assert str(ComplexNumber(1.0, -2.0)) == "1.0 - 2.0i"
    assert str(ComplexNumber(-1.0, 2.0)) == "-1.0 + 2.0i"


def test_format_rounds_when_places_given():
    assert ComplexNumber(0.123456, -0.654321).format(places=2) == "0.12 - 0.65i"
