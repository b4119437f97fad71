from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ComplexNumber:
    """
    Immutable complex value used by the escape-time evaluators.
    """
    real: float
    imaginary: float

    def add(self, other: "ComplexNumber") -> "ComplexNumber":
        return ComplexNumber(self.real + other.real,
                             self.imaginary + other.imaginary)

    def multiply(self, other: "ComplexNumber") -> "ComplexNumber":
        # (a+bi)(c+di) = (ac - bd) + (ad + bc)i
        term1 = self.real * other.real
        term2 = self.real * other.imaginary
        term3 = self.imaginary * other.real
        term4 = self.imaginary * other.imaginary
        return ComplexNumber(term1 - term4, term2 + term3)

    def __add__(self, other: "ComplexNumber") -> "ComplexNumber":
        return self.add(other)

    def __mul__(self, other: "ComplexNumber") -> "ComplexNumber":
        return self.multiply(other)

    def format(self, places: Optional[int] = None) -> str:
        real = self.real
        imag = self.imaginary
        if places is not None:
            real = round(real, places)
            imag = round(imag, places)
        sign = "-" if imag < 0 else "+"
        return f"{real} {sign} {abs(imag)}i"

    def __str__(self) -> str:
        return self.format()


def add(a: ComplexNumber, b: ComplexNumber) -> ComplexNumber:
    return a.add(b)


def multiply(a: ComplexNumber, b: ComplexNumber) -> ComplexNumber:
    return a.multiply(b)
