from enum import Enum, auto


class BackendType(Enum):
    CPU = auto()
    PYTHON = auto()


class FractalMode(Enum):
    MANDELBROT = auto()
    JULIA = auto()

    @classmethod
    def from_name(cls, name: str) -> "FractalMode":
        # Anything that is not "mandelbrot" selects the Julia variant.
        if str(name).strip().lower() == "mandelbrot":
            return cls.MANDELBROT
        return cls.JULIA


class GridSampling(Enum):
    INDEXED = auto()
    ACCUMULATE = auto()
