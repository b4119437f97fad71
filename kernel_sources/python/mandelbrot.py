from fractals.complex_number import ComplexNumber
from fractals.mandelbrot import mandelbrot_escape
from kernel_sources.registry import register_kernel

ARG_ORDER = ["xs", "ys", "max_iter", "out"]


def _mandelbrot_escape_grid(xs, ys, max_iter, out):
    """Reference grid loop over the pure-Python evaluator."""
    for y, ci in enumerate(ys):
        for x, cr in enumerate(xs):
            out[y, x] = mandelbrot_escape(ComplexNumber(float(cr), float(ci)), max_iter)
    return out


register_kernel(
    fractal="mandelbrot",
    op_name="escape_grid",
    backend="PYTHON",
    func=_mandelbrot_escape_grid,
    arg_order=ARG_ORDER,
    output_arg="out",
)
