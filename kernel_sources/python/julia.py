from fractals.complex_number import ComplexNumber
from fractals.julia import julia_escape
from kernel_sources.registry import register_kernel

ARG_ORDER = ["xs", "ys", "param_real", "param_imag", "max_iter", "out"]


def _julia_escape_grid(xs, ys, param_real, param_imag, max_iter, out):
    param = ComplexNumber(param_real, param_imag)
    for y, ci in enumerate(ys):
        for x, cr in enumerate(xs):
            out[y, x] = julia_escape(ComplexNumber(float(cr), float(ci)), param, max_iter)
    return out


register_kernel(
    fractal="julia",
    op_name="escape_grid",
    backend="PYTHON",
    func=_julia_escape_grid,
    arg_order=ARG_ORDER,
    output_arg="out",
)
