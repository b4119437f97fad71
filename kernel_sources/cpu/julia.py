from numba import njit

from kernel_sources.registry import register_kernel


ARG_SCALARS = ["param_real", "param_imag", "max_iter"]
ARG_BUFFERS_IN = ["xs", "ys"]
ARG_BUFFERS_OUT = ["out"]

ARG_ORDER = ["xs", "ys", "param_real", "param_imag", "max_iter", "out"]


@njit(cache=True)
def _julia_escape_grid(xs, ys, param_real, param_imag, max_iter, out):
    H = ys.shape[0]
    W = xs.shape[0]
    for y in range(H):
        for x in range(W):
            zr = xs[x]
            zi = ys[y]
            for i in range(max_iter):
                t1 = zr * zr
                t2 = zr * zi
                t3 = zi * zr
                t4 = zi * zi
                zr = (t1 - t4) + param_real
                zi = (t2 + t3) + param_imag
                if zr >= 2.0:
                    out[y, x] = i
                    break
    return out


register_kernel(
    fractal="julia",
    op_name="escape_grid",
    backend="CPU",
    func=_julia_escape_grid,
    arg_order=ARG_ORDER,
    scalars=ARG_SCALARS,
    consumes=ARG_BUFFERS_IN,
    produces=ARG_BUFFERS_OUT,
    output_arg="out",
)
