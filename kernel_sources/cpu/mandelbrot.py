from numba import njit

from kernel_sources.registry import register_kernel


ARG_SCALARS = ["max_iter"]
ARG_BUFFERS_IN = ["xs", "ys"]
ARG_BUFFERS_OUT = ["out"]

ARG_ORDER = ["xs", "ys", "max_iter", "out"]


# No fastmath: the products must round exactly like the reference evaluator.
@njit(cache=True)
def _mandelbrot_escape_grid(xs, ys, max_iter, out):
    H = ys.shape[0]
    W = xs.shape[0]
    for y in range(H):
        ci = ys[y]
        for x in range(W):
            cr = xs[x]
            zr = 0.0
            zi = 0.0
            for i in range(max_iter):
                t1 = zr * zr
                t2 = zr * zi
                t3 = zi * zr
                t4 = zi * zi
                zr = (t1 - t4) + cr
                zi = (t2 + t3) + ci
                if zr >= 2.0:
                    out[y, x] = i
                    break
    return out


register_kernel(
    fractal="mandelbrot",
    op_name="escape_grid",
    backend="CPU",
    func=_mandelbrot_escape_grid,
    arg_order=ARG_ORDER,
    scalars=ARG_SCALARS,
    consumes=ARG_BUFFERS_IN,
    produces=ARG_BUFFERS_OUT,
    output_arg="out",
)
