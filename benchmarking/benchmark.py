"""
Benchmark the escape-time pipeline (evaluation and rendering) per backend.

Usage examples:
  python -m benchmarking.benchmark --backends cpu,python --res 100,250,500 \
      --accuracy 200 --runs 3 --csv benchmark_results.csv

  python -m benchmarking.benchmark --mode julia --julia=-0.8,0.156 --save julia.png
"""

import os
import csv
import argparse
import platform
from typing import List, Tuple, Optional

from coloring.palettes import get_gradient, DEFAULT_PALETTE
from fractals.base import SimulationSettings, DEFAULT_JULIA_PARAM
from fractals.complex_number import ComplexNumber
from rendering.service import FrameService, FrameReport
from ui.session import SessionState
from utils.enums import BackendType, FractalMode, GridSampling

# --- Helpers -----------------------------------------------------------------

def parse_resolution_list(res_str: str) -> List[int]:
    """
    Parse per-axis sample counts like "100,250,500".
    """
    if not res_str:
        return [100, 250, 500]
    return [int(token) for token in res_str.split(',') if token.strip()]

def parse_canvas(token: str) -> Tuple[int, int]:
    """
    Parse canvas size like "800x600".
    """
    token = token.strip().lower().replace(' ', '')
    w, h = token.split('x')
    return int(w), int(h)

def parse_complex(token: str) -> ComplexNumber:
    """
    Parse "re,im" into a ComplexNumber.
    """
    re, im = token.split(',')
    return ComplexNumber(float(re), float(im))

def backend_from_tag(tag: str) -> BackendType:
    tag = tag.strip().upper()
    try:
        return BackendType[tag]
    except KeyError:
        raise ValueError(f"Unknown backend tag: {tag}") from None

# --- Benchmark core ----------------------------------------------------------

def benchmark_combo(service: FrameService,
                    state: SessionState,
                    backend: BackendType,
                    resolution: int,
                    runs: int,
                    warmup: int = 1) -> Tuple[float, float, FrameReport]:
    """
    Runs warmups (not timed; the first CPU run includes JIT compilation),
    then 'runs' timed frames. Returns (avg_eval_ms, avg_render_ms, last report).
    """
    settings = SimulationSettings(resolution=resolution,
                                  accuracy=state.accuracy,
                                  mode=state.mode,
                                  julia_param=state.julia_param,
                                  sampling=state.sampling,
                                  backend=backend)
    gradient = get_gradient(state.palette)

    def run_once() -> FrameReport:
        return service.run(state.viewport, settings, gradient,
                           state.canvas_width, state.canvas_height)

    for _ in range(max(0, warmup)):
        run_once()

    evals, renders = [], []
    report = None
    for _ in range(runs):
        report = run_once()
        evals.append(report.eval_ms)
        renders.append(report.render_ms)

    return sum(evals) / len(evals), sum(renders) / len(renders), report

# --- CSV writer --------------------------------------------------------------

def write_csv_row(writer: csv.writer,
                  resolution: int,
                  rows_by_backend: List[Tuple[str, Optional[Tuple[float, float]]]]):
    """
    rows_by_backend: list of (backend_label, (eval_ms, render_ms)); None marks a failed backend
    """
    base = [str(resolution)]
    for _, result in rows_by_backend:
        if result is None:
            base.extend(["n/a", "n/a"])
        else:
            eval_ms, render_ms = result
            base.extend([f"{eval_ms:.2f}", f"{render_ms:.2f}"])
    writer.writerow(base)

# --- CLI ---------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Benchmark the escape-time fractal renderer.")
    p.add_argument("--backends", type=str, default="cpu,python",
                   help="Comma separated list: cpu (numba), python (reference)")
    p.add_argument("--res", type=str, default="100,250,500",
                   help="Comma separated samples-per-axis list")
    p.add_argument("--canvas", type=str, default="800x600")
    p.add_argument("--accuracy", type=int, default=200)
    p.add_argument("--mode", type=str, default="mandelbrot")
    p.add_argument("--julia", type=str, default=f"{DEFAULT_JULIA_PARAM.real},{DEFAULT_JULIA_PARAM.imaginary}",
                   help="Julia parameter as re,im")
    p.add_argument("--palette", type=str, default=DEFAULT_PALETTE)
    p.add_argument("--sampling", type=str, default="indexed", choices=["indexed", "accumulate"])
    p.add_argument("--runs", type=int, default=3)
    p.add_argument("--warmup", type=int, default=1)
    p.add_argument("--csv", type=str, default="benchmark_results.csv")
    p.add_argument("--save", type=str, default=None,
                   help="Write the first completed frame to this image file")
    return p

def main(argv=None):
    args = build_parser().parse_args(argv)

    canvas_w, canvas_h = parse_canvas(args.canvas)
    state = SessionState(canvas_width=canvas_w, canvas_height=canvas_h,
                         accuracy=args.accuracy,
                         mode=FractalMode.from_name(args.mode),
                         julia_param=parse_complex(args.julia),
                         palette=args.palette,
                         sampling=GridSampling[args.sampling.upper()])
    backends = [backend_from_tag(t) for t in args.backends.split(",") if t.strip()]
    resolutions = parse_resolution_list(args.res)
    service = FrameService()

    print("=== Hardware Summary ===")
    print("CPU:", platform.processor() or platform.machine() or "Unknown CPU")
    print()

    saved = False
    if os.path.exists(args.csv):
        os.remove(args.csv)
    with open(args.csv, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["Hardware Summary"])
        writer.writerow(["CPU", platform.processor() or platform.machine()])
        writer.writerow([])

        header = ["Resolution"]
        for b in backends:
            header.extend([f"{b.name} Eval (ms)", f"{b.name} Render (ms)"])
        writer.writerow(header)

        print(f"Settings: canvas={canvas_w}x{canvas_h}, accuracy={args.accuracy}, "
              f"mode={state.mode.name.lower()}, sampling={state.sampling.name.lower()}")
        print()

        for res in resolutions:
            print(f"=== resolution {res} ===")
            row_results: List[Tuple[str, Optional[Tuple[float, float]]]] = []
            for backend in backends:
                try:
                    eval_ms, render_ms, report = benchmark_combo(
                        service, state, backend, res, runs=max(1, args.runs), warmup=args.warmup)
                    print(f"{backend.name:>8}  eval={eval_ms:.2f}ms  render={render_ms:.2f}ms")
                    row_results.append((backend.name, (eval_ms, render_ms)))
                    if args.save and not saved:
                        report.surface.save(args.save)
                        saved = True
                except Exception as e:
                    print(f"{backend.name:>8}  FAIL: {e}")
                    row_results.append((backend.name, None))
            write_csv_row(writer, res, row_results)
            print()

    print(f"Benchmark results saved to {args.csv}")
    if saved:
        print(f"Frame saved to {args.save}")

if __name__ == "__main__":
    main()
