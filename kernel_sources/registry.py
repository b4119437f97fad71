from __future__ import annotations
from typing import Dict, Any

# Nested dict: [fractal][op_name][backend] -> meta
_REGISTRY: Dict[str, Dict[str, Dict[str, Dict[str, Any]]]] = {}


def register_kernel(fractal: str, op_name: str, backend: str, **meta: Any) -> None:
    """
    Register kernel metadata for a given fractal, operation and backend.
    Example:
        register_kernel("mandelbrot", "escape_grid", "CPU", func=my_func, arg_order=[...])
    """
    _REGISTRY.setdefault(fractal, {}).setdefault(op_name, {})[backend.upper()] = meta


def lookup_kernel(fractal: str, op_name: str, backend: str) -> Dict[str, Any]:
    """
    Return kernel metadata from the registry for the given parameters.
    Raises KeyError if not found.
    """
    be = backend.upper()
    try:
        meta = _REGISTRY[fractal][op_name][be]
    except KeyError as e:
        raise KeyError(f"Kernel not found for fractal='{fractal}', op='{op_name}', backend='{be}'") from e
    return meta

