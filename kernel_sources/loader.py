from __future__ import annotations
import importlib
import logging
from typing import Dict, Any

from kernel_sources.registry import lookup_kernel

logger = logging.getLogger(__name__)

KERNEL_ROOT = "kernel_sources"


def _module_name(backend: str, fractal: str) -> str:
    return f"{KERNEL_ROOT}.{backend.lower()}.{fractal.lower()}"


def load_kernel(backend: str, fractal: str, operation: str = "escape_grid") -> Dict[str, Any]:
    """
    Import the kernel module by convention (which registers it) and return its metadata.
    """
    module = _module_name(backend, fractal)
    try:
        importlib.import_module(module)
    except ModuleNotFoundError as e:
        # Only a missing backend/fractal module means "no kernel"; anything
        # the kernel module itself fails to import is a real error.
        if e.name is None or not module.startswith(e.name):
            raise
        raise KeyError(f"No kernel module '{module}' for backend '{backend}'") from e

    meta = lookup_kernel(fractal, operation, backend)
    _validate_meta(meta, f"registry[{fractal}.{operation}:{backend.upper()}]")
    logger.debug("Loaded kernel %s.%s for %s", fractal, operation, backend.upper())
    return meta


def _validate_meta(meta: Dict[str, Any], where: str) -> None:
    if "func" not in meta or not callable(meta["func"]):
        raise KeyError(f"{where} must provide a callable 'func'")
    if "arg_order" not in meta or not isinstance(meta["arg_order"], (list, tuple)):
        raise KeyError(f"{where} must provide an 'arg_order' list")
    if "output_arg" not in meta or meta["output_arg"] not in meta["arg_order"]:
        raise KeyError(f"{where} must name an 'output_arg' present in 'arg_order'")
