# Kernel sources package
from .loader import load_kernel
from .registry import register_kernel

__all__ = [
    "load_kernel",
    "register_kernel",
]
__version__ = "0.3.0"
