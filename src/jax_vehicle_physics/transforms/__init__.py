"""
JAX-based linear algebra for collision primitives.

This module provides pure, JIT-compilable implementations of:
- SO(3) rotation helpers (so3 module)
- Symmetric inertia tensor packing and parallel-axis transfer (inertia module)
"""

from . import so3
from . import inertia

__all__ = [
    "so3",
    "inertia",
]
