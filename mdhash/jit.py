"""
Optional Numba engine.

`numba_kernels.py` holds `@njit` versions of the MD5, SHA-1 and SHA-256
compression functions over `np.uint32` arrays. This module decides whether
they can be used and adapts them to the `compress(state, words)` signature
the hasher expects. Numba is only imported once a kernel is requested.
"""

from __future__ import annotations

import importlib.util
import os
from typing import Callable, List

import numpy as np

from .core import State

KERNELS = {
    "md5": "md5_compress_u32",
    "sha1": "sha1_compress_u32",
    "sha224": "sha256_compress_u32",
    "sha256": "sha256_compress_u32",
}


def numba_available() -> bool:
    if os.getenv("MDHASH_NO_NUMBA") == "1":
        return False
    return importlib.util.find_spec("numba") is not None


def has_kernel(name: str) -> bool:
    return name in KERNELS


def kernel(name: str) -> Callable[[np.ndarray, np.ndarray], np.ndarray]:
    if name not in KERNELS:
        raise ValueError(f"no JIT kernel for {name!r}")
    if not numba_available():
        raise RuntimeError("numba is not available (pip install numba) or disabled via MDHASH_NO_NUMBA=1")
    from . import numba_kernels

    return getattr(numba_kernels, KERNELS[name])


def compressor(name: str) -> Callable[[State, List[int]], State]:
    fn = kernel(name)

    def compress(ihv: State, m: List[int]) -> State:
        out = fn(np.array(ihv, dtype=np.uint32), np.array(m, dtype=np.uint32))
        return tuple(int(x) for x in out.tolist())

    compress.__name__ = f"{name}_compress_jit"
    return compress
