#!/usr/bin/env python3
"""Throughput micro-benchmarks for the compression kernels."""
from __future__ import annotations

import argparse
import time
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from mdhash.algos import ALGORITHMS, get_algorithm, new
from mdhash.jit import has_kernel, numba_available


def bench(name: str, size: int, engine: str) -> None:
    hasher = new(name, engine=engine)
    if engine != "python":
        # first call compiles the kernel
        new(name, engine=engine).update(b"\x00" * hasher.block_size).digest()
    start = time.perf_counter()
    hasher.update_repeat(size, 0x61)
    hasher.digest()
    elapsed = time.perf_counter() - start
    rate = size / elapsed / 1e6 if elapsed else 0.0
    print(f"{name}: engine={engine} bytes={size} time={elapsed:.3f}s rate={rate:.2f} MB/s")


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--size", type=int, default=1 << 20)
    ap.add_argument("--algorithm", "-a", action="append", default=None)
    ap.add_argument("--numba", action="store_true", help="also time the numba kernels where they exist")
    args = ap.parse_args()

    names = [get_algorithm(a).name for a in args.algorithm] if args.algorithm else list(ALGORITHMS)
    for name in names:
        bench(name, args.size, "python")
        if args.numba and has_kernel(name):
            if not numba_available():
                print(f"{name}: engine=numba skipped (numba not installed)")
                continue
            bench(name, args.size, "numba")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
