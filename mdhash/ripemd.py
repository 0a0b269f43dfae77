"""
RIPEMD-128/160/256/320.

Every variant runs two lines over the same block. Each line has its own
boolean functions, additive constants, message word order and rotation
amounts. The 128/160-bit variants keep the lines apart and merge them in a
final cross-wise addition; the 256/320-bit variants exchange one word between
the lines after each round group and feed each line back into its own half of
the chaining state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from .core import MASK32, Algorithm, State, oneshot, rl, u32

RMD_IV_LEFT = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476, 0xC3D2E1F0)
RMD_IV_RIGHT = (0x76543210, 0xFEDCBA98, 0x89ABCDEF, 0x01234567, 0x3C2D1E0F)

RMD128_IV = RMD_IV_LEFT[:4]
RMD160_IV = RMD_IV_LEFT
RMD256_IV = RMD_IV_LEFT[:4] + RMD_IV_RIGHT[:4]
RMD320_IV = RMD_IV_LEFT + RMD_IV_RIGHT

# Message word selection per step
R_LEFT: Tuple[int, ...] = (
    0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15,
    7, 4, 13, 1, 10, 6, 15, 3, 12, 0, 9, 5, 2, 14, 11, 8,
    3, 10, 14, 4, 9, 15, 8, 1, 2, 7, 0, 6, 13, 11, 5, 12,
    1, 9, 11, 10, 0, 8, 12, 4, 13, 3, 7, 15, 14, 5, 6, 2,
    4, 0, 5, 9, 7, 12, 2, 10, 14, 1, 3, 8, 11, 6, 15, 13,
)
R_RIGHT: Tuple[int, ...] = (
    5, 14, 7, 0, 9, 2, 11, 4, 13, 6, 15, 8, 1, 10, 3, 12,
    6, 11, 3, 7, 0, 13, 5, 10, 14, 15, 8, 12, 4, 9, 1, 2,
    15, 5, 1, 3, 7, 14, 6, 9, 11, 8, 12, 2, 10, 0, 4, 13,
    8, 6, 4, 1, 3, 11, 15, 0, 5, 12, 2, 13, 9, 7, 10, 14,
    12, 15, 10, 4, 1, 5, 8, 7, 6, 2, 13, 14, 0, 3, 9, 11,
)

# Rotation amounts per step
S_LEFT: Tuple[int, ...] = (
    11, 14, 15, 12, 5, 8, 7, 9, 11, 13, 14, 15, 6, 7, 9, 8,
    7, 6, 8, 13, 11, 9, 7, 15, 7, 12, 15, 9, 11, 7, 13, 12,
    11, 13, 6, 7, 14, 9, 13, 15, 14, 8, 13, 6, 5, 12, 7, 5,
    11, 12, 14, 15, 14, 15, 9, 8, 9, 14, 5, 6, 8, 6, 5, 12,
    9, 15, 5, 11, 6, 8, 13, 12, 5, 12, 13, 14, 11, 8, 5, 6,
)
S_RIGHT: Tuple[int, ...] = (
    8, 9, 9, 11, 13, 15, 15, 5, 7, 7, 8, 11, 14, 14, 12, 6,
    9, 13, 15, 7, 12, 8, 9, 11, 7, 7, 12, 7, 6, 15, 13, 11,
    9, 7, 15, 11, 8, 6, 6, 14, 12, 13, 5, 14, 13, 13, 7, 5,
    15, 5, 8, 11, 14, 14, 6, 14, 6, 9, 12, 9, 12, 5, 15, 8,
    8, 5, 12, 9, 12, 5, 14, 6, 8, 13, 6, 5, 15, 13, 11, 11,
)

RMD_K_LEFT = np.array((0x00000000, 0x5A827999, 0x6ED9EBA1, 0x8F1BBCDC, 0xA953FD4E), dtype=np.uint32)
RMD_K_RIGHT = np.array((0x50A28BE6, 0x5C4DD124, 0x6D703EF3, 0x7A6D76E9, 0x00000000), dtype=np.uint32)
# The four-group variants end the right line with a zero constant.
RMD_K_RIGHT_4 = np.array((0x50A28BE6, 0x5C4DD124, 0x6D703EF3, 0x00000000), dtype=np.uint32)


def f1(x: int, y: int, z: int) -> int:
    return x ^ y ^ z


def f2(x: int, y: int, z: int) -> int:
    return (x & (y ^ z)) ^ z


def f3(x: int, y: int, z: int) -> int:
    return (x | (~y & MASK32)) ^ z


def f4(x: int, y: int, z: int) -> int:
    return (x & z) | (y & ~z & MASK32)


def f5(x: int, y: int, z: int) -> int:
    return x ^ (y | (~z & MASK32))


BoolFn = Callable[[int, int, int], int]


@dataclass(frozen=True)
class LineSchedule:
    """Per-group functions and constants for both lines, plus the swap order."""

    left_f: Tuple[BoolFn, ...]
    right_f: Tuple[BoolFn, ...]
    left_k: Tuple[int, ...]
    right_k: Tuple[int, ...]
    swaps: Optional[Tuple[int, ...]] = None

    @property
    def groups(self) -> int:
        return len(self.left_f)


def _ints(arr: np.ndarray) -> Tuple[int, ...]:
    return tuple(int(x) for x in arr.tolist())


SCHEDULE_4 = LineSchedule(
    left_f=(f1, f2, f3, f4),
    right_f=(f4, f3, f2, f1),
    left_k=_ints(RMD_K_LEFT[:4]),
    right_k=_ints(RMD_K_RIGHT_4),
)
SCHEDULE_5 = LineSchedule(
    left_f=(f1, f2, f3, f4, f5),
    right_f=(f5, f4, f3, f2, f1),
    left_k=_ints(RMD_K_LEFT),
    right_k=_ints(RMD_K_RIGHT),
)
# RIPEMD-256 exchanges A, B, C, D; RIPEMD-320 exchanges B, D, A, C, E.
SCHEDULE_256 = LineSchedule(
    SCHEDULE_4.left_f, SCHEDULE_4.right_f, SCHEDULE_4.left_k, SCHEDULE_4.right_k, swaps=(0, 1, 2, 3)
)
SCHEDULE_320 = LineSchedule(
    SCHEDULE_5.left_f, SCHEDULE_5.right_f, SCHEDULE_5.left_k, SCHEDULE_5.right_k, swaps=(1, 3, 0, 2, 4)
)


def group4(line: Sequence[int], m: Sequence[int], j: int, f: BoolFn, k: int, order: Sequence[int], rot: Sequence[int]) -> List[int]:
    a, b, c, d = line
    for i in range(16 * j, 16 * j + 16):
        t = rl(u32(a + f(b, c, d) + m[order[i]] + k), rot[i])
        a, b, c, d = d, t, b, c
    return [a, b, c, d]


def group5(line: Sequence[int], m: Sequence[int], j: int, f: BoolFn, k: int, order: Sequence[int], rot: Sequence[int]) -> List[int]:
    a, b, c, d, e = line
    for i in range(16 * j, 16 * j + 16):
        t = u32(rl(u32(a + f(b, c, d) + m[order[i]] + k), rot[i]) + e)
        a, b, c, d, e = e, t, b, rl(c, 10), d
    return [a, b, c, d, e]


@dataclass
class RoundGroup:
    """Line contents at the end of one round group, before and after the exchange."""

    index: int
    left: Tuple[int, ...]
    right: Tuple[int, ...]
    swap: Optional[int] = None
    left_swapped: Optional[Tuple[int, ...]] = None
    right_swapped: Optional[Tuple[int, ...]] = None


def run_lines(
    schedule: LineSchedule,
    left: Sequence[int],
    right: Sequence[int],
    m: Sequence[int],
    trace: Optional[List[RoundGroup]] = None,
) -> Tuple[List[int], List[int]]:
    """Run both lines over one block. The two lists are owned separately."""
    group = group4 if len(left) == 4 else group5
    left = list(left)
    right = list(right)
    for j in range(schedule.groups):
        left = group(left, m, j, schedule.left_f[j], schedule.left_k[j], R_LEFT, S_LEFT)
        right = group(right, m, j, schedule.right_f[j], schedule.right_k[j], R_RIGHT, S_RIGHT)
        rec = RoundGroup(j, tuple(left), tuple(right)) if trace is not None else None
        if schedule.swaps is not None:
            idx = schedule.swaps[j]
            left[idx], right[idx] = right[idx], left[idx]
            if rec is not None:
                rec.swap = idx
                rec.left_swapped = tuple(left)
                rec.right_swapped = tuple(right)
        if rec is not None:
            trace.append(rec)
    return left, right


def _merge_crosswise(ihv: State, left: List[int], right: List[int]) -> State:
    # h[i] = h[i+1] + left[i+2] + right[i+3], indices taken modulo the width
    n = len(ihv)
    return tuple(u32(ihv[(i + 1) % n] + left[(i + 2) % n] + right[(i + 3) % n]) for i in range(n))


def _merge_halves(ihv: State, left: List[int], right: List[int]) -> State:
    return tuple(u32(x + y) for x, y in zip(ihv, left + right))


def compress_128(ihv: State, m: List[int]) -> State:
    left, right = run_lines(SCHEDULE_4, ihv, ihv, m)
    return _merge_crosswise(ihv, left, right)


def compress_160(ihv: State, m: List[int]) -> State:
    left, right = run_lines(SCHEDULE_5, ihv, ihv, m)
    return _merge_crosswise(ihv, left, right)


def compress_256(ihv: State, m: List[int]) -> State:
    left, right = run_lines(SCHEDULE_256, ihv[:4], ihv[4:], m)
    return _merge_halves(ihv, left, right)


def compress_320(ihv: State, m: List[int]) -> State:
    left, right = run_lines(SCHEDULE_320, ihv[:5], ihv[5:], m)
    return _merge_halves(ihv, left, right)


def trace_block(bits: int, ihv: State, m: List[int]) -> Tuple[State, List[RoundGroup]]:
    """Compress one block and return the per-group line snapshots alongside."""
    trace: List[RoundGroup] = []
    if bits == 128:
        left, right = run_lines(SCHEDULE_4, ihv, ihv, m, trace)
        return _merge_crosswise(ihv, left, right), trace
    if bits == 160:
        left, right = run_lines(SCHEDULE_5, ihv, ihv, m, trace)
        return _merge_crosswise(ihv, left, right), trace
    if bits == 256:
        left, right = run_lines(SCHEDULE_256, ihv[:4], ihv[4:], m, trace)
        return _merge_halves(ihv, left, right), trace
    if bits == 320:
        left, right = run_lines(SCHEDULE_320, ihv[:5], ihv[5:], m, trace)
        return _merge_halves(ihv, left, right), trace
    raise ValueError(f"no RIPEMD variant with {bits} bits")


def _rmd(bits: int, iv: State, compress) -> Algorithm:
    return Algorithm(
        name=f"ripemd{bits}",
        word_bits=32,
        iv=iv,
        digest_size=bits // 8,
        big_endian=False,
        compress=compress,
    )


RIPEMD128 = _rmd(128, RMD128_IV, compress_128)
RIPEMD160 = _rmd(160, RMD160_IV, compress_160)
RIPEMD256 = _rmd(256, RMD256_IV, compress_256)
RIPEMD320 = _rmd(320, RMD320_IV, compress_320)

RIPEMD_VARIANTS = {128: RIPEMD128, 160: RIPEMD160, 256: RIPEMD256, 320: RIPEMD320}


def rmd_bytes(bits: int, *data: object) -> bytes:
    try:
        algorithm = RIPEMD_VARIANTS[bits]
    except KeyError:
        raise ValueError(f"no RIPEMD variant with {bits} bits") from None
    return oneshot(algorithm, *data)
