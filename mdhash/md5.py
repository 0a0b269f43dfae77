from __future__ import annotations

import math
from typing import List

import numpy as np

from .core import MASK32, Algorithm, State, oneshot, rl, u32

# MD5 initial value (A, B, C, D)
MD5_IV = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476)

# Rotation constants (RC_t) per RFC 1321
_RC: List[int] = (
    [7, 12, 17, 22] * 4
    + [5, 9, 14, 20] * 4
    + [4, 11, 16, 23] * 4
    + [6, 10, 15, 21] * 4
)


def _mk_AC() -> List[int]:
    # AC_t = floor(2^32 * abs(sin(t+1)))
    return [int(abs(math.sin(i + 1)) * (1 << 32)) & MASK32 for i in range(64)]


MD5_AC = np.array(_mk_AC(), dtype=np.uint32)

_AC = tuple(int(x) for x in MD5_AC.tolist())


def wt_index(t: int) -> int:
    """Index of the message word consumed by step t."""
    if not 0 <= t < 64:
        raise ValueError(f"step {t} out of range")
    mul, add = ((1, 0), (5, 1), (3, 5), (7, 0))[t >> 4]
    return (mul * t + add) % 16


_G = tuple(wt_index(t) for t in range(64))


def ft(t: int, b: int, c: int, d: int) -> int:
    if t < 16:
        return d ^ (b & (c ^ d))
    if t < 32:
        return c ^ (d & (b ^ c))
    if t < 48:
        return b ^ c ^ d
    return c ^ (b | (~d & MASK32))


def compress_block(ihv: State, m: List[int]) -> State:
    """
    MD5 compression.
    Inputs:
      - ihv: (A, B, C, D)
      - m: 16 little-endian 32-bit words
    """
    a, b, c, d = ihv
    for t in range(64):
        tmp = u32(a + ft(t, b, c, d) + _AC[t] + m[_G[t]])
        a, d, c, b = d, c, b, u32(b + rl(tmp, _RC[t]))
    return (u32(ihv[0] + a), u32(ihv[1] + b), u32(ihv[2] + c), u32(ihv[3] + d))


MD5 = Algorithm(
    name="md5",
    word_bits=32,
    iv=MD5_IV,
    digest_size=16,
    big_endian=False,
    compress=compress_block,
)


def md5_bytes(*data: object) -> bytes:
    return oneshot(MD5, *data)


def md5_hex(*data: object) -> str:
    return md5_bytes(*data).hex()
