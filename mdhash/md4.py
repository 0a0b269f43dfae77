from __future__ import annotations

from typing import List

import numpy as np

from .core import Algorithm, State, oneshot, rl, u32

MD4_IV = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476)

# Additive constant per round (RFC 1320)
MD4_K = np.array((0x00000000, 0x5A827999, 0x6ED9EBA1), dtype=np.uint32)
_K = tuple(int(x) for x in MD4_K.tolist())

# Message word order and rotation counts per step
_ORDER: List[int] = (
    list(range(16))
    + [0, 4, 8, 12, 1, 5, 9, 13, 2, 6, 10, 14, 3, 7, 11, 15]
    + [0, 8, 4, 12, 2, 10, 6, 14, 1, 9, 5, 13, 3, 11, 7, 15]
)
_RC: List[int] = [3, 7, 11, 19] * 4 + [3, 5, 9, 13] * 4 + [3, 9, 11, 15] * 4


def ft(t: int, x: int, y: int, z: int) -> int:
    if t < 16:
        return z ^ (x & (y ^ z))
    if t < 32:
        return (x & y) | (x & z) | (y & z)
    return x ^ y ^ z


def compress_block(ihv: State, m: List[int]) -> State:
    a, b, c, d = ihv
    for t in range(48):
        tmp = rl(u32(a + ft(t, b, c, d) + _K[t >> 4] + m[_ORDER[t]]), _RC[t])
        a, d, c, b = d, c, b, tmp
    return (u32(ihv[0] + a), u32(ihv[1] + b), u32(ihv[2] + c), u32(ihv[3] + d))


MD4 = Algorithm(
    name="md4",
    word_bits=32,
    iv=MD4_IV,
    digest_size=16,
    big_endian=False,
    compress=compress_block,
)


def md4_bytes(*data: object) -> bytes:
    return oneshot(MD4, *data)


def md4_hex(*data: object) -> str:
    return md4_bytes(*data).hex()
