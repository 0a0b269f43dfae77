from __future__ import annotations

from typing import List

import numpy as np

from .core import Algorithm, State, oneshot, rl, u32

SHA1_IV = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476, 0xC3D2E1F0)

SHA1_K = np.array((0x5A827999, 0x6ED9EBA1, 0x8F1BBCDC, 0xCA62C1D6), dtype=np.uint32)
_K = tuple(int(x) for x in SHA1_K.tolist())


def expand_schedule(m: List[int]) -> List[int]:
    w = list(m)
    for i in range(16, 80):
        w.append(rl(w[i - 3] ^ w[i - 8] ^ w[i - 14] ^ w[i - 16], 1))
    return w


def ft(t: int, b: int, c: int, d: int) -> int:
    if t < 20:
        return d ^ (b & (c ^ d))
    if t < 40 or t >= 60:
        return b ^ c ^ d
    return (b & c) | ((b ^ c) & d)


def compress_block(ihv: State, m: List[int]) -> State:
    """SHA-1 compression over 16 big-endian words."""
    w = expand_schedule(m)
    a, b, c, d, e = ihv
    for t in range(80):
        tmp = u32(rl(a, 5) + ft(t, b, c, d) + e + _K[t // 20] + w[t])
        a, b, c, d, e = tmp, a, rl(b, 30), c, d
    return tuple(u32(x + y) for x, y in zip(ihv, (a, b, c, d, e)))


SHA1 = Algorithm(
    name="sha1",
    word_bits=32,
    iv=SHA1_IV,
    digest_size=20,
    big_endian=True,
    compress=compress_block,
)


def sha1_bytes(*data: object) -> bytes:
    return oneshot(SHA1, *data)


def sha1_hex(*data: object) -> str:
    return sha1_bytes(*data).hex()
