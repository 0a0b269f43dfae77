"""
MD5, SHA-1 and SHA-256 compression compiled with Numba.

Imported lazily by `jit.py`; importing this module requires numba.
"""

from __future__ import annotations

import numpy as np
from numba import njit

from .md5 import _AC, _G, _RC
from .sha1 import _K as _SHA1_K
from .sha2 import _K32

# Globals captured by `@njit` are frozen at compile time; plain tuples of ints
# type as homogeneous tuples, NumPy arrays do not always.
_MD5_AC_T = tuple(_AC)
_MD5_G_T = tuple(_G)
_MD5_RC_T = tuple(_RC)
_SHA1_K_T = tuple(_SHA1_K)
_SHA256_K_T = tuple(_K32)


@njit(cache=True, inline="always")
def _rol_u32(x, n):
    y = np.uint32(x)
    return np.uint32((y << n) | (y >> (32 - n)))


@njit(cache=True, inline="always")
def _ror_u32(x, n):
    y = np.uint32(x)
    return np.uint32((y >> n) | (y << (32 - n)))


@njit(cache=True)
def md5_compress_u32(ihv, block):
    s = ihv.copy()
    for t in range(64):
        a, b, c, d = s[0], s[1], s[2], s[3]
        r = t >> 4
        if r == 0:
            mix = (b & c) | (np.uint32(~b) & d)
        elif r == 1:
            mix = (b & d) | (c & np.uint32(~d))
        elif r == 2:
            mix = b ^ c ^ d
        else:
            mix = c ^ (b | np.uint32(~d))
        x = np.uint32(a + mix + np.uint32(_MD5_AC_T[t]) + block[_MD5_G_T[t]])
        s[0] = d
        s[3] = c
        s[2] = b
        s[1] = np.uint32(b + _rol_u32(x, _MD5_RC_T[t]))
    for i in range(4):
        s[i] = np.uint32(ihv[i] + s[i])
    return s


@njit(cache=True)
def sha1_compress_u32(ihv, block):
    w = np.empty(80, dtype=np.uint32)
    for i in range(16):
        w[i] = block[i]
    for i in range(16, 80):
        w[i] = _rol_u32(np.uint32(w[i - 3] ^ w[i - 8] ^ w[i - 14] ^ w[i - 16]), 1)
    a = ihv[0]
    b = ihv[1]
    c = ihv[2]
    d = ihv[3]
    e = ihv[4]
    for i in range(80):
        if i < 20:
            f = np.uint32(d ^ (b & (c ^ d)))
        elif i < 40 or i >= 60:
            f = np.uint32(b ^ c ^ d)
        else:
            f = np.uint32((b & c) | ((b ^ c) & d))
        tmp = np.uint32(_rol_u32(a, 5) + f + e + np.uint32(_SHA1_K_T[i // 20]) + w[i])
        e = d
        d = c
        c = _rol_u32(b, 30)
        b = a
        a = tmp
    out = np.empty(5, dtype=np.uint32)
    out[0] = np.uint32(ihv[0] + a)
    out[1] = np.uint32(ihv[1] + b)
    out[2] = np.uint32(ihv[2] + c)
    out[3] = np.uint32(ihv[3] + d)
    out[4] = np.uint32(ihv[4] + e)
    return out


@njit(cache=True)
def sha256_compress_u32(ihv, block):
    w = np.empty(64, dtype=np.uint32)
    for i in range(16):
        w[i] = block[i]
    for i in range(16, 64):
        x = w[i - 15]
        y = w[i - 2]
        s0 = np.uint32(_ror_u32(x, 7) ^ _ror_u32(x, 18) ^ np.uint32(x >> 3))
        s1 = np.uint32(_ror_u32(y, 17) ^ _ror_u32(y, 19) ^ np.uint32(y >> 10))
        w[i] = np.uint32(w[i - 16] + s0 + w[i - 7] + s1)
    st = np.empty(8, dtype=np.uint32)
    for i in range(8):
        st[i] = ihv[i]
    for i in range(64):
        a = st[0]
        e = st[4]
        d1 = np.uint32(_ror_u32(e, 6) ^ _ror_u32(e, 11) ^ _ror_u32(e, 25))
        chv = np.uint32((e & (st[5] ^ st[6])) ^ st[6])
        t1 = np.uint32(st[7] + d1 + chv + np.uint32(_SHA256_K_T[i]) + w[i])
        d0 = np.uint32(_ror_u32(a, 2) ^ _ror_u32(a, 13) ^ _ror_u32(a, 22))
        mj = np.uint32((a & st[1]) | ((a ^ st[1]) & st[2]))
        t2 = np.uint32(d0 + mj)
        st[7] = st[6]
        st[6] = st[5]
        st[5] = st[4]
        st[4] = np.uint32(st[3] + t1)
        st[3] = st[2]
        st[2] = st[1]
        st[1] = st[0]
        st[0] = np.uint32(t1 + t2)
    out = np.empty(8, dtype=np.uint32)
    for i in range(8):
        out[i] = np.uint32(ihv[i] + st[i])
    return out

