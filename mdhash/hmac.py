"""HMAC (Keyed-Hashing for Message Authentication) over any registered digest.

Implements the construction described by RFC 2104:

    HMAC(K, m) = H((K' ^ opad) || H((K' ^ ipad) || m))

where K' is the key hashed down when it is longer than the block size and
then zero padded to exactly one block.
"""

from __future__ import annotations

from typing import Any, Optional

import numpy as np

from .algos import get_algorithm, with_engine
from .core import Algorithm, Hasher, as_bytes

IPAD = 0x36
OPAD = 0x5C


class HMAC:
    def __init__(
        self,
        key: bytes | bytearray | memoryview,
        algorithm: str | Algorithm = "sha256",
        msg: Any = None,
        engine: Optional[str] = None,
    ):
        """Create a new HMAC object.

        key:       secret key, any length.
        algorithm: registry name ("sha256", "ripemd160", ...) or an Algorithm.
        msg:       initial input for the inner hash, if provided.

        `scrub()` (also run on leaving a `with` block) zeroes the key pads and
        retires the object; later use raises ValueError from the inner hasher.
        """
        alg = with_engine(get_algorithm(algorithm), engine)
        self.algorithm = alg

        block = np.zeros(alg.block_size, dtype=np.uint8)
        raw = as_bytes(key)
        if raw.size > alg.block_size:
            with Hasher(alg) as hasher:
                raw = np.frombuffer(hasher.update(raw).digest(), dtype=np.uint8)
        block[: raw.size] = raw

        self._inner = Hasher(alg).update(block ^ IPAD)
        self._outer_key = block ^ OPAD
        block.fill(0)

        if msg is not None:
            self.update(msg)

    @property
    def name(self) -> str:
        return f"hmac-{self.algorithm.name}"

    @property
    def digest_size(self) -> int:
        return self.algorithm.digest_size

    @property
    def block_size(self) -> int:
        return self.algorithm.block_size

    def size(self) -> int:
        """Message bytes absorbed so far (the key block is not counted)."""
        return self._inner.size() - self.algorithm.block_size

    def update(self, data: Any) -> "HMAC":
        self._inner.update(data)
        return self

    def update_repeat(self, count: int, value: Any) -> "HMAC":
        self._inner.update_repeat(count, value)
        return self

    def update_text(self, text: str | bytes) -> "HMAC":
        self._inner.update_text(text)
        return self

    def copy(self) -> "HMAC":
        out = HMAC.__new__(HMAC)
        out.algorithm = self.algorithm
        out._inner = self._inner.copy()
        out._outer_key = self._outer_key.copy()
        return out

    def digest(self) -> bytes:
        inner = self._inner.digest()
        with Hasher(self.algorithm) as outer:
            return outer.update(self._outer_key).update(inner).digest()

    def hexdigest(self) -> str:
        return self.digest().hex()

    def scrub(self) -> None:
        self._inner.scrub()
        self._outer_key.fill(0)

    def __enter__(self) -> "HMAC":
        return self

    def __exit__(self, *exc: object) -> None:
        self.scrub()


def hmac_digest(key: bytes, msg: Any, algorithm: str | Algorithm = "sha256") -> bytes:
    with HMAC(key, algorithm, msg) as mac:
        return mac.digest()
