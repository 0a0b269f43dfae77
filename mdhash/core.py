from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Any, Callable, List, Tuple

import numpy as np

MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF

# Chunk size used when repeating a multi-byte value.
REPEAT_CHUNK = 1 << 12


def u32(x: int) -> int:
    return x & MASK32


def u64(x: int) -> int:
    return x & MASK64


def rl(x: int, s: int) -> int:
    x &= MASK32
    return ((x << s) | (x >> (32 - s))) & MASK32


def rr(x: int, s: int) -> int:
    x &= MASK32
    return ((x >> s) | (x << (32 - s))) & MASK32


def rr64(x: int, s: int) -> int:
    x &= MASK64
    return ((x >> s) | (x << (64 - s))) & MASK64


State = Tuple[int, ...]
Compress = Callable[[State, List[int]], State]


@dataclass(frozen=True)
class Algorithm:
    """
    Descriptor for one Merkle-Damgard digest.

    The compression function maps (chaining state, 16 block words) to the new
    chaining state. Everything else the driver needs (block size, length field
    width, byte order of the block words, length field and output) follows from
    the word width and `big_endian`.
    """

    name: str
    word_bits: int
    iv: State
    digest_size: int
    big_endian: bool
    compress: Compress

    @property
    def block_size(self) -> int:
        return 16 * self.word_bits // 8

    @property
    def length_size(self) -> int:
        # 64-bit counter for 32-bit words, 128-bit for 64-bit words
        return 2 * self.word_bits // 8

    @property
    def byteorder(self) -> str:
        return "big" if self.big_endian else "little"

    @property
    def word_dtype(self) -> str:
        return f"{'>' if self.big_endian else '<'}u{self.word_bits // 8}"


class BlockBuffer:
    """Fixed-capacity byte store holding one compression block."""

    def __init__(self, size: int):
        self.data = np.zeros(size, dtype=np.uint8)

    def size(self) -> int:
        return int(self.data.size)

    def words(self, dtype: str) -> List[int]:
        return self.data.view(dtype).tolist()

    def copy(self) -> "BlockBuffer":
        out = BlockBuffer.__new__(BlockBuffer)
        out.data = self.data.copy()
        return out

    def scrub(self) -> None:
        self.data.fill(0)


def as_bytes(value: Any) -> np.ndarray:
    """Raw in-memory bytes of a bytes-like object or NumPy value, as uint8."""
    if isinstance(value, str):
        raise TypeError("text must go through update_text()")
    if isinstance(value, (np.ndarray, np.generic)):
        return np.ascontiguousarray(value).reshape(-1).view(np.uint8)
    if isinstance(value, memoryview) and not value.c_contiguous:
        value = value.tobytes()
    if isinstance(value, (bytes, bytearray, memoryview)):
        return np.frombuffer(value, dtype=np.uint8)
    raise TypeError(f"cannot hash object of type {type(value).__name__}")


class Hasher:
    """
    Incremental Merkle-Damgard driver.

    Bytes are buffered until a full block is available, then handed to the
    algorithm's compression function. `digest()` pads and finalizes a private
    copy, so a hasher can keep absorbing data after a digest was taken.

    The bit counter is reduced modulo the length field width; messages longer
    than 2**61 bytes (2**125 for 64-bit word algorithms) are outside the
    supported domain.

    `scrub()`, also run when a `with` block exits, zeroes the pending block and
    retires the hasher: later updates, digests and copies raise ValueError.
    """

    def __init__(self, algorithm: Algorithm):
        self.algorithm = algorithm
        self._count = 0
        self._block = BlockBuffer(algorithm.block_size)
        self._state: State = tuple(algorithm.iv)
        self._scrubbed = False

    @property
    def name(self) -> str:
        return self.algorithm.name

    @property
    def digest_size(self) -> int:
        return self.algorithm.digest_size

    @property
    def block_size(self) -> int:
        return self.algorithm.block_size

    def size(self) -> int:
        return self._count

    def _check_live(self) -> None:
        if self._scrubbed:
            raise ValueError(f"{self.name} hasher was scrubbed")

    def _compress(self) -> None:
        words = self._block.words(self.algorithm.word_dtype)
        self._state = self.algorithm.compress(self._state, words)

    def update(self, data: Any) -> "Hasher":
        self._check_live()
        if isinstance(data, str):
            return self.update_text(data)
        src = as_bytes(data)
        count = int(src.size)

        size = self._block.size()
        cursor = self._count % size
        excess = (cursor + count) % size
        blocks = (cursor + count) // size

        pos = 0
        for _ in range(blocks):
            take = size - cursor
            self._block.data[cursor:] = src[pos : pos + take]
            pos += take
            self._compress()
            cursor = 0
        self._block.data[cursor:excess] = src[pos:]

        self._count += count
        return self

    def update_repeat(self, count: int, value: Any) -> "Hasher":
        """Absorb `count` repetitions of `value` (a byte int or any update() input)."""
        self._check_live()
        count = operator.index(count)
        if count < 0:
            raise ValueError("repeat count must be >= 0")
        if not isinstance(value, int):
            return self._update_pattern(count, value)
        if not 0 <= value <= 0xFF:
            raise ValueError("byte value must be in 0..255")

        size = self._block.size()
        cursor = self._count % size
        excess = (cursor + count) % size
        blocks = (cursor + count) // size

        for _ in range(blocks):
            self._block.data[cursor:] = value
            self._compress()
            cursor = 0
        self._block.data[cursor:excess] = value

        self._count += count
        return self

    def _update_pattern(self, count: int, value: Any) -> "Hasher":
        if isinstance(value, str):
            value = _terminated(value)
        pattern = as_bytes(value)
        if pattern.size == 0 or count == 0:
            return self
        if pattern.size == 1:
            return self.update_repeat(count, int(pattern[0]))

        reps = max(1, REPEAT_CHUNK // int(pattern.size))
        full, rest = divmod(count, reps)
        if full:
            chunk = np.tile(pattern, reps)
            for _ in range(full):
                self.update(chunk)
        if rest:
            self.update(np.tile(pattern, rest))
        return self

    def update_text(self, text: str | bytes) -> "Hasher":
        return self.update(_terminated(text))

    def copy(self) -> "Hasher":
        self._check_live()
        out = Hasher.__new__(Hasher)
        out.algorithm = self.algorithm
        out._count = self._count
        out._block = self._block.copy()
        out._state = self._state
        out._scrubbed = False
        return out

    def digest(self) -> bytes:
        self._check_live()
        alg = self.algorithm
        bits = (self._count << 3) & ((1 << (8 * alg.length_size)) - 1)

        with self.copy() as hasher:
            hasher.update_repeat(1, 0x80)

            length = hasher.size() % alg.block_size + alg.length_size
            factor = (length + alg.block_size - 1) // alg.block_size

            hasher.update_repeat(factor * alg.block_size - length, 0x00)
            hasher.update(bits.to_bytes(alg.length_size, alg.byteorder))

            out = np.array(hasher._state, dtype=alg.word_dtype).tobytes()
        return out[: alg.digest_size]

    def hexdigest(self) -> str:
        return self.digest().hex()

    def scrub(self) -> None:
        self._block.scrub()
        self._scrubbed = True

    def __enter__(self) -> "Hasher":
        return self

    def __exit__(self, *exc: object) -> None:
        self.scrub()

    def __repr__(self) -> str:
        return f"<{self.name} hasher, {self._count} bytes>"


def _terminated(text: str | bytes) -> bytes:
    if isinstance(text, str):
        text = text.encode("utf-8")
    return bytes(text).split(b"\x00", 1)[0]


def oneshot(algorithm: Algorithm, *inputs: Any) -> bytes:
    with Hasher(algorithm) as hasher:
        for item in inputs:
            hasher.update(item)
        return hasher.digest()
