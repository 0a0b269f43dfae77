import hashlib
import random
import unittest

import numpy as np

from mdhash.algos import ALGORITHMS, digest, new
from mdhash.core import REPEAT_CHUNK, BlockBuffer, Hasher, as_bytes
from mdhash.md5 import MD5, MD5_IV, compress_block


class TestBlockBuffer(unittest.TestCase):
    def test_words_follow_dtype(self) -> None:
        buf = BlockBuffer(64)
        buf.data[:4] = [1, 2, 3, 4]
        self.assertEqual(buf.words("<u4")[0], 0x04030201)
        self.assertEqual(buf.words(">u4")[0], 0x01020304)
        self.assertEqual(len(buf.words(">u8")), 8)

    def test_copy_and_scrub(self) -> None:
        buf = BlockBuffer(64)
        buf.data[:] = 0xAA
        other = buf.copy()
        buf.scrub()
        self.assertEqual(int(np.count_nonzero(buf.data)), 0)
        self.assertEqual(int(np.count_nonzero(other.data)), 64)


class TestHasher(unittest.TestCase):
    def test_incremental_equals_monolithic(self) -> None:
        rng = random.Random(1234)
        message = bytes(rng.randrange(256) for _ in range(777))
        for name in ("md4", "md5", "sha1", "sha256", "sha512", "ripemd160", "ripemd320"):
            expected = digest(name, message)
            for _ in range(5):
                cuts = sorted(rng.randrange(len(message) + 1) for _ in range(rng.randrange(1, 8)))
                hasher = new(name)
                prev = 0
                for cut in cuts + [len(message)]:
                    hasher.update(message[prev:cut])
                    prev = cut
                with self.subTest(name=name, cuts=cuts):
                    self.assertEqual(hasher.digest(), expected)

    def test_padding_boundaries(self) -> None:
        # lengths around the point where the length field spills into a new block
        for n in list(range(0, 140)) + [183, 184, 191, 192, 255, 256, 257]:
            m = bytes(range(256))[:n] if n <= 256 else bytes(n)
            with self.subTest(n=n):
                self.assertEqual(digest("sha256", m), hashlib.sha256(m).digest())
                self.assertEqual(digest("sha512", m), hashlib.sha512(m).digest())
                self.assertEqual(digest("md5", m), hashlib.md5(m).digest())

    def test_repeat_matches_explicit_bytes(self) -> None:
        for n in range(0, 200):
            with self.subTest(n=n):
                h = new("md5").update_repeat(n, 0x5A)
                self.assertEqual(h.digest(), hashlib.md5(b"\x5a" * n).digest())
                self.assertEqual(h.size(), n)

    def test_repeat_after_partial_block(self) -> None:
        for n in (0, 1, 60, 61, 64, 125, 200, 1000):
            h = new("sha1").update(b"xyz").update_repeat(n, 7)
            self.assertEqual(h.digest(), hashlib.sha1(b"xyz" + b"\x07" * n).digest())

    def test_repeat_large_count(self) -> None:
        n = 3 * 64 * 50 + 17
        self.assertEqual(new("sha256").update_repeat(n, 0).digest(), hashlib.sha256(bytes(n)).digest())

    def test_repeat_pattern(self) -> None:
        for count in (1, 2, 1000, REPEAT_CHUNK // 3 * 2 + 5):
            with self.subTest(count=count):
                h = new("sha256").update_repeat(count, b"abc")
                self.assertEqual(h.digest(), hashlib.sha256(b"abc" * count).digest())
                self.assertEqual(h.size(), 3 * count)

    def test_repeat_single_byte_pattern(self) -> None:
        self.assertEqual(new("md5").update_repeat(100, b"q").digest(), hashlib.md5(b"q" * 100).digest())

    def test_repeat_count_accepts_numpy_integers(self) -> None:
        h = new("md5").update_repeat(np.int64(3), 97)
        self.assertIs(type(h.size()), int)
        self.assertEqual(h.hexdigest(), hashlib.md5(b"aaa").hexdigest())
        h = new("sha512").update_repeat(np.uint16(2), b"xy")
        self.assertEqual(h.digest(), hashlib.sha512(b"xyxy").digest())
        with self.assertRaises(TypeError):
            new("md5").update_repeat(2.0, 97)

    def test_repeat_validation(self) -> None:
        h = new("md5")
        with self.assertRaises(ValueError):
            h.update_repeat(-1, 0)
        with self.assertRaises(ValueError):
            h.update_repeat(1, 256)
        with self.assertRaises(ValueError):
            h.update_repeat(1, -1)
        self.assertEqual(h.size(), 0)

    def test_digest_does_not_mutate(self) -> None:
        h = new("sha1").update(b"abc")
        first = h.digest()
        self.assertEqual(h.digest(), first)
        self.assertEqual(h.size(), 3)
        h.update(b"def")
        self.assertEqual(h.digest(), hashlib.sha1(b"abcdef").digest())

    def test_copy_is_independent(self) -> None:
        h = new("sha512").update(b"prefix")
        c = h.copy()
        c.update(b"-tail")
        self.assertEqual(h.digest(), hashlib.sha512(b"prefix").digest())
        self.assertEqual(c.digest(), hashlib.sha512(b"prefix-tail").digest())

    def test_buffered_block_is_compressed_once_full(self) -> None:
        data = bytes(range(70))
        h = Hasher(MD5).update(data)
        words = [int.from_bytes(data[i : i + 4], "little") for i in range(0, 64, 4)]
        self.assertEqual(h._state, compress_block(MD5_IV, words))
        self.assertEqual(h.size(), 70)

    def test_update_text_stops_at_nul(self) -> None:
        expected = hashlib.md5(b"abc").digest()
        self.assertEqual(new("md5").update_text("abc\x00def").digest(), expected)
        self.assertEqual(new("md5").update_text(b"abc\x00def").digest(), expected)
        self.assertEqual(new("md5").update("abc").digest(), expected)
        # bytes keep their NUL
        self.assertEqual(new("md5").update(b"abc\x00").digest(), hashlib.md5(b"abc\x00").digest())

    def test_update_text_encodes_utf8(self) -> None:
        self.assertEqual(new("sha256").update("é").digest(), hashlib.sha256("é".encode("utf-8")).digest())

    def test_numpy_values_hash_their_memory(self) -> None:
        value = np.uint32(0x01020304)
        self.assertEqual(new("sha1").update(value).digest(), hashlib.sha1(value.tobytes()).digest())
        arr = np.arange(10, dtype=">u2")
        self.assertEqual(new("sha1").update(arr).digest(), hashlib.sha1(arr.tobytes()).digest())

    def test_strided_memoryview(self) -> None:
        view = memoryview(b"abcdef")[::2]
        self.assertEqual(new("md5").update(view).digest(), hashlib.md5(b"ace").digest())

    def test_as_bytes_rejects_other_types(self) -> None:
        with self.assertRaises(TypeError):
            as_bytes(123)
        with self.assertRaises(TypeError):
            as_bytes("text")
        with self.assertRaises(TypeError):
            new("md5").update(1.5)

    def test_update_chains(self) -> None:
        h = new("md5")
        self.assertIs(h.update(b"a"), h)
        self.assertIs(h.update_repeat(2, 0), h)
        self.assertIs(h.update_text("x"), h)

    def test_context_manager_scrubs_buffer(self) -> None:
        with new("md5") as h:
            h.update(b"secret")
            self.assertEqual(h.hexdigest(), hashlib.md5(b"secret").hexdigest())
        self.assertEqual(int(np.count_nonzero(h._block.data)), 0)

    def test_scrubbed_hasher_is_retired(self) -> None:
        h = new("sha1").update(b"abc")
        h.scrub()
        for call in (lambda: h.update(b"x"), lambda: h.update_repeat(1, 0), h.digest, h.hexdigest, h.copy):
            with self.assertRaises(ValueError):
                call()

    def test_sizes(self) -> None:
        expected = {
            "md4": (16, 64),
            "md5": (16, 64),
            "sha1": (20, 64),
            "sha224": (28, 64),
            "sha256": (32, 64),
            "sha384": (48, 128),
            "sha512": (64, 128),
            "sha512_224": (28, 128),
            "sha512_256": (32, 128),
            "ripemd128": (16, 64),
            "ripemd160": (20, 64),
            "ripemd256": (32, 64),
            "ripemd320": (40, 64),
        }
        self.assertEqual(set(expected), set(ALGORITHMS))
        for name, (dsize, bsize) in expected.items():
            h = new(name)
            self.assertEqual((h.digest_size, h.block_size), (dsize, bsize))
            self.assertEqual(len(h.digest()), dsize)

    def test_trailing_zero_changes_digest(self) -> None:
        for name in ALGORITHMS:
            with self.subTest(name=name):
                self.assertNotEqual(digest(name, b"abc"), digest(name, b"abc\x00"))

    def test_independent_instances_agree(self) -> None:
        for name in ALGORITHMS:
            with self.subTest(name=name):
                self.assertEqual(new(name, b"determinism").digest(), new(name).update(b"determinism").digest())

    def test_repr(self) -> None:
        self.assertEqual(repr(new("md5", b"abcd")), "<md5 hasher, 4 bytes>")


if __name__ == "__main__":
    unittest.main()
