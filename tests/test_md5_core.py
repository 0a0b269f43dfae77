import hashlib
import unittest

from mdhash.md5 import MD5_AC, MD5_IV, compress_block, md5_bytes, md5_hex, wt_index


class TestMD5Core(unittest.TestCase):
    def test_md5_matches_hashlib(self) -> None:
        messages = [b"", b"abc", b"\x00" * 55, b"\x00" * 56, b"\xff" * 64, bytes(range(256)) * 3]
        for m in messages:
            self.assertEqual(md5_bytes(m), hashlib.md5(m).digest())

    def test_sine_table(self) -> None:
        self.assertEqual(int(MD5_AC[0]), 0xD76AA478)
        self.assertEqual(int(MD5_AC[63]), 0xEB86D391)

    def test_message_word_order(self) -> None:
        self.assertEqual([wt_index(t) for t in (0, 15, 16, 17, 32, 33, 48, 49)], [0, 15, 1, 6, 5, 8, 0, 7])
        with self.assertRaises(ValueError):
            wt_index(64)

    def test_single_padded_block(self) -> None:
        block = b"\x80" + b"\x00" * 63
        words = [int.from_bytes(block[i : i + 4], "little") for i in range(0, 64, 4)]
        ihv = compress_block(MD5_IV, words)
        out = b"".join(w.to_bytes(4, "little") for w in ihv)
        self.assertEqual(out, hashlib.md5(b"").digest())

    def test_md5_hex_joins_inputs(self) -> None:
        self.assertEqual(md5_hex(b"ab", b"c"), "900150983cd24fb0d6963f7d28e17f72")


if __name__ == "__main__":
    unittest.main()
