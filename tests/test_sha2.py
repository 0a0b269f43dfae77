import hashlib
import unittest

from mdhash.sha2 import (
    SHA2_IV,
    SHA2_VARIANTS,
    SHA256_K,
    SHA512_K,
    ch,
    expand_schedule_32,
    maj,
    sha2_bytes,
)


def _abc_block():
    block = b"abc" + b"\x80" + bytes(52) + (24).to_bytes(8, "big")
    return [int.from_bytes(block[i : i + 4], "big") for i in range(0, 64, 4)]


class TestSHA2(unittest.TestCase):
    def test_schedule_for_abc(self) -> None:
        w = expand_schedule_32(_abc_block())
        self.assertEqual(len(w), 64)
        self.assertEqual(w[0], 0x61626380)
        self.assertEqual(w[15], 0x00000018)
        self.assertEqual(w[16], 0x61626380)
        self.assertEqual(w[17], 0x000F0000)

    def test_round_constants(self) -> None:
        self.assertEqual(len(SHA256_K), 64)
        self.assertEqual(len(SHA512_K), 80)
        self.assertEqual(int(SHA256_K[0]), 0x428A2F98)
        self.assertEqual(int(SHA512_K[79]), 0x6C44198C4A475817)

    def test_boolean_functions(self) -> None:
        x, y, z = 0xF0F0F0F0, 0xFF00FF00, 0x0F0F0F0F
        self.assertEqual(ch(x, y, z), (x & y) ^ (~x & 0xFFFFFFFF & z))
        self.assertEqual(maj(x, y, z), (x & y) ^ (x & z) ^ (y & z))

    def test_truncated_variants_have_own_iv(self) -> None:
        full = sha2_bytes(512, 512, b"abc")
        self.assertNotEqual(sha2_bytes(512, 256, b"abc"), full[:32])
        self.assertNotEqual(sha2_bytes(512, 224, b"abc"), full[:28])
        self.assertNotEqual(sha2_bytes(512, 384, b"abc"), full[:48])
        self.assertNotEqual(sha2_bytes(256, 224, b"abc"), sha2_bytes(256, 256, b"abc")[:28])
        self.assertEqual(len(set(SHA2_IV.values())), len(SHA2_IV))

    def test_variants(self) -> None:
        self.assertEqual(
            sha2_bytes(512, 256, b"abc").hex(),
            "53048e2681941ef99b2e29b76b4c7dabe4c2d0c634fc6d46e0e2f13107e7af23",
        )
        self.assertEqual(sha2_bytes(256, 224, b"a", b"bc"), hashlib.sha224(b"abc").digest())
        self.assertEqual(sha2_bytes(512, 384, b""), hashlib.sha384(b"").digest())
        for (state_bits, output_bits), alg in SHA2_VARIANTS.items():
            self.assertEqual(alg.digest_size * 8, output_bits)
            self.assertEqual(alg.word_bits * 8, state_bits)

    def test_unknown_variant(self) -> None:
        with self.assertRaises(ValueError):
            sha2_bytes(256, 384, b"abc")


if __name__ == "__main__":
    unittest.main()
