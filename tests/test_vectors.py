import hashlib
import os
import random
import unittest

from mdhash.algos import ALGORITHMS, hexdigest, new
from mdhash.verify import VECTORS, Vector, compute, run_vectors

HEAVY = os.getenv("MDHASH_HEAVY_TESTS") == "1"


class TestPublishedVectors(unittest.TestCase):
    def test_every_algorithm_has_vectors(self) -> None:
        self.assertEqual({v.algorithm for v in VECTORS}, set(ALGORITHMS))

    def test_short_vectors(self) -> None:
        for v in VECTORS:
            if v.repeat != 1:
                continue
            with self.subTest(algorithm=v.algorithm, message=v.describe()):
                self.assertEqual(compute(v), v.expected)

    def test_million_a(self) -> None:
        for v in VECTORS:
            if v.message == b"a" and v.repeat == 1000000:
                with self.subTest(algorithm=v.algorithm):
                    self.assertEqual(compute(v), v.expected)

    @unittest.skipUnless(HEAVY, "set MDHASH_HEAVY_TESTS=1 to hash the 1 GiB vectors")
    def test_gigabyte_vectors(self) -> None:
        for v in VECTORS:
            if v.length > 1000000:
                with self.subTest(algorithm=v.algorithm):
                    self.assertEqual(compute(v), v.expected)

    def test_reference_scenarios(self) -> None:
        self.assertEqual(hexdigest("md4", b""), "31d6cfe0d16ae931b73c59d7e0c089c0")
        self.assertEqual(hexdigest("md5", b"abc"), "900150983cd24fb0d6963f7d28e17f72")
        self.assertEqual(hexdigest("sha1", b"abc"), "a9993e364706816aba3e25717850c26c9cd0d89d")
        self.assertEqual(
            hexdigest("sha256", b""),
            "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855",
        )
        self.assertEqual(
            hexdigest("SHA-512/256", b"abc"),
            "53048e2681941ef99b2e29b76b4c7dabe4c2d0c634fc6d46e0e2f13107e7af23",
        )
        self.assertEqual(hexdigest("RIPEMD-160", b"message digest"), "5d0689ef49d2fae572b881b123a85ffa21595f36")


class TestAgainstHashlib(unittest.TestCase):
    def test_random_messages(self) -> None:
        rng = random.Random(20240601)
        for name in ("md5", "sha1", "sha224", "sha256", "sha384", "sha512"):
            for _ in range(8):
                m = bytes(rng.randrange(256) for _ in range(rng.randrange(0, 600)))
                with self.subTest(name=name, length=len(m)):
                    self.assertEqual(new(name, m).digest(), hashlib.new(name, m).digest())


class TestRunner(unittest.TestCase):
    def test_results_report_success(self) -> None:
        results = list(run_vectors(VECTORS[:4]))
        self.assertEqual(len(results), 4)
        self.assertTrue(all(r.ok and not r.skipped for r in results))

    def test_mismatch_is_reported(self) -> None:
        bad = Vector("md5", b"abc", "00" * 16)
        (res,) = run_vectors([bad])
        self.assertFalse(res.ok)
        self.assertEqual(res.actual, "900150983cd24fb0d6963f7d28e17f72")

    def test_max_bytes_skips_long_vectors(self) -> None:
        vectors = [Vector("md5", b"a", "7707d6ae4e027c70eea2a935c2296f21", repeat=1000000)]
        (res,) = run_vectors(vectors, max_bytes=10)
        self.assertTrue(res.skipped)
        self.assertIsNone(res.actual)

    def test_describe(self) -> None:
        self.assertEqual(Vector("md5", b"abc", "").describe(), "'abc'")
        self.assertEqual(Vector("md5", b"a", "", repeat=3).describe(), "3 x 'a'")
        self.assertEqual(Vector("md5", b"a", "", repeat=3).length, 3)


if __name__ == "__main__":
    unittest.main()
