import random
import unittest

from mdhash import jit
from mdhash.algos import ALGORITHMS, digest, with_engine


class TestKernelLookup(unittest.TestCase):
    def test_kernel_coverage(self) -> None:
        self.assertTrue(jit.has_kernel("md5"))
        self.assertTrue(jit.has_kernel("sha224"))
        self.assertFalse(jit.has_kernel("sha512"))
        with self.assertRaises(ValueError):
            jit.kernel("ripemd160")

    def test_algorithm_without_kernel_is_unchanged(self) -> None:
        alg = ALGORITHMS["ripemd320"]
        if jit.numba_available():
            self.assertIs(with_engine(alg, "numba"), alg)
        else:
            self.assertIs(with_engine(alg, "auto"), alg)


@unittest.skipUnless(jit.numba_available(), "numba not installed")
class TestNumbaKernels(unittest.TestCase):
    def test_kernels_match_python(self) -> None:
        rng = random.Random(99)
        for name in jit.KERNELS:
            for length in (0, 3, 55, 56, 64, 300):
                m = bytes(rng.randrange(256) for _ in range(length))
                with self.subTest(name=name, length=length):
                    self.assertEqual(digest(name, m, engine="numba"), digest(name, m, engine="python"))

    def test_compressor_signature(self) -> None:
        alg = ALGORITHMS["sha256"]
        fn = jit.compressor("sha256")
        words = list(range(16))
        self.assertEqual(fn(alg.iv, words), alg.compress(alg.iv, words))


if __name__ == "__main__":
    unittest.main()
