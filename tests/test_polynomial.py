import pathlib  # locate repo root
import random  # deterministic PRNG for test cases
import sys  # adjust import path for local modules
import unittest  # unit test framework

ROOT = pathlib.Path(__file__).resolve().parents[1]  # repo root
sys.path.insert(0, str(ROOT))  # allow `import field`, `import polynomials`

from field import Fr  # BN254 Fr field elements
from polynomials import UniPoly, inner_product, log2_pow2, next_pow2, powers  # local polynomial module


class PolynomialTests(unittest.TestCase):  # Tests for dense univariate polynomial helpers.
    def test_evaluate_horner(self):  # 1 + 2x + 3x^2 at x = 5.
        f = UniPoly([1, 2, 3])
        self.assertEqual(f.evaluate(5), Fr(1 + 10 + 75))
        self.assertEqual(f.degree(), 2)
        self.assertEqual(UniPoly.zero().evaluate(9), Fr.zero())

    def test_trailing_zeros_dropped(self):  # Canonical coefficient list.
        self.assertEqual(UniPoly([1, 0, 0]).coeffs, [Fr(1)])
        self.assertTrue(UniPoly([0, 0]).is_zero())
        self.assertEqual(UniPoly([4, 0]), UniPoly([4]))

    def test_divide_by_linear(self):  # poly == q * (X - z) + r with r == poly(z).
        rng = random.Random(0)
        for deg in range(0, 8):
            f = UniPoly.random(deg, rng)
            z = Fr.random(rng)
            q, r = f.divide_by_linear(z)
            self.assertEqual(r, f.evaluate(z))
            x = Fr.random(rng)
            self.assertEqual(q.evaluate(x) * (x - z) + r, f.evaluate(x))
            self.assertEqual(f.opening_witness(z), q)

    def test_random_has_exact_degree(self):
        rng = random.Random(1)
        for deg in (0, 1, 19):
            self.assertEqual(len(UniPoly.random(deg, rng).coeffs), deg + 1)
        with self.assertRaises(ValueError):
            UniPoly.random(-1, rng)

    def test_arithmetic(self):
        f, g = UniPoly([1, 2, 3]), UniPoly([5, 7])
        self.assertEqual(f + g, UniPoly([6, 9, 3]))
        self.assertEqual(f - f, UniPoly.zero())
        self.assertEqual(g.scale(2), UniPoly([10, 14]))
        self.assertEqual(f.padded_coeffs(4)[3], Fr.zero())
        with self.assertRaises(ValueError):
            f.padded_coeffs(2)

    def test_helpers(self):
        self.assertEqual(log2_pow2(32), 5)
        with self.assertRaises(ValueError):
            log2_pow2(20)
        self.assertEqual([next_pow2(n) for n in (1, 2, 3, 20, 32, 33)], [1, 2, 4, 32, 32, 64])
        self.assertEqual(powers(Fr(3), 4), [Fr(1), Fr(3), Fr(9), Fr(27)])
        self.assertEqual(inner_product([Fr(1), Fr(2)], [Fr(3), Fr(4)]), Fr(11))


if __name__ == "__main__":
    unittest.main()
