import pathlib
import random
import sys
import unittest

ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from curve import G1, mul  # BN254 G1 ops
from field import Fr  # BN254 scalar field
from kzg import KZGCommitment, KZGError, KZGProof, KZGRandomness, SonicKZG  # backend under test
from pcs import LabeledPolynomial  # labeled polynomial wrapper
from polynomials import UniPoly  # dense polynomials


class KZGTests(unittest.TestCase):  # Sonic-style KZG backend (pairing checks are slow: keep them few).
    @classmethod
    def setUpClass(cls):
        cls.rng = random.Random(11)
        cls.kzg = SonicKZG()
        cls.pp = cls.kzg.setup(4, cls.rng)
        cls.ck, cls.vk = cls.kzg.trim(cls.pp, 4, 1)
        cls.poly = LabeledPolynomial("p", UniPoly.random(3, cls.rng), 4, 1)
        cls.comm, cls.rand = cls.kzg.commit(cls.ck, cls.poly, cls.rng)
        cls.z, cls.xi = Fr.random(cls.rng), Fr.random(cls.rng)
        cls.proof = cls.kzg.open(cls.ck, cls.poly, cls.comm, cls.z, cls.xi, cls.rand, cls.rng)

    def test_setup_and_trim_shapes(self):
        self.assertEqual(self.pp.max_degree, 4)
        self.assertEqual(len(self.pp.powers_of_gamma_g), 6)
        self.assertEqual(self.ck.supported_degree, 4)
        self.assertEqual(self.ck.supported_hiding_bound, 1)
        self.assertEqual(self.vk.g, G1)
        with self.assertRaises(KZGError):
            self.kzg.trim(self.pp, 5, 1)
        with self.assertRaises(KZGError):
            self.kzg.setup(0, self.rng)

    def test_hiding_commitment_differs_from_plain(self):
        self.assertTrue(self.rand.is_hiding)
        self.assertEqual(self.rand.blinding_polynomial.degree(), 1)
        plain, plain_rand = self.kzg.commit(self.ck, self.poly.polynomial, self.rng)
        self.assertFalse(plain_rand.is_hiding)
        self.assertNotEqual(plain, self.comm)

    def test_open_check_accepts(self):
        v = self.poly.evaluate(self.z)
        self.assertIsNotNone(self.proof.random_v)
        self.assertTrue(self.kzg.check(self.vk, self.comm, self.z, v, self.proof, self.xi, self.rng))

    def test_check_rejects_wrong_value(self):
        v = self.poly.evaluate(self.z) + Fr.one()
        self.assertFalse(self.kzg.check(self.vk, self.comm, self.z, v, self.proof, self.xi, self.rng))

    def test_non_hiding_open_check(self):
        f = UniPoly([3, 1, 4, 1, 5])
        comm, rand = self.kzg.commit(self.ck, f, self.rng)
        z = Fr(7)
        proof = self.kzg.open(self.ck, f, comm, z, self.xi, rand, self.rng)
        self.assertIsNone(proof.random_v)
        self.assertTrue(self.kzg.check(self.vk, comm, z, f.evaluate(z), proof, self.xi, self.rng))

    def test_degree_errors(self):
        too_big = UniPoly.random(5, self.rng)
        with self.assertRaises(KZGError):
            self.kzg.commit(self.ck, too_big, self.rng)
        with self.assertRaises(KZGError):
            self.kzg.open(self.ck, too_big, self.comm, self.z, self.xi, self.rand, self.rng)
        bounded = LabeledPolynomial("b", UniPoly.random(3, self.rng), degree_bound=2)
        with self.assertRaises(KZGError):
            self.kzg.commit(self.ck, bounded, self.rng)

    def test_open_requires_randomness_for_hiding_polynomial(self):
        with self.assertRaises(KZGError):
            self.kzg.open(self.ck, self.poly, self.comm, self.z, self.xi, KZGRandomness.empty(), self.rng)
        with self.assertRaises(KZGError):
            self.kzg.open(self.ck, self.poly, self.comm, 5, self.xi, self.rand, self.rng)

    def test_check_raises_on_malformed_input(self):
        v = self.poly.evaluate(self.z)
        with self.assertRaises(KZGError):
            self.kzg.check(self.vk, "not a commitment", self.z, v, self.proof, self.xi, self.rng)
        off_curve = (G1[0], G1[1] + G1[1])
        with self.assertRaises(KZGError):
            self.kzg.check(self.vk, self.comm, self.z, v, KZGProof(off_curve, None), self.xi, self.rng)
        with self.assertRaises(KZGError):
            self.kzg.check(self.vk, self.comm, self.z, int(v), self.proof, self.xi, self.rng)

    def test_encodings_roundtrip(self):
        enc = self.kzg.commitment_to_bytes(self.comm)
        self.assertEqual(len(enc), 32)
        self.assertEqual(self.kzg.commitment_from_bytes(enc), self.comm)
        penc = self.kzg.proof_to_bytes(self.proof)
        self.assertEqual(self.kzg.proof_from_bytes(penc), self.proof)
        plain = KZGProof(mul(G1, 9), None)
        self.assertEqual(self.kzg.proof_from_bytes(self.kzg.proof_to_bytes(plain)), plain)
        with self.assertRaises(KZGError):
            self.kzg.proof_from_bytes(penc + b"\x00")
        with self.assertRaises(KZGError):
            self.kzg.commitment_from_bytes(enc[:-1])
        with self.assertRaises(KZGError):
            self.kzg.commitment_to_bytes(KZGProof(None))
        infinity = KZGCommitment(None)
        self.assertEqual(self.kzg.commitment_from_bytes(self.kzg.commitment_to_bytes(infinity)), infinity)


if __name__ == "__main__":
    unittest.main()
