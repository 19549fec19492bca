import pathlib
import sys
import unittest

ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from codec import ByteReader, ByteWriter, DecodeError  # little-endian codec
from curve import G1, mul  # BN254 G1 ops
from equivalence_proof import EquivalenceProof, decode_proof, encode_proof  # proof container + wire format
from errors import EquivalenceError, ProofDecodeError  # decode boundary errors
from field import Fr  # BN254 scalar field
from ipa import IPAProof, InnerProductArgPC  # backend 2 proof type
from kzg import KZGProof, SonicKZG  # backend 1 proof type


class EquivalenceProofEncodingTests(unittest.TestCase):  # Wire format only; proofs are built by hand.
    def setUp(self):
        self.backends = (SonicKZG(), InnerProductArgPC())
        o1 = KZGProof(mul(G1, 5), Fr(17))
        o2 = IPAProof((mul(G1, 2), None), (mul(G1, 3), G1), mul(G1, 7), Fr(9), mul(G1, 11), Fr(13))
        self.proof = EquivalenceProof(Fr(123456789), (o1, o2))

    def test_layout(self):
        data = encode_proof(self.proof, self.backends)
        self.assertEqual(data[:32], Fr(123456789).to_bytes())
        n1 = int.from_bytes(data[32:40], "little")
        self.assertEqual(data[40 : 40 + n1], self.backends[0].proof_to_bytes(self.proof.openings[0]))
        rest = data[40 + n1 :]
        n2 = int.from_bytes(rest[:8], "little")
        self.assertEqual(rest[8:], self.backends[1].proof_to_bytes(self.proof.openings[1]))
        self.assertEqual(len(rest), 8 + n2)

    def test_roundtrip(self):
        data = self.proof.to_bytes(self.backends)
        self.assertEqual(decode_proof(data, self.backends), self.proof)
        self.assertEqual(EquivalenceProof.from_bytes(data, self.backends), self.proof)

    def test_rejects_trailing_and_truncated(self):
        data = encode_proof(self.proof, self.backends)
        with self.assertRaises(ProofDecodeError):
            decode_proof(data + b"\x00", self.backends)
        for cut in (0, 31, 39, len(data) - 1):
            with self.subTest(cut=cut):
                with self.assertRaises(ProofDecodeError):
                    decode_proof(data[:cut], self.backends)

    def test_rejects_non_canonical_evaluation(self):
        data = encode_proof(self.proof, self.backends)
        bad = Fr.MODULUS.to_bytes(32, "little") + data[32:]
        with self.assertRaises(ProofDecodeError):
            decode_proof(bad, self.backends)

    def test_rejects_bad_opening_bytes(self):
        raw1 = self.backends[0].proof_to_bytes(self.proof.openings[0])
        data = ByteWriter().fr(self.proof.evaluation).bytes(raw1 + b"\x00").bytes(b"").getvalue()
        with self.assertRaises(ProofDecodeError) as cm:
            decode_proof(data, self.backends)
        self.assertIn("opening 1", str(cm.exception))
        self.assertIsInstance(cm.exception, EquivalenceError)

    def test_container_validation(self):
        with self.assertRaises(TypeError):
            EquivalenceProof(5, self.proof.openings)
        with self.assertRaises(ValueError):
            EquivalenceProof(Fr(1), self.proof.openings[:1])
        p = EquivalenceProof(Fr(1), list(self.proof.openings))
        self.assertIsInstance(p.openings, tuple)


class CodecTests(unittest.TestCase):
    def test_writer_reader_mirror(self):
        w = ByteWriter().u8(7).u64(2**40).bool(True).fr(Fr(9)).g1(G1).bytes(b"xyz")
        w.option(None, w.fr).option(Fr(3), w.fr).vec([Fr(1), Fr(2)], w.fr)
        r = ByteReader(w.getvalue())
        self.assertEqual((r.u8(), r.u64(), r.bool()), (7, 2**40, True))
        self.assertEqual(r.fr(), Fr(9))
        self.assertEqual(r.g1(), G1)
        self.assertEqual(r.bytes(), b"xyz")
        self.assertIsNone(r.option(r.fr))
        self.assertEqual(r.option(r.fr), Fr(3))
        self.assertEqual(r.vec(r.fr), [Fr(1), Fr(2)])
        r.finish()

    def test_reader_errors(self):
        with self.assertRaises(DecodeError):
            ByteReader(b"\x02").bool()
        with self.assertRaises(DecodeError):
            ByteReader(b"\x01\x02").u64()
        with self.assertRaises(DecodeError):
            ByteReader(b"\x00" * 31 + b"\xc0").g1()
        with self.assertRaises(DecodeError):
            ByteReader(b"\x00").finish()


if __name__ == "__main__":
    unittest.main()
