"""Hiding inner-product-argument polynomial commitments over BN254 G1 (pairing free).

Transparent setup: Pedersen bases `G_0..G_{n-1}`, `H`, `S` are hash-to-curve outputs, so nobody
knows discrete-log relations between them. `n` is a power of two.

```text
commit    C = <p, G> + rand * S
open      hiding:   q <- random degree-(n-1) poly with q(z) = 0, commitment Q = <q, G> + rho * S
                    alpha = H(C, z, v, Q)
                    p' = p + alpha*q,  rand' = rand + alpha*rho,  C' = C + alpha*Q - rand'*S = <p', G>
          u = H(C', z, v), H' = u * H,  P = C' + v * H'
          per round (a, b = powers of z, G halved):
              L = <a_lo, G_hi> + <a_lo, b_hi> H'      R = <a_hi, G_lo> + <a_hi, b_lo> H'
              x = H(x_prev, L, R)
              a <- a_lo + x^-1 a_hi,  b <- b_lo + x b_hi,  G <- G_lo + x G_hi
check     P_final = P + sum_j (x_j L_j + x_j^-1 R_j)
          s_i = prod_j x_j^{bit_j(i)},  G_final = <s, G>,  b_final = <s, powers(z)>
          accept iff P_final == c * G_final + c * b_final * H'
```

Oracle challenges come from a fresh `Blake2bTranscript` per call. `opening_challenge` is the
batching scalar for folding several polynomials (coefficient xi^0 = 1 for a single one).
"""

from __future__ import annotations  # keep type hints lightweight

import logging  # backend diagnostics
from dataclasses import dataclass  # key/commitment/proof containers

import config  # hash-to-curve domain + oracle label
from codec import ByteReader, ByteWriter, DecodeError  # canonical encodings
from curve import add, g1_to_bytes, hash_to_g1, is_on_g1, msm, mul, sub  # BN254 G1 ops
from field import Fr  # BN254 scalar field
from pcs import PCError, PolynomialCommitment, as_labeled  # capability interface
from polynomials import UniPoly, inner_product, log2_pow2, next_pow2, powers  # polynomial helpers
from transcript import Blake2bTranscript  # random oracle for IPA challenges

logger = logging.getLogger(__name__)


class IPAError(PCError):  # Malformed or out-of-range input to the IPA backend.
    pass


@dataclass(frozen=True)
class IPAUniversalParams:
    comm_key: tuple  # G_0..G_{n-1}
    h: tuple
    s: tuple

    @property
    def max_degree(self) -> int:
        return len(self.comm_key) - 1


@dataclass(frozen=True)
class IPACommitterKey:  # Also serves as the verifier key (transparent setup).
    comm_key: tuple
    h: tuple
    s: tuple
    max_degree: int

    @property
    def supported_degree(self) -> int:
        return len(self.comm_key) - 1


IPAVerifierKey = IPACommitterKey


@dataclass(frozen=True)
class IPACommitment:
    point: tuple | None


@dataclass(frozen=True)
class IPARandomness:
    rand: Fr | None = None

    @property
    def is_hiding(self) -> bool:
        return self.rand is not None


@dataclass(frozen=True)
class IPAProof:
    l_vec: tuple
    r_vec: tuple
    final_comm_key: tuple | None
    c: Fr
    hiding_comm: tuple | None = None
    rand: Fr | None = None


def _oracle(*parts):  # Hash group elements / scalars into one Fr challenge.
    t = Blake2bTranscript.new(config.IPA_ORACLE_LABEL)
    for x in parts:
        t.absorb(x.to_bytes() if isinstance(x, Fr) else g1_to_bytes(x))
    return t.squeeze_field_element()


class InnerProductArgPC(PolynomialCommitment):
    name = "ipa"
    UniversalParams = IPAUniversalParams
    CommitterKey = IPACommitterKey
    VerifierKey = IPAVerifierKey
    Commitment = IPACommitment
    Randomness = IPARandomness
    Proof = IPAProof

    def __init__(self, generator_domain=config.IPA_GENERATOR_DOMAIN):
        self.generator_domain = bytes(generator_domain)

    def setup(self, max_degree, rng):  # Transparent: `rng` is unused.
        max_degree = int(max_degree)
        if max_degree < 1:
            raise IPAError("max_degree must be >= 1")
        n = next_pow2(max_degree + 1)
        comm_key = tuple(hash_to_g1(self.generator_domain, i) for i in range(n))
        logger.debug("ipa setup: %d generators", n)
        h, s = hash_to_g1(self.generator_domain, n), hash_to_g1(self.generator_domain, n + 1)
        return IPAUniversalParams(comm_key, h, s)

    def trim(self, pp, supported_degree, supported_hiding_bound=0):
        supported_degree = int(supported_degree)
        if supported_degree < 1:
            raise IPAError("supported_degree must be >= 1")
        n = next_pow2(supported_degree + 1)
        if n > len(pp.comm_key):
            raise IPAError(
                f"supported degree {supported_degree} needs {n} generators, parameters have {len(pp.comm_key)}"
            )
        ck = IPACommitterKey(pp.comm_key[:n], pp.h, pp.s, pp.max_degree)
        return ck, ck

    def commit(self, ck, polynomial, rng):
        lp = as_labeled(polynomial)
        self._check_degree(ck, lp)
        rand = IPARandomness(Fr.random(rng)) if lp.is_hiding else IPARandomness()
        point = msm(ck.comm_key, lp.polynomial.coeffs)
        if rand.is_hiding:
            point = add(point, mul(ck.s, int(rand.rand)))
        logger.debug("ipa commit %r: degree=%d hiding=%s", lp.label, lp.degree(), rand.is_hiding)
        return IPACommitment(point), rand

    def open(self, ck, polynomial, commitment, point, opening_challenge, randomness, rng):
        lp = as_labeled(polynomial)
        self._check_degree(ck, lp)
        if not isinstance(commitment, IPACommitment):
            raise IPAError(f"expected IPACommitment, got {type(commitment).__name__}")
        if not isinstance(randomness, IPARandomness):
            raise IPAError(f"expected IPARandomness, got {type(randomness).__name__}")
        z = _scalar(point, "point")
        _scalar(opening_challenge, "opening_challenge")
        if lp.is_hiding and not randomness.is_hiding:
            raise IPAError(f"missing blinding randomness for hiding polynomial {lp.label!r}")
        n = len(ck.comm_key)
        poly = lp.polynomial
        v = poly.evaluate(z)
        combined = commitment.point
        hiding_comm = proof_rand = None
        if randomness.is_hiding:
            q = UniPoly.random(n - 1, rng)
            q = q - UniPoly([q.evaluate(z)])
            rho = Fr.random(rng)
            hiding_comm = add(msm(ck.comm_key, q.coeffs), mul(ck.s, int(rho)))
            alpha = _oracle(combined, z, v, hiding_comm)
            poly = poly + q.scale(alpha)
            proof_rand = randomness.rand + alpha * rho
            combined = sub(add(combined, mul(hiding_comm, int(alpha))), mul(ck.s, int(proof_rand)))
        u = _oracle(combined, z, v)
        h_prime = mul(ck.h, int(u))
        a, b, key = poly.padded_coeffs(n), powers(z, n), list(ck.comm_key)
        l_vec, r_vec = [], []
        x = u
        while len(a) > 1:
            m = len(a) // 2
            a_lo, a_hi, b_lo, b_hi, g_lo, g_hi = a[:m], a[m:], b[:m], b[m:], key[:m], key[m:]
            L = add(msm(g_hi, a_lo), mul(h_prime, int(inner_product(a_lo, b_hi))))
            R = add(msm(g_lo, a_hi), mul(h_prime, int(inner_product(a_hi, b_lo))))
            l_vec.append(L)
            r_vec.append(R)
            x = _oracle(x, L, R)
            x_inv = x.inv()
            a = [lo + x_inv * hi for lo, hi in zip(a_lo, a_hi)]
            b = [lo + x * hi for lo, hi in zip(b_lo, b_hi)]
            key = [add(lo, mul(hi, int(x))) for lo, hi in zip(g_lo, g_hi)]
        return IPAProof(tuple(l_vec), tuple(r_vec), key[0], a[0], hiding_comm, proof_rand)

    def check(self, vk, commitment, point, value, proof, opening_challenge, rng) -> bool:
        if not isinstance(commitment, IPACommitment) or not is_on_g1(commitment.point):
            raise IPAError("malformed commitment")
        self._check_proof_shape(vk, proof)
        z, v = _scalar(point, "point"), _scalar(value, "value")
        _scalar(opening_challenge, "opening_challenge")
        n = len(vk.comm_key)
        combined = commitment.point
        if proof.hiding_comm is not None:
            alpha = _oracle(combined, z, v, proof.hiding_comm)
            combined = sub(add(combined, mul(proof.hiding_comm, int(alpha))), mul(vk.s, int(proof.rand)))
        u = _oracle(combined, z, v)
        h_prime = mul(vk.h, int(u))
        p = add(combined, mul(h_prime, int(v)))
        x, xs = u, []
        for L, R in zip(proof.l_vec, proof.r_vec):
            x = _oracle(x, L, R)
            xs.append(x)
            p = add(p, add(mul(L, int(x)), mul(R, int(x.inv()))))
        s = [Fr.one()]
        for x in reversed(xs):
            s = s + [si * x for si in s]
        final_key = msm(vk.comm_key, s)
        if final_key != proof.final_comm_key:
            logger.debug("ipa check: final commitment key mismatch")
            return False
        b_final = inner_product(s, powers(z, n))
        expected = add(mul(final_key, int(proof.c)), mul(h_prime, int(proof.c * b_final)))
        ok = p == expected
        logger.debug("ipa check: %s", "accept" if ok else "reject")
        return ok

    def commitment_to_bytes(self, commitment) -> bytes:
        if not isinstance(commitment, IPACommitment):
            raise IPAError(f"expected IPACommitment, got {type(commitment).__name__}")
        return ByteWriter().g1(commitment.point).getvalue()

    def commitment_from_bytes(self, data):
        try:
            r = ByteReader(data)
            out = IPACommitment(r.g1())
            r.finish()
        except DecodeError as exc:
            raise IPAError(f"bad commitment encoding: {exc}") from exc
        return out

    def proof_to_bytes(self, proof) -> bytes:
        if not isinstance(proof, IPAProof):
            raise IPAError(f"expected IPAProof, got {type(proof).__name__}")
        w = ByteWriter()
        w.vec(proof.l_vec, w.g1).vec(proof.r_vec, w.g1).g1(proof.final_comm_key).fr(proof.c)
        return w.option(proof.hiding_comm, w.g1).option(proof.rand, w.fr).getvalue()

    def proof_from_bytes(self, data):
        try:
            r = ByteReader(data)
            out = IPAProof(tuple(r.vec(r.g1)), tuple(r.vec(r.g1)), r.g1(), r.fr(), r.option(r.g1), r.option(r.fr))
            r.finish()
        except DecodeError as exc:
            raise IPAError(f"bad proof encoding: {exc}") from exc
        return out

    @staticmethod
    def _check_degree(ck, lp):
        if lp.degree() > ck.supported_degree:
            raise IPAError(f"polynomial {lp.label!r} has degree {lp.degree()} > supported {ck.supported_degree}")
        if lp.degree_bound is not None and lp.degree() > lp.degree_bound:
            raise IPAError(f"polynomial {lp.label!r} violates its degree bound {lp.degree_bound}")

    @staticmethod
    def _check_proof_shape(vk, proof):  # Malformed proofs raise; well-formed but wrong ones return False in check.
        if not isinstance(proof, IPAProof):
            raise IPAError(f"expected IPAProof, got {type(proof).__name__}")
        rounds = log2_pow2(len(vk.comm_key))
        if len(proof.l_vec) != rounds or len(proof.r_vec) != rounds:
            raise IPAError(f"expected {rounds} rounds, proof has {len(proof.l_vec)}/{len(proof.r_vec)}")
        for P in list(proof.l_vec) + list(proof.r_vec) + [proof.final_comm_key, proof.hiding_comm]:
            if not is_on_g1(P):
                raise IPAError("proof contains a point not on G1")
        if not isinstance(proof.c, Fr):
            raise IPAError("malformed proof: c")
        unpaired = (proof.hiding_comm is None) != (proof.rand is None)
        if unpaired or (proof.rand is not None and not isinstance(proof.rand, Fr)):
            raise IPAError("malformed proof: hiding commitment and rand must be given together")


def _scalar(x, what):
    if not isinstance(x, Fr):
        raise IPAError(f"{what} must be an Fr element, got {type(x).__name__}")
    return x
