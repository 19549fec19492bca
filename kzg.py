"""Hiding KZG polynomial commitments over BN254 (Sonic-style, single polynomial).

```text
setup     beta <- Fr, gamma_g <- G1
          powers_of_g       = [beta^i * G1]        i = 0..D
          powers_of_gamma_g = [beta^i * gamma_g]   i = 0..D+1
          beta_h            = beta * G2
commit    C = p(beta) * G1 + r(beta) * gamma_g     (r = random blinding poly, degree = hiding bound)
open      W = w(beta) * G1 + w_r(beta) * gamma_g   w = (p - p(z)) / (X - z), w_r likewise for r
          random_v = r(z)
check     e(C - v*G1 - random_v*gamma_g + z*W, h) == e(W, beta_h)
```

`opening_challenge` is the batching scalar used to fold several polynomials into one
(`sum_i xi^i p_i`); with a single polynomial the fold coefficient is xi^0 = 1.
"""

from __future__ import annotations  # keep type hints lightweight

import logging  # backend diagnostics
from dataclasses import dataclass  # key/commitment/proof containers

from codec import ByteReader, ByteWriter, DecodeError  # canonical encodings
from curve import G1, G2, add, is_on_g1, msm, mul, neg, pairing_product_is_one, sub  # BN254 group ops + pairing
from field import Fr  # BN254 scalar field
from pcs import LabeledPolynomial, PCError, PolynomialCommitment, as_labeled  # capability interface
from polynomials import UniPoly  # dense univariate polynomials

logger = logging.getLogger(__name__)


class KZGError(PCError):  # Malformed or out-of-range input to the KZG backend.
    pass


@dataclass(frozen=True)
class KZGUniversalParams:
    powers_of_g: tuple
    powers_of_gamma_g: tuple
    h: tuple
    beta_h: tuple

    @property
    def max_degree(self) -> int:
        return len(self.powers_of_g) - 1


@dataclass(frozen=True)
class KZGCommitterKey:
    powers_of_g: tuple
    powers_of_gamma_g: tuple
    max_degree: int

    @property
    def supported_degree(self) -> int:
        return len(self.powers_of_g) - 1

    @property
    def supported_hiding_bound(self) -> int:
        return len(self.powers_of_gamma_g) - 2


@dataclass(frozen=True)
class KZGVerifierKey:
    g: tuple
    gamma_g: tuple
    h: tuple
    beta_h: tuple
    max_degree: int
    supported_degree: int


@dataclass(frozen=True)
class KZGCommitment:
    point: tuple | None


@dataclass(frozen=True)
class KZGRandomness:
    blinding_polynomial: UniPoly

    @classmethod
    def empty(cls):
        return cls(UniPoly.zero())

    @property
    def is_hiding(self) -> bool:
        return not self.blinding_polynomial.is_zero()


@dataclass(frozen=True)
class KZGProof:
    w: tuple | None
    random_v: Fr | None = None


class SonicKZG(PolynomialCommitment):
    name = "kzg"
    UniversalParams = KZGUniversalParams
    CommitterKey = KZGCommitterKey
    VerifierKey = KZGVerifierKey
    Commitment = KZGCommitment
    Randomness = KZGRandomness
    Proof = KZGProof

    def setup(self, max_degree, rng):
        max_degree = int(max_degree)
        if max_degree < 1:
            raise KZGError("max_degree must be >= 1")
        beta = _nonzero(rng)
        gamma_g = mul(G1, int(_nonzero(rng)))
        powers_of_g, powers_of_gamma_g = [], []
        g, gg = G1, gamma_g
        for i in range(max_degree + 2):
            if i <= max_degree:
                powers_of_g.append(g)
                g = mul(g, int(beta))
            powers_of_gamma_g.append(gg)
            gg = mul(gg, int(beta))
        logger.debug("kzg setup: max_degree=%d", max_degree)
        return KZGUniversalParams(tuple(powers_of_g), tuple(powers_of_gamma_g), G2, mul(G2, int(beta)))

    def trim(self, pp, supported_degree, supported_hiding_bound=0):
        supported_degree, supported_hiding_bound = int(supported_degree), int(supported_hiding_bound)
        if supported_degree < 1 or supported_degree > pp.max_degree:
            raise KZGError(f"supported degree {supported_degree} outside [1, {pp.max_degree}]")
        if supported_hiding_bound < 0 or supported_hiding_bound + 2 > len(pp.powers_of_gamma_g):
            raise KZGError(f"hiding bound {supported_hiding_bound} unsupported by parameters")
        ck = KZGCommitterKey(
            pp.powers_of_g[: supported_degree + 1],
            pp.powers_of_gamma_g[: supported_hiding_bound + 2],
            pp.max_degree,
        )
        vk = KZGVerifierKey(
            pp.powers_of_g[0], pp.powers_of_gamma_g[0], pp.h, pp.beta_h, pp.max_degree, supported_degree
        )
        return ck, vk

    def commit(self, ck, polynomial, rng):
        lp = as_labeled(polynomial)
        self._check_degree(ck, lp)
        rand = KZGRandomness.empty()
        if lp.is_hiding:
            if lp.hiding_bound > ck.supported_hiding_bound:
                raise KZGError(f"hiding bound {lp.hiding_bound} exceeds key's {ck.supported_hiding_bound}")
            rand = KZGRandomness(UniPoly.random(lp.hiding_bound, rng))
        point = add(
            msm(ck.powers_of_g, lp.polynomial.coeffs),
            msm(ck.powers_of_gamma_g, rand.blinding_polynomial.coeffs),
        )
        logger.debug("kzg commit %r: degree=%d hiding=%s", lp.label, lp.degree(), rand.is_hiding)
        return KZGCommitment(point), rand

    def open(self, ck, polynomial, commitment, point, opening_challenge, randomness, rng):
        lp = as_labeled(polynomial)
        self._check_degree(ck, lp)
        if not isinstance(commitment, KZGCommitment):
            raise KZGError(f"expected KZGCommitment, got {type(commitment).__name__}")
        if not isinstance(randomness, KZGRandomness):
            raise KZGError(f"expected KZGRandomness, got {type(randomness).__name__}")
        z = _scalar(point, "point")
        _scalar(opening_challenge, "opening_challenge")
        if lp.is_hiding and not randomness.is_hiding:
            raise KZGError(f"missing blinding randomness for hiding polynomial {lp.label!r}")
        r = randomness.blinding_polynomial
        if len(r.coeffs) > len(ck.powers_of_gamma_g):
            raise KZGError("blinding polynomial exceeds key's hiding bound")
        w = msm(ck.powers_of_g, lp.polynomial.opening_witness(z).coeffs)
        random_v = None
        if randomness.is_hiding:
            w = add(w, msm(ck.powers_of_gamma_g, r.opening_witness(z).coeffs))
            random_v = r.evaluate(z)
        return KZGProof(w, random_v)

    def check(self, vk, commitment, point, value, proof, opening_challenge, rng) -> bool:
        if not isinstance(commitment, KZGCommitment) or not is_on_g1(commitment.point):
            raise KZGError("malformed commitment")
        if not isinstance(proof, KZGProof) or not is_on_g1(proof.w):
            raise KZGError("malformed opening proof")
        if proof.random_v is not None and not isinstance(proof.random_v, Fr):
            raise KZGError("malformed opening proof: random_v")
        z, v = _scalar(point, "point"), _scalar(value, "value")
        _scalar(opening_challenge, "opening_challenge")
        lhs = sub(commitment.point, mul(vk.g, int(v)))
        if proof.random_v is not None:
            lhs = sub(lhs, mul(vk.gamma_g, int(proof.random_v)))
        lhs = add(lhs, mul(proof.w, int(z)))
        ok = pairing_product_is_one([(vk.h, lhs), (neg(vk.beta_h), proof.w)])
        logger.debug("kzg check: %s", "accept" if ok else "reject")
        return ok

    def commitment_to_bytes(self, commitment) -> bytes:
        if not isinstance(commitment, KZGCommitment):
            raise KZGError(f"expected KZGCommitment, got {type(commitment).__name__}")
        return ByteWriter().g1(commitment.point).getvalue()

    def commitment_from_bytes(self, data):
        try:
            r = ByteReader(data)
            out = KZGCommitment(r.g1())
            r.finish()
        except DecodeError as exc:
            raise KZGError(f"bad commitment encoding: {exc}") from exc
        return out

    def proof_to_bytes(self, proof) -> bytes:
        if not isinstance(proof, KZGProof):
            raise KZGError(f"expected KZGProof, got {type(proof).__name__}")
        w = ByteWriter().g1(proof.w)
        return w.option(proof.random_v, w.fr).getvalue()

    def proof_from_bytes(self, data):
        try:
            r = ByteReader(data)
            out = KZGProof(r.g1(), r.option(r.fr))
            r.finish()
        except DecodeError as exc:
            raise KZGError(f"bad proof encoding: {exc}") from exc
        return out

    @staticmethod
    def _check_degree(ck, lp: LabeledPolynomial):
        if lp.degree() > ck.supported_degree:
            raise KZGError(f"polynomial {lp.label!r} has degree {lp.degree()} > supported {ck.supported_degree}")
        if lp.degree_bound is not None and lp.degree() > lp.degree_bound:
            raise KZGError(f"polynomial {lp.label!r} violates its degree bound {lp.degree_bound}")


def _nonzero(rng):
    x = Fr.random(rng)
    while x.is_zero():
        x = Fr.random(rng)
    return x


def _scalar(x, what):
    if not isinstance(x, Fr):
        raise KZGError(f"{what} must be an Fr element, got {type(x).__name__}")
    return x
