"""Polynomial commitment scheme capability interface.

The equivalence protocol only ever calls `open`, `check` and the canonical encoding hooks;
`setup`, `trim` and `commit` belong to whoever wires a backend up (tests, demo driver).
Keys, commitments, randomness and opening proofs are opaque to the protocol; each backend
names its concrete types through the class attributes below.
"""

from __future__ import annotations  # keep type hints lightweight

from abc import ABC, abstractmethod  # capability interface
from dataclasses import dataclass  # labeled polynomial container

from polynomials import UniPoly  # dense univariate polynomials


class PCError(Exception):  # Base class for backend errors (malformed input, degree overflow, ...).
    pass


@dataclass(frozen=True)
class LabeledPolynomial:  # Polynomial plus the bounds it is committed under.
    label: str
    polynomial: UniPoly
    degree_bound: int | None = None  # enforced as `degree <= degree_bound` when set
    hiding_bound: int | None = None  # None -> non-hiding commitment

    def evaluate(self, x):
        return self.polynomial.evaluate(x)

    def degree(self) -> int:
        return self.polynomial.degree()

    @property
    def is_hiding(self) -> bool:
        return self.hiding_bound is not None and self.hiding_bound > 0


def as_labeled(polynomial, label="poly") -> LabeledPolynomial:  # Wrap a bare UniPoly.
    if isinstance(polynomial, LabeledPolynomial):
        return polynomial
    if isinstance(polynomial, UniPoly):
        return LabeledPolynomial(label, polynomial)
    raise TypeError(f"expected UniPoly or LabeledPolynomial, got {type(polynomial).__name__}")


class PolynomialCommitment(ABC):  # One backend instance; stateless apart from its configuration.
    name = "pcs"
    UniversalParams = object
    CommitterKey = object
    VerifierKey = object
    Commitment = object
    Randomness = object
    Proof = object

    @abstractmethod
    def setup(self, max_degree, rng):  # -> UniversalParams
        raise NotImplementedError

    @abstractmethod
    def trim(self, pp, supported_degree, supported_hiding_bound=0):  # -> (CommitterKey, VerifierKey)
        raise NotImplementedError

    @abstractmethod
    def commit(self, ck, polynomial, rng):  # -> (Commitment, Randomness)
        raise NotImplementedError

    @abstractmethod
    def open(self, ck, polynomial, commitment, point, opening_challenge, randomness, rng):  # -> Proof
        raise NotImplementedError

    @abstractmethod
    def check(self, vk, commitment, point, value, proof, opening_challenge, rng) -> bool:
        raise NotImplementedError

    @abstractmethod
    def commitment_to_bytes(self, commitment) -> bytes:  # canonical: equal commitments <=> equal bytes
        raise NotImplementedError

    @abstractmethod
    def commitment_from_bytes(self, data):
        raise NotImplementedError

    @abstractmethod
    def proof_to_bytes(self, proof) -> bytes:
        raise NotImplementedError

    @abstractmethod
    def proof_from_bytes(self, data):
        raise NotImplementedError

    def __repr__(self):
        return f"{type(self).__name__}(name={self.name!r})"
