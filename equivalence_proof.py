"""Equivalence proof container + canonical byte encoding.

```text
EquivalenceProof
  evaluation: Fr          // claimed p(challenge_point)
  openings:   (O1, O2)    // backend 1 / backend 2 opening proofs (opaque)
```

Wire layout, fixed field order:

```text
evaluation   32 bytes, Fr little-endian (canonical, < r)
opening1     u64 LE length || backend1.proof_to_bytes(opening1)
opening2     u64 LE length || backend2.proof_to_bytes(opening2)
```

Trailing bytes are rejected. Openings are decoded by the backend that produced them, so
`decode_proof` needs the same backend pair the proof was built with.
"""

from __future__ import annotations

from dataclasses import dataclass  # immutable proof container

from codec import ByteReader, ByteWriter, DecodeError  # canonical encodings
from errors import ProofDecodeError  # decode boundary error
from field import Fr  # BN254 scalar field
from pcs import PCError  # backend decode failures


@dataclass(frozen=True)
class EquivalenceProof:  # Produced once by `prove`, consumed once by `verify`.
    evaluation: Fr
    openings: tuple  # (backend1 proof, backend2 proof)

    def __post_init__(self):
        if not isinstance(self.evaluation, Fr):
            raise TypeError("evaluation must be an Fr element")
        if len(self.openings) != 2:
            raise ValueError("expected exactly two openings")
        object.__setattr__(self, "openings", tuple(self.openings))

    def to_bytes(self, backends) -> bytes:
        return encode_proof(self, backends)

    @classmethod
    def from_bytes(cls, data, backends) -> EquivalenceProof:
        return decode_proof(data, backends)


def encode_proof(proof: EquivalenceProof, backends) -> bytes:
    b1, b2 = backends
    w = ByteWriter().fr(proof.evaluation)
    w.bytes(b1.proof_to_bytes(proof.openings[0]))
    w.bytes(b2.proof_to_bytes(proof.openings[1]))
    return w.getvalue()


def decode_proof(data, backends) -> EquivalenceProof:
    b1, b2 = backends
    try:
        r = ByteReader(data)
        evaluation = r.fr()
        raw1, raw2 = r.bytes(), r.bytes()
        r.finish()
    except DecodeError as exc:
        raise ProofDecodeError(f"bad equivalence proof encoding: {exc}") from exc
    openings = []
    for i, (backend, raw) in enumerate(((b1, raw1), (b2, raw2)), start=1):
        try:
            openings.append(backend.proof_from_bytes(raw))
        except PCError as exc:
            raise ProofDecodeError(f"bad opening {i} ({backend.name}): {exc}") from exc
    return EquivalenceProof(evaluation, tuple(openings))
