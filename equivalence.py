"""Proof that two commitments under different PCS backends hide the same polynomial.

Prover:   Idle -> ChallengeDerived -> Opened -> ProofEmitted
Verifier: Idle -> ChallengeRederived -> Checking -> Accepted | Rejected

Both sides seed a `Blake2bTranscript` with `config.TRANSCRIPT_SEED`, absorb the canonical
bytes of commitment 1 then commitment 2 (never the proof), and squeeze `challenge_point`
then `opening_challenge`. The prover opens both commitments at `challenge_point` to the same
evaluation; the verifier accepts iff both backends' checks pass. Two distinct polynomials of
degree <= d agree at an unpredictable point with probability <= d / |Fr|.
"""

from __future__ import annotations  # keep type hints lightweight

import logging  # protocol state transitions
import secrets  # default CSPRNG for backend randomness
from concurrent.futures import ThreadPoolExecutor  # optional parallel backend calls
from functools import partial  # deferred backend calls

import config  # transcript seed, labels, runtime settings
from equivalence_proof import EquivalenceProof  # proof container
from errors import BackendCheckError, BackendOpenError, EquivalenceRejected, TranscriptError  # error taxonomy
from pcs import as_labeled  # bare UniPoly -> LabeledPolynomial
from transcript import Blake2bTranscript  # Fiat-Shamir challenges

logger = logging.getLogger(__name__)


def _pair(name, items):  # Exactly one entry per backend, in backend order.
    items = tuple(items)
    if len(items) != 2:
        raise ValueError(f"expected exactly two {name}, got {len(items)}")
    return items


def absorb_commitments(transcript, backends, commitments):  # Commitment 1 then commitment 2, canonical bytes.
    backends, commitments = _pair("backends", backends), _pair("commitments", commitments)
    for backend_id, (backend, commitment) in enumerate(zip(backends, commitments), start=1):
        try:
            data = backend.commitment_to_bytes(commitment)
        except Exception as exc:  # backend codecs are external; any failure is an encoding failure
            raise TranscriptError(f"cannot encode commitment {backend_id} ({backend.name}): {exc}") from exc
        transcript.append_bytes(config.COMMITMENT_LABEL, data)


def derive_challenges(backends, commitments, seed=config.TRANSCRIPT_SEED):
    """Return `(challenge_point, opening_challenge)` for a commitment pair."""
    transcript = Blake2bTranscript.seed(seed)
    absorb_commitments(transcript, backends, commitments)
    challenge_point = transcript.squeeze_field_element()
    opening_challenge = transcript.squeeze_field_element()
    return challenge_point, opening_challenge


class PolyCommitEquivalence:  # Backend-agnostic equivalence prover/verifier for one backend pair.
    def __init__(self, backend1, backend2, *, parallel=None):
        self.backends = (backend1, backend2)
        self.parallel = config.parallel_default() if parallel is None else bool(parallel)

    def derive_challenges(self, commitments):
        return derive_challenges(self.backends, commitments)

    def prove(self, commit_keys, polynomial, commitments, randomnesses, rng=None) -> EquivalenceProof:
        """Open both commitments at the Fiat-Shamir challenge point.

        `commit_keys`, `commitments` and `randomnesses` are (backend1, backend2) pairs produced
        by the backends' own `trim` / `commit`; anything else raises `ValueError`. Raises
        `BackendOpenError` naming the first backend whose `open` failed; no partial proof is returned.
        """
        commit_keys, randomnesses = _pair("commit keys", commit_keys), _pair("randomnesses", randomnesses)
        commitments = _pair("commitments", commitments)
        rng = secrets.SystemRandom() if rng is None else rng
        polynomial = as_labeled(polynomial)
        challenge_point, opening_challenge = self.derive_challenges(commitments)
        logger.debug("prove: challenge derived")
        evaluation = polynomial.evaluate(challenge_point)
        calls = [
            partial(backend.open, ck, polynomial, commitment, challenge_point, opening_challenge, randomness, rng)
            for backend, ck, commitment, randomness in zip(self.backends, commit_keys, commitments, randomnesses)
        ]
        openings = []
        for backend_id, (backend, outcome) in enumerate(zip(self.backends, self._outcomes(calls)), start=1):
            try:
                openings.append(outcome())
            except Exception as exc:  # attribute any backend failure to the backend that raised it
                logger.info("prove: backend %d (%s) open failed: %s", backend_id, backend.name, exc)
                raise BackendOpenError(backend_id, exc, backend.name) from exc
        logger.debug("prove: opened under %s and %s", *(b.name for b in self.backends))
        return EquivalenceProof(evaluation, tuple(openings))

    def verify(self, verifier_keys, commitments, proof: EquivalenceProof, rng=None) -> None:
        """Accept (return None) iff both backends accept `proof.evaluation` at the challenge point.

        `verifier_keys` and `commitments` must be (backend1, backend2) pairs, else `ValueError`.
        Raises `EquivalenceRejected` when a backend's check returns False and
        `BackendCheckError` when a check could not be evaluated; backend 1 is reported first.
        """
        if not isinstance(proof, EquivalenceProof):
            raise TypeError(f"expected EquivalenceProof, got {type(proof).__name__}")
        verifier_keys, commitments = _pair("verifier keys", verifier_keys), _pair("commitments", commitments)
        rng = secrets.SystemRandom() if rng is None else rng
        challenge_point, opening_challenge = self.derive_challenges(commitments)
        logger.debug("verify: challenge rederived")
        calls = [
            partial(backend.check, vk, commitment, challenge_point, proof.evaluation, opening, opening_challenge, rng)
            for backend, vk, commitment, opening in zip(self.backends, verifier_keys, commitments, proof.openings)
        ]
        for backend_id, (backend, outcome) in enumerate(zip(self.backends, self._outcomes(calls)), start=1):
            try:
                ok = outcome()
            except Exception as exc:  # a check that raises could not be evaluated; never a verdict
                raise BackendCheckError(backend_id, exc, backend.name) from exc
            if ok is not True:
                logger.info("verify: backend %d (%s) rejected", backend_id, backend.name)
                raise EquivalenceRejected(backend_id, backend.name)
            logger.debug("verify: backend %d (%s) accepted", backend_id, backend.name)
        logger.debug("verify: accepted")

    def _outcomes(self, calls):  # Yield one thunk per call, in backend order.
        if not self.parallel:
            yield from calls
            return
        with ThreadPoolExecutor(max_workers=len(calls)) as pool:
            futures = [pool.submit(call) for call in calls]
            for future in futures:
                yield future.result


def prove(backends, commit_keys, polynomial, commitments, randomnesses, rng=None, *, parallel=None):
    protocol = PolyCommitEquivalence(*backends, parallel=parallel)
    return protocol.prove(commit_keys, polynomial, commitments, randomnesses, rng)


def verify(backends, verifier_keys, commitments, proof, rng=None, *, parallel=None):
    protocol = PolyCommitEquivalence(*backends, parallel=parallel)
    return protocol.verify(verifier_keys, commitments, proof, rng)
