"""Error taxonomy for the commitment-equivalence protocol.

`verify` separates two outcomes callers must not conflate:

- `EquivalenceRejected`: the proof was checked and is invalid (an expected, negative answer).
- `BackendCheckError`: a backend could not evaluate its check at all (malformed input).

Backend failures carry a 1-based `backend_id` (position in the backend pair) and the
backend's `name`; the original exception is kept as `inner` and chained as `__cause__`.
"""


class EquivalenceError(Exception):  # Base class for everything the protocol raises.
    pass


class TranscriptError(EquivalenceError):  # Absorb/serialization failure while building the transcript.
    pass


class ProofDecodeError(EquivalenceError):  # Malformed equivalence-proof bytes.
    pass


class _BackendError(EquivalenceError):
    action = "failed"

    def __init__(self, backend_id, inner, backend_name=None):
        self.backend_id = int(backend_id)
        self.inner = inner
        self.backend_name = backend_name
        who = f"backend {self.backend_id}" + (f" ({backend_name})" if backend_name else "")
        super().__init__(f"{who} {self.action}: {inner}")


class BackendOpenError(_BackendError):  # A backend's `open` raised; no proof is produced.
    action = "open failed"


class BackendCheckError(_BackendError):  # A backend's `check` could not be evaluated.
    action = "check could not be evaluated"


class EquivalenceRejected(EquivalenceError):  # A backend's `check` returned False.
    def __init__(self, backend_id, backend_name=None):
        self.backend_id = int(backend_id)
        self.backend_name = backend_name
        who = f"backend {self.backend_id}" + (f" ({backend_name})" if backend_name else "")
        super().__init__(f"{who} rejected the opening")
