import hashlib  # blake2b hash primitive

from errors import TranscriptError  # raised on malformed absorb input
from field import Fr  # BN254 scalar field for challenges

WORD = 32  # state / label / challenge block width in bytes


class Blake2bTranscript:  # Fiat-Shamir transcript: state := H(state || round_tag || payload).
    def __init__(self, label=b""):  # Seed transcript state from a domain label (may be empty).
        label_b = _as_bytes(label)
        self.state = hashlib.blake2b(self._label_word(label_b), digest_size=WORD).digest()
        self.n_rounds = 0

    new = classmethod(lambda cls, label=b"": cls(label))  # Constructor alias.

    seed = new  # Capability-style name: `Blake2bTranscript.seed(domain)`.

    @staticmethod
    def _label_word(label_b):  # Encode label as 32-byte right-padded word.
        if len(label_b) > WORD:
            raise TranscriptError("label must be <= 32 bytes")
        return label_b + b"\x00" * (WORD - len(label_b))

    @staticmethod
    def _label_with_len_word(label_b, n):  # Encode 24-byte label + u64(be) length in 32 bytes.
        if len(label_b) > 24:
            raise TranscriptError("label must be <= 24 bytes for length-prefixed methods")
        return label_b + b"\x00" * (24 - len(label_b)) + int(n).to_bytes(8, "big")

    def _round_tag(self):  # Encode the 32-byte round tag (zero28 || be_u32(n_rounds)).
        return b"\x00" * 28 + int(self.n_rounds).to_bytes(4, "big")

    def _absorb(self, payload):  # Update state := H(state || round_tag || payload), increment round.
        h = hashlib.blake2b(digest_size=WORD)
        h.update(self.state)
        h.update(self._round_tag())
        h.update(payload)
        self.state = h.digest()
        self.n_rounds += 1

    def _challenge_block32(self):  # Draw 32 bytes: rand := H(state || round_tag), then state := rand.
        h = hashlib.blake2b(digest_size=WORD)
        h.update(self.state)
        h.update(self._round_tag())
        rand = h.digest()
        self.state = rand
        self.n_rounds += 1
        return rand

    def absorb(self, data):  # Append raw bytes (one absorb).
        self._absorb(_as_bytes(data))

    def append_bytes(self, label, data):  # Append labeled bytes with length prefix (two absorbs).
        data_b = _as_bytes(data)
        self._absorb(self._label_with_len_word(_as_bytes(label), len(data_b)))
        self._absorb(data_b)

    def challenge_bytes(self, n):  # Draw n bytes using ceil(n/32) blocks.
        n = int(n)
        out = bytearray(n)
        remaining = n
        start = 0
        while remaining > WORD:
            out[start : start + WORD] = self._challenge_block32()
            start += WORD
            remaining -= WORD
        full = self._challenge_block32()
        out[start : start + remaining] = full[:remaining]
        return bytes(out)

    def squeeze_field_element(self):  # Draw an Fr from 64 bytes mod r (bias < 2^-250).
        return Fr.from_bytes_mod_order(self.challenge_bytes(2 * WORD))


def _as_bytes(data):
    if isinstance(data, str):
        return data.encode()
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TranscriptError(f"expected bytes, got {type(data).__name__}")
    return bytes(data)
