"""Little-endian byte reader/writer used by every canonical encoding in this repo.

Layout conventions (arkworks-like):

```text
u8 / u64           little-endian fixed width
Fr                  32 bytes little-endian, must be < r
G1                  32 bytes compressed (see `curve.g1_to_bytes`)
Option<T>           u8 tag (0 = None, 1 = Some) followed by T
Vec<T>              u64 length followed by items
bytes               u64 length followed by raw bytes
```
"""

from __future__ import annotations  # `bytes` is also a method name below

from curve import G1_COMPRESSED_SIZE, PointDecodeError, g1_from_bytes, g1_to_bytes  # compressed G1 codec
from field import Fr  # BN254 scalar field


class DecodeError(ValueError):  # Raised on truncated or malformed encodings.
    pass


class ByteReader:  # Minimal arkworks-like little-endian reader.
    def __init__(self, data: bytes):
        self.data = bytes(data)
        self.i = 0

    def remaining(self) -> int:
        return len(self.data) - self.i

    def take(self, n: int) -> bytes:
        n = int(n)
        if n < 0 or self.i + n > len(self.data):
            raise DecodeError("unexpected EOF")
        out = self.data[self.i : self.i + n]
        self.i += n
        return out

    def u8(self) -> int:
        return self.take(1)[0]

    def u64(self) -> int:
        return int.from_bytes(self.take(8), "little")

    def bool(self) -> bool:
        x = self.u8()
        if x == 0:
            return False
        if x == 1:
            return True
        raise DecodeError("invalid bool")

    def fr(self) -> Fr:
        try:
            return Fr.from_bytes(self.take(32))
        except ValueError as exc:
            raise DecodeError(str(exc)) from exc

    def g1(self):
        try:
            return g1_from_bytes(self.take(G1_COMPRESSED_SIZE))
        except PointDecodeError as exc:
            raise DecodeError(str(exc)) from exc

    def bytes(self) -> bytes:
        return self.take(self.u64())

    def option(self, read_item):
        return read_item() if self.bool() else None

    def vec(self, read_item):
        n = self.u64()
        if n > self.remaining():  # every item is at least one byte
            raise DecodeError("vector length exceeds input")
        return [read_item() for _ in range(int(n))]

    def finish(self):  # Reject trailing bytes.
        if self.remaining() != 0:
            raise DecodeError(f"{self.remaining()} trailing bytes")


class ByteWriter:  # Mirror of `ByteReader`.
    def __init__(self):
        self.buf = bytearray()

    def u8(self, x):
        self.buf += int(x).to_bytes(1, "little")
        return self

    def u64(self, x):
        self.buf += int(x).to_bytes(8, "little")
        return self

    def bool(self, x):
        return self.u8(1 if x else 0)

    def fr(self, x):
        self.buf += (x if isinstance(x, Fr) else Fr(x)).to_bytes()
        return self

    def g1(self, P):
        self.buf += g1_to_bytes(P)
        return self

    def bytes(self, data):
        data = bytes(data)
        self.u64(len(data))
        self.buf += data
        return self

    def option(self, x, write_item):
        self.bool(x is not None)
        if x is not None:
            write_item(x)
        return self

    def vec(self, items, write_item):
        items = list(items)
        self.u64(len(items))
        for x in items:
            write_item(x)
        return self

    def getvalue(self) -> bytes:
        return bytes(self.buf)
