from field import Fr  # BN254 scalar field

def log2_pow2(n):  # Compute log2(n) for n a power of two.
    n = int(n)
    if n <= 0 or (n & (n - 1)) != 0:
        raise ValueError("expected power-of-two n")
    return n.bit_length() - 1

def next_pow2(n):  # Smallest power of two >= n (n >= 1).
    n = int(n)
    if n <= 0:
        raise ValueError("n must be positive")
    return 1 << (n - 1).bit_length()

def powers(x, n):  # [1, x, x^2, ..., x^(n-1)].
    x = x if isinstance(x, Fr) else Fr(x)
    out = [Fr.one()] * int(n)
    for i in range(1, int(n)):
        out[i] = out[i - 1] * x
    return out

def inner_product(a, b):  # sum_i a_i * b_i over Fr.
    out = Fr.zero()
    for x, y in zip(a, b):
        out += x * y
    return out

class UniPoly:  # Dense univariate polynomial over Fr, coefficients in ascending order (c0, c1, ...).
    def __init__(self, coeffs):  # Store coefficients; trailing zeros are dropped.
        cs = [c if isinstance(c, Fr) else Fr(c) for c in coeffs]
        while cs and cs[-1].is_zero():
            cs.pop()
        self.coeffs = cs

    zero = classmethod(lambda cls: cls([]))

    @classmethod
    def random(cls, degree, rng):  # Uniform polynomial of exactly `degree` (nonzero leading coefficient).
        degree = int(degree)
        if degree < 0:
            raise ValueError("degree must be non-negative")
        cs = [Fr.random(rng) for _ in range(degree)]
        lead = Fr.zero()
        while lead.is_zero():
            lead = Fr.random(rng)
        return cls(cs + [lead])

    def degree(self):  # Degree of the polynomial (0 for the zero polynomial).
        return max(0, len(self.coeffs) - 1)

    def is_zero(self): return not self.coeffs

    def evaluate(self, x):  # Evaluate by Horner.
        x = x if isinstance(x, Fr) else Fr(x)
        out = Fr.zero()
        for c in reversed(self.coeffs):
            out = out * x + c
        return out

    def padded_coeffs(self, n):  # Coefficients right-padded with zeros to length n.
        if len(self.coeffs) > n:
            raise ValueError(f"polynomial has {len(self.coeffs)} coefficients, more than {n}")
        return self.coeffs + [Fr.zero()] * (n - len(self.coeffs))

    def __add__(self, other):
        n = max(len(self.coeffs), len(other.coeffs))
        return UniPoly([a + b for a, b in zip(self.padded_coeffs(n), other.padded_coeffs(n))])

    def __sub__(self, other):
        n = max(len(self.coeffs), len(other.coeffs))
        return UniPoly([a - b for a, b in zip(self.padded_coeffs(n), other.padded_coeffs(n))])

    def scale(self, s):  # s * poly.
        s = s if isinstance(s, Fr) else Fr(s)
        return UniPoly([c * s for c in self.coeffs])

    def divide_by_linear(self, z):  # Synthetic division: returns (q, r) with poly = q * (X - z) + r.
        z = z if isinstance(z, Fr) else Fr(z)
        if not self.coeffs:
            return UniPoly.zero(), Fr.zero()
        q = [Fr.zero()] * (len(self.coeffs) - 1)
        acc = Fr.zero()
        for i in range(len(self.coeffs) - 1, 0, -1):
            acc = acc * z + self.coeffs[i]
            q[i - 1] = acc
        rem = acc * z + self.coeffs[0]
        return UniPoly(q), rem

    def opening_witness(self, z):  # (poly(X) - poly(z)) / (X - z), the KZG quotient.
        q, _ = self.divide_by_linear(z)
        return q

    def __eq__(self, other):
        return isinstance(other, UniPoly) and self.coeffs == other.coeffs

    def __repr__(self):
        return f"UniPoly({[int(c) for c in self.coeffs]})"
