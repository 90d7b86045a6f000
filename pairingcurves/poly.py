"""Polynomials over a prime field, quotient rings and extension fields."""

from __future__ import annotations

from dataclasses import dataclass
from math import gcd
from typing import Iterable

from .modulo import PrimeField

MAX_DEGREE = 32


@dataclass(frozen=True)
class Poly:
    """Polynomial with coefficients stored lowest degree first, trailing zeros removed."""

    coefs: tuple[int, ...]

    def __post_init__(self) -> None:
        values = [int(c) for c in self.coefs]
        while len(values) > 1 and values[-1] == 0:
            values.pop()
        object.__setattr__(self, "coefs", tuple(values) if values else (0,))

    def degree(self) -> int:
        return len(self.coefs) - 1

    def is_zero(self) -> bool:
        return self.coefs == (0,)

    @property
    def leading(self) -> int:
        return self.coefs[-1]

    @staticmethod
    def constant(value: int) -> Poly:
        return Poly((value,))

    @staticmethod
    def monomial(degree: int) -> Poly:
        """Return x**degree."""
        if degree < 0:
            raise ValueError("degree must not be negative")
        return Poly((0,) * degree + (1,))


ZERO = Poly.constant(0)
ONE = Poly.constant(1)


def _scale(field: PrimeField, a: Poly, c: int) -> Poly:
    p = field.modulus
    return Poly(tuple(v * c % p for v in a.coefs))


def _product(field: PrimeField, a: Poly, b: Poly) -> Poly:
    p = field.modulus
    out = [0] * (len(a.coefs) + len(b.coefs) - 1)
    for i, ac in enumerate(a.coefs):
        if ac:
            for j, bc in enumerate(b.coefs):
                out[i + j] = (out[i + j] + ac * bc) % p
    return Poly(tuple(out))


def _combine(field: PrimeField, a: Poly, b: Poly, sign: int) -> Poly:
    p = field.modulus
    n = max(len(a.coefs), len(b.coefs))
    left = a.coefs + (0,) * (n - len(a.coefs))
    right = b.coefs + (0,) * (n - len(b.coefs))
    return Poly(tuple((x + sign * y) % p for x, y in zip(left, right)))


def poly_add(field: PrimeField, a: Poly, b: Poly) -> Poly:
    """Return a + b."""
    return _combine(field, a, b, 1)


def poly_sub(field: PrimeField, a: Poly, b: Poly) -> Poly:
    """Return a - b."""
    return _combine(field, a, b, -1)


def poly_normal(field: PrimeField, a: Poly) -> Poly:
    """Return a scaled to be monic; the zero polynomial is returned unchanged."""
    if a.is_zero() or a.leading % field.modulus == 1:
        return a
    return _scale(field, a, field.inv(a.leading))


def poly_euclid(field: PrimeField, a: Poly, b: Poly) -> tuple[Poly, Poly]:
    """Return (q, r) with a = q*b + r and deg r < deg b."""
    if b.is_zero():
        raise ZeroDivisionError("polynomial division by zero")
    p = field.modulus
    n = b.degree()
    r = [c % p for c in a.coefs]
    if a.degree() < n:
        return ZERO, Poly(tuple(r))
    inv = field.inv(b.leading)
    q = [0] * (len(r) - n)
    for i in range(len(r) - 1, n - 1, -1):
        c = r[i] * inv % p
        if not c:
            continue
        q[i - n] = c
        for j, bc in enumerate(b.coefs):
            r[i - n + j] = (r[i - n + j] - c * bc) % p
    return Poly(tuple(q)), Poly(tuple(r[:n]) if n else (0,))


def poly_gcd(field: PrimeField, a: Poly, b: Poly) -> Poly:
    """Return a greatest common divisor of a and b (not made monic)."""
    if a.is_zero():
        return b
    if b.is_zero():
        return a
    aw, bw = (a, b) if a.degree() >= b.degree() else (b, a)
    while bw.degree() > 0:
        _, r = poly_euclid(field, aw, bw)
        aw, bw = bw, r
    return aw if bw.is_zero() else bw


def poly_pseudo_div(field: PrimeField, a: Poly, b: Poly) -> tuple[Poly, Poly]:
    """Return (Q, R) with d**(deg a - deg b + 1) * a = b*Q + R, d the leading coefficient of b."""
    if b.is_zero():
        raise ZeroDivisionError("polynomial division by zero")
    n = b.degree()
    d = b.leading % field.modulus
    e = a.degree() - n + 1
    q, r = ZERO, a
    while not r.is_zero() and r.degree() >= n:
        s = _scale(field, Poly.monomial(r.degree() - n), r.leading)
        q = poly_add(field, _scale(field, q, d), s)
        r = poly_sub(field, _scale(field, r, d), _product(field, s, b))
        e -= 1
    if e >= 1:
        factor = field.power(d, e)
        q = _scale(field, q, factor)
        r = _scale(field, r, factor)
    return q, r


def poly_content(a: Poly) -> int:
    """Return the gcd of the coefficients."""
    result = 0
    for c in reversed(a.coefs):
        result = gcd(result, c)
        if result == 1:
            break
    return result


def poly_resultant(field: PrimeField, a: Poly, b: Poly) -> int:
    """Return the resultant of a and b modulo the field prime."""
    p = field.modulus
    if a.is_zero() or b.is_zero():
        return 0
    ca, cb = poly_content(a), poly_content(b)
    ta = tb = 1
    if ca != 1:
        ta = field.power(ca, b.degree())
        a = _scale(field, a, field.inv(ca))
    if cb != 1:
        tb = field.power(cb, a.degree())
        b = _scale(field, b, field.inv(cb))
    sign = 1
    if a.degree() < b.degree():
        if a.degree() % 2 and b.degree() % 2:
            sign = -sign
        a, b = b, a
    g = h = 1
    while b.degree() > 0:
        delta = a.degree() - b.degree()
        if a.degree() % 2 and b.degree() % 2:
            sign = -sign
        _, r = poly_pseudo_div(field, a, b)
        a = b
        b = _scale(field, r, field.inv(g * field.power(h, delta) % p))
        g = a.leading
        h = field.power(h, 1 - delta) * field.power(g, delta) % p
    h = field.power(h, 1 - a.degree()) * field.power(b.leading, a.degree()) % p
    return sign * h * ta * tb % p


def find_irreducible(field: PrimeField, n: int) -> Poly:
    """Return the first irreducible x^n + x + j with 2 <= j < p (Ben-Or test)."""
    if n < 1 or n > MAX_DEGREE:
        raise ValueError(f"degree must be between 1 and {MAX_DEGREE}")
    x = Poly.monomial(1)
    for j in range(2, field.modulus):
        coefs = [0] * (n + 1)
        coefs[n] = 1
        coefs[1] = 1
        coefs[0] = j
        f = Poly(tuple(coefs))
        ring = QuotientRing(field, f)
        xp = x
        for _ in range(n // 2):
            xp = ring.frobenius(xp)
            if poly_gcd(field, poly_sub(field, xp, x), f).degree() > 0:
                break
        else:
            return f
    raise ValueError(f"no irreducible trinomial of degree {n} found")


def format_poly(field: PrimeField, a: Poly) -> str:
    """Render a polynomial as Mod(c, p)*x^i terms."""
    p = field.modulus
    terms = [
        f"Mod({c}, {p})*x^{i} + "
        for i, c in reversed(list(enumerate(a.coefs)))
        if i > 0 and c
    ]
    return "".join(terms) + f"Mod({a.coefs[0]}, {p})"


@dataclass(frozen=True)
class QuotientRing:
    """Polynomials modulo a fixed polynomial of degree at least one."""

    field: PrimeField
    modulus: Poly

    def __post_init__(self) -> None:
        if self.modulus.degree() < 1:
            raise ValueError("modulus polynomial must have degree at least 1")
        object.__setattr__(self, "modulus", poly_normal(self.field, self.modulus))

    @property
    def degree(self) -> int:
        return self.modulus.degree()

    def _reduce(self, a: Poly) -> Poly:
        p = self.field.modulus
        n = self.degree
        m = self.modulus.coefs
        values = [c % p for c in a.coefs]
        for i in range(len(values) - 1, n - 1, -1):
            c = values[i]
            if c:
                for j in range(n):
                    values[i - n + j] = (values[i - n + j] - c * m[j]) % p
                values[i] = 0
        return Poly(tuple(values[:n]))

    def mul(self, a: Poly, b: Poly) -> Poly:
        return self._reduce(_product(self.field, a, b))

    def square_multiply(self, x: Poly, a: Poly, flag: bool) -> Poly:
        """Return x^2, or a*x^2 when flag is set."""
        square = self.mul(x, x)
        return self.mul(square, a) if flag else square

    def power(self, g: Poly, k: int) -> Poly:
        """Return g**k."""
        if k < 0:
            raise ValueError("exponent must not be negative")
        if k == 0:
            return ONE
        result = self._reduce(g)
        for bit in bin(k)[3:]:
            result = self.square_multiply(result, g, bit == "1")
        return result

    def frobenius(self, x: Poly) -> Poly:
        """Return x**p for the field prime p."""
        return self.power(x, self.field.modulus)

    def half_power(self, g: Poly) -> Poly:
        """Return g**((p - 1) / 2)."""
        return self.power(g, (self.field.modulus - 1) // 2)


@dataclass(frozen=True)
class ExtensionField(QuotientRing):
    """GF(p^k) as polynomials modulo an irreducible polynomial."""

    @property
    def order(self) -> int:
        return self.field.modulus ** self.degree

    def is_square(self, x: Poly) -> bool:
        """True if x is a nonzero square; uses the norm Res(f, x)."""
        x = self._reduce(x)
        if x.is_zero():
            return False
        return self.field.legendre(poly_resultant(self.field, self.modulus, x)) == 1

    def sqrt(self, a: Poly) -> Poly:
        """Return a square root of a; raise ValueError for a non-square."""
        a = self._reduce(a)
        if a.is_zero():
            return a
        if not self.is_square(a):
            raise ValueError("not a quadratic residue")
        order = self.order
        if order % 4 == 3:
            return self.power(a, (order + 1) // 4)
        q, r = order - 1, 0
        while q % 2 == 0:
            q //= 2
            r += 1
        z = self.random()
        while self.is_square(z):
            z = self.random()
        y = self.power(z, q)
        b = self.power(a, q)
        x = self.power(a, (q + 1) // 2)
        while b != ONE:
            m, t = 0, b
            while t != ONE:
                m += 1
                if m >= r:
                    raise ValueError("square root failed")
                t = self.mul(t, t)
            t = self.power(y, 1 << (r - m - 1))
            y = self.mul(t, t)
            r = m
            x = self.mul(x, t)
            b = self.mul(b, y)
        return x

    def invert(self, b: Poly) -> Poly:
        """Return 1 / b; raise ZeroDivisionError for zero."""
        b = self._reduce(b)
        if b.is_zero():
            raise ZeroDivisionError("inverse of zero polynomial")
        r0, r1 = self.modulus, b
        s0, s1 = ZERO, ONE
        while not r1.is_zero():
            q, r = poly_euclid(self.field, r0, r1)
            r0, r1 = r1, r
            s0, s1 = s1, poly_sub(self.field, s0, self.mul(q, s1))
        if r0.degree() > 0:
            raise ZeroDivisionError("polynomial is not invertible")
        return self._reduce(_scale(self.field, s0, self.field.inv(r0.coefs[0])))

    def div(self, a: Poly, b: Poly) -> Poly:
        return self.mul(a, self.invert(b))

    def random(self) -> Poly:
        """Return a random element with every coefficient in 2 .. p-1."""
        return Poly(tuple(self.field.random() for _ in range(self.degree)))


def from_coefficients(values: Iterable[int]) -> Poly:
    """Build a polynomial from coefficients listed lowest degree first."""
    return Poly(tuple(values))