"""Elliptic curves whose coordinates live in an extension field GF(p^k)."""

from __future__ import annotations

from dataclasses import dataclass

from .eliptic import Point
from .poly import (
    ZERO,
    ExtensionField,
    Poly,
    format_poly,
    poly_add,
    poly_euclid,
    poly_sub,
)


@dataclass(frozen=True)
class PolyPoint:
    """Affine point with polynomial coordinates; (0, 0) is the point at infinity."""

    x: Poly
    y: Poly

    def is_infinity(self) -> bool:
        return self.x.is_zero() and self.y.is_zero()

    @staticmethod
    def from_point(point: Point) -> PolyPoint:
        """Lift a base field point into the extension field."""
        return PolyPoint(Poly.constant(point.x), Poly.constant(point.y))


POLY_INFINITY = PolyPoint(ZERO, ZERO)


def _reduce(ext: ExtensionField, a: Poly) -> Poly:
    p = ext.field.modulus
    if a.degree() < ext.degree:
        return Poly(tuple(c % p for c in a.coefs))
    return poly_euclid(ext.field, a, ext.modulus)[1]


def bump(ext: ExtensionField, x: Poly) -> Poly:
    """Step x to the next field element, counting coefficients from the lowest up."""
    p = ext.field.modulus
    x = _reduce(ext, x)
    values = list(x.coefs) + [0] * (ext.degree - len(x.coefs))
    for i in range(ext.degree):
        values[i] = (values[i] + 1) % p
        if values[i]:
            break
    return Poly(tuple(values))


def format_poly_point(label: str, ext: ExtensionField, p: PolyPoint) -> str:
    """Render a polynomial point with a leading label."""
    f = ext.field
    return f"{label}x: {format_poly(f, p.x)}\ny: {format_poly(f, p.y)}"


@dataclass(frozen=True)
class PolyCurve:
    """y^2 = x^3 + a4*x + a6 over an extension field."""

    ext: ExtensionField
    a4: Poly
    a6: Poly

    def rhs(self, x: Poly) -> Poly:
        """Return x^3 + a4*x + a6."""
        e = self.ext
        f = e.field
        cube = e.mul(e.mul(x, x), x)
        return poly_add(f, poly_add(f, cube, e.mul(self.a4, x)), self.a6)

    def embed(self, x: Poly) -> tuple[PolyPoint, PolyPoint]:
        """Step x up until it lies on the curve; return both points, smaller leading y first."""
        e = self.ext
        x = _reduce(e, x)
        while True:
            value = self.rhs(x)
            if e.is_square(value):
                break
            x = bump(e, x)
        y = e.sqrt(value)
        other = poly_sub(e.field, ZERO, y)
        if other.leading < y.leading:
            y, other = other, y
        return PolyPoint(x, y), PolyPoint(x, other)

    def add(self, p: PolyPoint, q: PolyPoint) -> PolyPoint:
        """Return p + q using one formula for addition and doubling."""
        if p.is_infinity():
            return q
        if q.is_infinity():
            return p
        e = self.ext
        f = e.field
        top = poly_add(
            f,
            poly_add(
                f, poly_add(f, e.mul(p.x, p.x), e.mul(p.x, q.x)), e.mul(q.x, q.x)
            ),
            self.a4,
        )
        bottom = poly_add(f, p.y, q.y)
        if bottom.is_zero():
            bottom = poly_sub(f, q.x, p.x)
            if bottom.is_zero():
                return POLY_INFINITY
            top = poly_sub(f, q.y, p.y)
        slope = e.div(top, bottom)
        x3 = poly_sub(f, e.mul(slope, slope), poly_add(f, p.x, q.x))
        y3 = poly_sub(f, e.mul(poly_sub(f, p.x, x3), slope), p.y)
        return PolyPoint(x3, y3)

    def multiply(self, p: PolyPoint, k: int) -> PolyPoint:
        """Return k * p by double and add."""
        if k < 0:
            raise ValueError("scalar must not be negative")
        if k == 0:
            return POLY_INFINITY
        result = p
        for bit in bin(k)[3:]:
            result = self.add(result, result)
            if bit == "1":
                result = self.add(result, p)
        return result

    def random_point(self) -> PolyPoint:
        """Return a random point on the curve."""
        r = self.ext.random()
        first, second = self.embed(r)
        return first if r.coefs[0] & 1 else second

    def negate(self, p: PolyPoint) -> PolyPoint:
        """Return -p."""
        if p.is_infinity():
            return p
        return PolyPoint(p.x, poly_sub(self.ext.field, ZERO, p.y))