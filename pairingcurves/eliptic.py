"""Short Weierstrass elliptic curves y^2 = x^3 + a4*x + a6 over a prime field."""

from __future__ import annotations

from dataclasses import dataclass

from .modulo import PrimeField


@dataclass(frozen=True)
class Point:
    """Affine point; (0, 0) stands for the point at infinity."""

    x: int
    y: int

    def is_infinity(self) -> bool:
        return self.x == 0 and self.y == 0


INFINITY = Point(0, 0)


def format_point(label: str, p: Point) -> str:
    """Render a point with a leading label."""
    return f"{label}({p.x},  {p.y})"


@dataclass(frozen=True)
class Curve:
    """A curve over a prime field, with a6 != 0 so (0, 0) is never on it."""

    field: PrimeField
    a4: int
    a6: int

    def rhs(self, x: int) -> int:
        """Return x^3 + a4*x + a6."""
        f = self.field
        return f.add(f.add(f.mul(f.mul(x, x), x), f.mul(self.a4, x)), self.a6)

    def embed(self, x: int) -> tuple[Point, Point]:
        """Step x up until it lies on the curve; return both points, smaller y first."""
        f = self.field
        x %= f.modulus
        while True:
            value = self.rhs(x)
            if f.legendre(value) > 0:
                break
            x = f.add(x, 1)
        y = f.sqrt(value)
        other = f.neg(y)
        low, high = sorted((y, other))
        return Point(x, low), Point(x, high)

    def add(self, p: Point, q: Point) -> Point:
        """Return p + q using one formula for addition and doubling."""
        if p.is_infinity():
            return q
        if q.is_infinity():
            return p
        f = self.field
        top = f.add(
            f.add(f.add(f.mul(p.x, p.x), f.mul(p.x, q.x)), f.mul(q.x, q.x)), self.a4
        )
        bottom = f.add(p.y, q.y)
        if bottom == 0:
            bottom = f.sub(q.x, p.x)
            if bottom == 0:
                return INFINITY
            top = f.sub(q.y, p.y)
        slope = f.div(top, bottom)
        x3 = f.sub(f.mul(slope, slope), f.add(p.x, q.x))
        y3 = f.sub(f.mul(f.sub(p.x, x3), slope), p.y)
        return Point(x3, y3)

    def multiply(self, p: Point, k: int) -> Point:
        """Return k * p by double and add."""
        if k < 0:
            raise ValueError("scalar must not be negative")
        if k == 0:
            return INFINITY
        result = p
        for bit in bin(k)[3:]:
            result = self.add(result, result)
            if bit == "1":
                result = self.add(result, p)
        return result

    def random_point(self) -> Point:
        """Return a random point on the curve."""
        r = self.field.random()
        first, second = self.embed(r)
        return first if r & 1 else second

    def contains(self, p: Point) -> bool:
        if p.is_infinity():
            return True
        f = self.field
        return f.mul(p.y, p.y) == self.rhs(p.x)