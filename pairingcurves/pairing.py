"""Miller's algorithm with Weil and Tate pairings, and point order helpers."""

from __future__ import annotations

from typing import Sequence

from .eliptic import Curve, Point
from .poly import ONE, Poly, poly_add, poly_sub
from .poly_eliptic import PolyCurve, PolyPoint


def group_type(p: PolyPoint) -> int:
    """1: x, y in base field; 2: x extended; 3: y extended; 4: both extended."""
    x_ext = p.x.degree() > 0
    y_ext = p.y.degree() > 0
    if x_ext and y_ext:
        return 4
    if x_ext:
        return 2
    if y_ext:
        return 3
    return 1


def cardinality(p: int, t: int, k: int) -> int:
    """Number of points over GF(p^k) given the trace of Frobenius t over GF(p)."""
    if k < 1:
        raise ValueError("extension degree must be at least 1")
    prev, cur = 2, t
    for _ in range(k - 1):
        prev, cur = cur, t * cur - p * prev
    return p**k + 1 - cur


def line_value(curve: PolyCurve, p: PolyPoint, q: PolyPoint, r: PolyPoint) -> Poly:
    """Miller's h value of the line through p and q, evaluated at r."""
    if p.is_infinity() or q.is_infinity():
        return ONE
    e = curve.ext
    f = e.field
    bottom = poly_add(f, p.y, q.y)
    if bottom.is_zero():
        bottom = poly_sub(f, p.x, q.x)
        if bottom.is_zero():
            return poly_sub(f, r.x, p.x)
        top = poly_sub(f, p.y, q.y)
    else:
        top = poly_add(
            f,
            poly_add(
                f, poly_add(f, e.mul(p.x, p.x), e.mul(p.x, q.x)), e.mul(q.x, q.x)
            ),
            curve.a4,
        )
    slope = e.div(top, bottom)
    num = poly_sub(
        f, poly_sub(f, r.y, p.y), e.mul(poly_sub(f, r.x, p.x), slope)
    )
    den = poly_add(
        f, poly_add(f, poly_sub(f, r.x, e.mul(slope, slope)), p.x), q.x
    )
    return e.div(num, den)


def miller(curve: PolyCurve, p: PolyPoint, r: PolyPoint, m: int) -> Poly:
    """Evaluate Miller's function f_m for p at r."""
    if m < 1:
        raise ValueError("order must be positive")
    e = curve.ext
    value = ONE
    t = p
    for bit in bin(m)[3:]:
        h = line_value(curve, t, t, r)
        value = e.mul(e.mul(value, value), h)
        t = curve.add(t, t)
        if bit == "1":
            h = line_value(curve, t, p, r)
            value = e.mul(value, h)
            t = curve.add(t, p)
    return value


def weil(curve: PolyCurve, p: PolyPoint, q: PolyPoint, s: PolyPoint, m: int) -> Poly:
    """Weil pairing of p and q of order m, using an auxiliary point s."""
    e = curve.ext
    q_plus_s = curve.add(q, s)
    minus_s = curve.negate(s)
    p_minus_s = curve.add(p, minus_s)
    t1 = miller(curve, p, q_plus_s, m)
    t2 = miller(curve, p, s, m)
    t3 = miller(curve, q, p_minus_s, m)
    t4 = miller(curve, q, minus_s, m)
    return e.div(e.div(t1, t2), e.div(t3, t4))


def tate(curve: PolyCurve, p: PolyPoint, q: PolyPoint, s: PolyPoint, m: int) -> Poly:
    """Reduced Tate pairing of p and q with q in the m-torsion, using s."""
    e = curve.ext
    exponent, rest = divmod(e.order - 1, m)
    if rest:
        raise ValueError("order does not divide the field order minus one")
    value = e.div(miller(curve, p, curve.add(q, s), m), miller(curve, p, s, m))
    return e.power(value, exponent)


def point_order(curve: Curve, point: Point, factors: Sequence[int]) -> tuple[int, int]:
    """Return (index, factor) of the first factor that sends point to infinity."""
    for index, factor in enumerate(factors):
        if curve.multiply(point, factor).is_infinity():
            return index, factor
    raise ValueError("missing order in base")


def poly_point_order(
    curve: PolyCurve, point: PolyPoint, factors: Sequence[int]
) -> tuple[int, int]:
    """Return (index, factor) of the first factor that sends point to infinity."""
    for index, factor in enumerate(factors):
        if curve.multiply(point, factor).is_infinity():
            return index, factor
    raise ValueError("missing order in extended")