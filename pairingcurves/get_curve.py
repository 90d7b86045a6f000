"""Find curves of a given order from Hilbert class polynomial roots."""

from __future__ import annotations

import re
import sys
from pathlib import Path
from typing import Sequence

from .eliptic import Curve
from .modulo import PrimeField
from .poly import (
    ONE,
    Poly,
    QuotientRing,
    format_poly,
    poly_euclid,
    poly_gcd,
    poly_normal,
    poly_sub,
)

HILBERT_FILE = "Hilbert_Polynomials.list"
_HEAD = re.compile(r"^\s*(-?\d+)")
_TERM = re.compile(r"[+-]?[^+-]+")


def two_roots(field: PrimeField, hc: Poly) -> tuple[int, int]:
    """Return both roots of a degree two polynomial."""
    if hc.degree() != 2:
        raise ValueError("polynomial must have degree 2")
    hc = poly_normal(field, hc)
    c0, c1 = hc.coefs[0], hc.coefs[1]
    disc = field.sub(field.mul(c1, c1), field.mul(4, c0))
    e = field.sqrt(disc)
    minus_b = field.neg(c1)
    return field.div(field.add(minus_b, e), 2), field.div(field.sub(minus_b, e), 2)


def _parse_poly(text: str, field: PrimeField) -> Poly:
    compact = "".join(text.split())
    terms = _TERM.findall(compact)
    if not terms or "".join(terms) != compact:
        raise ValueError(f"cannot read polynomial {text!r}")
    coefs: dict[int, int] = {}
    for term in terms:
        sign = -1 if term.startswith("-") else 1
        body = term.lstrip("+-")
        if "x" in body:
            head, _, power = body.partition("x")
            head = head.rstrip("*")
            coef = int(head) if head else 1
            if power:
                if not power.startswith("^"):
                    raise ValueError(f"cannot read term {term!r}")
                exponent = int(power[1:])
            else:
                exponent = 1
        else:
            coef, exponent = int(body), 0
        coefs[exponent] = coefs.get(exponent, 0) + sign * coef
    degree = max(coefs)
    p = field.modulus
    return Poly(tuple(coefs.get(i, 0) % p for i in range(degree + 1)))


def parse_hilbert(text: str, discriminant: int, field: PrimeField) -> Poly:
    """Find the polynomial for a discriminant in a sorted list, reduced mod p."""
    wanted = abs(discriminant)
    for line in text.splitlines():
        head = _HEAD.match(line)
        if not head:
            continue
        value = -int(head.group(1))
        if value == wanted:
            rest = line[head.end():]
            start = rest.find("x")
            if start < 0:
                raise ValueError(f"no polynomial for discriminant {wanted}")
            return _parse_poly(rest[start:], field)
        if value > wanted:
            break
    raise ValueError(f"invalid discriminant {wanted}")


def _split(field: PrimeField, a: Poly) -> Poly:
    ring = QuotientRing(field, a)
    while True:
        shifted = Poly((field.random(), 1))
        h = poly_sub(field, ring.half_power(shifted), ONE)
        b = poly_gcd(field, h, a)
        if 0 < b.degree() < a.degree():
            return poly_normal(field, b)


def find_roots(field: PrimeField, hc: Poly) -> list[int]:
    """Return the distinct roots of hc in the prime field."""
    hc = poly_normal(field, hc)
    degree = hc.degree()
    if degree < 1:
        raise ValueError("constant polynomial has no roots to find")
    if degree == 1:
        return [field.neg(hc.coefs[0])]
    if degree == 2:
        return list(two_roots(field, hc))
    ring = QuotientRing(field, hc)
    x = Poly.monomial(1)
    a = poly_gcd(field, poly_sub(field, ring.frobenius(x), x), hc)
    if a.degree() == 0:
        raise ValueError("no roots found for this combination")
    roots: list[int] = []
    stack = [poly_normal(field, a)]
    while stack:
        a = stack.pop()
        if a.degree() == 1:
            roots.append(field.neg(field.div(a.coefs[0], a.coefs[1])))
        elif a.degree() == 2:
            j1, j2 = two_roots(field, a)
            roots.extend((j2, j1))
        else:
            b = _split(field, a)
            stack.append(b)
            stack.append(poly_euclid(field, a, b)[0])
    return roots


def curves_from_roots(field: PrimeField, roots: Sequence[int]) -> list[Curve]:
    """Curve with j-invariant j for each root: c = j/(1728 - j), a4 = 3c, a6 = 2c."""
    curves = []
    for j in roots:
        c = field.div(j, field.sub(1728, j))
        curves.append(Curve(field, field.mul(c, 3), field.mul(c, 2)))
    return curves


def _fits(curve: Curve, order: int) -> bool:
    return curve.multiply(curve.random_point(), order).is_infinity()


def _twist(field: PrimeField, curve: Curve) -> Curve:
    c = field.random()
    while field.legendre(c) >= 0:
        c = field.random()
    c2 = field.mul(c, c)
    return Curve(field, field.mul(curve.a4, c2), field.mul(curve.a6, field.mul(c2, c)))


def select_curve(
    field: PrimeField, curves: Sequence[Curve], order: int
) -> tuple[int | None, Curve]:
    """Return (index, curve) of the first curve with the order, or (None, twist of the first)."""
    if not curves:
        raise ValueError("no curves to choose from")
    for index, curve in enumerate(curves):
        if _fits(curve, order):
            return index, curve
    twist = _twist(field, curves[0])
    if _fits(twist, order):
        return None, twist
    raise ValueError("no curve has the requested order")


def main(argv: list[str] | None = None) -> int:
    """get_curve <discriminant> <prime> <t> [hilbert list file]"""
    args = sys.argv[1:] if argv is None else argv
    if len(args) < 3:
        print("Use: get_curve <discriminant> <prime> <t>")
        print("   values from output of pairing_sweep_alpha")
        return 1
    path = Path(args[3]) if len(args) > 3 else Path(HILBERT_FILE)
    try:
        text = path.read_text()
    except OSError:
        print(f"can't find file {path}")
        return 2
    try:
        discriminant = int(args[0])
    except ValueError:
        print(f"invalid discriminant {args[0]}")
        return 3
    try:
        prime = int(args[1])
        field = PrimeField(prime)
    except ValueError:
        print("invalid prime string")
        return 4
    try:
        t = int(args[2])
    except ValueError:
        print("invalid t string")
        return 5
    try:
        hc = parse_hilbert(text, discriminant, field)
    except ValueError as exc:
        print(exc)
        return 3
    try:
        roots = find_roots(field, hc)
    except ValueError:
        print("no roots found for this combination:")
        print(format_poly(field, hc))
        print(f"prime: {prime}")
        return 6
    for i, root in enumerate(roots):
        print(f"{i}:  {root}")
    try:
        curves = curves_from_roots(field, roots)
    except ZeroDivisionError:
        print("root 1728 gives no curve of this form")
        return 7
    for i, curve in enumerate(curves):
        print(f"{i}: a4= {curve.a4}  a6= {curve.a6}")

    order = prime + 1 - t
    print(f"#E = {order}")
    found = False
    for i, curve in enumerate(curves):
        if _fits(curve, order):
            print(f"curve {i} is right curve!")
            found = True
        else:
            print(f"curve {i} is not right curve.")
    if not found:
        twist = _twist(field, curves[0])
        if _fits(twist, order):
            print(f"a4 = {twist.a4}  a6 = {twist.a6}")
            print("twist is right curve!")
        else:
            print("twist is not right curve.")
    return 0