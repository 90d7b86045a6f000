"""Census of point orders on a small curve and its quadratic extension."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Sequence

from .eliptic import Curve
from .modulo import PrimeField
from .pairing import point_order, poly_point_order
from .poly import ZERO, ExtensionField, Poly, find_irreducible, format_poly
from .poly_eliptic import PolyCurve, bump

PRIME = 43
A4 = 23
A6 = 42
EXTENSION_POINTS = 1815
FACTORS = (5, 11, 55, 3, 33, 15, 165)
TORSION = 11


@dataclass
class OrderCensus:
    """Points counted by order, and how many lie outside the torsion subgroup."""

    counts: dict[int, int] = field(default_factory=dict)
    quotient: int = 0

    @property
    def points(self) -> int:
        return sum(self.counts.values())


def base_census(curve: Curve, factors: Sequence[int], torsion: int) -> OrderCensus:
    """Walk x over the base field and classify each pair of points by order."""
    census = OrderCensus({f: 0 for f in factors})
    p = curve.field.modulus
    x = 0
    while x < p - 1:
        first, _ = curve.embed(x)
        if first.x < x:
            break
        _, order = point_order(curve, first, factors)
        census.counts[order] += 2
        if order != torsion:
            census.quotient += 2
        x = first.x + 1
    return census


def extension_census(
    curve: PolyCurve, factors: Sequence[int], torsion: int, count: int
) -> OrderCensus:
    """Walk x over the extension field until count - 1 points are classified."""
    census = OrderCensus({f: 0 for f in factors})
    x: Poly = ZERO
    done = 0
    while done < count - 1:
        first, _ = curve.embed(x)
        _, order = poly_point_order(curve, first, factors)
        census.counts[order] += 2
        if order != torsion:
            census.quotient += 2
        x = bump(curve.ext, first.x)
        done += 2
    return census


def _report(census: OrderCensus) -> None:
    for factor, number in census.counts.items():
        print(f"order {factor} has {number} points")


def main(argv: list[str] | None = None) -> int:
    """Print the order census for the base curve and its quadratic extension."""
    _ = sys.argv[1:] if argv is None else argv
    prime_field = PrimeField(PRIME)
    try:
        irrd = find_irreducible(prime_field, 2)
    except ValueError:
        print("no irreducible polynomial found...")
        return 1
    print("Found irreducible polynomial:")
    print(format_poly(prime_field, irrd))
    ext = ExtensionField(prime_field, irrd)

    base = Curve(prime_field, A4, A6)
    census = base_census(base, FACTORS[:3], TORSION)
    print(f"number of points in base E/nE group: {census.quotient}")
    _report(census)
    print()

    curve = PolyCurve(ext, Poly.constant(A4), Poly.constant(A6))
    census = extension_census(curve, FACTORS, TORSION, EXTENSION_POINTS)
    print(f"number of points on extended E/nE group: {census.quotient}")
    _report(census)
    return 0