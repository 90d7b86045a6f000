"""Modular arithmetic over integers and over a fixed prime field."""

from __future__ import annotations

import random
from dataclasses import dataclass, field as dc_field


def mod_add(a: int, b: int, n: int) -> int:
    """Return (a + b) mod n."""
    return (a + b) % n


def mod_sub(a: int, b: int, n: int) -> int:
    """Return (a - b) mod n."""
    return (a - b) % n


def mod_mul(a: int, b: int, n: int) -> int:
    """Return (a * b) mod n."""
    return (a * b) % n


def mod_div(a: int, b: int, n: int) -> int:
    """Return a / b mod n; raise ZeroDivisionError if b has no inverse."""
    try:
        inverse = pow(b, -1, n)
    except ValueError:
        raise ZeroDivisionError("division by zero in mod_div") from None
    return (a * inverse) % n


def mod_neg(a: int, n: int) -> int:
    """Return -a mod n."""
    return (-a) % n


@dataclass(frozen=True)
class PrimeField:
    """Arithmetic modulo an odd prime."""

    modulus: int
    rng: random.Random = dc_field(
        default_factory=random.SystemRandom, compare=False, repr=False
    )

    def __post_init__(self) -> None:
        if self.modulus < 3:
            raise ValueError("modulus must be an odd prime of at least 3")

    def add(self, a: int, b: int) -> int:
        return mod_add(a, b, self.modulus)

    def sub(self, a: int, b: int) -> int:
        return mod_sub(a, b, self.modulus)

    def mul(self, a: int, b: int) -> int:
        return mod_mul(a, b, self.modulus)

    def div(self, a: int, b: int) -> int:
        return mod_div(a, b, self.modulus)

    def inv(self, a: int) -> int:
        """Return 1 / a; raise ZeroDivisionError if a is zero."""
        return mod_div(1, a, self.modulus)

    def neg(self, a: int) -> int:
        return mod_neg(a, self.modulus)

    def random(self) -> int:
        """Return a random element in the range 2 .. modulus - 1."""
        while True:
            value = self.rng.randrange(self.modulus)
            if value > 1:
                return value

    def legendre(self, x: int) -> int:
        """Return the Legendre symbol of x: 0, 1 or -1."""
        p = self.modulus
        value = pow(x % p, (p - 1) // 2, p)
        if value == 0:
            return 0
        return 1 if value == 1 else -1

    def power(self, b: int, i: int) -> int:
        """Return b**i; a negative exponent powers the inverse."""
        if i == 0:
            return 1
        if i < 0:
            return pow(self.inv(b), -i, self.modulus)
        return pow(b, i, self.modulus)

    def sqrt(self, a: int) -> int:
        """Return a square root of a; raise ValueError for a non-residue."""
        p = self.modulus
        a %= p
        if a == 0:
            return 0
        if self.legendre(a) != 1:
            raise ValueError(f"{a} is not a quadratic residue")
        if p % 4 == 3:
            return pow(a, (p + 1) // 4, p)

        q, e = p - 1, 0
        while q % 2 == 0:
            q //= 2
            e += 1

        n = self.random()
        while self.legendre(n) != -1:
            n = self.random()

        y = pow(n, q, p)
        r = e
        x = pow(a, (q - 1) // 2, p)
        b = x * x % p * a % p
        x = x * a % p
        while b != 1:
            m, t1 = 1, b * b % p
            while t1 != 1:
                m += 1
                if m >= r:
                    raise ValueError("square root failed")
                t1 = t1 * t1 % p
            t = pow(y, 1 << (r - m - 1), p)
            y = t * t % p
            r = m
            x = x * t % p
            b = b * y % p
        return x