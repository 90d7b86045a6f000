"""Search for pairing friendly curve parameters (Taxonomy constructions 6.2, 6.19, 6.20)."""

from __future__ import annotations

import math
import random
import sys
from dataclasses import dataclass
from math import isqrt
from pathlib import Path
from typing import Iterator

_BASES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47)
_TRIAL_LIMIT = 1 << 20

K_TABLE = (5, 7, 11, 13, 17, 19, 23, 29, 31)
_USES_6_2 = (True, False, False, True, True, False, False, True, False)
ALPHA_TABLE = (7, 11, 15, 19, 23)


@dataclass(frozen=True)
class Candidate:
    """Parameters where both r and q came out prime."""

    k: int
    alpha: int
    x: int
    r: int
    q: int
    t: int

    @property
    def rbits(self) -> int:
        return self.r.bit_length()

    @property
    def qbits(self) -> int:
        return self.q.bit_length()

    @property
    def rho(self) -> float:
        return self.qbits / self.rbits


def is_probable_prime(n: int, rounds: int = 25) -> bool:
    """Miller-Rabin test; exact below a small bound."""
    if n < 2:
        return False
    if n < _TRIAL_LIMIT:
        if n % 2 == 0:
            return n == 2
        return all(n % d for d in range(3, isqrt(n) + 1, 2))
    if n % 2 == 0:
        return False
    d, s = n - 1, 0
    while d % 2 == 0:
        d //= 2
        s += 1
    for i in range(rounds):
        a = _BASES[i] if i < len(_BASES) else random.randrange(2, n - 1)
        y = pow(a, d, n)
        if y in (1, n - 1):
            continue
        for _ in range(s - 1):
            y = y * y % n
            if y == n - 1:
                break
        else:
            return False
    return True


def _z(alpha: int, x: int) -> int:
    return alpha * x * x


def phi4k(k: int, alpha: int, x: int) -> int:
    """Return 1 - z + z^2 - ... + z^(k-1) with z = alpha*x^2."""
    z = _z(alpha, x)
    total, term = 0, 1
    for _ in range(k):
        total += term
        term *= -z
    return total


def checked_phi4k(k: int, alpha: int, x: int) -> int:
    """phi4k for a prime k of at most 37; raise ValueError otherwise."""
    if k > 37:
        raise ValueError("k must be at most 37")
    if not is_probable_prime(k, 5):
        raise ValueError("k must be prime")
    return phi4k(k, alpha, x)


def xstart(lg2r: int) -> tuple[int, int, int]:
    """Return (k, max, alphabase) for a target size of r in bits."""
    if lg2r < 224:
        k, alphabase = (7, 3) if lg2r < 192 else (11, 3)
    elif lg2r < 320:
        k, alphabase = 19, 3
    elif lg2r < 384:
        k, alphabase = 19, 43
    elif lg2r < 448:
        k, alphabase = 23, 67
    else:
        k, alphabase = 31, 3
    w = lg2r / (k - 1.0) / 2.0 - math.log2(alphabase) / 2.0
    return k, int(2.0 ** (w + 0.5)), alphabase


def make_alpha(u: int, alphabase: int) -> int:
    return u * u * alphabase


def qofz(k: int, alpha: int, x: int) -> int | None:
    """Return q from 6.19/6.20 when 4 divides the numerator exactly, else None."""
    z = _z(alpha, x)
    k2 = (k + 1) // 2
    t3 = 4 * z**k2
    total = z ** (k + 1) + (-t3 if k2 & 1 else t3) + z**k + z + 1
    if total % 4:
        return None
    return total // 4


def tofz(k: int, alpha: int, x: int) -> int:
    """Trace of Frobenius for 6.19/6.20."""
    z = _z(alpha, x)
    k1 = (k + 1) // 2
    power = z**k1
    return 1 - power if k1 & 1 else 1 + power


def qofz_20(k: int, alpha: int, x: int) -> int:
    """q from 6.20 and 6.19, floor divided by 4."""
    z = _z(alpha, x)
    return (z ** (k + 1) + z**k + 4 * z ** ((k + 1) // 2) + z + 1) // 4


def qofz_2(k: int, alpha: int, x: int) -> int:
    """q from 6.2 and 6.19, floor divided by 4."""
    z = _z(alpha, x)
    return (z ** (k + 2) + 2 * z ** (k + 1) + z**k + (z - 1) ** 2) // 4


def tofz_20(k: int, alpha: int, x: int) -> int:
    return _z(alpha, x) ** ((k + 1) // 2) + 1


def tofz_2(k: int, alpha: int, x: int) -> int:
    return 1 - _z(alpha, x)


def format_candidate(candidate: Candidate) -> str:
    """Render a candidate in the search output layout."""
    c = candidate
    return (
        f"k= {c.k} alpha = {c.alpha}  x = {c.x}\n"
        f"r = {c.r} numbits: {c.rbits}\n"
        f"q = {c.q}  numbits: {c.qbits}\n"
        f"rho = {c.rho:f}\n"
        f"t = {c.t}\n"
    )


def _generate_rows(lg2r: int) -> Iterator[tuple[int, int, int, list[Candidate]]]:
    k, limit, alphabase = xstart(lg2r)
    for m in range(1, limit):
        jlo = limit // (m + 1)
        jhi = limit // m
        if jlo == jhi:
            jhi += 1
        found = []
        for j in range(jlo, jhi):
            alpha = make_alpha(j, alphabase)
            r = phi4k(k, alpha, m)
            if not is_probable_prime(r, 25):
                continue
            q = qofz(k, alpha, m)
            if q is not None and is_probable_prime(q, 25):
                found.append(Candidate(k, alpha, m, r, q, tofz(k, alpha, m)))
        yield m, jlo, jhi, found


def generate(lg2r: int) -> Iterator[Candidate]:
    """Yield candidates chosen around a target size of r in bits."""
    if lg2r < 2:
        raise ValueError("log2(r) is too small")
    for _, _, _, found in _generate_rows(lg2r):
        yield from found


def _alpha_bases() -> Iterator[int]:
    for a in range(8):
        for base in ALPHA_TABLE:
            yield base + a * 20


def _sweep_alpha(lg2r: int, k: int, alpha: int) -> tuple[list[Candidate], int]:
    six_two = _USES_6_2[K_TABLE.index(k)]
    limit = 2 ** (lg2r // 2 // (k - 1))
    found, primes = [], 0
    for x in range(1, limit, 2):
        r = phi4k(k, alpha, x)
        if r.bit_length() > lg2r:
            break
        if not is_probable_prime(r, 25):
            continue
        primes += 1
        if six_two:
            q, t = qofz_2(k, alpha, x), tofz_2(k, alpha, x)
        else:
            q, t = qofz_20(k, alpha, x), tofz_20(k, alpha, x)
        if is_probable_prime(q, 25):
            found.append(Candidate(k, alpha, x, r, q, t))
    return found, primes


def _check_sweep(lg2r: int, k: int) -> None:
    if lg2r < 3:
        raise ValueError("need more bits to work with")
    if k not in K_TABLE:
        raise ValueError("k must be from list")


def sweep(lg2r: int, k: int) -> tuple[list[Candidate], int]:
    """Sweep alpha values for embedding degree k; return (candidates, count of prime r)."""
    _check_sweep(lg2r, k)
    found: list[Candidate] = []
    primes = 0
    for alpha in _alpha_bases():
        more, count = _sweep_alpha(lg2r, k, alpha)
        found.extend(more)
        primes += count
    return found, primes


def gen_main(argv: list[str] | None = None) -> int:
    """Write pair.<lg2r> with candidates near the requested size."""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print("Use: pairing_gen <log2(r)>")
        print("   where log2(r) is 2 to 512")
        return 1
    lg2r = int(args[0])
    if lg2r < 2:
        print("Come on, that's too small!")
        return 1
    if lg2r > 576:
        print("OK, but security will be questionable.")
    k, limit, alphabase = xstart(lg2r)
    with Path(f"pair.{lg2r:03d}").open("w") as out:
        out.write(f"k= {k} alphabase = {alphabase} max = {limit}\n")
        for m, jlo, jhi, found in _generate_rows(lg2r):
            out.write(f"{m} {jlo} {jhi}\n")
            for candidate in found:
                out.write(format_candidate(candidate))
    return 0


def sweep_main(argv: list[str] | None = None) -> int:
    """Ask for k and write pairings_alpha.<k> with the sweep results."""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print("Use: pairing_sweep_alpha  <log2(r) max range>")
        return 1
    lg2r = int(args[0])
    if lg2r < 3:
        print("need more bits to work with")
        return 2
    text = input("choose embedding degree k from 5, 7, 11, 13, 17, 19, 23, 29, 31: ")
    try:
        k = int(text.strip())
    except ValueError:
        k = 0
    if k not in K_TABLE:
        print("k must be from list.")
        return 1
    primes = 0
    with Path(f"pairings_alpha.{k:02d}").open("w") as out:
        for alpha in _alpha_bases():
            print(f"processing alpha = {alpha}")
            found, count = _sweep_alpha(lg2r, k, alpha)
            primes += count
            for candidate in found:
                out.write(format_candidate(candidate) + "\n")
    print(f"found {primes} r primes")
    return 0