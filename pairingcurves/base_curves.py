"""System-level base curve parameters and embedding degree reports."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .eliptic import Curve, Point
from .modulo import PrimeField

FIELD_SIZES = (160, 256, 384, 512)
EMBED_LIMIT = 256
_SUFFIX = "_full_sort.csv"

_PRIMES = {
    160: "ac000000000000000000000000000000000000001",
    256: "2b000000000000000000000000000000000000000000000000000000000000001",
    384: "2e00000000000000000000000000000000000000000000000000000000000000"
    "000000000000000000000000000000001",
    512: "e2000000000000000000000000000000000000000000000000000000000000000"
    "0000000000000000000000000000000000000000000000000000000000000001",
}

_CURVES = {
    160: ("ac0000000000000000006543ba11adf8eb6345c77", 1, 1, 0x782E),
    256: ("2b0000000000000000000000000000002e7f521c85bba055a6e2161b956a47f69", 1, 1, 0xA87),
    384: (
        "2e00000000000000000000000000000000000000000000002275cc5f2f7fcc15"
        "352a2c993900a851b3a75365a9ac54733",
        1,
        1,
        0x310,
    ),
    512: (
        "e2000000000000000000000000000000000000000000000000000000000000007"
        "788830d091dc57e3af7d7bbd15386ee9414602d88d1e6489cd056336922bbf4d",
        1,
        1,
        0x41,
    ),
}


@dataclass(frozen=True)
class BaseCurveParameters:
    size: int
    prime: int
    order: int
    cofactor: int
    a4: int
    a6: int
    base: Point


def field_prime(size: int) -> int:
    """Return the field prime for a field size in bits."""
    try:
        return int(_PRIMES[size], 16)
    except KeyError:
        raise ValueError(f"don't have prime for field size {size}") from None


def curve_parameters(size: int) -> tuple[int, int, int, int]:
    """Return (order, cofactor, a4, a6) for a field size."""
    try:
        order, cofactor, a4, a6 = _CURVES[size]
    except KeyError:
        raise ValueError(f"don't have curve for field size {size}") from None
    return int(order, 16), cofactor, a4, a6


def generate_parameters(size: int) -> BaseCurveParameters:
    """Pick a random base point of prime order on the curve for a size."""
    prime = field_prime(size)
    order, cofactor, a4, a6 = curve_parameters(size)
    curve = Curve(PrimeField(prime), a4, a6)
    base = curve.multiply(curve.random_point(), cofactor)
    return BaseCurveParameters(size, prime, order, cofactor, a4, a6, base)


def format_parameters(params: BaseCurveParameters) -> str:
    """Render parameters in the parameter file layout."""
    lines = [
        "prime",
        f"{params.prime:x}",
        "order",
        f"{params.order:x}",
        "cofactor",
        f"{params.cofactor:d}",
        "curve(a4   a6)",
        f"{params.a4:x}",
        f"{params.a6:x}",
        "basepoint(x   y)",
        f"{params.base.x:x}",
        f"{params.base.y:x}",
    ]
    return "\n".join(lines) + "\n"


def write_parameter_files(directory: str | Path = ".") -> list[Path]:
    """Write Curve_<size>_params.dat for each field size; return the paths."""
    directory = Path(directory)
    paths = []
    for size in FIELD_SIZES:
        path = directory / f"Curve_{size}_params.dat"
        path.write_text(format_parameters(generate_parameters(size)))
        paths.append(path)
    return paths


def field_size_from_name(filename: str) -> int:
    """Read the three-digit field size just before '_full_sort.csv'."""
    index = filename.find(_SUFFIX)
    if index < 0:
        raise ValueError("wrong kind of file - must be fully processed")
    digits = filename[index - 3 : index] if index >= 3 else ""
    if len(digits) != 3 or not digits.isdigit():
        raise ValueError(f"no field size in file name {filename}")
    return int(digits)


def embedding_degree(
    prime: int, subgroup: int, cofactor: int, limit: int = EMBED_LIMIT
) -> int | None:
    """Smallest k in 2..limit with (t-1)^k = 1 mod subgroup, or None."""
    t = prime - subgroup * cofactor
    power = t % subgroup
    for k in range(2, limit + 1):
        power = power * t % subgroup
        if power == 1:
            return k
    return None


def embed_report(lines: Iterable[str], prime: int) -> list[str]:
    """Report the embedding degree of each 'a4 a6 r p ...' line."""
    report = []
    for line in lines:
        fields = line.split()
        if not fields:
            continue
        if len(fields) < 4:
            raise ValueError(f"malformed curve line: {line!r}")
        a4, a6, r, p = int(fields[0]), fields[1], int(fields[2]), int(fields[3])
        k = embedding_degree(prime, p, r)
        head = f"{a4} {a6} {r} {p}"
        report.append(f"{head}  {k}" if k is not None else f"{head} > {EMBED_LIMIT}")
    return report


def main(argv: list[str] | None = None) -> int:
    """Write the parameter files into the current directory."""
    for path in write_parameter_files(Path.cwd()):
        print(path)
    return 0


def embed_main(argv: list[str] | None = None) -> int:
    """Write <prefix>_embed.dat for a *_full_sort.csv file."""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print("Use: base_curves_embed <filename>")
        print("     where <filename> is *_full_sort.csv")
        return 1
    name = args[0]
    try:
        text = Path(name).read_text()
    except OSError:
        print(f"can't find file {name}")
        return 2
    try:
        size = field_size_from_name(name)
    except ValueError as err:
        print(err)
        return 3
    try:
        prime = field_prime(size)
    except ValueError as err:
        print(err)
        return 4
    out = name[: name.find(_SUFFIX)] + "_embed.dat"
    report = embed_report(text.splitlines(), prime)
    Path(out).write_text("".join(line + "\n" for line in report))
    return 0