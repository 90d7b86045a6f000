"""Generate signature system parameters and a file of key pairs."""

from __future__ import annotations

import struct
import sys
from pathlib import Path
from typing import BinaryIO, Sequence

from .eliptic import Curve, format_point
from .modulo import PrimeField
from .pairing import cardinality
from .poly import ExtensionField, Poly, find_irreducible, format_poly
from .poly_eliptic import PolyCurve, PolyPoint, format_poly_point
from .signature import (
    SigSystem,
    keygen,
    read_mpz,
    read_poly_point,
    write_mpz,
    write_poly_point,
)

EMBED_DEGREE = 11
PRIME = 3252011917820513804209601668228184687614933135935522716335534348924920411135269
A4 = 2176336228457045175187176003692720598604044414672361175116793345654679844960925
A6 = 1870980220760335983335580434512960352657871567376133141577832331267457576039896
TORSION = 848222711223348251273816343240321778327803280959919975351835864551
TRACE = 3606666653515050472962077101037353515626
KEY_COUNT = 20
KEY_BYTES = 32
RANDOM_FILE = "random.data"
PARAMETER_FILE = "curve_11_parameters.bin"
KEY_FILE = "key_data_11.skpk"


def read_random_data(text: str) -> bytes:
    """Parse whitespace separated integers, keeping the low byte of each."""
    return bytes(int(token) & 0xFF for token in text.split())


def build_system(degree: int = EMBED_DEGREE) -> SigSystem:
    """Build the base and extension curves with random generators of the torsion group."""
    field = PrimeField(PRIME)
    irrd = find_irreducible(field, degree)
    curve = Curve(field, A4, A6)
    card_e = PRIME + 1 - TRACE
    cobse = card_e // TORSION
    card_ex = cardinality(PRIME, TRACE, degree)
    coxtd = card_ex // TORSION // TORSION
    g1 = curve.multiply(curve.random_point(), cobse)
    ex = PolyCurve(ExtensionField(field, irrd), Poly.constant(A4), Poly.constant(A6))
    g2 = ex.multiply(ex.random_point(), coxtd)
    return SigSystem(PRIME, A4, A6, card_e, TORSION, cobse, g1, irrd, card_ex, coxtd, g2)


def make_keys(
    system: SigSystem, random_bytes: bytes, count: int = KEY_COUNT
) -> list[tuple[int, PolyPoint]]:
    """Make count key pairs from consecutive 32-byte chunks."""
    need = count * KEY_BYTES
    if len(random_bytes) < need:
        raise ValueError(f"need {need} random bytes, have {len(random_bytes)}")
    return [
        keygen(random_bytes[i * KEY_BYTES : (i + 1) * KEY_BYTES], system.g2, system.ex)
        for i in range(count)
    ]


def write_keys(stream: BinaryIO, keys: Sequence[tuple[int, PolyPoint]]) -> None:
    """Write a 4-byte key count, then each private key and public key."""
    stream.write(struct.pack("<i", len(keys)))
    for sk, pk in keys:
        write_mpz(stream, sk)
        write_poly_point(stream, pk)


def read_keys(stream: BinaryIO) -> list[tuple[int, PolyPoint]]:
    """Read key pairs written by write_keys."""
    head = stream.read(4)
    if len(head) != 4:
        raise EOFError("missing key count")
    (count,) = struct.unpack("<i", head)
    if count < 0:
        raise ValueError(f"negative key count {count}")
    keys = []
    for _ in range(count):
        sk = read_mpz(stream)
        keys.append((sk, read_poly_point(stream)))
    return keys


def _describe(system: SigSystem) -> list[str]:
    f = system.field
    return [
        f"prime: {system.prime}",
        f"E.a4: {system.a4}",
        f"E.a6: {system.a6}",
        f"cardE: {system.card_e}",
        f"tor: {system.tor}",
        f"cobse: {system.cobse}",
        f"G1.x: {system.g1.x}",
        f"G1.y: {system.g1.y}",
        "irrd:",
        format_poly(f, system.irrd),
        f"cardEx: {system.card_ex}",
        f"coxtd: {system.coxtd}",
        format_poly_point("G2:\n", system.ext, system.g2),
    ]


def main(argv: list[str] | None = None) -> int:
    """Write the parameter file and the key file into the current directory."""
    _ = sys.argv[1:] if argv is None else argv
    try:
        text = Path(RANDOM_FILE).read_text()
    except OSError:
        print(f"can't find file {RANDOM_FILE}")
        return 1
    data = read_random_data(text)
    if len(data) < KEY_COUNT * KEY_BYTES:
        print(f"need {KEY_COUNT * KEY_BYTES} random bytes in {RANDOM_FILE}")
        return 2
    try:
        system = build_system(EMBED_DEGREE)
    except ValueError:
        print("no irreducible polynomial found...")
        return 3
    print("Found irreducible polynomial:")
    print(format_poly(system.field, system.irrd))
    print(f"base has {system.card_e} points")
    print(f"extension has {system.card_ex} points")
    print(format_point("G1 generator: ", system.g1))
    print(format_poly_point("G2 generator:\n", system.ext, system.g2))

    with open(PARAMETER_FILE, "wb") as out:
        system.write(out)
    keys = make_keys(system, data, KEY_COUNT)
    with open(KEY_FILE, "wb") as out:
        write_keys(out, keys)
    for line in _describe(system):
        print(line)
    return 0