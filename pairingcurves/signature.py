"""Compact multi-signatures and subgroup signatures built on pairings."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from functools import cached_property
from typing import BinaryIO, Sequence

from Crypto.Hash import KangarooTwelve

from .eliptic import INFINITY, Curve, Point
from .modulo import PrimeField, mod_mul
from .pairing import weil
from .poly import ExtensionField, Poly
from .poly_eliptic import POLY_INFINITY, PolyCurve, PolyPoint

_TAG_H0 = b"signat H_0 parng"
_TAG_H1 = b"Hash_1 pring&sig"
_TAG_H2 = b"signat H_2 parng"
_PAIRING_ATTEMPTS = 64


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise EOFError("unexpected end of data")
    return data


def write_mpz(stream: BinaryIO, value: int) -> None:
    """Write an integer as a 4-byte big-endian signed length and big-endian magnitude."""
    size = (abs(value).bit_length() + 7) // 8
    stream.write((-size if value < 0 else size).to_bytes(4, "big", signed=True))
    stream.write(abs(value).to_bytes(size, "big"))


def read_mpz(stream: BinaryIO) -> int:
    """Read an integer written by write_mpz."""
    size = int.from_bytes(_read_exact(stream, 4), "big", signed=True)
    value = int.from_bytes(_read_exact(stream, abs(size)), "big")
    return -value if size < 0 else value


def write_point(stream: BinaryIO, p: Point) -> None:
    write_mpz(stream, p.x)
    write_mpz(stream, p.y)


def read_point(stream: BinaryIO) -> Point:
    x = read_mpz(stream)
    return Point(x, read_mpz(stream))


def write_poly(stream: BinaryIO, p: Poly) -> None:
    """Write the degree as an 8-byte little-endian word, then each coefficient."""
    stream.write(struct.pack("<q", p.degree()))
    for coef in p.coefs:
        write_mpz(stream, coef)


def read_poly(stream: BinaryIO) -> Poly:
    """Read a polynomial; only the low four bytes of the degree word count."""
    raw = _read_exact(stream, 8)
    degree = int.from_bytes(raw[:4], "little", signed=True)
    if degree < 0:
        raise ValueError(f"negative polynomial degree {degree}")
    return Poly(tuple(read_mpz(stream) for _ in range(degree + 1)))


def write_poly_point(stream: BinaryIO, p: PolyPoint) -> None:
    write_poly(stream, p.x)
    write_poly(stream, p.y)


def read_poly_point(stream: BinaryIO) -> PolyPoint:
    x = read_poly(stream)
    return PolyPoint(x, read_poly(stream))


@dataclass(frozen=True)
class SigSystem:
    """Base curve, its extension curve, torsion order and the two generators."""

    prime: int
    a4: int
    a6: int
    card_e: int
    tor: int
    cobse: int
    g1: Point
    irrd: Poly
    card_ex: int
    coxtd: int
    g2: PolyPoint

    @cached_property
    def field(self) -> PrimeField:
        return PrimeField(self.prime)

    @cached_property
    def curve(self) -> Curve:
        return Curve(self.field, self.a4, self.a6)

    @cached_property
    def ext(self) -> ExtensionField:
        return ExtensionField(self.field, self.irrd)

    @cached_property
    def ex(self) -> PolyCurve:
        return PolyCurve(self.ext, Poly.constant(self.a4), Poly.constant(self.a6))

    @property
    def coefficient_size(self) -> int:
        """Bytes needed for one field coefficient."""
        return (self.prime.bit_length() + 7) // 8

    @property
    def degree(self) -> int:
        return self.irrd.degree()

    @classmethod
    def read(cls, stream: BinaryIO) -> SigSystem:
        """Read system parameters in the order they are written."""
        prime = read_mpz(stream)
        a4 = read_mpz(stream)
        a6 = read_mpz(stream)
        card_e = read_mpz(stream)
        tor = read_mpz(stream)
        cobse = read_mpz(stream)
        g1 = read_point(stream)
        irrd = read_poly(stream)
        card_ex = read_mpz(stream)
        coxtd = read_mpz(stream)
        g2 = read_poly_point(stream)
        return cls(prime, a4, a6, card_e, tor, cobse, g1, irrd, card_ex, coxtd, g2)

    def write(self, stream: BinaryIO) -> None:
        for value in (self.prime, self.a4, self.a6, self.card_e, self.tor, self.cobse):
            write_mpz(stream, value)
        write_point(stream, self.g1)
        write_poly(stream, self.irrd)
        write_mpz(stream, self.card_ex)
        write_mpz(stream, self.coxtd)
        write_poly_point(stream, self.g2)


def secbyte(p: int) -> int:
    """Bytes of hash output for a modulus: its bits plus the security level."""
    bits = p.bit_length()
    if bits < 208:
        level = 80
    elif bits < 320:
        level = 128
    elif bits < 448:
        level = 192
    else:
        level = 256
    return (bits + level + 7) >> 3


def _k12_int(data: bytes, tag: bytes, modulus: int) -> int:
    digest = KangarooTwelve.new(data=bytes(data), custom=tag).read(secbyte(modulus))
    return int.from_bytes(digest, "little") % modulus


def hash1(data: bytes, r: int) -> int:
    """Hash data to an integer mod r."""
    return _k12_int(data, _TAG_H1, r)


def _hash_to_g1(system: SigSystem, data: bytes, tag: bytes) -> Point:
    value = _k12_int(data, tag, system.prime)
    first, _ = system.curve.embed(value)
    return system.curve.multiply(first, system.cobse)


def hash0(system: SigSystem, data: bytes) -> Point:
    """Hash data to a point of the torsion subgroup of the base curve."""
    return _hash_to_g1(system, data, _TAG_H0)


def hash2(system: SigSystem, data: bytes) -> Point:
    """Like hash0 with a separate domain tag."""
    return _hash_to_g1(system, data, _TAG_H2)


def keygen(data: bytes, g2: PolyPoint, curve: PolyCurve) -> tuple[int, PolyPoint]:
    """Private key from little-endian bytes; public key is sk * g2."""
    sk = int.from_bytes(bytes(data), "little")
    return sk, curve.multiply(g2, sk)


def to_g2(point: Point) -> PolyPoint:
    """Lift a base curve point onto the extension curve."""
    return PolyPoint.from_point(point)


def _padded(p: Poly, degree: int) -> list[int]:
    coefs = list(p.coefs[:degree])
    return coefs + [0] * (degree - len(coefs))


def point_to_bytes(p: PolyPoint, size: int, degree: int) -> bytes:
    """Lay out degree coefficients of x then y, each little-endian in size bytes."""
    out = bytearray()
    for coef in _padded(p.x, degree) + _padded(p.y, degree):
        out += coef.to_bytes(size, "little")
    return bytes(out)


def _point_text(system: SigSystem, p: PolyPoint) -> bytes:
    return point_to_bytes(p, system.coefficient_size, system.degree)


def _index_bytes(index: int) -> bytes:
    return index.to_bytes(8, "little", signed=True)


def aj_hash(system: SigSystem, keys: Sequence[PolyPoint]) -> list[int]:
    """Hash each key together with the whole key list, mod the torsion order."""
    tail = b"".join(_point_text(system, key) for key in keys)
    return [hash1(_point_text(system, key) + tail, system.tor) for key in keys]


def sign(system: SigSystem, sk: int, aj: int, msg: bytes) -> Point:
    """Individual signature (aj * sk) * H0(msg)."""
    return system.curve.multiply(hash0(system, msg), aj * sk)


def aggregate(system: SigSystem, sigs: Sequence[Point]) -> Point:
    """Sum individual signatures into one."""
    total = INFINITY
    for sig in sigs:
        total = system.curve.add(total, sig)
    return total


def aj_sum(
    system: SigSystem, keys: Sequence[PolyPoint], hashes: Sequence[int]
) -> PolyPoint:
    """Return the sum of hash_j * key_j."""
    if len(keys) != len(hashes):
        raise ValueError("keys and hashes differ in length")
    total = POLY_INFINITY
    for key, value in zip(keys, hashes):
        total = system.ex.add(total, system.ex.multiply(key, value))
    return total


def _pairings(
    system: SigSystem, pairs: Sequence[tuple[PolyPoint, PolyPoint]]
) -> list[Poly]:
    """Weil pairings of each pair, sharing one usable auxiliary point."""
    ex = system.ex
    for _ in range(_PAIRING_ATTEMPTS):
        aux = ex.random_point()
        if any(
            ex.add(q, aux).is_infinity() or ex.add(p, ex.negate(aux)).is_infinity()
            for p, q in pairs
        ):
            continue
        try:
            values = [weil(ex, p, q, aux, system.tor) for p, q in pairs]
        except ZeroDivisionError:
            continue
        if not any(value.is_zero() for value in values):
            return values
    raise ArithmeticError("no usable auxiliary point for the pairing")


def multisig_verify(
    system: SigSystem, sigma: Point, apk: PolyPoint, msg: bytes
) -> bool:
    """Check e(sigma, g2) == e(H0(msg), apk)."""
    h0 = hash0(system, msg)
    w1, w2 = _pairings(system, [(to_g2(sigma), system.g2), (to_g2(h0), apk)])
    return w1 == w2


def mu_column(
    apk: PolyPoint, system: SigSystem, aj: int, sk: int, count: int
) -> list[Point]:
    """Column of the membership matrix: (aj * sk) * H2(apk, i) for each i."""
    scale = mod_mul(sk, aj, system.tor)
    text = _point_text(system, apk)
    return [
        system.curve.multiply(hash2(system, text + _index_bytes(i)), scale)
        for i in range(count)
    ]


def membership_key(row: Sequence[Point], curve: Curve) -> Point:
    """Sum one row of the membership matrix."""
    total = INFINITY
    for point in row:
        total = curve.add(total, point)
    return total


def subgroup_sign(
    apk: PolyPoint, system: SigSystem, memkey: Point, sk: int, msg: bytes
) -> Point:
    """Signature sk * H0(apk, msg) + membership key."""
    h0 = hash0(system, _point_text(system, apk) + bytes(msg))
    return system.curve.add(system.curve.multiply(h0, sk), memkey)


def subgroup_combine(
    system: SigSystem,
    sigs: Sequence[Point],
    keys: Sequence[PolyPoint],
    indices: Sequence[int],
) -> tuple[PolyPoint, Point]:
    """Return (sum of the listed public keys, sum of the signatures in list order)."""
    if len(sigs) != len(indices):
        raise ValueError("one signature is needed per listed index")
    pk = POLY_INFINITY
    ssum = INFINITY
    for sig, index in zip(sigs, indices):
        ssum = system.curve.add(ssum, sig)
        pk = system.ex.add(pk, keys[index])
    return pk, ssum


def subgroup_verify(
    system: SigSystem,
    apk: PolyPoint,
    msg: bytes,
    indices: Sequence[int],
    pk: PolyPoint,
    ssum: Point,
) -> bool:
    """Check e(H0(apk, msg), pk) * e(sum H2(apk, j), apk) == e(ssum, g2)."""
    text = _point_text(system, apk)
    h0 = hash0(system, text + bytes(msg))
    hsum = INFINITY
    for index in indices:
        hsum = system.curve.add(hsum, hash2(system, text + _index_bytes(index)))
    w1, w2, w3 = _pairings(
        system,
        [(to_g2(h0), pk), (to_g2(hsum), apk), (to_g2(ssum), system.g2)],
    )
    return system.ext.mul(w1, w2) == w3