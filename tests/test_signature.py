import io

import pytest

from pairingcurves.eliptic import INFINITY, Curve, Point
from pairingcurves.modulo import PrimeField
from pairingcurves.pairing import group_type
from pairingcurves.poly import ExtensionField, Poly, find_irreducible
from pairingcurves.poly_eliptic import PolyCurve, PolyPoint
from pairingcurves.signature import (
    SigSystem,
    aggregate,
    aj_hash,
    aj_sum,
    hash0,
    hash1,
    hash2,
    keygen,
    membership_key,
    mu_column,
    multisig_verify,
    point_to_bytes,
    read_mpz,
    read_point,
    read_poly,
    read_poly_point,
    secbyte,
    sign,
    subgroup_combine,
    subgroup_sign,
    subgroup_verify,
    to_g2,
    write_mpz,
    write_point,
    write_poly,
    write_poly_point,
)


def _small_system():
    field = PrimeField(43)
    irrd = find_irreducible(field, 2)
    curve = Curve(field, 23, 42)
    ex = PolyCurve(ExtensionField(field, irrd), Poly.constant(23), Poly.constant(42))
    g1 = INFINITY
    while g1.is_infinity():
        g1 = curve.multiply(curve.random_point(), 5)
    g2 = PolyPoint(Poly.constant(0), Poly.constant(0))
    while g2.is_infinity() or group_type(g2) == 1:
        g2 = ex.multiply(ex.random_point(), 15)
    return SigSystem(43, 23, 42, 55, 11, 5, g1, irrd, 1815, 15, g2)


@pytest.fixture(scope="module")
def system():
    return _small_system()


@pytest.fixture(scope="module")
def keys(system):
    return [keygen(bytes([n]), system.g2, system.ex) for n in (2, 3, 4, 5)]


def _dump(writer, value):
    buf = io.BytesIO()
    writer(buf, value)
    return buf.getvalue()


@pytest.mark.parametrize(
    "value, expected",
    [
        (300, b"\x00\x00\x00\x02\x01\x2c"),
        (0, b"\x00\x00\x00\x00"),
        (-1, b"\xff\xff\xff\xff\x01"),
    ],
)
def test_write_mpz_layout(value, expected):
    buf = io.BytesIO()
    write_mpz(buf, value)
    assert buf.getvalue() == expected


@pytest.mark.parametrize("value", [0, 1, -77, 2**261 + 12345, -(2**100)])
def test_mpz_round_trip(value):
    assert read_mpz(io.BytesIO(_dump(write_mpz, value))) == value


def test_read_mpz_truncated():
    with pytest.raises(EOFError):
        read_mpz(io.BytesIO(b"\x00\x00\x00\x05\x01"))


def test_point_and_poly_round_trip():
    point = Point(12, 34)
    assert read_point(io.BytesIO(_dump(write_point, point))) == point
    poly = Poly((5, 0, 7))
    data = _dump(write_poly, poly)
    assert data[:8] == (2).to_bytes(8, "little")
    assert read_poly(io.BytesIO(data)) == poly
    pp = PolyPoint(Poly((1, 2)), Poly((3,)))
    assert read_poly_point(io.BytesIO(_dump(write_poly_point, pp))) == pp


def test_read_poly_uses_low_word_of_degree():
    data = b"\x00\x00\x00\x00\xde\xad\xbe\xef" + _dump(write_mpz, 9)
    assert read_poly(io.BytesIO(data)) == Poly.constant(9)


def test_system_round_trip(system):
    buf = io.BytesIO()
    system.write(buf)
    buf.seek(0)
    again = SigSystem.read(buf)
    assert again == system
    assert again.curve.contains(again.g1)


def test_secbyte_security_levels():
    assert 207 + 80 <= secbyte(2**206) * 8 < 207 + 88
    assert 208 + 128 <= secbyte(2**207) * 8 < 208 + 136
    assert 448 + 256 <= secbyte(2**447) * 8 < 448 + 264


def test_hash1_range_and_determinism():
    r = 2**255 - 19
    assert hash1(b"abc", r) == hash1(b"abc", r)
    assert hash1(b"abc", r) != hash1(b"abd", r)
    assert all(0 <= hash1(bytes([i]), 11) < 11 for i in range(20))


def test_hash0_lands_in_torsion(system):
    h = hash0(system, b"message")
    assert system.curve.contains(h)
    assert system.curve.multiply(h, system.tor).is_infinity()
    assert hash0(system, b"message") == h


def test_hash0_and_hash2_are_separated(system):
    msgs = [bytes([i]) * 3 for i in range(8)]
    assert any(hash0(system, m) != hash2(system, m) for m in msgs)


def test_keygen_little_endian(system):
    sk, pk = keygen(b"\x01\x02", system.g2, system.ex)
    assert sk == 513
    assert pk == system.ex.multiply(system.g2, 513)


def test_to_g2():
    assert to_g2(Point(4, 9)) == PolyPoint(Poly.constant(4), Poly.constant(9))


def test_point_to_bytes_layout():
    pp = PolyPoint(Poly((1, 2)), Poly((3,)))
    assert point_to_bytes(pp, 2, 2) == b"\x01\x00\x02\x00\x03\x00\x00\x00"
    with pytest.raises(OverflowError):
        point_to_bytes(PolyPoint(Poly((300,)), Poly((1,))), 1, 1)


def test_aj_hash(system, keys):
    pks = [pk for _, pk in keys]
    hashes = aj_hash(system, pks)
    assert len(hashes) == len(pks)
    assert all(0 <= h < system.tor for h in hashes)
    assert aj_hash(system, pks) == hashes


def test_aggregate_and_membership_key(system):
    h = hash0(system, b"x")
    sigs = [system.curve.multiply(h, k) for k in (1, 2, 3)]
    assert aggregate(system, sigs) == system.curve.multiply(h, 6)
    assert aggregate(system, sigs[:1]) == sigs[0]
    assert membership_key([system.g1] * 3, system.curve) == system.curve.multiply(
        system.g1, 3
    )


def test_aj_sum_matches_combined_scalar(system, keys):
    pks = [pk for _, pk in keys]
    hashes = aj_hash(system, pks)
    total = sum(h * sk for h, (sk, _) in zip(hashes, keys)) % system.tor
    assert aj_sum(system, pks, hashes) == system.ex.multiply(system.g2, total)
    with pytest.raises(ValueError):
        aj_sum(system, pks, hashes[:1])


def test_multisig_verify(system, keys):
    pks = [pk for _, pk in keys]
    hashes = aj_hash(system, pks)
    apk = aj_sum(system, pks, hashes)
    msg = b"the message"
    sigma = aggregate(
        system, [sign(system, sk, a, msg) for (sk, _), a in zip(keys, hashes)]
    )
    assert multisig_verify(system, sigma, apk, msg) is True
    forged = system.curve.add(sigma, system.g1)
    assert multisig_verify(system, forged, apk, msg) is False


def test_mu_column_scales(system, keys):
    apk = keys[0][1]
    single = mu_column(apk, system, 1, 1, 3)
    double = mu_column(apk, system, 2, 1, 3)
    assert len(single) == 3
    assert double == [system.curve.add(p, p) for p in single]


def test_subgroup_signature_flow(system, keys):
    sks = [sk for sk, _ in keys]
    pks = [pk for _, pk in keys]
    n = len(keys)
    hashes = aj_hash(system, pks)
    apk = aj_sum(system, pks, hashes)
    columns = [mu_column(apk, system, hashes[j], sks[j], n) for j in range(n)]
    memkeys = [
        membership_key([columns[j][i] for j in range(n)], system.curve)
        for i in range(n)
    ]
    msg = b"subgroup message"
    indices = [2, 0]
    sigs = [subgroup_sign(apk, system, memkeys[i], sks[i], msg) for i in indices]
    pk, ssum = subgroup_combine(system, sigs, pks, indices)
    assert pk == system.ex.add(pks[2], pks[0])
    assert subgroup_verify(system, apk, msg, indices, pk, ssum) is True
    forged = system.curve.add(ssum, system.g1)
    assert subgroup_verify(system, apk, msg, indices, pk, forged) is False


def test_subgroup_combine_needs_matching_lengths(system, keys):
    with pytest.raises(ValueError):
        subgroup_combine(system, [system.g1], [pk for _, pk in keys], [0, 1])