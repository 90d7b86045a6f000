import pytest

from pairingcurves.base_curves import generate_parameters, field_prime
from pairingcurves.eliptic import Curve
from pairingcurves.modulo import PrimeField
from pairingcurves.protocols import (
    BaseSystem,
    EcdsaSignature,
    SchnorrSignature,
    avf,
    diffie_hellman,
    ecdsa_sign,
    ecdsa_verify,
    gen_key,
    hash_to_int,
    mqv_ephemeral,
    mqv_share,
    schnorr_sign,
    schnorr_verify,
)


@pytest.fixture(scope="module")
def system():
    params = generate_parameters(160)
    curve = Curve(PrimeField(params.prime), params.a4, params.a6)
    return BaseSystem(params.cofactor, params.order, params.base, curve)


def test_hash_is_deterministic_and_reduced(system):
    a = hash_to_int(b"some data", system.order)
    assert a == hash_to_int(b"some data", system.order)
    assert 0 <= a < system.order
    assert a != hash_to_int(b"other data", system.order)


def test_hash_str_matches_bytes(system):
    assert hash_to_int("phrase", system.order) == hash_to_int(b"phrase", system.order)


def test_hash_large_modulus():
    prime = field_prime(512)
    assert 0 <= hash_to_int(b"abc", prime) < prime


def test_gen_key(system):
    sk, pk = gen_key("alice phrase", system)
    assert sk == hash_to_int(b"alice phrase", system.order)
    assert pk == system.curve.multiply(system.base, sk)
    assert system.curve.contains(pk)


def test_diffie_hellman_agrees(system):
    a, pa = gen_key("alice", system)
    b, pb = gen_key("bob", system)
    assert diffie_hellman(a, pb, system.curve) == diffie_hellman(b, pa, system.curve)


def test_mqv_agrees(system):
    a, pa = gen_key("alice", system)
    b, pb = gen_key("bob", system)
    x, px = mqv_ephemeral(system)
    y, py = mqv_ephemeral(system)
    assert system.curve.contains(px)
    share_a = mqv_share(a, pa, x, px, pb, py, system)
    share_b = mqv_share(b, pb, y, py, pa, px, system)
    assert share_a == share_b


def test_avf_invariants(system):
    z = avf(0, system)
    assert z > 0 and z & (z - 1) == 0
    assert avf(12345, system) == avf(12345 | (1 << 400), system)
    assert avf(12345, system) & z == z


def test_ecdsa_round_trip(system):
    sk, pk = gen_key("signer", system)
    sig = ecdsa_sign(sk, pk, b"message", system)
    assert ecdsa_verify(sig, pk, b"message", system)
    assert not ecdsa_verify(sig, pk, b"massage", system)


def test_ecdsa_tampered_signature(system):
    sk, pk = gen_key("signer", system)
    sig = ecdsa_sign(sk, pk, b"message", system)
    bad = EcdsaSignature(sig.c, (sig.d + 1) % system.order)
    assert not ecdsa_verify(bad, pk, b"message", system)
    _, other = gen_key("someone else", system)
    assert not ecdsa_verify(sig, other, b"message", system)


def test_ecdsa_zero_d_rejected(system):
    _, pk = gen_key("signer", system)
    assert not ecdsa_verify(EcdsaSignature(5, 0), pk, b"m", system)


def test_schnorr_round_trip(system):
    sk, pk = gen_key("signer", system)
    sig = schnorr_sign(sk, pk, b"message", system)
    assert schnorr_verify(sig, pk, b"message", system)
    assert not schnorr_verify(sig, pk, b"other", system)


def test_schnorr_tampered(system):
    sk, pk = gen_key("signer", system)
    sig = schnorr_sign(sk, pk, b"message", system)
    bad = SchnorrSignature(sig.q, (sig.s + 1) % system.order)
    assert not schnorr_verify(bad, pk, b"message", system)