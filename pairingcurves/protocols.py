"""Basic elliptic curve protocols: keys, key agreement and signatures."""

from __future__ import annotations

from dataclasses import dataclass

from Crypto.Hash import KangarooTwelve

from .eliptic import Curve, Point
from .modulo import PrimeField, mod_add, mod_div, mod_mul, mod_sub

_HASH_TAG = b"Hash_b pring&sig"


@dataclass(frozen=True)
class BaseSystem:
    """Curve, base point, its prime order and the curve cofactor."""

    cofactor: int
    order: int
    base: Point
    curve: Curve

    @property
    def field(self) -> PrimeField:
        return self.curve.field


@dataclass(frozen=True)
class EcdsaSignature:
    c: int
    d: int


@dataclass(frozen=True)
class SchnorrSignature:
    q: Point
    s: int


def _as_bytes(data: bytes | str) -> bytes:
    return data.encode() if isinstance(data, str) else bytes(data)


def _security_bits(bits: int) -> int:
    if bits < 208:
        return 80
    if bits < 320:
        return 128
    if bits < 448:
        return 192
    return 256


def hash_to_int(data: bytes | str, modulus: int) -> int:
    """Hash data with KangarooTwelve to an integer mod modulus.

    Extra output bytes matching the security level keep the reduction uniform.
    """
    bits = modulus.bit_length()
    size = (bits + _security_bits(bits) + 7) // 8
    digest = KangarooTwelve.new(data=_as_bytes(data), custom=_HASH_TAG).read(size)
    return int.from_bytes(digest, "little") % modulus


def gen_key(phrase: bytes | str, system: BaseSystem) -> tuple[int, Point]:
    """Turn a phrase into a (private, public) key pair."""
    sk = hash_to_int(phrase, system.order)
    return sk, system.curve.multiply(system.base, sk)


def diffie_hellman(my_key: int, their_key: Point, curve: Curve) -> int:
    """Return the x coordinate of my_key * their_key as the shared key."""
    return curve.multiply(their_key, my_key).x


def mqv_ephemeral(system: BaseSystem) -> tuple[int, Point]:
    """Return a random ephemeral key and its point."""
    ephem = system.field.random()
    return ephem, system.curve.multiply(system.base, ephem)


def avf(x: int, system: BaseSystem) -> int:
    """Lower half of x with the bit just above it set."""
    f = (system.order.bit_length() >> 1) + 1
    return (x & ((1 << f) - 1)) | (1 << f)


def mqv_share(
    my_key: int,
    my_public: Point,
    my_ephem: int,
    my_ephem_point: Point,
    their_key: Point,
    their_ephem: Point,
    system: BaseSystem,
) -> int:
    """Return the MQV shared value (an x coordinate)."""
    n = system.order
    curve = system.curve
    s = mod_add(mod_mul(avf(my_ephem_point.x, system), my_key, n), my_ephem, n)
    u = curve.add(curve.multiply(their_key, avf(their_ephem.x, system)), their_ephem)
    u = curve.multiply(u, s)
    if system.cofactor > 1:
        u = curve.multiply(u, system.cofactor)
    return u.x


def ecdsa_sign(sk: int, public: Point, msg: bytes | str, system: BaseSystem) -> EcdsaSignature:
    """Sign msg with the private key sk."""
    n = system.order
    e = hash_to_int(msg, n)
    k = system.field.random()
    r = system.curve.multiply(system.base, k)
    c = r.x % n
    d = mod_div(mod_add(mod_mul(sk, c, n), e, n), k, n)
    return EcdsaSignature(c, d)


def ecdsa_verify(sig: EcdsaSignature, public: Point, msg: bytes | str, system: BaseSystem) -> bool:
    """Return True if sig is a valid signature of msg for public."""
    n = system.order
    e = hash_to_int(msg, n)
    try:
        h = pow(sig.d, -1, n)
    except ValueError:
        return False
    curve = system.curve
    t = curve.multiply(public, mod_mul(sig.c, h, n))
    s = curve.multiply(system.base, mod_mul(e, h, n))
    r = curve.add(t, s)
    return r.x % n == sig.c


def _schnorr_challenge(q: Point, msg: bytes | str, n: int) -> int:
    size = max((q.x.bit_length() + 7) // 8, 1)
    x_bytes = q.x.to_bytes(size, "little")
    y_raw = q.y.to_bytes(max((q.y.bit_length() + 7) // 8, 1), "little")
    y_bytes = y_raw[:size].ljust(size, b"\0")
    return hash_to_int(x_bytes + y_bytes + _as_bytes(msg), n)


def schnorr_sign(sk: int, public: Point, msg: bytes | str, system: BaseSystem) -> SchnorrSignature:
    """Sign msg; the signature is a point and a scalar."""
    n = system.order
    k = system.field.random()
    q = system.curve.multiply(system.base, k)
    e = _schnorr_challenge(q, msg, n)
    return SchnorrSignature(q, mod_sub(k, mod_mul(sk, e, n), n))


def schnorr_verify(sig: SchnorrSignature, public: Point, msg: bytes | str, system: BaseSystem) -> bool:
    """Return True if sig is a valid Schnorr signature of msg for public."""
    e = _schnorr_challenge(sig.q, msg, system.order)
    curve = system.curve
    check = curve.add(curve.multiply(system.base, sig.s), curve.multiply(public, e))
    return check == sig.q