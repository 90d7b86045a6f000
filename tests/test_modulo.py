import random

import pytest

from pairingcurves.modulo import (
    PrimeField,
    mod_add,
    mod_div,
    mod_mul,
    mod_neg,
    mod_sub,
)

P160 = int("ac000000000000000000000000000000000000001", 16)


def test_add_sub_round_trip():
    for a, b, n in [(5, 9, 13), (123456789, 987654321, 1000003), (-4, 7, 11)]:
        assert mod_sub(mod_add(a, b, n), b, n) == a % n


def test_mul_div_round_trip():
    for a, b, n in [(5, 9, 13), (123456789, 987654321, 1000003), (-4, 7, 11)]:
        assert mod_div(mod_mul(a, b, n), b, n) == a % n


def test_neg_cancels():
    for a in range(-20, 20):
        assert mod_add(a, mod_neg(a, 17), 17) == 0


def test_div_by_zero_raises():
    with pytest.raises(ZeroDivisionError):
        mod_div(3, 0, 13)
    with pytest.raises(ZeroDivisionError):
        mod_div(3, 6, 12)


def test_small_modulus_rejected():
    with pytest.raises(ValueError):
        PrimeField(2)


@pytest.mark.parametrize("p", [43, 41, 97, 257])
def test_legendre_matches_squares(p):
    f = PrimeField(p, random.Random(1))
    squares = {x * x % p for x in range(1, p)}
    for a in range(1, p):
        assert f.legendre(a) == (1 if a in squares else -1)
    assert f.legendre(0) == 0


@pytest.mark.parametrize("p", [43, 41, 97, 257])
def test_sqrt_all_residues(p):
    f = PrimeField(p, random.Random(2))
    for a in range(1, p):
        if f.legendre(a) == 1:
            root = f.sqrt(a)
            assert f.mul(root, root) == a
        else:
            with pytest.raises(ValueError):
                f.sqrt(a)


def test_sqrt_large_prime():
    f = PrimeField(P160, random.Random(3))
    for _ in range(5):
        x = f.random()
        a = f.mul(x, x)
        root = f.sqrt(a)
        assert root in (x, f.neg(x))


def test_sqrt_zero():
    assert PrimeField(41).sqrt(0) == 0


def test_power_and_inverse():
    f = PrimeField(97)
    assert f.power(5, 0) == 1
    assert f.mul(f.power(5, -3), f.power(5, 3)) == 1
    assert f.power(5, 3) == f.mul(f.mul(5, 5), 5)
    assert f.mul(f.inv(10), 10) == 1
    assert f.div(f.mul(7, 10), 10) == 7


def test_inverse_of_zero_raises():
    with pytest.raises(ZeroDivisionError):
        PrimeField(97).inv(0)


def test_random_range():
    f = PrimeField(5, random.Random(4))
    values = {f.random() for _ in range(200)}
    assert values <= {2, 3, 4}
    assert len(values) > 1