import io
import sys

import pytest

from pairingcurves.base_curves import field_prime
from pairingcurves.pairing_search import (
    Candidate,
    checked_phi4k,
    format_candidate,
    gen_main,
    generate,
    is_probable_prime,
    make_alpha,
    phi4k,
    qofz,
    qofz_2,
    qofz_20,
    sweep,
    sweep_main,
    tofz,
    tofz_2,
    tofz_20,
    xstart,
)


@pytest.mark.parametrize("n", [2, 3, 97, 2**61 - 1, 2**127 - 1])
def test_primes(n):
    assert is_probable_prime(n, 25)


@pytest.mark.parametrize("n", [0, 1, 4, 561, 2**61 + 1, (2**61 - 1) * (2**31 - 1)])
def test_composites(n):
    assert not is_probable_prime(n, 25)


def test_field_prime_is_prime():
    assert is_probable_prime(field_prime(256), 25)


@pytest.mark.parametrize("k,alpha,x", [(5, 3, 2), (7, 11, 1), (11, 2, 3)])
def test_phi4k_geometric_identity(k, alpha, x):
    z = alpha * x * x
    assert phi4k(k, alpha, x) * (1 + z) == 1 + z**k


def test_checked_phi4k_errors():
    with pytest.raises(ValueError):
        checked_phi4k(41, 1, 1)
    with pytest.raises(ValueError):
        checked_phi4k(9, 1, 1)
    assert checked_phi4k(7, 3, 2) == phi4k(7, 3, 2)


def test_xstart_table():
    assert xstart(100)[0] == 7 and xstart(100)[2] == 3
    assert xstart(400)[0] == 23 and xstart(400)[2] == 67
    assert xstart(500)[0] == 31 and xstart(500)[2] == 3
    assert xstart(100)[1] > 0


def test_make_alpha_scales():
    assert make_alpha(2, 5) == 4 * make_alpha(1, 5)


@pytest.mark.parametrize("alpha,x", [(1, 1), (3, 1), (3, 2), (43, 5)])
def test_qofz_matches_20_when_k2_even(alpha, x):
    q = qofz(7, alpha, x)
    if q is None:
        assert qofz(7, alpha, x) is None
    else:
        assert q == qofz_20(7, alpha, x)
    assert tofz(7, alpha, x) == tofz_20(7, alpha, x)


def test_tofz_odd_k1():
    assert tofz(5, 3, 2) + tofz_20(5, 3, 2) == 2


def test_tofz_2_unit_z():
    assert tofz_2(5, 1, 1) == 0
    assert qofz_2(5, 1, 1) == 1


def test_generate_candidates_are_valid():
    found = list(generate(60))
    for c in found:
        assert c.r == phi4k(c.k, c.alpha, c.x)
        assert is_probable_prime(c.r) and is_probable_prime(c.q)
        assert c.q == qofz(c.k, c.alpha, c.x)
        assert c.t == tofz(c.k, c.alpha, c.x)


def test_generate_too_small():
    with pytest.raises(ValueError):
        list(generate(1))


def test_sweep_results():
    found, primes = sweep(40, 5)
    assert primes >= len(found)
    for c in found:
        assert c.k == 5
        assert c.r.bit_length() <= 40
        assert is_probable_prime(c.q)


def test_sweep_errors():
    with pytest.raises(ValueError):
        sweep(40, 9)
    with pytest.raises(ValueError):
        sweep(2, 5)


def test_format_candidate():
    c = Candidate(7, 3, 2, 11, 13, 5)
    lines = format_candidate(c).splitlines()
    assert lines[0] == "k= 7 alpha = 3  x = 2"
    assert lines[1] == "r = 11 numbits: 4"
    assert lines[3].startswith("rho = 1.0")
    assert lines[4] == "t = 5"


def test_gen_main_writes_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert gen_main(["60"]) == 0
    text = (tmp_path / "pair.060").read_text()
    assert text.startswith("k= 7 alphabase = 3 max = ")
    assert gen_main(["1"]) == 1
    assert gen_main([]) == 1


def test_sweep_main(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(sys, "stdin", io.StringIO("5\n"))
    assert sweep_main(["30"]) == 0
    assert (tmp_path / "pairings_alpha.05").exists()


def test_sweep_main_bad_k(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(sys, "stdin", io.StringIO("6\n"))
    assert sweep_main(["30"]) == 1
    assert sweep_main(["2"]) == 2