import pytest

from pairingcurves.base_curves import (
    BaseCurveParameters,
    curve_parameters,
    embed_main,
    embed_report,
    embedding_degree,
    field_prime,
    field_size_from_name,
    format_parameters,
    generate_parameters,
    write_parameter_files,
)
from pairingcurves.eliptic import Curve, Point
from pairingcurves.modulo import PrimeField


def test_field_prime_values():
    assert field_prime(160) == int("ac000000000000000000000000000000000000001", 16)
    for size in (160, 256, 384, 512):
        assert field_prime(size).bit_length() == size


def test_unknown_size_raises():
    with pytest.raises(ValueError):
        field_prime(200)
    with pytest.raises(ValueError):
        curve_parameters(200)


def test_curve_parameters_160():
    order, cofactor, a4, a6 = curve_parameters(160)
    assert order == int("ac0000000000000000006543ba11adf8eb6345c77", 16)
    assert (cofactor, a4, a6) == (1, 1, 0x782E)


def test_generate_parameters_base_point():
    params = generate_parameters(160)
    curve = Curve(PrimeField(params.prime), params.a4, params.a6)
    assert curve.contains(params.base)
    assert not params.base.is_infinity()
    assert curve.multiply(params.base, params.order).is_infinity()


def test_format_parameters_layout():
    params = BaseCurveParameters(160, 0x1F, 0x2A, 1, 1, 0x782E, Point(0xAB, 0xCD))
    lines = format_parameters(params).splitlines()
    assert lines[0] == "prime" and int(lines[1], 16) == 0x1F
    assert lines[2] == "order" and int(lines[3], 16) == 0x2A
    assert lines[4] == "cofactor" and lines[5] == "1"
    assert lines[6] == "curve(a4   a6)" and lines[8] == "782e"
    assert lines[9] == "basepoint(x   y)"
    assert (int(lines[10], 16), int(lines[11], 16)) == (0xAB, 0xCD)


def test_write_parameter_files(tmp_path):
    paths = write_parameter_files(tmp_path)
    assert [p.name for p in paths] == [
        f"Curve_{s}_params.dat" for s in (160, 256, 384, 512)
    ]
    for path, size in zip(paths, (160, 256, 384, 512)):
        lines = path.read_text().splitlines()
        prime = int(lines[1], 16)
        assert prime == field_prime(size)
        curve = Curve(PrimeField(prime), int(lines[7], 16), int(lines[8], 16))
        assert curve.contains(Point(int(lines[10], 16), int(lines[11], 16)))


def test_field_size_from_name():
    assert field_size_from_name("curves_160_full_sort.csv") == 160
    assert field_size_from_name("dir/x512_full_sort.csv") == 512
    with pytest.raises(ValueError):
        field_size_from_name("curves_160.csv")
    with pytest.raises(ValueError):
        field_size_from_name("ab_full_sort.csv")


def test_embedding_degree_small():
    assert embedding_degree(7, 5, 1) == 4
    assert embedding_degree(10, 5, 1) is None


def test_embedding_degree_limit():
    assert embedding_degree(7, 5, 1, 3) is None


def test_embed_report_lines():
    report = embed_report(["1 abc 1 5 x", "", "1 def 1 5 y"], 7)
    assert report == ["1 abc 1 5  4", "1 def 1 5  4"]
    assert embed_report(["2 q 1 5 z"], 10) == ["2 q 1 5 > 256"]
    with pytest.raises(ValueError):
        embed_report(["1 2"], 7)


def test_embed_main_writes_report(tmp_path):
    order = int("ac0000000000000000006543ba11adf8eb6345c77", 16)
    src = tmp_path / "curves_160_full_sort.csv"
    src.write_text(f"1 782e 1 {order} z\n")
    assert embed_main([str(src)]) == 0
    out = (tmp_path / "curves_160_embed.dat").read_text().splitlines()
    assert len(out) == 1
    assert out[0].startswith(f"1 782e 1 {order}")


def test_embed_main_usage(capsys):
    assert embed_main([]) == 1
    assert "Use:" in capsys.readouterr().out