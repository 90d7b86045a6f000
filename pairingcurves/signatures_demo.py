"""Demonstrate aggregate multi-signatures and subgroup signatures end to end."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

from .eliptic import Point, format_point
from .keygen import KEY_FILE, PARAMETER_FILE, read_keys
from .poly_eliptic import PolyPoint, format_poly_point
from .signature import (
    SigSystem,
    aggregate,
    aj_hash,
    aj_sum,
    membership_key,
    mu_column,
    multisig_verify,
    sign,
    subgroup_combine,
    subgroup_sign,
    subgroup_verify,
)

MESSAGE_FILE = "message.dat"
MESSAGE_VALUES = 100
MAX_KEYS = 32
SUBGROUP = (5, 2, 17, 10, 16, 19, 7, 8, 14, 4)


@dataclass(frozen=True)
class DemoResult:
    """Everything the demonstration computes and checks."""

    aj: tuple[int, ...]
    apk: PolyPoint
    sigma: Point
    multisig_ok: bool
    membership_keys: tuple[Point, ...]
    indices: tuple[int, ...]
    subgroup_pk: PolyPoint
    subgroup_sum: Point
    subgroup_ok: bool


def read_message(text: str) -> list[int]:
    """Return the first hundred whitespace separated integers of text."""
    tokens = text.split()
    if len(tokens) < MESSAGE_VALUES:
        raise ValueError(
            f"message needs {MESSAGE_VALUES} values, found {len(tokens)}"
        )
    return [int(token) for token in tokens[:MESSAGE_VALUES]]


def message_bytes(values: Iterable[int]) -> bytes:
    """Lay the values out as little-endian 16-bit words."""
    return b"".join((value & 0xFFFF).to_bytes(2, "little") for value in values)


def run_demo(
    system: SigSystem,
    keys: Sequence[tuple[int, PolyPoint]],
    msg: bytes,
    subgroup: Sequence[int] = SUBGROUP,
) -> DemoResult:
    """Sign msg with every key, aggregate and verify; then sign with a subgroup."""
    if not keys:
        raise ValueError("at least one key pair is needed")
    count = len(keys)
    indices = tuple(subgroup)
    if not indices:
        raise ValueError("subgroup must not be empty")
    for index in indices:
        if not 0 <= index < count:
            raise ValueError(f"subgroup index {index} out of range")

    secrets = [sk for sk, _ in keys]
    publics = [pk for _, pk in keys]
    aj = aj_hash(system, publics)
    apk = aj_sum(system, publics, aj)

    sigs = [sign(system, sk, a, msg) for sk, a in zip(secrets, aj)]
    sigma = aggregate(system, sigs)
    multisig_ok = multisig_verify(system, sigma, apk, msg)

    columns = [mu_column(apk, system, a, sk, count) for a, sk in zip(aj, secrets)]
    memkeys = tuple(
        membership_key([column[i] for column in columns], system.curve)
        for i in range(count)
    )

    group_sigs = [
        subgroup_sign(apk, system, memkeys[j], secrets[j], msg) for j in indices
    ]
    pk, ssum = subgroup_combine(system, group_sigs, publics, indices)
    subgroup_ok = subgroup_verify(system, apk, msg, indices, pk, ssum)
    return DemoResult(
        tuple(aj), apk, sigma, multisig_ok, memkeys, indices, pk, ssum, subgroup_ok
    )


def main(argv: list[str] | None = None) -> int:
    """Run the demonstration on the files in a directory (default: current)."""
    args = sys.argv[1:] if argv is None else argv
    base = Path(args[0]) if args else Path(".")

    try:
        with (base / PARAMETER_FILE).open("rb") as stream:
            system = SigSystem.read(stream)
    except OSError:
        print(f"can't find file {PARAMETER_FILE}")
        return 1
    try:
        with (base / KEY_FILE).open("rb") as stream:
            keys = read_keys(stream)
    except OSError:
        print(f"can't find file {KEY_FILE}")
        return 2
    if len(keys) > MAX_KEYS:
        print(f"need more space for testing: {len(keys)}")
        return 3
    try:
        text = (base / MESSAGE_FILE).read_text()
    except OSError:
        print(f"can't find {MESSAGE_FILE}")
        return 4
    try:
        values = read_message(text)
    except ValueError as exc:
        print(exc)
        return 5
    if len(keys) <= max(SUBGROUP):
        print(f"need at least {max(SUBGROUP) + 1} keys, have {len(keys)}")
        return 6

    msg = message_bytes(values)
    print("computing aj_hash:")
    result = run_demo(system, keys, msg)
    print(format_poly_point("APK:\n", system.ext, result.apk))
    print(format_point("Sigma:\n", result.sigma))
    if result.multisig_ok:
        print("e(sigma, g2) matches e(H0, apk)")
    else:
        print("Signature FAILS verification")

    print("subgroup index list:")
    print(" ".join(str(i) for i in result.indices))
    print("subgroup signature:")
    print(format_poly_point("Public Key Aggregation:\n", system.ext, result.subgroup_pk))
    print(format_point("Aggregate Signature: ", result.subgroup_sum))
    print()
    if result.subgroup_ok:
        print("Subgroup Aggregate Signature Verifies!")
    else:
        print("Subgroup Aggregate Signature FAILS!!")
    return 0