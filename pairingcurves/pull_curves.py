"""Collect curves from base curve search output and sort them by prime."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from math import prod
from operator import attrgetter
from pathlib import Path
from typing import Iterable

_LINE = re.compile(r"^\s*[0-9a-fA-F]+\s+([0-9a-fA-F]+)\s+2\^(\d+)\s*\*(.*)$")
_NUMBER = re.compile(r"\d+")


@dataclass(frozen=True)
class CurveRecord:
    """A curve y^2 = x^3 + x + a6 whose order is cofactor * prime."""

    a6: str
    cofactor: int
    prime: int


def parse_output(text: str) -> list[CurveRecord]:
    """Read every line that carries a factored curve order."""
    records = []
    for line in text.splitlines():
        match = _LINE.match(line)
        if not match:
            continue
        numbers = [int(n) for n in _NUMBER.findall(match.group(3))]
        if not numbers:
            continue
        *factors, prime = numbers
        cofactor = 2 ** int(match.group(2)) * prod(factors)
        records.append(CurveRecord(match.group(1), cofactor, prime))
    return records


def format_sorted(records: Iterable[CurveRecord]) -> str:
    """One line per curve, largest prime first, prime in hex."""
    ordered = sorted(records, key=attrgetter("prime"), reverse=True)
    return "".join(f"1 {r.a6:>4} {r.cofactor} {r.prime:x}\n" for r in ordered)


def saved_name(filename: str) -> str:
    """Replace everything from the first '.out' with '.saved', or append it."""
    index = filename.find(".out")
    if index < 0:
        return filename + ".saved"
    return filename[:index] + ".saved"


def main(argv: list[str] | None = None) -> int:
    """pull_curves <filename>: write the sorted curves next to the input."""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print("USE: pull_curves <filename>")
        return 1
    try:
        text = Path(args[0]).read_text()
    except OSError:
        print(f"can't find file {args[0]}")
        return 2
    Path(saved_name(args[0])).write_text(format_sorted(parse_output(text)))
    return 0