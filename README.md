# pairingcurves

Tools for working with elliptic curves over prime fields and their
extension fields: modular arithmetic, point arithmetic, polynomial
arithmetic modulo an irreducible polynomial, Weil and Tate pairings,
classic curve protocols (key generation, Diffie-Hellman, MQV, ECDSA,
Schnorr), pairing-based aggregate multi-signatures, and programs that
search for and select pairing-friendly curves.

The arithmetic is written for clarity and study rather than speed, and
makes no attempt at constant-time operation.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `pairingcurves.modulo` – `mod_add`, `mod_sub`, `mod_mul`, `mod_div`,
  `mod_neg` and `PrimeField`, with Legendre symbols, powers (negative
  exponents invert first), random elements and Tonelli-Shanks square
  roots. Division by a non-invertible value raises `ZeroDivisionError`;
  the square root of a non-residue raises `ValueError`.
- `pairingcurves.eliptic` – `Point` and `Curve` for short Weierstrass
  curves `y^2 = x^3 + a4*x + a6`; the point `(0, 0)` stands for the point
  at infinity. `Curve` offers `add`, `multiply`, `embed`, `random_point`
  and `contains`; `format_point` renders a point.
- `pairingcurves.poly` – `Poly` (immutable, lowest degree first),
  `poly_add`, `poly_sub`, `poly_normal`, `poly_euclid`, `poly_gcd`,
  `poly_pseudo_div`, `poly_content`, `poly_resultant`,
  `find_irreducible` (first irreducible `x^n + x + j`), `format_poly`,
  `QuotientRing` (multiplication and powers modulo a polynomial) and
  `ExtensionField` (inverse, division, square test, square roots,
  random elements).
- `pairingcurves.poly_eliptic` – `PolyPoint` and `PolyCurve`: curves over
  an extension field, plus `bump` and `format_poly_point`.
- `pairingcurves.pairing` – `miller`, `weil` and `tate` pairings,
  `line_value`, `group_type`, extension field `cardinality`, and
  `point_order` / `poly_point_order` lookups over a list of candidate
  orders.
- `pairingcurves.protocols` – `BaseSystem`, `hash_to_int`, `gen_key`,
  `diffie_hellman`, `mqv_ephemeral`, `avf`, `mqv_share`,
  `ecdsa_sign`/`ecdsa_verify` and `schnorr_sign`/`schnorr_verify`, with
  messages hashed by KangarooTwelve.
- `pairingcurves.signature` – `SigSystem` (with binary `read`/`write`),
  the hashes `hash0`, `hash1`, `hash2`, and the compact aggregate
  multi-signature scheme: `keygen`, `aj_hash`, `sign`, `aggregate`,
  `aj_sum`, `multisig_verify`, `mu_column`, `membership_key`,
  `subgroup_sign`, `subgroup_combine` and `subgroup_verify`.
- `pairingcurves.keygen` – builds the degree 11 signature system and
  reads and writes key files.
- `pairingcurves.signatures_demo` – `run_demo` signs a message with
  every key, aggregates and verifies, then does the same with a
  subgroup of signers.
- `pairingcurves.base_curves` – the fixed 160, 256, 384 and 512 bit base
  curves, their parameter files and embedding degree checks.
- `pairingcurves.pairing_search` – searches for pairing-friendly curve
  parameters from cyclotomic polynomials.
- `pairingcurves.get_curve` – finds roots of a Hilbert class polynomial
  and the curve with a given number of points.
- `pairingcurves.pull_curves` – sorts curve search output by the size of
  its large prime factor.
- `pairingcurves.quotient_group` – counts points by order on a small
  curve and its degree 2 extension.

A short example:

```python
from pairingcurves.base_curves import generate_parameters, format_parameters

params = generate_parameters(256)
print(format_parameters(params))
```

## Commands

| Command | What it does |
| --- | --- |
| `base-curve-gen` | Writes `Curve_<size>_params.dat` into the current directory for the 160, 256, 384 and 512 bit curves, each with a random base point. |
| `base-curves-embed <name>_full_sort.csv` | Checks each listed curve for an embedding degree up to 256 and writes `<name>_embed.dat`. |
| `pairing-gen <log2(r)>` | Searches for pairing-friendly parameters and writes them to `pair.NNN`. |
| `pairing-sweep-alpha <log2(r) max>` | Asks for an embedding degree (5, 7, 11, 13, 17, 19, 23, 29 or 31) and sweeps alpha values, writing `pairings_alpha.KK`. |
| `get-curve <discriminant> <prime> <t> [list file]` | Reads the Hilbert class polynomial list (default `Hilbert_Polynomials.list`), finds the polynomial's roots and reports which curve (or twist) has `p + 1 - t` points. |
| `pull-curves <file>.output` | Collects the curves from a search output and writes them, largest prime first, to `<file>.saved`. |
| `quotient-group` | Counts points by order on a small curve and its degree 2 extension, showing the size of the quotient group. |
| `signatures-keygen` | Reads `random.data` from the current directory, builds the degree 11 signature system and writes `curve_11_parameters.bin` and `key_data_11.skpk`. |
| `signatures-demo [directory]` | Reads the system, the keys and `message.dat` (from the given directory or the current one), then signs, aggregates and verifies, including a subgroup signature. |

## What this package does not do

- It does not count the points on a curve. `pull-curves` and
  `base-curves-embed` work on lists of curves and orders that were
  produced by a point-counting search run elsewhere.
- It does not compute Hilbert class polynomials; `get-curve` needs a
  list of them supplied as a file.
- It has no zero-knowledge proof tooling.