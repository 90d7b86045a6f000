[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pairingcurves"
version = "0.1.0"
description = "Elliptic curves over prime and extension fields, pairings, signature protocols and pairing-friendly curve search"
requires-python = ">=3.10"
keywords = [
    "elliptic curves",
    "pairings",
    "weil pairing",
    "tate pairing",
    "ecdsa",
    "schnorr",
    "multi-signatures",
    "finite fields",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = [
    "pycryptodome",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
base-curve-gen = "pairingcurves.base_curves:main"
base-curves-embed = "pairingcurves.base_curves:embed_main"
quotient-group = "pairingcurves.quotient_group:main"
pairing-gen = "pairingcurves.pairing_search:gen_main"
pairing-sweep-alpha = "pairingcurves.pairing_search:sweep_main"
signatures-keygen = "pairingcurves.keygen:main"
signatures-demo = "pairingcurves.signatures_demo:main"
get-curve = "pairingcurves.get_curve:main"
pull-curves = "pairingcurves.pull_curves:main"

[tool.hatch.build.targets.wheel]
packages = ["pairingcurves"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
