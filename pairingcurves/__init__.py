"""Elliptic curves over prime and extension fields, pairings, curve protocols and pairing-based signatures."""

__version__ = "0.1.0"