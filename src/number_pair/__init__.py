"""Number Pair: a 9x9 tile-matching puzzle engine with pygame and gymnasium front ends."""

__version__ = "0.1.0"
