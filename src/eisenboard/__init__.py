"""Eisenhower-matrix task board with ordered buckets."""

__version__ = "0.3.0"
