"""Minimal perfect hashing building blocks: Jenkins hashing, FCH construction, select structures, graphs and bit utilities."""

__version__ = "0.1.0"