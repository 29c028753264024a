"""Incremental list loading for the toko point-of-sale backend."""

__version__ = "0.1.0"
