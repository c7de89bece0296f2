"""Charcha Manch: constituency reference data and civic discussion backend."""

__version__ = "1.0.0"
