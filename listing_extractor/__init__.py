"""Structured listing extraction for Japanese real-estate portals."""

__version__ = "0.1.0"
