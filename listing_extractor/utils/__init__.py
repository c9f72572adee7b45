"""Utility functions for time handling and listing URLs."""

from .timestamps import current_year, utc_now
from .urls import normalize_listing_url

__all__ = [
    "utc_now",
    "current_year",
    "normalize_listing_url",
]
