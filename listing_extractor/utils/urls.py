"""Listing URL helpers."""

from typing import Optional
from urllib.parse import urlsplit, urlunsplit


def normalize_listing_url(url: Optional[str]) -> Optional[str]:
    """Strip query string and fragment so one listing always maps to one key.

    The scheme and hostname are lower-cased; the path is kept as-is.
    Returns None for blank input and returns unparseable input unchanged.

    Example:
        >>> normalize_listing_url("https://www.athome.co.jp/mansion/123/?utm_source=x#map")
        'https://www.athome.co.jp/mansion/123/'
    """
    if url is None or not url.strip():
        return None

    stripped = url.strip()
    try:
        parts = urlsplit(stripped)
    except ValueError:
        return stripped

    if not parts.scheme or not parts.netloc:
        return stripped

    return urlunsplit((parts.scheme.lower(), parts.netloc.lower(), parts.path, "", ""))
