"""Map a listing URL to its source profile."""

from typing import Optional, Tuple
from urllib.parse import urlsplit

from listing_extractor.domain.models import SourceProfile

# Ordered: "athomes" must resolve to at home before the "homes" pattern is tried
HOSTNAME_PATTERNS: Tuple[Tuple[str, SourceProfile], ...] = (
    ("athome", SourceProfile.ATHOME),
    ("suumo", SourceProfile.SUUMO),
    ("homes", SourceProfile.HOMES),
)


def listing_hostname(url: str) -> Optional[str]:
    """Lower-cased hostname of ``url``, or None when it has none or cannot be parsed."""
    try:
        return urlsplit(url.strip()).hostname
    except (ValueError, AttributeError):
        return None


def classify_source(url: str) -> SourceProfile:
    """Return the source profile whose pattern occurs in the URL's hostname.

    First match wins; anything else, including malformed URLs, is
    ``SourceProfile.UNSUPPORTED``. Never raises.

    Example:
        >>> classify_source("https://www.athome.co.jp/kodate/6978312345/")
        <SourceProfile.ATHOME: 'athome'>
        >>> classify_source("https://example.com/listing/1")
        <SourceProfile.UNSUPPORTED: 'unsupported'>
    """
    hostname = listing_hostname(url)
    if not hostname:
        return SourceProfile.UNSUPPORTED

    for pattern, profile in HOSTNAME_PATTERNS:
        if pattern in hostname:
            return profile

    return SourceProfile.UNSUPPORTED
