"""Document retrieval for listing pages.

Usage:
    from listing_extractor.fetching import PageFetcher
    page = PageFetcher(timeout=20).fetch(url)

Exception handling:
    from listing_extractor.fetching import FetchError, FetchTimeout
"""

from .exceptions import FetcherConfigurationError, FetchError, FetchTimeout
from .fetcher import PageFetcher, decode_document
from .models import FetchedPage

__all__ = [
    "PageFetcher",
    "decode_document",
    "FetchedPage",
    "FetchError",
    "FetchTimeout",
    "FetcherConfigurationError",
]
