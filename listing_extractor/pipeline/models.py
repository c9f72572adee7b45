"""Result records for batch extraction."""

from dataclasses import dataclass
from typing import Optional

from listing_extractor.domain.exceptions import ListingExtractionError
from listing_extractor.domain.models import NormalizedListing
from listing_extractor.utils.urls import normalize_listing_url


@dataclass
class ExtractionOutcome:
    """
    Result of extracting one URL within a batch.

    Exactly one of ``listing`` and ``error`` is set.

    Attributes:
        url: Requested listing URL
        listing: Extracted listing on success
        error: Typed failure (unsupported source, blocked page, fetch failure)
        duration_seconds: Time spent on this URL, fetch included
    """

    url: str
    listing: Optional[NormalizedListing] = None
    error: Optional[ListingExtractionError] = None
    duration_seconds: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.listing is not None

    @property
    def listing_key(self) -> Optional[str]:
        """URL without query or fragment, for keying results across runs."""
        return normalize_listing_url(self.url)

    @property
    def error_type(self) -> Optional[str]:
        return type(self.error).__name__ if self.error is not None else None
