"""Failures raised while identifying the source of a listing page."""

from typing import Optional

from listing_extractor.domain.exceptions import ListingExtractionError
from listing_extractor.domain.models import SourceProfile


class UnsupportedSource(ListingExtractionError):
    """The URL's hostname matches no known listing site.

    Raised before any network or parsing work happens.
    """

    def __init__(self, message: str, url: Optional[str] = None, hostname: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url
        self.hostname = hostname


class BlockedPage(ListingExtractionError):
    """The document is an authentication wall or anti-bot interstitial.

    Attributes:
        url: Page URL
        profile: Source profile the URL was classified as
        signature: Signature that identified the page ("" for an empty document)
    """

    def __init__(self, message: str, url: str, profile: SourceProfile, signature: str) -> None:
        super().__init__(message)
        self.url = url
        self.profile = profile
        self.signature = signature
