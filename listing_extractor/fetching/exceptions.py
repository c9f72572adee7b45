"""Custom exceptions for the page fetcher."""

from listing_extractor.domain.exceptions import ListingExtractionError


class FetchError(ListingExtractionError):
    """Document retrieval failed.

    Raised for non-2xx responses (``status`` holds the HTTP status) and for
    network-level failures (``status`` is 0). Never retried inside the core.
    """

    def __init__(self, message: str, status: int, url: str) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.url = url


class FetchTimeout(ListingExtractionError):
    """The document did not arrive within the wall-clock timeout.

    Any partially received body is discarded.
    """

    def __init__(self, message: str, url: str, timeout: float) -> None:
        super().__init__(message)
        self.url = url
        self.timeout = timeout


class FetcherConfigurationError(ValueError):
    """Invalid fetcher settings (timeout out of range, empty headers)."""

    pass
