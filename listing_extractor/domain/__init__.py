"""Domain models for the listing extractor."""

from .exceptions import ListingExtractionError
from .models import (
    KEY_FIELDS,
    LISTING_FIELDS,
    MAX_TRANSPORT_ROUTES,
    ExtractionDiagnostics,
    NormalizedListing,
    RawFieldCandidate,
    SourceProfile,
    TransportRoute,
)

__all__ = [
    "SourceProfile",
    "RawFieldCandidate",
    "TransportRoute",
    "ExtractionDiagnostics",
    "NormalizedListing",
    "ListingExtractionError",
    "LISTING_FIELDS",
    "KEY_FIELDS",
    "MAX_TRANSPORT_ROUTES",
]
