"""Root of the typed failures surfaced to callers."""


class ListingExtractionError(Exception):
    """Base exception for all hard failures of an extraction call.

    Per-field misses are never errors; only transport failures, unsupported
    sources and blocked pages derive from this class.
    """

    pass
