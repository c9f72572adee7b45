"""Rejection of script, markup, URL and template fragments before they become field values."""

from .policy import (
    CODE_TOKENS,
    DEFAULT_FIELD_POLICIES,
    TRANSIT_MARKERS,
    URL_TOKENS,
    VENDOR_TOKENS,
    FieldPolicy,
    SanitizationPolicy,
)

__all__ = [
    "SanitizationPolicy",
    "FieldPolicy",
    "DEFAULT_FIELD_POLICIES",
    "CODE_TOKENS",
    "URL_TOKENS",
    "VENDOR_TOKENS",
    "TRANSIT_MARKERS",
]
