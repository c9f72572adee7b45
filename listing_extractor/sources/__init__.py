"""Source identification: which site a URL belongs to, and whether a page is a real listing."""

from .blocked import BLOCKED_PAGE_SIGNATURES, find_blocked_signature, is_blocked_page
from .classifier import HOSTNAME_PATTERNS, classify_source, listing_hostname
from .exceptions import BlockedPage, UnsupportedSource

__all__ = [
    "classify_source",
    "listing_hostname",
    "HOSTNAME_PATTERNS",
    "is_blocked_page",
    "find_blocked_signature",
    "BLOCKED_PAGE_SIGNATURES",
    "UnsupportedSource",
    "BlockedPage",
]
