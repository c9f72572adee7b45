"""Text cleanup shared by the normalizers."""

import re
import unicodedata
from typing import Optional

_WHITESPACE_RE = re.compile(r"\s+")


def to_halfwidth(text: str) -> str:
    """NFKC-normalize: full-width digits and Latin to ASCII, ㎡ to m2, ％ to %."""
    return unicodedata.normalize("NFKC", text)


def clean_text(text: Optional[str]) -> Optional[str]:
    """Normalize width, collapse whitespace runs to one space and strip.

    Returns None for missing or blank input so callers never store "".
    """
    if text is None:
        return None

    cleaned = _WHITESPACE_RE.sub(" ", to_halfwidth(text)).strip()
    return cleaned or None
