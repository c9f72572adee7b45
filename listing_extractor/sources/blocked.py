"""Detection of authentication walls and anti-bot challenge pages.

Listing sites routinely answer automated clients with a challenge page
instead of the listing. Extracting from such a page silently produces wrong
data, so it has to be recognized before any extractor runs.
"""

from typing import Optional

BLOCKED_PAGE_SIGNATURES = (
    "認証中",
    "【アットホーム】認証中",
    "onprotectioninitialized",
    "reeseskip",
    "cookieisset",
    "認証してください",
    "アクセスを確認しています",
    "just a moment...",
    "attention required! | cloudflare",
)


def find_blocked_signature(document_text: Optional[str]) -> Optional[str]:
    """Return the first signature found in ``document_text``, or None.

    Matching is case-insensitive. An empty or missing document returns an
    empty-string marker, since it cannot hold a listing either.
    """
    if not document_text or not document_text.strip():
        return ""

    lowered = document_text.lower()
    for signature in BLOCKED_PAGE_SIGNATURES:
        if signature.lower() in lowered:
            return signature

    return None


def is_blocked_page(document_text: Optional[str]) -> bool:
    """Whether the document is an interstitial/challenge page rather than a listing."""
    return find_blocked_signature(document_text) is not None
