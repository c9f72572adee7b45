"""Base extractor with the full-text fallbacks shared by every site.

Site-specific subclasses produce candidates from page structure; this class
appends candidates scanned from the rendered text and the URL path, so a
field the structural strategy misses can still be recovered. Candidates for
one field are ordered by priority: structural first, fallbacks last.
"""

import re
from abc import ABC, abstractmethod
from typing import Iterable, List
from urllib.parse import urlsplit

from listing_extractor.domain.models import RawFieldCandidate, SourceProfile
from listing_extractor.logging import get_logger

from .document import ListingDocument
from .rules import FieldRule

logger = get_logger(__name__, component="extractor")

_AREA_VALUE = r"(?P<value>\d[\d,]*(?:\.\d+)?\s*(?:m\s?2|平米|平方メートル))"
_PERCENT_VALUE = r"(?P<value>\d+(?:\.\d+)?\s*%)"

# (fields fed, pattern) scanned over NFKC-normalized visible text
TEXT_FALLBACK_PATTERNS = (
    (("building_area",), re.compile(rf"(?:建物面積|延床面積|延べ床面積|専有面積|建物)\s*:?\s*{_AREA_VALUE}")),
    (("land_area",), re.compile(rf"(?:土地面積|敷地面積|土地)\s*:?\s*{_AREA_VALUE}")),
    (
        ("building_coverage_ratio", "floor_area_ratio"),
        re.compile(
            r"建[ぺペ蔽]い?率\s*[・/]\s*容積率\s*:?\s*"
            r"(?P<value>\d+(?:\.\d+)?\s*%\s*[/・,、]\s*\d+(?:\.\d+)?\s*%)"
        ),
    ),
    (("building_coverage_ratio",), re.compile(rf"建[ぺペ蔽]い?率\s*:?\s*{_PERCENT_VALUE}")),
    (("floor_area_ratio",), re.compile(rf"容積率\s*:?\s*{_PERCENT_VALUE}")),
    (("yield_rate",), re.compile(rf"(?:表面)?利回り\s*:?\s*{_PERCENT_VALUE}")),
)

# URL path fragment -> property type, checked in order
PROPERTY_TYPE_PATH_HINTS = (
    ("/chukoikkodate/", "一戸建て"),
    ("/ikkodate/", "一戸建て"),
    ("/kodate/", "一戸建て"),
    ("/mansion/", "マンション"),
    ("/ms/", "マンション"),
    ("/tochi/", "土地"),
)


class BaseExtractor(ABC):
    """Base class for all site extractors.

    Subclasses implement ``_structured_candidates``; ``extract`` adds the
    shared fallbacks. Extractors hold no per-document state, so one instance
    may serve any number of documents.
    """

    PROFILE: SourceProfile = SourceProfile.UNSUPPORTED

    def extract(self, document: ListingDocument) -> List[RawFieldCandidate]:
        """Produce ordered raw candidates for every field found in ``document``."""
        candidates = list(self._structured_candidates(document))
        candidates.extend(self._text_fallback_candidates(document))
        candidates.extend(self._url_hint_candidates(document))

        logger.debug(
            "Extracted field candidates",
            extra={
                "event": "extraction.candidates",
                "profile": self.PROFILE.value,
                "candidate_count": len(candidates),
                "fields": len({c.field for c in candidates}),
            },
        )
        return candidates

    @abstractmethod
    def _structured_candidates(self, document: ListingDocument) -> Iterable[RawFieldCandidate]:
        """Candidates derived from the page's markup."""
        pass

    def _rule_candidates(self, document: ListingDocument, rules: Iterable[FieldRule]) -> Iterable[RawFieldCandidate]:
        for rule in rules:
            for selector in rule.selectors:
                text = document.select_text(selector)
                if text:
                    yield RawFieldCandidate(rule.field, text, f"selector:{selector}")

    def _text_fallback_candidates(self, document: ListingDocument) -> Iterable[RawFieldCandidate]:
        text = document.normalized_text
        if not text:
            return

        for fields, pattern in TEXT_FALLBACK_PATTERNS:
            match = pattern.search(text)
            if match:
                for field in fields:
                    yield RawFieldCandidate(field, match.group("value"), f"text:{field}")

        yield RawFieldCandidate("transportation", text, "text:transportation")

    def _url_hint_candidates(self, document: ListingDocument) -> Iterable[RawFieldCandidate]:
        try:
            path = urlsplit(document.url or "").path.lower()
        except ValueError:
            return

        for fragment, property_type in PROPERTY_TYPE_PATH_HINTS:
            if fragment in path:
                yield RawFieldCandidate("property_type", property_type, f"url:{fragment}")
                return
