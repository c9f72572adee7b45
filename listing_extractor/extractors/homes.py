"""LIFULL HOME'S extractor: label-anchored scan over the rendered text."""

import re
from typing import Iterable, Tuple

from listing_extractor.domain.models import RawFieldCandidate, SourceProfile

from .base import BaseExtractor
from .document import ListingDocument
from .rules import FieldRule

HOMES_RULES = (
    FieldRule("title", ("h1", "[class*='bukkenName']", "[class*='BukkenName']")),
    FieldRule("price", ("[class*='price']", "[class*='Price']")),
)

# Routes come from the full-text scan: HOME'S puts one route per line
LABELS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("price", ("価格", "販売価格")),
    ("address", ("所在地", "住所")),
    ("property_type", ("物件種目", "物件種別", "種別")),
    ("floor_plan", ("間取り",)),
    ("construction", ("築年月", "完成時期", "築年数")),
    ("building_area", ("専有面積", "建物面積", "延床面積")),
    ("land_area", ("土地面積", "敷地面積")),
    ("building_floors", ("階建", "建物階数")),
    ("floor_number", ("所在階",)),
    ("access", ("交通", "アクセス", "最寄駅")),
    ("building_structure", ("建物構造", "構造")),
    ("road_access", ("接道状況", "接道")),
    ("building_coverage_ratio", ("建ぺい率", "建蔽率")),
    ("floor_area_ratio", ("容積率",)),
    ("land_category", ("地目",)),
    ("zoning", ("用途地域",)),
    ("urban_planning", ("都市計画",)),
    ("land_rights", ("土地権利", "権利形態")),
    ("yield_rate", ("表面利回り", "利回り")),
)

# Occurrences per label; later ones are usually navigation or related listings
MAX_MATCHES_PER_LABEL = 3


def label_pattern(label: str) -> "re.Pattern[str]":
    """A label on its own line (or followed by a colon) and the line holding its value."""
    return re.compile(rf"(?m)^[ \t]*{re.escape(label)}(?:[ \t]*:[ \t]*|[ \t]*\n\s*)(?P<value>[^\n]+)")


LABEL_PATTERNS = tuple((field, tuple(label_pattern(label) for label in labels)) for field, labels in LABELS)


class HomesExtractor(BaseExtractor):
    """Extractor for LIFULL HOME'S (homes.co.jp) detail pages.

    HOME'S markup differs between property types and page generations, but
    the rendered label/value layout is stable, so after a couple of
    structural selectors each field is located by its label in the text.
    """

    PROFILE = SourceProfile.HOMES
    RULES = HOMES_RULES

    def _structured_candidates(self, document: ListingDocument) -> Iterable[RawFieldCandidate]:
        yield from self._rule_candidates(document, self.RULES)

        text = document.normalized_text
        if not text:
            return

        for field, patterns in LABEL_PATTERNS:
            for pattern in patterns:
                for count, match in enumerate(pattern.finditer(text)):
                    if count >= MAX_MATCHES_PER_LABEL:
                        break
                    yield RawFieldCandidate(field, match.group("value").strip(), f"label:{field}")
