"""SUUMO extractor: walks the property spec table row by row."""

import re
from typing import Dict, Iterable, List, Tuple

from bs4.element import Tag

from listing_extractor.domain.models import RawFieldCandidate, SourceProfile
from listing_extractor.normalization.text import to_halfwidth

from .base import BaseExtractor
from .document import ListingDocument, element_text
from .rules import FieldRule

SPEC_TABLE_SELECTORS = (
    "table.pCell10",
    "table.bdGrayT",
    "table.data_table",
    "div.bukkenSpec table",
    "table[summary*='表']",
)

SUUMO_RULES = (
    FieldRule("title", ("h1.section_h1-header-title", ".mainIndex", "h1")),
    FieldRule("price", (".fs16.fgOrange", "[class*='price']")),
)

# Field -> label vocabulary, most specific label first
LABEL_VOCABULARY: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("title", ("物件名",)),
    ("price", ("価格", "販売価格")),
    ("address", ("所在地", "住所")),
    ("property_type", ("物件種別", "種別")),
    ("floor_plan", ("間取り",)),
    ("construction", ("築年月", "完成時期(築年月)", "完成時期", "築年")),
    ("building_area", ("専有面積", "建物面積", "延床面積")),
    ("land_area", ("土地面積", "敷地面積")),
    ("building_floors", ("階建", "建物階数", "構造・階建て")),
    ("floor_number", ("所在階",)),
    ("access", ("交通", "アクセス", "最寄駅")),
    ("transportation", ("交通", "アクセス", "最寄駅")),
    ("building_structure", ("構造", "建物構造", "構造・階建て")),
    ("road_access", ("接道状況", "接道")),
    ("building_coverage_ratio", ("建ぺい率", "建蔽率", "建ぺい率・容積率")),
    ("floor_area_ratio", ("容積率", "建ぺい率・容積率")),
    ("land_category", ("地目",)),
    ("zoning", ("用途地域",)),
    ("urban_planning", ("都市計画",)),
    ("land_rights", ("土地権利", "敷地の権利形態", "権利形態")),
    ("yield_rate", ("表面利回り", "利回り")),
)

_LABEL_NOISE_RE = re.compile(r"\s+|ヒント")


def normalize_label(text: str) -> str:
    """NFKC-normalize a header cell and drop whitespace and the "ヒント" help link."""
    return _LABEL_NOISE_RE.sub("", to_halfwidth(text))


def spec_tables(document: ListingDocument) -> List[Tag]:
    """Spec tables in priority order; the first table with ``th`` cells if no selector matches."""
    tables: List[Tag] = []
    for selector in SPEC_TABLE_SELECTORS:
        for table in document.soup.select(selector):
            if not any(table is seen for seen in tables):
                tables.append(table)

    if not tables:
        for table in document.soup.find_all("table"):
            if table.find("th"):
                tables.append(table)
                break

    return tables


def table_label_map(tables: Iterable[Tag]) -> Dict[str, str]:
    """Map normalized ``th`` labels to the text of the ``td`` that follows them.

    Rows may hold several ``th/td`` pairs; the first occurrence of a label wins.
    """
    labels: Dict[str, str] = {}
    for table in tables:
        for row in table.find_all("tr"):
            cells = row.find_all(["th", "td"], recursive=False)
            for header, value in zip(cells, cells[1:]):
                if header.name != "th" or value.name != "td":
                    continue
                label = normalize_label(element_text(header))
                text = element_text(value)
                if label and text and label not in labels:
                    labels[label] = text
    return labels


class SuumoExtractor(BaseExtractor):
    """Extractor for SUUMO (suumo.jp) detail pages.

    SUUMO lists specs in ``th``/``td`` tables whose header cells carry help
    links and full-width characters. Labels are normalized before matching:
    an exact label match is preferred, then a header containing the label.
    """

    PROFILE = SourceProfile.SUUMO
    RULES = SUUMO_RULES

    def _structured_candidates(self, document: ListingDocument) -> Iterable[RawFieldCandidate]:
        yield from self._rule_candidates(document, self.RULES)

        labels = table_label_map(spec_tables(document))
        if not labels:
            return

        for field, vocabulary in LABEL_VOCABULARY:
            for label in self._matching_labels(labels, vocabulary):
                yield RawFieldCandidate(field, labels[label], f"table:{label}")

    @staticmethod
    def _matching_labels(labels: Dict[str, str], vocabulary: Tuple[str, ...]) -> List[str]:
        matched: List[str] = []
        for term in vocabulary:
            term = normalize_label(term)
            if term in labels and term not in matched:
                matched.append(term)
        for term in vocabulary:
            term = normalize_label(term)
            for label in labels:
                if term in label and label not in matched:
                    matched.append(label)
        return matched
