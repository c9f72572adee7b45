"""at home extractor: label-adjacent selector rules."""

from typing import Iterable

from listing_extractor.domain.models import RawFieldCandidate, SourceProfile

from .base import BaseExtractor
from .document import ListingDocument
from .rules import FieldRule, label_selectors

# Specific class hooks first, then label cells, then broad class heuristics
ATHOME_RULES = (
    FieldRule(
        "title",
        (
            "h1.property-title",
            ".property-title",
            ".propertyName",
            ".property-name",
            "h1",
            "[class*='property'][class*='title']",
        ),
    ),
    FieldRule(
        "price",
        (
            ".price",
            ".property-price",
            ".priceValue",
            ".price-value",
            *label_selectors("価格"),
            "[class*='price']",
            "[class*='Price']",
        ),
    ),
    FieldRule("address", (".address", ".propertyAddress", *label_selectors("所在地", "住所"), ".location")),
    FieldRule("property_type", ("[data-name='物件種目']", *label_selectors("物件種目", "物件種別", "種別"))),
    FieldRule("floor_plan", (".floor-plan", ".floorPlan", "[data-name='間取り']", *label_selectors("間取り"))),
    FieldRule("construction", (".year-built", *label_selectors("築年月", "完成時期", "築年"))),
    FieldRule(
        "building_area",
        (*label_selectors("建物面積", "専有面積", "延床面積"), "[data-name*='建物面積']"),
    ),
    FieldRule("land_area", (*label_selectors("土地面積", "敷地面積"), "[data-name*='土地面積']")),
    FieldRule("building_floors", (*label_selectors("階建", "建物階数"), ".floors", "[class*='floors']")),
    FieldRule("floor_number", label_selectors("所在階")),
    FieldRule("access", (*label_selectors("交通", "アクセス"), ".access")),
    FieldRule("transportation", (*label_selectors("交通", "アクセス"), ".access")),
    FieldRule("building_structure", (*label_selectors("建物構造", "構造"), ".structure")),
    FieldRule("road_access", label_selectors("接道状況", "接道")),
    FieldRule("building_coverage_ratio", label_selectors("建ぺい率", "建蔽率")),
    FieldRule("floor_area_ratio", label_selectors("容積率")),
    FieldRule("land_category", (*label_selectors("地目"), "[data-name*='地目']")),
    FieldRule(
        "zoning",
        (*label_selectors("用途地域", "用途"), "[class*='zoning']", "[data-name*='用途']"),
    ),
    FieldRule("urban_planning", label_selectors("都市計画")),
    FieldRule("land_rights", label_selectors("土地権利", "権利形態")),
    FieldRule("yield_rate", ("[class*='yield']", "[data-name*='利回り']", *label_selectors("利回り"))),
)


class AthomeExtractor(BaseExtractor):
    """Extractor for at home (athome.co.jp) detail pages.

    at home renders specs as ``<dt>/<dd>`` or ``<th>/<td>`` pairs with stable
    Japanese labels, so each field is a short list of selectors tried in order.
    """

    PROFILE = SourceProfile.ATHOME
    RULES = ATHOME_RULES

    def _structured_candidates(self, document: ListingDocument) -> Iterable[RawFieldCandidate]:
        return self._rule_candidates(document, self.RULES)
