"""Tests for folding raw candidates into a NormalizedListing."""

from decimal import Decimal

import pytest

from listing_extractor.domain.models import LISTING_FIELDS, RawFieldCandidate, SourceProfile
from listing_extractor.pipeline import ListingAssembler, price_per_area, round_half_up
from listing_extractor.sanitization import FieldPolicy, SanitizationPolicy


def candidate(field, raw, location="test"):
    return RawFieldCandidate(field=field, raw=raw, location=location)


@pytest.fixture
def assembler():
    return ListingAssembler(as_of_year=2024)


class TestPricePerArea:
    """Tests for the derived yen-per-square-meter value."""

    def test_land_area_preferred(self):
        """Test that land area wins when both areas are known."""
        assert price_per_area(30_000_000, 100.0, 80.0) == 300_000

    def test_building_area_when_no_land(self):
        """Test the building-area fallback."""
        assert price_per_area(30_000_000, None, 80.0) == 375_000

    @pytest.mark.parametrize(
        "price,land,building",
        [(None, 100.0, 80.0), (30_000_000, None, None)],
    )
    def test_missing_inputs(self, price, land, building):
        """Test that missing price or area yields no value."""
        assert price_per_area(price, land, building) is None

    def test_rounds_half_up(self):
        """Test commercial rounding of the quotient."""
        assert price_per_area(5, 2.0, None) == 3
        assert price_per_area(84_800_000, None, 70.12) == 1_209_355

    def test_round_half_up(self):
        """Test rounding at exactly one half."""
        assert round_half_up(Decimal("2.5")) == 3
        assert round_half_up(Decimal("2.49")) == 2


class TestFieldResolution:
    """Tests for per-field candidate selection."""

    def test_first_successful_candidate_wins(self, assembler):
        """Test that later candidates are ignored once a value is accepted."""
        listing = assembler.assemble(
            SourceProfile.ATHOME,
            [candidate("price", "5,980万円"), candidate("price", "1円")],
        )

        assert listing.price == 59_800_000

    def test_rejected_candidate_falls_through(self, assembler):
        """Test that a sanitization rejection moves on to the next candidate."""
        listing = assembler.assemble(
            SourceProfile.ATHOME,
            [
                candidate("address", "function(){return window.location.href}"),
                candidate("address", "東京都世田谷区桜丘3丁目"),
            ],
        )

        assert listing.address == "東京都世田谷区桜丘3丁目"
        assert listing.location == "東京都世田谷区桜丘3丁目"
        assert listing.diagnostics.rejected == {"address": 1}

    def test_unparsed_candidate_falls_through(self, assembler):
        """Test that a clean but unparseable value counts as unparsed."""
        listing = assembler.assemble(
            SourceProfile.SUUMO,
            [candidate("price", "価格未定"), candidate("price", "3,000万円")],
        )

        assert listing.price == 30_000_000
        assert listing.diagnostics.unparsed == {"price": 1}

    def test_all_candidates_rejected(self, assembler):
        """Test that a field with no acceptable candidate stays None."""
        listing = assembler.assemble(
            SourceProfile.SUUMO,
            [candidate("title", "<script>x</script>"), candidate("title", "https://suumo.jp/")],
        )

        assert listing.title is None
        assert listing.diagnostics.found["title"] is False
        assert listing.diagnostics.rejected == {"title": 2}

    def test_text_fields_are_cleaned(self, assembler):
        """Test width folding and whitespace collapse of text values."""
        listing = assembler.assemble(
            SourceProfile.HOMES,
            [candidate("floor_plan", " ３ＬＤＫ\n "), candidate("road_access", "南側\n公道  幅員4.5m")],
        )

        assert listing.floor_plan == "3LDK"
        assert listing.road_access == "南側 公道 幅員4.5m"

    def test_construction_maps_to_year_and_month(self, assembler):
        """Test construction candidates feed year_built and year_built_month."""
        listing = assembler.assemble(SourceProfile.ATHOME, [candidate("construction", "2004年3月")])

        assert listing.year_built == 2004
        assert listing.year_built_month == 3
        assert listing.diagnostics.found["year_built"] is True

    def test_construction_age_uses_as_of_year(self):
        """Test that 築N年 resolves against the assembler's reference year."""
        listing = ListingAssembler(as_of_year=2030).assemble(
            SourceProfile.ATHOME, [candidate("construction", "築10年")]
        )

        assert listing.year_built == 2020
        assert listing.year_built_month is None

    def test_unparsed_construction_reported_as_year_built(self, assembler):
        """Test that construction diagnostics use the listing field name."""
        listing = assembler.assemble(SourceProfile.ATHOME, [candidate("construction", "不明")])

        assert listing.diagnostics.unparsed == {"year_built": 1}

    def test_ratio_fields(self, assembler):
        """Test that a combined ratio cell feeds both ratio fields."""
        listing = assembler.assemble(
            SourceProfile.SUUMO,
            [
                candidate("building_coverage_ratio", "80％・600％"),
                candidate("floor_area_ratio", "80％・600％"),
                candidate("yield_rate", "表面利回り 5.2%"),
            ],
        )

        assert listing.building_coverage_ratio == 80.0
        assert listing.floor_area_ratio == 600.0
        assert listing.yield_rate == 5.2

    def test_structure_and_floors_split(self, assembler):
        """Test that a combined structure cell fills each field with its own part."""
        listing = assembler.assemble(
            SourceProfile.SUUMO,
            [
                candidate("building_floors", "RC10階建"),
                candidate("building_structure", "10階建"),
                candidate("building_structure", "RC10階建"),
            ],
        )

        assert listing.building_floors == "10階建"
        assert listing.building_structure == "RC"
        assert listing.diagnostics.unparsed == {"building_structure": 1}

    def test_unknown_fields_are_ignored(self, assembler):
        """Test that candidates for unknown fields never fail assembly."""
        listing = assembler.assemble(SourceProfile.SUUMO, [candidate("management_fee", "1万8000円")])

        assert listing.is_empty

    def test_custom_policy(self):
        """Test that the assembler applies the policy it is given."""
        policy = SanitizationPolicy({"title": FieldPolicy(max_length=5)})
        listing = ListingAssembler(policy, as_of_year=2024).assemble(
            SourceProfile.SUUMO, [candidate("title", "パークハウス渋谷")]
        )

        assert listing.title is None
        assert listing.diagnostics.rejected == {"title": 1}


class TestTransportResolution:
    """Tests for route parsing, filtering and capping."""

    def test_first_candidate_with_routes_wins(self, assembler):
        """Test that a candidate without routes is skipped."""
        listing = assembler.assemble(
            SourceProfile.ATHOME,
            [
                candidate("transportation", "お問い合わせください"),
                candidate("transportation", "JR山手線 渋谷駅 徒歩5分"),
                candidate("transportation", "東急東横線 代官山駅 徒歩7分"),
            ],
        )

        assert [r.station for r in listing.transportation] == ["渋谷駅"]
        assert listing.diagnostics.unparsed == {"transportation": 1}
        assert listing.diagnostics.found["transportation"] is True

    def test_routes_capped_at_five(self, assembler):
        """Test that eight routes are cut to the first five."""
        text = "、".join(f"テスト{n}線 第{n}駅 徒歩{n}分" for n in range(1, 9))

        listing = assembler.assemble(SourceProfile.ATHOME, [candidate("transportation", text)])

        assert [r.walk_minutes for r in listing.transportation] == [1, 2, 3, 4, 5]

    def test_rejected_route_parts_are_dropped_before_capping(self, assembler):
        """Test that a rejected route does not use one of the five slots."""
        long_line = "長" * 50 + "線"
        routes = [f"{long_line} 渋谷駅 徒歩1分"] + [f"テスト{n}線 第{n}駅 徒歩{n}分" for n in range(2, 8)]

        listing = assembler.assemble(SourceProfile.ATHOME, [candidate("transportation", "、".join(routes))])

        assert [r.walk_minutes for r in listing.transportation] == [2, 3, 4, 5, 6]
        assert listing.diagnostics.rejected == {"transportation": 1}

    def test_no_routes(self, assembler):
        """Test that a listing without routes has an empty list."""
        listing = assembler.assemble(SourceProfile.HOMES, [])

        assert listing.transportation == []
        assert listing.diagnostics.found["transportation"] is False


class TestAssemblyDiagnostics:
    """Tests for found flags, derived values and determinism."""

    def test_found_covers_every_field(self, assembler):
        """Test that found has an entry for every listing field."""
        listing = assembler.assemble(SourceProfile.SUUMO, [candidate("floor_plan", "1K")])

        assert set(listing.diagnostics.found) == set(LISTING_FIELDS)
        assert listing.diagnostics.found_fields == ["floor_plan"]

    def test_price_per_area_derived(self, assembler):
        """Test that price per area uses accepted values only."""
        listing = assembler.assemble(
            SourceProfile.ATHOME,
            [
                candidate("price", "5,980万円"),
                candidate("building_area", "98.5㎡"),
                candidate("land_area", "120.25㎡"),
            ],
        )

        assert listing.price_per_area == 497_297
        assert listing.diagnostics.found["price_per_area"] is True

    def test_html_length_recorded(self, assembler):
        """Test that the document length is carried into diagnostics."""
        listing = assembler.assemble(SourceProfile.SUUMO, [], html_length=1234)

        assert listing.diagnostics.html_length == 1234

    def test_assembly_is_idempotent(self, assembler):
        """Test that identical candidates give identical serialized listings."""
        candidates = [
            candidate("title", "パークハウス渋谷"),
            candidate("price", "8,480万円"),
            candidate("building_area", "70.12m2"),
            candidate("transportation", "JR山手線 渋谷駅 徒歩8分"),
            candidate("address", "<% address %>"),
        ]

        first = assembler.assemble(SourceProfile.SUUMO, candidates)
        second = assembler.assemble(SourceProfile.SUUMO, candidates)

        assert first.model_dump_json() == second.model_dump_json()
