"""Unit tests for time and URL utilities."""

from datetime import datetime, timezone

import pytest

from listing_extractor.pipeline import ExtractionOutcome
from listing_extractor.utils import current_year, normalize_listing_url, utc_now


class TestUtcNow:
    """Tests for utc_now and current_year."""

    def test_utc_now_returns_utc_datetime(self):
        """Test that utc_now returns a timezone-aware datetime in UTC."""
        now = utc_now()

        assert now.tzinfo == timezone.utc
        assert isinstance(now, datetime)

    def test_utc_now_is_recent(self):
        """Test that utc_now returns a recent timestamp."""
        before = datetime.now(timezone.utc)
        now = utc_now()
        after = datetime.now(timezone.utc)

        assert before <= now <= after

    def test_current_year(self):
        """Test that current_year matches the UTC calendar year."""
        assert current_year() == datetime.now(timezone.utc).year


class TestNormalizeListingUrl:
    """Tests for normalize_listing_url."""

    @pytest.mark.parametrize(
        "url,expected",
        [
            (
                "https://www.athome.co.jp/mansion/123/?utm_source=x#map",
                "https://www.athome.co.jp/mansion/123/",
            ),
            ("HTTPS://SUUMO.JP/ms/chuko/nc_1/", "https://suumo.jp/ms/chuko/nc_1/"),
            ("  https://www.homes.co.jp/tochi/b-1/  ", "https://www.homes.co.jp/tochi/b-1/"),
            ("https://suumo.jp/ms/Chuko/", "https://suumo.jp/ms/Chuko/"),
        ],
    )
    def test_normalization(self, url, expected):
        """Test that query and fragment are dropped and the host lower-cased."""
        assert normalize_listing_url(url) == expected

    @pytest.mark.parametrize("url", [None, "", "   "])
    def test_blank(self, url):
        """Test that blank input has no key."""
        assert normalize_listing_url(url) is None

    @pytest.mark.parametrize("url", ["not a url", "/relative/path?x=1", "https://[::1/broken"])
    def test_unparseable_returned_unchanged(self, url):
        """Test that input without scheme and host is returned as-is."""
        assert normalize_listing_url(url) == url

    def test_outcome_listing_key(self):
        """Test that batch outcomes expose the normalized key."""
        outcome = ExtractionOutcome(url="https://suumo.jp/ms/chuko/nc_1/?page=2")

        assert outcome.listing_key == "https://suumo.jp/ms/chuko/nc_1/"
        assert outcome.succeeded is False
        assert outcome.error_type is None
