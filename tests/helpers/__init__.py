"""Test helper utilities for listing extractor tests."""

from .fixture_fetcher import FIXTURES_DIR, FixtureFetcher, load_html

__all__ = ["FIXTURES_DIR", "FixtureFetcher", "load_html"]
