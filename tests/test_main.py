"""Unit tests for the command-line entry point.

Tests main() including:
- Argument parsing
- Configuration loading and the --as-of-year override
- Extraction from saved HTML and from a (fixture) fetcher
- Exit codes for every failure class
- JSON output on stdout
"""

import json
import logging
from unittest.mock import patch

import pytest

from listing_extractor.config.exceptions import ConfigurationError
from listing_extractor.main import (
    EXIT_BLOCKED,
    EXIT_CONFIG_ERROR,
    EXIT_FETCH_FAILED,
    EXIT_OK,
    EXIT_UNSUPPORTED,
    build_parser,
    load_runtime_config,
    main,
    read_html,
)
from listing_extractor.pipeline import ListingAssembler, ListingExtractionService

from tests.helpers import FIXTURES_DIR, FixtureFetcher

ATHOME_URL = "https://www.athome.co.jp/kodate/6978312345/"
SUUMO_URL = "https://suumo.jp/ms/chuko/tokyo/sc_shibuya/nc_76543210/"


@pytest.fixture(autouse=True)
def isolated_cli(monkeypatch, tmp_path):
    """Run from an empty directory with no .env loading and restore logging afterwards."""
    for name in ("LOG_LEVEL", "LOG_FORMAT", "ENVIRONMENT", "FETCH_TIMEOUT", "USER_AGENT"):
        monkeypatch.delenv(f"LISTING_EXTRACTOR_{name}", raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("listing_extractor.main.load_dotenv", lambda: None)

    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def fixture_path(name):
    return str(FIXTURES_DIR / name)


class TestBuildParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        """Test that only the URL is required."""
        args = build_parser().parse_args([SUUMO_URL])

        assert args.url == SUUMO_URL
        assert args.html is None
        assert args.config is None
        assert args.as_of_year is None
        assert args.log_level is None

    def test_invalid_log_level(self):
        """Test that unknown log levels are refused by argparse."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([SUUMO_URL, "--log-level", "LOUD"])


class TestLoadRuntimeConfig:
    """Tests for load_runtime_config."""

    def test_as_of_year_override(self):
        """Test that --as-of-year replaces the configured reference year."""
        config = load_runtime_config(None, 2024)

        assert config.extraction.as_of_year == 2024

    def test_no_override(self, tmp_path):
        """Test that the configured year is kept without the flag."""
        path = tmp_path / "config.yaml"
        path.write_text("extraction:\n  as_of_year: 2020\n", encoding="utf-8")

        assert load_runtime_config(path, None).extraction.as_of_year == 2020

    @pytest.mark.parametrize("year", [24, 1492, 3000])
    def test_implausible_year(self, year):
        """Test that years outside 1900-2200 are configuration errors."""
        with pytest.raises(ConfigurationError):
            load_runtime_config(None, year)


class TestReadHtml:
    """Tests for reading saved pages."""

    def test_shift_jis_file(self, tmp_path):
        """Test that saved pages are decoded like fetched ones."""
        path = tmp_path / "page.html"
        path.write_bytes('<meta charset="shift_jis"><p>東京都港区</p>'.encode("shift_jis"))

        assert "東京都港区" in read_html(path)

    def test_missing_file(self, tmp_path):
        """Test that an unreadable file is a configuration error."""
        with pytest.raises(ConfigurationError):
            read_html(tmp_path / "missing.html")


class TestMain:
    """Tests for main() exit codes and output."""

    def test_extract_from_saved_html(self, capsys):
        """Test a successful run prints the listing as JSON."""
        exit_code = main([ATHOME_URL, "--html", fixture_path("athome_kodate.html"), "--as-of-year", "2024"])

        assert exit_code == EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert data["title"] == "世田谷区桜丘3丁目 中古一戸建て"
        assert data["price"] == 59_800_000
        assert data["transportation"][0] == {"line": "小田急小田原線", "station": "千歳船橋駅", "walk_minutes": 8}
        assert data["diagnostics"]["profile"] == "athome"

    def test_output_keeps_japanese_unescaped(self, capsys):
        """Test that JSON output is not ASCII-escaped."""
        main([SUUMO_URL, "--html", fixture_path("suumo_mansion.html")])

        assert "パークハウス渋谷" in capsys.readouterr().out

    def test_logs_go_to_stderr(self, capsys):
        """Test that stdout carries only the JSON document."""
        main([SUUMO_URL, "--html", fixture_path("suumo_mansion.html"), "--log-level", "DEBUG"])

        captured = capsys.readouterr()
        json.loads(captured.out)
        assert "assembly.completed" in captured.err

    def test_extract_with_fetch(self, capsys):
        """Test a run that fetches the document."""
        service = ListingExtractionService(
            fetcher=FixtureFetcher({SUUMO_URL: "suumo_mansion.html"}),
            assembler=ListingAssembler(as_of_year=2024),
        )

        with patch.object(ListingExtractionService, "from_config", return_value=service):
            exit_code = main([SUUMO_URL])

        assert exit_code == EXIT_OK
        assert json.loads(capsys.readouterr().out)["price"] == 84_800_000
        assert service.fetcher.closed is True

    def test_unsupported_source(self, capsys):
        """Test the exit code for an unknown host."""
        exit_code = main(["https://example.com/listing/1", "--html", fixture_path("athome_kodate.html")])

        assert exit_code == EXIT_UNSUPPORTED
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Unsupported source" in captured.err

    def test_blocked_page(self, capsys):
        """Test the exit code for a challenge page."""
        exit_code = main([ATHOME_URL, "--html", fixture_path("athome_blocked.html")])

        assert exit_code == EXIT_BLOCKED
        assert "Blocked page" in capsys.readouterr().err

    def test_fetch_failure(self, capsys):
        """Test the exit code when the document cannot be fetched."""
        service = ListingExtractionService(fetcher=FixtureFetcher({}))

        with patch.object(ListingExtractionService, "from_config", return_value=service):
            exit_code = main([SUUMO_URL])

        assert exit_code == EXIT_FETCH_FAILED
        assert "HTTP 404" in capsys.readouterr().err

    def test_missing_html_file(self, tmp_path, capsys):
        """Test that a missing --html file is a configuration error."""
        exit_code = main([SUUMO_URL, "--html", str(tmp_path / "missing.html")])

        assert exit_code == EXIT_CONFIG_ERROR
        assert "Configuration Error" in capsys.readouterr().err

    def test_invalid_config_file(self, tmp_path):
        """Test that an invalid configuration file is reported."""
        path = tmp_path / "config.yaml"
        path.write_text("logging:\n  level: LOUD\n", encoding="utf-8")

        exit_code = main([SUUMO_URL, "--config", str(path)])

        assert exit_code == EXIT_CONFIG_ERROR

    def test_invalid_as_of_year(self):
        """Test that an implausible --as-of-year is a configuration error."""
        assert main([SUUMO_URL, "--as-of-year", "1492"]) == EXIT_CONFIG_ERROR
