"""Command-line entry point: extract one listing and print it as JSON."""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from listing_extractor.config.exceptions import ConfigurationError
from listing_extractor.config.loader import load_config
from listing_extractor.config.models import ExtractorConfig
from listing_extractor.fetching import FetcherConfigurationError, FetchError, FetchTimeout, decode_document
from listing_extractor.logging import get_logger
from listing_extractor.logging.config import configure_logging
from listing_extractor.pipeline import ListingExtractionService
from listing_extractor.sources import BlockedPage, UnsupportedSource

logger = get_logger(__name__, component="cli")

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_UNSUPPORTED = 2
EXIT_BLOCKED = 3
EXIT_FETCH_FAILED = 4


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="listing-extractor",
        description="Extract a normalized real-estate listing from an at home, SUUMO or LIFULL HOME'S page",
    )
    parser.add_argument("url", help="Listing URL; its hostname selects the extraction profile")
    parser.add_argument(
        "--html",
        type=Path,
        default=None,
        help="Previously saved HTML for the URL (skips fetching)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: listing_extractor.yaml if present)",
    )
    parser.add_argument(
        "--as-of-year",
        type=int,
        default=None,
        help="Reference year for ages such as 築20年 (default: current UTC year)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    return parser


def load_runtime_config(config_path: Optional[Path], as_of_year: Optional[int]) -> ExtractorConfig:
    """
    Load configuration and apply CLI overrides.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    config = load_config(config_path)

    if as_of_year is not None:
        if not 1900 <= as_of_year <= 2200:
            raise ConfigurationError(
                f"Invalid --as-of-year: {as_of_year}",
                suggestions=["Use a four-digit western calendar year, e.g. 2024"],
            )
        extraction = config.extraction.model_copy(update={"as_of_year": as_of_year})
        config = config.model_copy(update={"extraction": extraction})

    return config


def read_html(path: Path) -> str:
    """Read a saved page, detecting its encoding like a fetched one."""
    try:
        body = path.read_bytes()
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read HTML file: {path}",
            errors=[str(e)],
            suggestions=[f"Ensure {path} exists and is readable"],
        ) from e

    text, _ = decode_document(body)
    return text


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the listing extractor CLI.

    Returns:
        Exit code: 0 success, 1 configuration error, 2 unsupported source,
        3 blocked page, 4 fetch failure.
    """
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        config = load_runtime_config(args.config, args.as_of_year)
        configure_logging(
            level=args.log_level or config.logging.level,
            format_type=config.logging.format,
            environment=config.logging.environment,
        )

        html = read_html(args.html) if args.html else None
        service = ListingExtractionService.from_config(config)
    except (ConfigurationError, FetcherConfigurationError) as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    try:
        listing = service.extract(args.url, html)
    except UnsupportedSource as e:
        print(f"Unsupported source: {e}", file=sys.stderr)
        return EXIT_UNSUPPORTED
    except BlockedPage as e:
        print(f"Blocked page: {e}", file=sys.stderr)
        return EXIT_BLOCKED
    except (FetchError, FetchTimeout) as e:
        print(f"Fetch failed: {e}", file=sys.stderr)
        return EXIT_FETCH_FAILED
    finally:
        service.close()

    logger.info(
        "Listing extracted",
        extra={
            "event": "cli.extracted",
            "found_count": len(listing.diagnostics.found_fields),
            "needs_reextraction": listing.diagnostics.needs_reextraction(),
        },
    )

    print(json.dumps(listing.model_dump(mode="json"), ensure_ascii=False, indent=2))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
