"""Extraction orchestration: URL (and optionally HTML) in, NormalizedListing out."""

import time
from typing import Iterable, Iterator, Optional, Tuple
from uuid import uuid4

import requests

from listing_extractor.config.models import ExtractorConfig
from listing_extractor.domain.exceptions import ListingExtractionError
from listing_extractor.domain.models import NormalizedListing, SourceProfile
from listing_extractor.extractors import ListingDocument, get_extractor
from listing_extractor.fetching import PageFetcher
from listing_extractor.logging import get_logger
from listing_extractor.logging.context import log_context
from listing_extractor.sanitization import SanitizationPolicy
from listing_extractor.sources import (
    BlockedPage,
    UnsupportedSource,
    classify_source,
    find_blocked_signature,
    listing_hostname,
)
from listing_extractor.utils.urls import normalize_listing_url

from .assembler import ListingAssembler
from .models import ExtractionOutcome

logger = get_logger(__name__, component="pipeline")


class ListingExtractionService:
    """
    Runs one listing through classification, retrieval and extraction.

    The order of checks matters: an unsupported host fails before any
    network access, and a blocked page fails before any extractor sees it.
    Field-level misses never fail the call; they show up in the listing's
    diagnostics.
    """

    def __init__(
        self,
        fetcher: Optional[PageFetcher] = None,
        assembler: Optional[ListingAssembler] = None,
    ):
        """
        Initialize the service.

        Args:
            fetcher: Fetcher used when the caller supplies no HTML. Created
                with default settings on first use if omitted.
            assembler: Assembler folding candidates into listings
        """
        self._fetcher = fetcher
        self.assembler = assembler or ListingAssembler()

    @classmethod
    def from_config(
        cls,
        config: ExtractorConfig,
        session: Optional[requests.Session] = None,
    ) -> "ListingExtractionService":
        """Build a service from a loaded configuration."""
        return cls(
            fetcher=PageFetcher.from_config(config.fetch, session=session),
            assembler=ListingAssembler(SanitizationPolicy(), as_of_year=config.extraction.as_of_year),
        )

    @property
    def fetcher(self) -> PageFetcher:
        if self._fetcher is None:
            self._fetcher = PageFetcher()
        return self._fetcher

    def close(self) -> None:
        if self._fetcher is not None:
            self._fetcher.close()

    def extract(self, url: str, html: Optional[str] = None) -> NormalizedListing:
        """
        Extract a normalized listing.

        Args:
            url: Listing URL; its hostname selects the extraction profile
            html: Previously fetched document. Fetched from ``url`` if None.

        Returns:
            NormalizedListing. If parsing or extraction fails unexpectedly,
            an empty listing whose diagnostics carry a ``parse_error`` note.

        Raises:
            UnsupportedSource: Hostname matches no known site (nothing is fetched)
            BlockedPage: Document is an auth wall or challenge page
            FetchTimeout: Document did not arrive in time
            FetchError: Non-2xx status or network failure
        """
        profile = classify_source(url)

        with log_context(url=url, profile=profile.value):
            if profile is SourceProfile.UNSUPPORTED:
                hostname = listing_hostname(url)
                logger.warning(
                    f"Unsupported listing source: {hostname or url}",
                    extra={"event": "extraction.unsupported", "hostname": hostname},
                )
                raise UnsupportedSource(
                    f"Unsupported listing source: {hostname or url}", url=url, hostname=hostname
                )

            if html is None:
                html = self.fetcher.fetch(url).text

            signature = find_blocked_signature(html)
            if signature is not None:
                logger.warning(
                    "Blocked or interstitial page detected",
                    extra={
                        "event": "extraction.blocked",
                        "signature": signature or "empty_document",
                        "html_length": len(html or ""),
                    },
                )
                raise BlockedPage(
                    f"Blocked page for {url}: {signature or 'empty document'}",
                    url=url,
                    profile=profile,
                    signature=signature,
                )

            try:
                document = ListingDocument.parse(url, html)
                candidates = get_extractor(profile).extract(document)
            except Exception as e:
                # Unexpected markup must not take the caller down; report an empty listing
                logger.error(
                    f"Extraction failed: {e}",
                    extra={"event": "extraction.parse_error", "error_type": type(e).__name__},
                    exc_info=True,
                )
                return NormalizedListing.empty(profile, note=f"parse_error: {e}")

            return self.assembler.assemble(profile, candidates, html_length=len(html))

    def extract_batch(self, items: Iterable[Tuple[str, Optional[str]]]) -> Iterator[ExtractionOutcome]:
        """
        Extract several listings independently.

        Each ``(url, html)`` pair is processed on its own; typed failures are
        yielded as outcomes and never stop the batch. No retries.

        Yields:
            ExtractionOutcome per request, in input order
        """
        batch_id = uuid4().hex
        succeeded = 0
        failed = 0

        logger.info("Batch extraction started", extra={"event": "batch.started", "batch_id": batch_id})

        for url, html in items:
            started = time.monotonic()
            try:
                listing = self.extract(url, html)
            except ListingExtractionError as e:
                failed += 1
                logger.warning(
                    f"Extraction failed for {url}: {e}",
                    extra={
                        "event": "batch.item.failed",
                        "batch_id": batch_id,
                        "url": url,
                        "listing_key": normalize_listing_url(url),
                        "error_type": type(e).__name__,
                    },
                )
                yield ExtractionOutcome(url=url, error=e, duration_seconds=time.monotonic() - started)
                continue

            succeeded += 1
            yield ExtractionOutcome(url=url, listing=listing, duration_seconds=time.monotonic() - started)

        logger.info(
            "Batch extraction completed",
            extra={"event": "batch.completed", "batch_id": batch_id, "succeeded": succeeded, "failed": failed},
        )
