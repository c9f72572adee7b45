"""Page fetcher: the only component of the extractor that performs I/O.

The fetcher retrieves one listing document under a hard wall-clock deadline.
``requests`` timeouts only bound the connect and the gap between reads, so a
server trickling bytes could hold a read open indefinitely. The body is
streamed under a timer armed for the remaining budget: when it fires, the
socket is shut down (waking any blocked read), the response is closed and
whatever arrived so far is discarded.
"""

import logging
import re
import threading
import time
from contextlib import closing
from typing import Callable, Optional, Tuple

import requests
from bs4 import UnicodeDammit

from listing_extractor.config.models import (
    DEFAULT_ACCEPT,
    DEFAULT_ACCEPT_LANGUAGE,
    DEFAULT_USER_AGENT,
    FetchConfig,
)
from listing_extractor.logging import get_logger

from .exceptions import FetcherConfigurationError, FetchError, FetchTimeout
from .models import FetchedPage

logger = get_logger(__name__, component="fetcher")

_CHARSET_RE = re.compile(r"charset\s*=\s*[\"']?([\w.:-]+)", re.IGNORECASE)


def decode_document(body: bytes, content_type: str = "") -> Tuple[str, str]:
    """Decode an HTML body using the header charset, then in-document declarations.

    Japanese listing sites still serve Shift_JIS and EUC-JP, so the charset is
    never assumed. Returns the text and the encoding that was used.
    """
    declared = _CHARSET_RE.search(content_type)
    known = [declared.group(1)] if declared else []

    dammit = UnicodeDammit(body, known_definite_encodings=known, is_html=True)
    if dammit.unicode_markup is None:
        return body.decode("utf-8", errors="replace"), "utf-8"

    return dammit.unicode_markup, dammit.original_encoding or "utf-8"


class PageFetcher:
    """Fetches listing documents with browser-like headers and a hard timeout.

    Attributes:
        timeout: Wall-clock limit in seconds for the whole document fetch
        max_response_bytes: Largest body accepted before giving up
    """

    CHUNK_SIZE = 64 * 1024
    MIN_TIMEOUT = 1.0
    MAX_TIMEOUT = 120.0

    def __init__(
        self,
        timeout: float = 20.0,
        user_agent: str = DEFAULT_USER_AGENT,
        accept_language: str = DEFAULT_ACCEPT_LANGUAGE,
        max_response_bytes: int = 10 * 1024 * 1024,
        session: Optional[requests.Session] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the fetcher.

        Args:
            timeout: Wall-clock limit in seconds (1-120)
            user_agent: User-Agent header sent with every request
            accept_language: Accept-Language header sent with every request
            max_response_bytes: Largest body accepted
            session: Optional pre-built session (tests inject a mock here)
            clock: Monotonic clock used for the deadline

        Raises:
            FetcherConfigurationError: If timeout is out of range or a header is empty
        """
        if not self.MIN_TIMEOUT <= timeout <= self.MAX_TIMEOUT:
            raise FetcherConfigurationError(
                f"Timeout must be between {self.MIN_TIMEOUT:g} and {self.MAX_TIMEOUT:g} seconds, got: {timeout}"
            )
        if not user_agent or not user_agent.strip():
            raise FetcherConfigurationError("user_agent cannot be empty")
        if not accept_language or not accept_language.strip():
            raise FetcherConfigurationError("accept_language cannot be empty")

        self.timeout = float(timeout)
        self.max_response_bytes = max_response_bytes
        self._clock = clock

        self._session = session if session is not None else requests.Session()
        self._session.headers.update(
            {
                "User-Agent": user_agent.strip(),
                "Accept": DEFAULT_ACCEPT,
                "Accept-Language": accept_language.strip(),
            }
        )

    @classmethod
    def from_config(cls, fetch_config: FetchConfig, session: Optional[requests.Session] = None) -> "PageFetcher":
        """Build a fetcher from the ``fetch`` section of the configuration."""
        return cls(
            timeout=fetch_config.timeout_seconds,
            user_agent=fetch_config.user_agent,
            accept_language=fetch_config.accept_language,
            max_response_bytes=fetch_config.max_response_bytes,
            session=session,
        )

    def close(self) -> None:
        self._session.close()

    def fetch(self, url: str) -> FetchedPage:
        """Retrieve a listing document.

        Args:
            url: Absolute listing URL (validated by the caller)

        Returns:
            FetchedPage with decoded text, status and headers

        Raises:
            FetchTimeout: If the whole document did not arrive within ``timeout``
            FetchError: On non-2xx status, oversize body or network failure
        """
        deadline = self._clock() + self.timeout

        logger.debug(
            f"HTTP GET {url}",
            extra={"event": "fetch.request", "url": url, "timeout": self.timeout},
        )

        try:
            response = self._session.get(url, timeout=self.timeout, stream=True)
        except requests.exceptions.Timeout as e:
            raise self._timeout(url) from e
        except requests.exceptions.RequestException as e:
            raise self._network_error(url, e) from e

        with closing(response):
            status = response.status_code
            if not 200 <= status < 300:
                logger.log(
                    logging.WARNING if status >= 500 else logging.ERROR,
                    f"HTTP {status} error from {url}",
                    extra={"event": "fetch.error", "status_code": status, "url": url},
                )
                raise FetchError(f"HTTP {status}: {response.reason}", status=status, url=url)

            remaining = deadline - self._clock()
            if remaining <= 0:
                raise self._timeout(url)

            expired = threading.Event()
            timer = threading.Timer(remaining, self._cancel, args=(response, url, expired))
            timer.daemon = True
            timer.start()
            try:
                body = self._read_body(response, url, deadline, expired)
            finally:
                timer.cancel()
            headers = {name.lower(): value for name, value in response.headers.items()}
            final_url = response.url or url

        text, encoding = decode_document(body, headers.get("content-type", ""))

        logger.info(
            "Fetched listing document",
            extra={
                "event": "fetch.succeeded",
                "url": url,
                "status_code": status,
                "content_length": len(text),
                "encoding": encoding,
            },
        )

        return FetchedPage(url=final_url, status=status, text=text, encoding=encoding, headers=headers)

    def _read_body(
        self, response: requests.Response, url: str, deadline: float, expired: threading.Event
    ) -> bytes:
        """Stream the body, enforcing the deadline and size limit.

        A read interrupted by the deadline timer surfaces as whatever error the
        closed connection produces; once ``expired`` is set, any such error
        (or a short body ending early) is reported as a timeout.
        """
        chunks = []
        received = 0

        try:
            for chunk in response.iter_content(chunk_size=self.CHUNK_SIZE):
                if expired.is_set() or self._clock() > deadline:
                    raise self._timeout(url)
                if not chunk:
                    continue
                received += len(chunk)
                if received > self.max_response_bytes:
                    logger.error(
                        f"Response from {url} exceeds {self.max_response_bytes} bytes",
                        extra={"event": "fetch.error", "error_type": "ResponseTooLarge", "url": url},
                    )
                    raise FetchError(
                        f"Response exceeds {self.max_response_bytes} bytes",
                        status=response.status_code,
                        url=url,
                    )
                chunks.append(chunk)
        except (FetchError, FetchTimeout):
            raise
        except requests.exceptions.Timeout as e:
            raise self._timeout(url) from e
        except Exception as e:
            if expired.is_set():
                raise self._timeout(url) from e
            if isinstance(e, requests.exceptions.RequestException):
                raise self._network_error(url, e) from e
            raise

        if expired.is_set() or self._clock() > deadline:
            raise self._timeout(url)

        return b"".join(chunks)

    @staticmethod
    def _cancel(response: requests.Response, url: str, expired: threading.Event) -> None:
        """Deadline timer callback: stop the in-flight read from another thread."""
        expired.set()
        try:
            # Closing alone does not wake a thread blocked in recv()
            response.raw.shutdown()
        except (AttributeError, ValueError, OSError) as e:
            logger.debug(
                f"Could not shut down socket for {url}: {e}",
                extra={"event": "fetch.cancel", "url": url, "error_type": type(e).__name__},
            )
        response.close()

    def _timeout(self, url: str) -> FetchTimeout:
        logger.warning(
            f"Fetching {url} exceeded {self.timeout:g} seconds",
            extra={"event": "fetch.timeout", "url": url, "timeout": self.timeout},
        )
        return FetchTimeout(
            f"Fetching {url} exceeded {self.timeout:g} seconds", url=url, timeout=self.timeout
        )

    @staticmethod
    def _network_error(url: str, error: Exception) -> FetchError:
        logger.error(
            f"Request to {url} failed: {error}",
            extra={"event": "fetch.error", "error_type": type(error).__name__, "url": url},
        )
        return FetchError(f"Request to {url} failed: {error}", status=0, url=url)
