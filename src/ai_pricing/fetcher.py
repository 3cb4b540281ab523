"""Fetching of the remote pricing document.

A fetch is a single HTTP GET followed by decoding. There are no retries and
no fallbacks here; retry policy belongs to the caller.
"""

from typing import Optional

import requests

from .config import DEFAULT_TIMEOUT
from .decoding import decode_pricing_document
from .errors import DecodeError, HttpStatusError, TransportError
from .logging import LogEvent, log_debug, log_warning
from .models import PricingDocument


class PricingFetcher:
    """Fetches and decodes the pricing document from a URL."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, session: Optional[requests.Session] = None):
        """Initialize the fetcher.

        Args:
            timeout: Seconds to wait for connect and read
            session: Optional session to issue requests through. If None,
                     ``requests.get`` is used.
        """
        self.timeout = timeout
        self._session = session

    def fetch(self, url: str) -> PricingDocument:
        """Fetch the pricing document at ``url``.

        Args:
            url: Fully formed document URL

        Returns:
            A newly decoded pricing document owned by the caller

        Raises:
            ValueError: If ``url`` is empty
            TransportError: If the connection failed or timed out
            HttpStatusError: If the server returned a non-success status
            DecodeError: If the body is not a valid pricing document
        """
        if not url:
            raise ValueError("URL must not be empty")

        log_debug(LogEvent.PRICING_FETCH, "Fetching pricing document", url=url)
        getter = self._session.get if self._session is not None else requests.get
        try:
            response = getter(url, timeout=self.timeout)
        except requests.RequestException as e:
            log_warning(LogEvent.PRICING_FETCH, f"Failed to fetch pricing document: {e}", url=url)
            raise TransportError(f"Failed to fetch {url}: {e}", url=url) from e

        try:
            try:
                response.raise_for_status()
            except requests.HTTPError as e:
                log_warning(
                    LogEvent.PRICING_FETCH,
                    f"HTTP error {response.status_code}",
                    url=url,
                )
                raise HttpStatusError(
                    f"HTTP error {response.status_code} fetching {url}",
                    status_code=response.status_code,
                    url=url,
                ) from e

            # raise_for_status lets unfollowed 3xx responses through
            if not 200 <= response.status_code < 300:
                log_warning(LogEvent.PRICING_FETCH, f"Unexpected status {response.status_code}", url=url)
                raise HttpStatusError(
                    f"HTTP error {response.status_code} fetching {url}",
                    status_code=response.status_code,
                    url=url,
                )

            try:
                payload = response.json()
            except ValueError as e:
                log_warning(LogEvent.PRICING_DECODE, "Response body is not valid JSON", url=url)
                raise DecodeError(f"Response body from {url} is not valid JSON: {e}", url=url) from e
            except requests.RequestException as e:
                # body read can still fail after the headers arrived
                raise TransportError(f"Failed to read response from {url}: {e}", url=url) from e
        finally:
            # Ensure response is closed to prevent resource leaks
            response.close()

        try:
            document = decode_pricing_document(payload)
        except DecodeError as e:
            log_warning(LogEvent.PRICING_DECODE, e.message, url=url, field=e.field)
            e.url = url
            raise

        log_debug(
            LogEvent.PRICING_FETCH,
            "Fetched pricing document",
            url=url,
            providers=len(document.providers),
        )
        return document


def fetch_pricing_json(url: str, timeout: Optional[float] = None) -> PricingDocument:
    """Fetch and decode the pricing document at ``url``.

    Convenience wrapper around :meth:`PricingFetcher.fetch`.
    """
    return PricingFetcher(timeout=DEFAULT_TIMEOUT if timeout is None else timeout).fetch(url)
