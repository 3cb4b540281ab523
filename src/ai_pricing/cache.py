"""Process-wide cache for the pricing document.

This module provides the PricingCache class, which hands out the pricing
document from a single write-once slot and fetches it on first use.

Typical usage:

    from ai_pricing import get_ai_pricing  # singleton helper

    pricing = get_ai_pricing("prod")                    # cached after first call
    fresh = get_ai_pricing("prod", bust_cache=True)     # never touches the cache

The slot is filled at most once per cache instance. Fetches run without any
lock held; concurrent first callers may each fetch, but only one document is
committed and every caller gets that committed instance back.
"""

import threading
from typing import Generic, Optional, TypeVar, cast

from .config import PricingConfig
from .errors import CacheContention, FetchError
from .fetcher import PricingFetcher
from .logging import LogEvent, log_debug, log_info, log_warning
from .models import PricingDocument

T = TypeVar("T")


class _OnceSlot(Generic[T]):
    """A slot that can be written exactly once.

    Reads are plain attribute loads and never block. The write is guarded by
    a lock so that only the first writer commits; later writers get
    :class:`CacheContention`.
    """

    def __init__(self) -> None:
        self._value: Optional[T] = None
        self._lock = threading.Lock()

    def get(self) -> Optional[T]:
        return self._value

    def set(self, value: T) -> None:
        with self._lock:
            if self._value is not None:
                raise CacheContention("Slot was already initialized")
            self._value = value


class PricingCache:
    """Cache-or-fetch access to the pricing document."""

    _default_instance: Optional["PricingCache"] = None
    _instance_lock = threading.RLock()

    @classmethod
    def get_default(cls) -> "PricingCache":
        """Get the process-wide cache instance with standard configuration.

        Returns:
            The default PricingCache instance
        """
        with cls._instance_lock:
            if cls._default_instance is None:
                cls._default_instance = cls()
            return cls._default_instance

    @staticmethod
    def cleanup() -> None:
        """Drop the default instance so the next lookup starts empty.

        Existing instances keep their slot; callers holding a document keep it.
        """
        with PricingCache._instance_lock:
            PricingCache._default_instance = None

    def __init__(self, config: Optional[PricingConfig] = None, fetcher: Optional[PricingFetcher] = None):
        """Initialize a new cache instance.

        Args:
            config: Configuration for this cache. If None, default
                    configuration (including AIP_* overrides) is used.
            fetcher: Fetcher used for network access. If None, one is built
                     with the configured timeout.
        """
        self.config = config or PricingConfig()
        self._fetcher = fetcher or PricingFetcher(timeout=self.config.timeout)
        self._slot: _OnceSlot[PricingDocument] = _OnceSlot()

    @property
    def is_filled(self) -> bool:
        """Check if a document has been committed to the cache."""
        return self._slot.get() is not None

    def get(self, env: str, bust_cache: bool = False) -> PricingDocument:
        """Return the pricing document for ``env``.

        Args:
            env: Deployment environment used to build the document URL
            bust_cache: Fetch a fresh document and return it without reading
                        or writing the cache

        Returns:
            The cached document, or a freshly fetched one when ``bust_cache``
            is set. After the first successful cached call the same instance
            is returned for the life of this cache, whatever ``env`` is given.

        Raises:
            TransportError: If the connection failed or timed out
            HttpStatusError: If the server returned a non-success status
            DecodeError: If the body is not a valid pricing document
        """
        url = self.config.pricing_url(env)

        if bust_cache:
            log_debug(LogEvent.PRICING_CACHE, "Bypassing cache", env=env, url=url)
            return self._fetcher.fetch(url)

        cached = self._slot.get()
        if cached is not None:
            return cached

        log_debug(LogEvent.PRICING_CACHE, "Cache empty, fetching", env=env, url=url)
        try:
            document = self._fetcher.fetch(url)
        except FetchError as e:
            log_warning(LogEvent.PRICING_CACHE, "Fetch failed, cache left empty", env=env, error=str(e))
            raise

        try:
            self._slot.set(document)
        except CacheContention:
            # Another caller committed first; its document wins.
            log_debug(LogEvent.PRICING_CACHE, "Lost commit race, using committed document", env=env)
            return cast(PricingDocument, self._slot.get())

        log_info(
            LogEvent.PRICING_CACHE,
            "Committed pricing document to cache",
            env=env,
            metered_price_id=document.metered_price_id,
        )
        return document


def get_ai_pricing(env: str, bust_cache: bool = False) -> PricingDocument:
    """Get the pricing document through the process-wide cache.

    This is a convenience function for ``PricingCache.get_default().get()``.

    Args:
        env: Deployment environment, e.g. ``"dev"`` or ``"prod"``
        bust_cache: Fetch fresh data without reading or updating the cache

    Returns:
        PricingDocument: The shared cached document, or an independent fresh
        one when ``bust_cache`` is set
    """
    return PricingCache.get_default().get(env, bust_cache=bust_cache)
