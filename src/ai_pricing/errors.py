"""Error types for the AI pricing client.

This module defines the error types raised while resolving, fetching and
decoding the remote pricing document.
"""

from typing import Optional


class PricingError(Exception):
    """Base class for all pricing-related errors.

    This is the parent class for all package-specific exceptions.
    """

    def __init__(self, message: str) -> None:
        """Initialize pricing error.

        Args:
            message: Error message
        """
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message


class ConfigurationError(PricingError):
    """Raised when a configuration value is invalid.

    Examples:
        >>> try:
        ...     PricingConfig(timeout=-1)
        ... except ConfigurationError as e:
        ...     print(f"Bad setting {e.setting}: {e}")
    """

    def __init__(self, message: str, setting: Optional[str] = None) -> None:
        """Initialize configuration error.

        Args:
            message: Error message
            setting: Name of the offending setting or environment variable
        """
        super().__init__(message)
        self.setting = setting


class FetchError(PricingError):
    """Base class for failures while fetching the pricing document.

    Every fetch failure carries the URL that was being accessed so callers
    can report or retry it.
    """

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        """Initialize fetch error.

        Args:
            message: Error message
            url: URL that was being accessed
        """
        super().__init__(message)
        self.url = url


class TransportError(FetchError):
    """Raised when the connection could not be established or timed out.

    Examples:
        >>> try:
        ...     get_ai_pricing("dev")
        ... except TransportError as e:
        ...     print(f"Network failure for {e.url}: {e}")
    """

    pass


class HttpStatusError(FetchError):
    """Raised when the server answers with a non-success status.

    Examples:
        >>> try:
        ...     get_ai_pricing("staging")
        ... except HttpStatusError as e:
        ...     print(f"Server returned {e.status_code}")
    """

    def __init__(self, message: str, status_code: int, url: Optional[str] = None) -> None:
        """Initialize HTTP status error.

        Args:
            message: Error message
            status_code: HTTP status code returned by the server
            url: URL that was being accessed
        """
        super().__init__(message, url)
        self.status_code = status_code


class DecodeError(FetchError):
    """Raised when a response body does not match the pricing schema.

    The ``field`` attribute holds the path of the offending value, for
    example ``providers[0].models[3].pricing``, when it can be determined.
    """

    def __init__(self, message: str, field: Optional[str] = None, url: Optional[str] = None) -> None:
        """Initialize decode error.

        Args:
            message: Error message
            field: Path of the field that failed to decode
            url: URL the body was fetched from, if any
        """
        super().__init__(message, url)
        self.field = field


class CacheContention(PricingError):
    """Raised internally when a cache slot has already been committed.

    The cache resolves this itself by returning the committed value; it is
    never raised to callers of ``PricingCache.get``.
    """

    pass
