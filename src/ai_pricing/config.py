"""Configuration for the pricing client.

This module resolves where the pricing document lives for a given deployment
environment and how long a fetch may take. Defaults can be overridden through
``AIP_*`` environment variables.
"""

import os
from typing import Dict, List, Optional, Union

from .errors import ConfigurationError
from .logging import LogEvent, log_debug, log_error

# Environment variables (all prefixed with AIP_)
ENV_BASE_URL = "AIP_BASE_URL"
ENV_PRODUCTION_ENV = "AIP_PRODUCTION_ENV"
ENV_TIMEOUT = "AIP_TIMEOUT"
ENV_DEFAULT_ENV = "AIP_ENV"

DEFAULT_BASE_URL = "https://images.bookcicle.com/ai"
DEFAULT_PRODUCTION_ENV = "prod"
DEFAULT_TIMEOUT = 30.0

PRICING_FILE_STEM = "ai-pricing"


class PricingConfig:
    """Configuration for fetching the pricing document."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        production_env: Optional[str] = None,
        timeout: Optional[Union[float, str]] = None,
    ):
        """Initialize pricing configuration.

        Args:
            base_url: Location the pricing documents are published under. If
                      None, ``AIP_BASE_URL`` or the default host is used.
            production_env: Environment name that selects the unsuffixed
                            production document. If None, ``AIP_PRODUCTION_ENV``
                            or ``"prod"`` is used.
            timeout: Seconds to wait for the remote document. If None,
                     ``AIP_TIMEOUT`` or 30 seconds is used.

        Raises:
            ConfigurationError: If a value is empty or the timeout is not a
                                positive number
        """
        base_url = base_url or os.getenv(ENV_BASE_URL) or DEFAULT_BASE_URL
        base_url = base_url.strip().rstrip("/")
        if not base_url:
            raise ConfigurationError("base_url must not be empty", setting=ENV_BASE_URL)
        self.base_url = base_url

        production_env = production_env or os.getenv(ENV_PRODUCTION_ENV) or DEFAULT_PRODUCTION_ENV
        production_env = production_env.strip()
        if not production_env:
            raise ConfigurationError("production_env must not be empty", setting=ENV_PRODUCTION_ENV)
        self.production_env = production_env

        if timeout is None:
            timeout = os.getenv(ENV_TIMEOUT) or DEFAULT_TIMEOUT
        try:
            self.timeout = self._parse_timeout(timeout)
        except ConfigurationError as e:
            log_error(LogEvent.PRICING_CONFIG, e.message, setting=e.setting)
            raise

        log_debug(
            LogEvent.PRICING_CONFIG,
            "Resolved pricing configuration",
            base_url=self.base_url,
            production_env=self.production_env,
            timeout=self.timeout,
        )

    @staticmethod
    def _parse_timeout(value: Union[float, str]) -> float:
        if isinstance(value, bool):
            raise ConfigurationError(f"Invalid timeout: {value!r}", setting=ENV_TIMEOUT)
        try:
            timeout = float(value)
        except (TypeError, ValueError):
            raise ConfigurationError(f"Invalid timeout: {value!r}", setting=ENV_TIMEOUT)
        if timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {timeout}", setting=ENV_TIMEOUT)
        return timeout

    def pricing_url(self, env: str) -> str:
        """Map an environment name to the URL of its pricing document.

        The production environment maps to ``ai-pricing.json``; every other
        name maps to ``ai-pricing-<env>.json``.

        Args:
            env: Deployment environment name, e.g. ``"dev"`` or ``"prod"``

        Returns:
            The fully formed document URL

        Raises:
            ValueError: If ``env`` is empty
        """
        if not env:
            raise ValueError("Environment name must not be empty")
        if env == self.production_env:
            return f"{self.base_url}/{PRICING_FILE_STEM}.json"
        return f"{self.base_url}/{PRICING_FILE_STEM}-{env}.json"

    def __repr__(self) -> str:
        return (
            f"PricingConfig(base_url={self.base_url!r}, production_env={self.production_env!r}, "
            f"timeout={self.timeout!r})"
        )


def pricing_url(env: str) -> str:
    """Resolve the pricing document URL for ``env`` with the default configuration."""
    return PricingConfig().pricing_url(env)


def get_env_vars() -> Dict[str, Optional[str]]:
    """Get all AIP_* environment variables.

    Returns:
        Dictionary of AIP environment variables and their values, including
        the commonly used ones even when unset
    """
    aip_vars: Dict[str, Optional[str]] = {}
    for key, value in os.environ.items():
        if key.startswith("AIP_"):
            aip_vars[key] = value

    common_vars: List[str] = [ENV_BASE_URL, ENV_PRODUCTION_ENV, ENV_TIMEOUT, ENV_DEFAULT_ENV]
    for var in common_vars:
        if var not in aip_vars:
            aip_vars[var] = None

    return aip_vars
