"""Cached access to the published AI pricing document.

This package fetches the pricing document for a deployment environment
(per-token text rates, per-image rates, markups, moderation thresholds and
billing identifiers), keeps the first successfully fetched copy for the life
of the process, and can bypass that cache on request.
"""

# Version of the package
try:
    from importlib.metadata import version as _version

    __version__ = _version("ai-pricing")
except ImportError:
    raise ImportError(
        "Failed to determine package version. This package requires Python 3.8+ "
        "where importlib.metadata is available, or must be installed as a package."
    )

# Import main components for easier access
from .cache import PricingCache, get_ai_pricing
from .config import PricingConfig, pricing_url
from .decoding import decode_pricing_document, encode_pricing_document, loads_pricing_document
from .errors import (
    ConfigurationError,
    DecodeError,
    FetchError,
    HttpStatusError,
    PricingError,
    TransportError,
)
from .fetcher import PricingFetcher, fetch_pricing_json
from .models import (
    Categories,
    CategoryScore,
    ImagePricing,
    Markup,
    Model,
    ModerationThreshold,
    Pricing,
    PricingDocument,
    ProdPriceIds,
    Provider,
    TextPricing,
)

# Define public API
__all__ = [
    # Cache
    "PricingCache",
    "get_ai_pricing",
    # Fetching and configuration
    "PricingFetcher",
    "fetch_pricing_json",
    "PricingConfig",
    "pricing_url",
    # Decoding
    "decode_pricing_document",
    "encode_pricing_document",
    "loads_pricing_document",
    # Data model
    "PricingDocument",
    "Provider",
    "Model",
    "Markup",
    "ModerationThreshold",
    "Categories",
    "CategoryScore",
    "Pricing",
    "TextPricing",
    "ImagePricing",
    "ProdPriceIds",
    # Errors
    "PricingError",
    "ConfigurationError",
    "FetchError",
    "TransportError",
    "HttpStatusError",
    "DecodeError",
]
