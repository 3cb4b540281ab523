"""Pricing data structures.

Every structure is a frozen dataclass and every sequence is a tuple, so a
decoded :class:`PricingDocument` can be shared between threads without copies.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

TEXT_MODEL = "text"
IMAGE_MODEL = "image"


@dataclass(frozen=True)
class TextPricing:
    """Per-token rates for a text model.

    - input/output rates are given per 1K and per 1M tokens
    - cached input rates are only published by providers with a discounted
      cache-hit rate
    """

    input_per_1k: float
    input_per_1m: float
    output_per_1k: float
    output_per_1m: float
    cached_input_per_1k: Optional[float] = None
    cached_input_per_1m: Optional[float] = None

    @property
    def has_cached_input(self) -> bool:
        """Whether a discounted cache-hit rate is published."""
        return self.cached_input_per_1k is not None or self.cached_input_per_1m is not None


@dataclass(frozen=True)
class ImagePricing:
    """Cost of generating one image at a given size."""

    cost_per_image: float
    description: str
    size: str


# A text model is priced by a rate object, an image model by an ordered list
# of per-size entries.
Pricing = Union[TextPricing, Tuple[ImagePricing, ...]]


@dataclass(frozen=True)
class ProdPriceIds:
    """Identifiers of the rates in the external billing system."""

    cached_input: Optional[str] = None
    input: Optional[str] = None
    output: Optional[str] = None


@dataclass(frozen=True)
class Markup:
    """Markup fractions applied on top of provider cost."""

    image_percentage: float
    text_percentage: float


@dataclass(frozen=True)
class Categories:
    """Moderation categories that block content outright when flagged."""

    hate: bool
    hate_threatening: bool
    self_harm: bool
    self_harm_instructions: bool
    self_harm_intent: bool
    sexual_minors: bool


@dataclass(frozen=True)
class CategoryScore:
    """Per-category score thresholds above which content is blocked."""

    harassment_threatening: float
    illicit: float
    illicit_violent: float
    violence_graphic: float


@dataclass(frozen=True)
class ModerationThreshold:
    """Moderation policy checked before content is billed."""

    categories: Categories
    category_score: CategoryScore
    general: float


@dataclass(frozen=True)
class Model:
    """One billable model offered by a provider."""

    added: str
    created: str
    model_type: str
    key: str = ""
    features: Tuple[str, ...] = ()
    model_id: Optional[str] = None
    inference_profile_arn: Optional[str] = None
    inference_profile_id: Optional[str] = None
    pricing: Optional[Pricing] = None
    streaming: Optional[bool] = None
    system_disabled: Optional[bool] = None
    deprecated: Optional[bool] = None
    encoder: Optional[str] = None
    prod_price_ids: Optional[ProdPriceIds] = None

    @property
    def is_text(self) -> bool:
        """Check if the model is billed per token."""
        return self.model_type == TEXT_MODEL

    @property
    def is_image(self) -> bool:
        """Check if the model is billed per image."""
        return self.model_type == IMAGE_MODEL

    @property
    def text_pricing(self) -> Optional[TextPricing]:
        """Text rates, or None when the model is not priced per token."""
        return self.pricing if isinstance(self.pricing, TextPricing) else None

    @property
    def image_pricing(self) -> Tuple[ImagePricing, ...]:
        """Per-image entries in published order (empty for text models)."""
        return self.pricing if isinstance(self.pricing, tuple) else ()


@dataclass(frozen=True)
class Provider:
    """A model provider together with its markup and moderation policy."""

    key: str
    label: str
    description: str
    website: str
    provider_host: str
    markup: Markup
    moderation_threshold: ModerationThreshold
    models: Tuple[Model, ...] = field(default_factory=tuple)

    def get_model(self, key: str) -> Optional[Model]:
        """Return the first model with ``key``, or None."""
        return next((m for m in self.models if m.key == key), None)


@dataclass(frozen=True)
class PricingDocument:
    """Root of the published pricing document.

    Providers keep the publisher's order; keys are expected to be unique but
    lookups simply return the first match.
    """

    metered_price_id: str
    providers: Tuple[Provider, ...] = field(default_factory=tuple)

    def get_provider(self, key: str) -> Optional[Provider]:
        """Return the first provider with ``key``, or None."""
        return next((p for p in self.providers if p.key == key), None)

    @property
    def provider_keys(self) -> Tuple[str, ...]:
        """Provider keys in published order."""
        return tuple(p.key for p in self.providers)
