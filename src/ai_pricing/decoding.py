"""Decoding of the published JSON document into pricing data structures.

The wire format uses camelCase keys, and moderation categories use the
provider's own names (``hate/threatening``, ``self-harm``...). Model pricing
is an untagged union: an object holds text rates, an array holds per-image
entries. Every failure raises :class:`DecodeError` with the path of the
offending field.
"""

import json
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, TypeVar

from .errors import DecodeError
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

T = TypeVar("T")

# (attribute name, wire name) pairs for structures with fixed wire names
_CATEGORY_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("hate", "hate"),
    ("hate_threatening", "hate/threatening"),
    ("self_harm", "self-harm"),
    ("self_harm_instructions", "self-harm/instructions"),
    ("self_harm_intent", "self-harm/intent"),
    ("sexual_minors", "sexual/minors"),
)
_CATEGORY_SCORE_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("harassment_threatening", "harassment/threatening"),
    ("illicit", "illicit"),
    ("illicit_violent", "illicit/violent"),
    ("violence_graphic", "violence/graphic"),
)
_TEXT_RATE_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("input_per_1k", "inputPer1K"),
    ("input_per_1m", "inputPer1M"),
    ("output_per_1k", "outputPer1K"),
    ("output_per_1m", "outputPer1M"),
)
_CACHED_RATE_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("cached_input_per_1k", "cachedInputPer1K"),
    ("cached_input_per_1m", "cachedInputPer1M"),
)
_MODEL_OPTIONAL_STR_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("model_id", "modelId"),
    ("inference_profile_arn", "inferenceProfileArn"),
    ("inference_profile_id", "inferenceProfileId"),
    ("encoder", "encoder"),
)
_MODEL_OPTIONAL_BOOL_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("streaming", "streaming"),
    ("system_disabled", "systemDisabled"),
    ("deprecated", "deprecated"),
)


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def _expect_object(value: Any, path: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise DecodeError(f"Expected object at '{path or '<root>'}', got {_type_name(value)}", field=path or None)
    return value


def _expect_array(value: Any, path: str) -> List[Any]:
    if not isinstance(value, list):
        raise DecodeError(f"Expected array at '{path}', got {_type_name(value)}", field=path)
    return value


def _as_str(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise DecodeError(f"Expected string at '{path}', got {_type_name(value)}", field=path)
    return value


def _as_float(value: Any, path: str) -> float:
    # bool is an int subclass; JSON true/false is never a rate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(f"Expected number at '{path}', got {_type_name(value)}", field=path)
    return float(value)


def _as_bool(value: Any, path: str) -> bool:
    if not isinstance(value, bool):
        raise DecodeError(f"Expected boolean at '{path}', got {_type_name(value)}", field=path)
    return value


def _required(obj: Mapping[str, Any], key: str, path: str, convert: Callable[[Any, str], T]) -> T:
    field_path = _join(path, key)
    if key not in obj:
        raise DecodeError(f"Missing required field '{field_path}'", field=field_path)
    return convert(obj[key], field_path)


def _optional(obj: Mapping[str, Any], key: str, path: str, convert: Callable[[Any, str], T]) -> Optional[T]:
    value = obj.get(key)
    if value is None:
        return None
    return convert(value, _join(path, key))


def _defaulted(obj: Mapping[str, Any], key: str, path: str, convert: Callable[[Any, str], T], default: T) -> T:
    # absent falls back to the default; an explicit null is a type error
    if key not in obj:
        return default
    return convert(obj[key], _join(path, key))


def _decode_fields(
    obj: Mapping[str, Any], fields: Tuple[Tuple[str, str], ...], path: str, convert: Callable[[Any, str], T]
) -> Dict[str, T]:
    return {attr: _required(obj, wire, path, convert) for attr, wire in fields}


def decode_text_pricing(value: Any, path: str = "pricing") -> TextPricing:
    """Decode the object form of model pricing."""
    obj = _expect_object(value, path)
    rates = _decode_fields(obj, _TEXT_RATE_FIELDS, path, _as_float)
    for attr, wire in _CACHED_RATE_FIELDS:
        rates[attr] = _optional(obj, wire, path, _as_float)  # type: ignore[assignment]
    return TextPricing(**rates)


def decode_image_pricing(value: Any, path: str = "pricing") -> Tuple[ImagePricing, ...]:
    """Decode the array form of model pricing, keeping entry order."""
    entries = []
    for index, raw in enumerate(_expect_array(value, path)):
        entry_path = f"{path}[{index}]"
        obj = _expect_object(raw, entry_path)
        entries.append(
            ImagePricing(
                cost_per_image=_required(obj, "costPerImage", entry_path, _as_float),
                description=_required(obj, "description", entry_path, _as_str),
                size=_required(obj, "size", entry_path, _as_str),
            )
        )
    return tuple(entries)


def decode_pricing(value: Any, path: str = "pricing") -> Pricing:
    """Decode model pricing by probing its structure.

    An object is decoded as text rates, an array as per-image entries. Any
    other shape, or an object missing a required rate, is a decode failure.
    """
    if isinstance(value, Mapping):
        return decode_text_pricing(value, path)
    if isinstance(value, list):
        return decode_image_pricing(value, path)
    raise DecodeError(
        f"Pricing at '{path}' matches neither text rates (object) nor image entries (array), "
        f"got {_type_name(value)}",
        field=path,
    )


def _decode_features(value: Any, path: str) -> Tuple[str, ...]:
    return tuple(_as_str(item, f"{path}[{i}]") for i, item in enumerate(_expect_array(value, path)))


def _decode_prod_price_ids(value: Any, path: str) -> ProdPriceIds:
    obj = _expect_object(value, path)
    return ProdPriceIds(
        cached_input=_optional(obj, "cachedInput", path, _as_str),
        input=_optional(obj, "input", path, _as_str),
        output=_optional(obj, "output", path, _as_str),
    )


def decode_model(value: Any, path: str = "model") -> Model:
    """Decode a single model entry.

    A missing ``key`` or ``features`` takes its default; an explicit null for
    either is rejected.
    """
    obj = _expect_object(value, path)
    kwargs: Dict[str, Any] = {
        "added": _required(obj, "added", path, _as_str),
        "created": _required(obj, "created", path, _as_str),
        "model_type": _required(obj, "type", path, _as_str),
        "key": _defaulted(obj, "key", path, _as_str, ""),
        "features": _defaulted(obj, "features", path, _decode_features, ()),
        "pricing": _optional(obj, "pricing", path, decode_pricing),
        "prod_price_ids": _optional(obj, "prodPriceIds", path, _decode_prod_price_ids),
    }
    for attr, wire in _MODEL_OPTIONAL_STR_FIELDS:
        kwargs[attr] = _optional(obj, wire, path, _as_str)
    for attr, wire in _MODEL_OPTIONAL_BOOL_FIELDS:
        kwargs[attr] = _optional(obj, wire, path, _as_bool)
    return Model(**kwargs)


def _decode_moderation_threshold(value: Any, path: str) -> ModerationThreshold:
    obj = _expect_object(value, path)
    categories_path = _join(path, "categories")
    scores_path = _join(path, "categoryScore")
    categories = _required(obj, "categories", path, _expect_object)
    scores = _required(obj, "categoryScore", path, _expect_object)
    return ModerationThreshold(
        categories=Categories(**_decode_fields(categories, _CATEGORY_FIELDS, categories_path, _as_bool)),
        category_score=CategoryScore(**_decode_fields(scores, _CATEGORY_SCORE_FIELDS, scores_path, _as_float)),
        general=_required(obj, "general", path, _as_float),
    )


def _decode_markup(value: Any, path: str) -> Markup:
    obj = _expect_object(value, path)
    return Markup(
        image_percentage=_required(obj, "imagePercentage", path, _as_float),
        text_percentage=_required(obj, "textPercentage", path, _as_float),
    )


def decode_provider(value: Any, path: str = "provider") -> Provider:
    """Decode a provider entry including its models."""
    obj = _expect_object(value, path)
    models_path = _join(path, "models")
    raw_models = _required(obj, "models", path, _expect_array)
    return Provider(
        key=_required(obj, "key", path, _as_str),
        label=_required(obj, "label", path, _as_str),
        description=_required(obj, "description", path, _as_str),
        website=_required(obj, "website", path, _as_str),
        provider_host=_required(obj, "providerHost", path, _as_str),
        markup=_required(obj, "markup", path, _decode_markup),
        moderation_threshold=_required(obj, "moderationThreshold", path, _decode_moderation_threshold),
        models=tuple(decode_model(raw, f"{models_path}[{i}]") for i, raw in enumerate(raw_models)),
    )


def decode_pricing_document(payload: Any) -> PricingDocument:
    """Build a :class:`PricingDocument` from parsed JSON.

    Args:
        payload: The parsed JSON value (normally a dict)

    Returns:
        The immutable pricing document

    Raises:
        DecodeError: If the payload does not match the pricing schema
    """
    obj = _expect_object(payload, "")
    raw_providers = _required(obj, "providers", "", _expect_array)
    return PricingDocument(
        metered_price_id=_required(obj, "meteredPriceId", "", _as_str),
        providers=tuple(decode_provider(raw, f"providers[{i}]") for i, raw in enumerate(raw_providers)),
    )


def loads_pricing_document(text: str) -> PricingDocument:
    """Parse a JSON string and decode it into a :class:`PricingDocument`.

    Raises:
        DecodeError: If the text is not valid JSON or does not match the schema
    """
    try:
        payload = json.loads(text)
    except ValueError as e:
        raise DecodeError(f"Response body is not valid JSON: {e}") from e
    return decode_pricing_document(payload)


# ----------------------------------------------------------------------
# Encoding
# ----------------------------------------------------------------------


def _put_optional(target: Dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        target[key] = value


def encode_pricing(pricing: Pricing) -> Any:
    """Encode model pricing back to its wire shape."""
    if isinstance(pricing, TextPricing):
        encoded: Dict[str, Any] = {wire: getattr(pricing, attr) for attr, wire in _TEXT_RATE_FIELDS}
        for attr, wire in _CACHED_RATE_FIELDS:
            _put_optional(encoded, wire, getattr(pricing, attr))
        return encoded
    return [
        {"costPerImage": entry.cost_per_image, "description": entry.description, "size": entry.size}
        for entry in pricing
    ]


def encode_model(model: Model) -> Dict[str, Any]:
    """Encode a model entry, omitting optional fields that are unset."""
    encoded: Dict[str, Any] = {
        "added": model.added,
        "created": model.created,
        "features": list(model.features),
        "key": model.key,
        "type": model.model_type,
    }
    for attr, wire in _MODEL_OPTIONAL_STR_FIELDS + _MODEL_OPTIONAL_BOOL_FIELDS:
        _put_optional(encoded, wire, getattr(model, attr))
    if model.pricing is not None:
        encoded["pricing"] = encode_pricing(model.pricing)
    if model.prod_price_ids is not None:
        ids: Dict[str, Any] = {}
        _put_optional(ids, "cachedInput", model.prod_price_ids.cached_input)
        _put_optional(ids, "input", model.prod_price_ids.input)
        _put_optional(ids, "output", model.prod_price_ids.output)
        encoded["prodPriceIds"] = ids
    return encoded


def encode_provider(provider: Provider) -> Dict[str, Any]:
    """Encode a provider entry including its models."""
    threshold = provider.moderation_threshold
    return {
        "description": provider.description,
        "key": provider.key,
        "label": provider.label,
        "markup": {
            "imagePercentage": provider.markup.image_percentage,
            "textPercentage": provider.markup.text_percentage,
        },
        "models": [encode_model(m) for m in provider.models],
        "moderationThreshold": {
            "categories": {wire: getattr(threshold.categories, attr) for attr, wire in _CATEGORY_FIELDS},
            "categoryScore": {wire: getattr(threshold.category_score, attr) for attr, wire in _CATEGORY_SCORE_FIELDS},
            "general": threshold.general,
        },
        "providerHost": provider.provider_host,
        "website": provider.website,
    }


def encode_pricing_document(document: PricingDocument) -> Dict[str, Any]:
    """Encode a document to its JSON-compatible wire shape.

    Decoding the result yields a document equal to ``document``.
    """
    return {
        "meteredPriceId": document.metered_price_id,
        "providers": [encode_provider(p) for p in document.providers],
    }
