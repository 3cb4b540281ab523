"""Model listing commands for the AIP CLI."""

from typing import Any, Dict, List, Optional

import click

from ...models import Model, PricingDocument, Provider
from ..formatters import create_console, format_json, format_models_list_json, format_models_table, format_yaml
from ..utils import ExitCode, handle_error, load_document


def _pricing_row(model: Model) -> Optional[Dict[str, Any]]:
    text = model.text_pricing
    if text is not None:
        return {
            "input_per_1m": text.input_per_1m,
            "output_per_1m": text.output_per_1m,
            "cached_input_per_1m": text.cached_input_per_1m,
        }
    images = model.image_pricing
    if images:
        costs = [entry.cost_per_image for entry in images]
        return {
            "min_cost_per_image": min(costs),
            "max_cost_per_image": max(costs),
            "sizes": [entry.size for entry in images],
        }
    return None


def model_rows(providers: List[Provider]) -> List[Dict[str, Any]]:
    """Flatten models of ``providers`` into display rows."""
    rows = []
    for provider in providers:
        for model in provider.models:
            rows.append(
                {
                    "provider": provider.key,
                    "key": model.key,
                    "type": model.model_type,
                    "model_id": model.model_id,
                    "features": list(model.features),
                    "streaming": model.streaming,
                    "deprecated": model.deprecated,
                    "system_disabled": model.system_disabled,
                    "pricing": _pricing_row(model),
                }
            )
    return rows


def _select_providers(document: PricingDocument, provider_key: Optional[str]) -> List[Provider]:
    if provider_key is None:
        return list(document.providers)
    provider = document.get_provider(provider_key)
    if provider is None:
        handle_error(
            click.BadParameter(
                f"Provider '{provider_key}' not found. Available: {', '.join(document.provider_keys)}"
            ),
            ExitCode.PROVIDER_NOT_FOUND,
        )
    return [provider]  # type: ignore[list-item]


@click.group()
def models() -> None:
    """Inspect models and their prices."""
    pass


@models.command("list")
@click.option("--provider", "provider_key", type=str, help="Only list models of this provider key.")
@click.option("--bust-cache", is_flag=True, help="Fetch fresh data instead of using the process cache.")
@click.pass_context
def list_models(ctx: click.Context, provider_key: Optional[str], bust_cache: bool) -> None:
    """List models with their type and headline prices."""
    document = load_document(ctx.obj, bust_cache=bust_cache)
    rows = model_rows(_select_providers(document, provider_key))
    format_type = ctx.obj["format"]

    if format_type == "json":
        format_json(format_models_list_json(rows))
    elif format_type == "yaml":
        format_yaml(format_models_list_json(rows))
    else:
        format_models_table(rows, create_console(no_color=ctx.obj["no_color"]))
