"""Provider inspection commands for the AIP CLI."""

from typing import Any, Dict, List

import click

from ...models import PricingDocument
from ..formatters import create_console, format_json, format_providers_json, format_providers_table, format_yaml
from ..utils import load_document


def provider_rows(document: PricingDocument) -> List[Dict[str, Any]]:
    """Flatten providers into display rows, keeping published order."""
    return [
        {
            "key": p.key,
            "label": p.label,
            "description": p.description,
            "website": p.website,
            "provider_host": p.provider_host,
            "markup": {
                "text_percentage": p.markup.text_percentage,
                "image_percentage": p.markup.image_percentage,
            },
            "model_count": len(p.models),
        }
        for p in document.providers
    ]


@click.group()
def providers() -> None:
    """Inspect providers in the pricing document."""
    pass


@providers.command("list")
@click.option("--bust-cache", is_flag=True, help="Fetch fresh data instead of using the process cache.")
@click.pass_context
def list_providers(ctx: click.Context, bust_cache: bool) -> None:
    """List providers with their markups and model counts."""
    document = load_document(ctx.obj, bust_cache=bust_cache)
    rows = provider_rows(document)
    format_type = ctx.obj["format"]

    if format_type == "json":
        format_json(format_providers_json(rows))
    elif format_type == "yaml":
        format_yaml(format_providers_json(rows))
    else:
        format_providers_table(rows, create_console(no_color=ctx.obj["no_color"]))
