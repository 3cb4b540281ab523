"""Pricing document commands for the AIP CLI."""

from typing import Any, Dict

import click

from ...cache import PricingCache
from ...decoding import encode_pricing_document
from ...errors import ConfigurationError
from ..formatters import create_console, format_json, format_summary_json, format_summary_table, format_yaml
from ..utils import ExitCode, handle_error, load_document


def _resolve_url(env: str) -> str:
    try:
        return PricingCache.get_default().config.pricing_url(env)
    except (ConfigurationError, ValueError) as e:
        handle_error(e, ExitCode.INVALID_USAGE)
        raise


@click.command()
@click.pass_context
def url(ctx: click.Context) -> None:
    """Print the URL of the pricing document for the selected environment."""
    click.echo(_resolve_url(ctx.obj["env"]))


@click.command()
@click.option("--bust-cache", is_flag=True, help="Fetch fresh data instead of using the process cache.")
@click.option("--full", is_flag=True, help="Output the whole document (json/yaml formats only).")
@click.pass_context
def fetch(ctx: click.Context, bust_cache: bool, full: bool) -> None:
    """Fetch the pricing document and show a summary.

    Examples:
      # Summary for the dev environment
      aip --env dev fetch

      # Whole production document as YAML
      aip --env prod --format yaml fetch --full
    """
    env = ctx.obj["env"]
    format_type = ctx.obj["format"]
    if full and format_type not in ("json", "yaml"):
        handle_error(
            click.BadParameter("--full requires --format json or --format yaml"),
            ExitCode.INVALID_USAGE,
        )

    document_url = _resolve_url(env)
    document = load_document(ctx.obj, bust_cache=bust_cache)

    if full:
        data: Dict[str, Any] = encode_pricing_document(document)
    else:
        data = format_summary_json(
            {
                "env": env,
                "url": document_url,
                "metered_price_id": document.metered_price_id,
                "provider_count": len(document.providers),
                "model_count": sum(len(p.models) for p in document.providers),
                "cached": not bust_cache,
            }
        )

    if format_type == "json":
        format_json(data)
    elif format_type == "yaml":
        format_yaml(data)
    else:
        format_summary_table(data, create_console(no_color=ctx.obj["no_color"]))
