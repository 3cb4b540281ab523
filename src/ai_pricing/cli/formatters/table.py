"""Rich table formatter for CLI output."""

import sys
from typing import Any, Dict, List, Optional, TextIO

from rich.console import Console
from rich.table import Table
from rich.text import Text


def create_console(output: Optional[TextIO] = None, no_color: bool = False) -> Console:
    """Create a Rich console instance.

    Args:
        output: Output stream (defaults to stdout)
        no_color: Disable color output

    Returns:
        Console instance
    """
    if output is None:
        output = sys.stdout

    # Let Rich use the actual terminal width to avoid truncating headers
    return Console(file=output, no_color=no_color)


def _format_percentage(value: Optional[float]) -> str:
    if value is None:
        return "N/A"
    return f"{value * 100:g}%"


def _format_cost(value: Optional[float]) -> str:
    if value is None:
        return "N/A"
    return f"${value:g}"


def _format_flag(value: Optional[bool]) -> str:
    if value is None:
        return "N/A"
    return "✓" if value else "✗"


def format_summary_table(summary: Dict[str, Any], console: Optional[Console] = None) -> None:
    """Print a pricing document summary.

    Args:
        summary: Summary with env, url, metered price id and counts
        console: Rich console (will create if None)
    """
    if console is None:
        console = create_console()

    source = "cache" if summary.get("cached") else "fresh fetch"
    console.print(f"[bold]Environment:[/bold] {summary.get('env')}")
    console.print(f"[bold]URL:[/bold] {summary.get('url')}")
    console.print(f"[bold]Metered Price ID:[/bold] {summary.get('metered_price_id')}")
    console.print(f"[bold]Providers:[/bold] {summary.get('provider_count', 0)}")
    console.print(f"[bold]Models:[/bold] {summary.get('model_count', 0)}")
    console.print(f"[bold]Source:[/bold] {source}")


def format_providers_table(providers: List[Dict[str, Any]], console: Optional[Console] = None) -> None:
    """Format providers as a Rich table.

    Args:
        providers: Provider rows in published order
        console: Rich console (will create if None)
    """
    if console is None:
        console = create_console()

    table = Table(title="Providers", show_header=True, header_style="bold magenta")

    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Label")
    table.add_column("Host", style="dim")
    table.add_column("Text\nMarkup", justify="right", no_wrap=True)
    table.add_column("Image\nMarkup", justify="right", no_wrap=True)
    table.add_column("Models", justify="right")

    for provider in providers:
        markup = provider.get("markup", {})
        table.add_row(
            provider.get("key", ""),
            provider.get("label", ""),
            provider.get("provider_host", ""),
            _format_percentage(markup.get("text_percentage")),
            _format_percentage(markup.get("image_percentage")),
            str(provider.get("model_count", 0)),
        )

    console.print(table)


def format_models_table(models: List[Dict[str, Any]], console: Optional[Console] = None) -> None:
    """Format models as a Rich table.

    Text models show per-million input/output rates; image models show the
    cheapest and most expensive per-image cost.

    Args:
        models: Model rows
        console: Rich console (will create if None)
    """
    if console is None:
        console = create_console()

    table = Table(title="Models", show_header=True, header_style="bold magenta")

    table.add_column("Provider", style="yellow", no_wrap=True)
    table.add_column("Model", style="cyan", no_wrap=True)
    table.add_column("Type", justify="center")
    table.add_column("Input\n/1M", justify="right", no_wrap=True)
    table.add_column("Output\n/1M", justify="right", no_wrap=True)
    table.add_column("Cached\n/1M", justify="right", no_wrap=True)
    table.add_column("Per\nImage", justify="right", no_wrap=True)
    table.add_column("Streaming", justify="center")
    table.add_column("Deprecated", justify="center")

    for model in models:
        pricing = model.get("pricing") or {}
        if model.get("type") == "image" and pricing:
            low = pricing.get("min_cost_per_image")
            high = pricing.get("max_cost_per_image")
            per_image = _format_cost(low) if low == high else f"{_format_cost(low)}-{_format_cost(high)}"
        else:
            per_image = "N/A"

        deprecated = model.get("deprecated")
        table.add_row(
            model.get("provider", ""),
            model.get("key", ""),
            model.get("type", ""),
            _format_cost(pricing.get("input_per_1m")),
            _format_cost(pricing.get("output_per_1m")),
            _format_cost(pricing.get("cached_input_per_1m")),
            per_image,
            _format_flag(model.get("streaming")),
            Text(_format_flag(deprecated), style="red" if deprecated else ""),
        )

    console.print(table)


def format_env_vars_table(env_vars: Dict[str, Optional[str]], console: Optional[Console] = None) -> None:
    """Format environment variables as a Rich table.

    Args:
        env_vars: Environment variables
        console: Rich console (will create if None)
    """
    if console is None:
        console = create_console()

    table = Table(title="AIP Environment Variables", show_header=True, header_style="bold magenta")

    table.add_column("Variable", style="cyan")
    table.add_column("Value", style="yellow")
    table.add_column("Set", justify="center")

    for key, value in sorted(env_vars.items()):
        is_set = value is not None
        display_value = value if is_set else "[dim]<not set>[/dim]"
        status = "✓" if is_set else "✗"
        status_style = "green" if is_set else "red"

        table.add_row(key, display_value, Text(status, style=status_style))

    console.print(table)
