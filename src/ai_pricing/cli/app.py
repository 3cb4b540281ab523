"""Main CLI application for the AI pricing client."""

import logging
from typing import Optional

import click
import rich_click as rich_click

from ..logging import PACKAGE_LOGGER, get_logger
from .utils import resolve_env, resolve_format

# Configure rich-click
rich_click.rich_click.USE_RICH_MARKUP = True
rich_click.rich_click.USE_MARKDOWN = True
rich_click.rich_click.SHOW_ARGUMENTS = True
rich_click.rich_click.GROUP_ARGUMENTS_OPTIONS = True


def _configure_logging(log_level: str) -> None:
    """Send package log records to stderr at ``log_level``."""
    package_logger = get_logger(PACKAGE_LOGGER)
    package_logger.setLevel(log_level)
    if not any(isinstance(h, logging.StreamHandler) for h in package_logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        package_logger.addHandler(handler)


def _print_version(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    try:
        from .. import __version__

        library_version = __version__
    except ImportError:
        library_version = "unknown"

    click.echo(f"AIP CLI version: {library_version}")
    ctx.exit()


@click.group()
@click.option(
    "--env",
    "env_name",
    type=str,
    help="Deployment environment to read pricing for. Takes precedence over AIP_ENV (default: dev).",
)
@click.option(
    "--format",
    type=click.Choice(["table", "json", "yaml"], case_sensitive=False),
    help="Output format. Defaults to 'table' for TTY, 'json' for non-TTY.",
)
@click.option("--verbose", "-v", count=True, help="Increase verbosity (can be used multiple times).")
@click.option("--debug", is_flag=True, help="Enable debug-level logging.")
@click.option("--no-color", is_flag=True, help="Disable color output.")
@click.option(
    "--version",
    is_flag=True,
    is_eager=True,
    expose_value=False,
    callback=_print_version,
    help="Print CLI version information.",
)
@click.pass_context
def app(
    ctx: click.Context,
    env_name: Optional[str] = None,
    format: Optional[str] = None,
    verbose: int = 0,
    debug: bool = False,
    no_color: bool = False,
) -> None:
    """AI pricing CLI - inspect the published AI pricing document.

    Examples:
      # Show the URL used for an environment
      aip --env prod url

      # Summarise the dev pricing document
      aip --env dev fetch

      # List models of one provider as JSON
      aip --format json models list --provider openai
    """
    ctx.ensure_object(dict)

    # Configure logging level based on verbosity
    log_level = "WARNING"
    if debug or verbose >= 2:
        log_level = "DEBUG"
    elif verbose == 1:
        log_level = "INFO"
    if log_level != "WARNING":
        _configure_logging(log_level)

    ctx.obj.update(
        {
            "env": resolve_env(env_name),
            "format": resolve_format(format),
            "format_explicit": format is not None,
            "no_color": no_color,
            "log_level": log_level,
        }
    )


# Import and register subcommands after the group is defined to avoid
# circular imports at runtime.
from .commands import env, models, pricing, providers  # noqa: E402

app.add_command(pricing.url)
app.add_command(pricing.fetch)
app.add_command(env.env)
app.add_command(providers.providers)
app.add_command(models.models)


if __name__ == "__main__":
    app()
