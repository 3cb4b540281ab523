"""Helper functions for CLI operations."""

import os
import sys
from typing import Any, Dict, Optional

import click

from ...cache import get_ai_pricing
from ...config import ENV_DEFAULT_ENV
from ...errors import ConfigurationError, FetchError
from ...models import PricingDocument

DEFAULT_ENV = "dev"


class ExitCode:
    """Standard exit codes for the CLI."""

    SUCCESS = 0
    GENERIC_ERROR = 1
    INVALID_USAGE = 2
    PROVIDER_NOT_FOUND = 3
    FETCH_ERROR = 4


def resolve_env(cli_env: Optional[str] = None) -> str:
    """Resolve environment using precedence: CLI flag > AIP_ENV env > default 'dev'.

    Args:
        cli_env: Environment specified via CLI flag

    Returns:
        Resolved environment name
    """
    if cli_env:
        return cli_env

    env_value = os.getenv(ENV_DEFAULT_ENV)
    if env_value:
        return env_value

    return DEFAULT_ENV


def resolve_format(cli_format: Optional[str] = None, default_tty: str = "table", default_non_tty: str = "json") -> str:
    """Resolve output format with TTY detection.

    Args:
        cli_format: Format specified via CLI flag
        default_tty: Default format for TTY output
        default_non_tty: Default format for non-TTY output

    Returns:
        Resolved format name
    """
    if cli_format:
        return cli_format.lower()

    # Auto-detect based on TTY
    if sys.stdout.isatty():
        return default_tty
    else:
        return default_non_tty


def handle_error(error: Exception, exit_code: int = ExitCode.GENERIC_ERROR) -> None:
    """Handle CLI errors with consistent formatting.

    Args:
        error: Exception to handle
        exit_code: Exit code to use
    """
    click.echo(f"Error: {str(error)}", err=True)
    sys.exit(exit_code)


def handle_fetch_error(error: FetchError) -> None:
    """Report a fetch failure, naming the URL when known, and exit."""
    message = str(error)
    if error.url and error.url not in message:
        message = f"{message} ({error.url})"
    click.echo(f"Error: {message}", err=True)
    sys.exit(ExitCode.FETCH_ERROR)


def load_document(ctx_obj: Dict[str, Any], bust_cache: bool = False) -> PricingDocument:
    """Fetch the pricing document for the environment stored in the context.

    Exits with :attr:`ExitCode.FETCH_ERROR` on any fetch failure and with
    :attr:`ExitCode.INVALID_USAGE` when the AIP_* configuration is invalid.
    """
    try:
        return get_ai_pricing(ctx_obj["env"], bust_cache=bust_cache)
    except ConfigurationError as e:
        handle_error(e, ExitCode.INVALID_USAGE)
        raise  # unreachable, handle_error exits
    except FetchError as e:
        handle_fetch_error(e)
        raise  # unreachable, handle_fetch_error exits
