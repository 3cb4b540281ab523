"""Environment inspection command for the AIP CLI."""

import click

from ...config import get_env_vars
from ..formatters import create_console, format_env_vars_json, format_env_vars_table, format_json, format_yaml


@click.command()
@click.pass_context
def env(ctx: click.Context) -> None:
    """Show effective AIP_* environment variables."""
    env_vars = get_env_vars()
    format_type = ctx.obj["format"]

    if format_type == "json":
        format_json(format_env_vars_json(env_vars))
    elif format_type == "yaml":
        format_yaml(format_env_vars_json(env_vars))
    else:
        format_env_vars_table(env_vars, create_console(no_color=ctx.obj["no_color"]))
