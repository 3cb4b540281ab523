"""CLI formatters package."""

from .json import (
    format_env_vars_json,
    format_json,
    format_models_list_json,
    format_providers_json,
    format_summary_json,
    format_yaml,
)
from .table import (
    create_console,
    format_env_vars_table,
    format_models_table,
    format_providers_table,
    format_summary_table,
)

__all__ = [
    "format_json",
    "format_yaml",
    "format_summary_json",
    "format_models_list_json",
    "format_providers_json",
    "format_env_vars_json",
    "create_console",
    "format_summary_table",
    "format_models_table",
    "format_providers_table",
    "format_env_vars_table",
]
