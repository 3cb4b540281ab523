"""CLI utilities package."""

from .helpers import (
    ExitCode,
    handle_error,
    handle_fetch_error,
    load_document,
    resolve_env,
    resolve_format,
)

__all__ = [
    "ExitCode",
    "resolve_env",
    "resolve_format",
    "handle_error",
    "handle_fetch_error",
    "load_document",
]
