"""CLI commands package."""

# Import all command modules to make them available
from . import env, models, pricing, providers

__all__ = ["env", "models", "pricing", "providers"]
