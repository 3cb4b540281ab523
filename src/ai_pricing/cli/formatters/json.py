"""JSON and YAML output formatters for CLI."""

import datetime as _dt
import json
import sys
from enum import Enum as _Enum
from typing import Any, Dict, List, Optional, TextIO

import yaml


def _default_serializer(obj: Any) -> Any:
    """Serialize otherwise non-JSON-serializable objects.

    - datetime/date -> ISO 8601 string
    - Enum -> value (fallback to name)
    - tuple -> list
    - Fallback -> str(obj)
    """
    if isinstance(obj, (_dt.datetime, _dt.date)):
        return obj.isoformat()
    if isinstance(obj, _Enum):
        return getattr(obj, "value", obj.name)
    if isinstance(obj, tuple):
        return list(obj)
    return str(obj)


def format_json(data: Any, output: Optional[TextIO] = None, indent: int = 2) -> None:
    """Format data as JSON and write to output.

    Args:
        data: Data to format
        output: Output stream (defaults to stdout)
        indent: JSON indentation level
    """
    if output is None:
        output = sys.stdout

    json.dump(
        data,
        output,
        indent=indent,
        ensure_ascii=False,
        sort_keys=True,
        default=_default_serializer,
    )
    output.write("\n")


def format_yaml(data: Any, output: Optional[TextIO] = None) -> None:
    """Format data as YAML and write to output."""
    if output is None:
        output = sys.stdout

    # Round-trip through JSON so tuples and enums serialize as plain values
    plain = json.loads(json.dumps(data, default=_default_serializer))
    output.write(yaml.safe_dump(plain, default_flow_style=False, sort_keys=True, allow_unicode=True))


def format_summary_json(summary: Dict[str, Any]) -> Dict[str, Any]:
    """Format a pricing document summary for JSON output.

    Args:
        summary: Summary with env, url, metered price id and counts

    Returns:
        Formatted data structure
    """
    return {
        "env": summary.get("env"),
        "url": summary.get("url"),
        "metered_price_id": summary.get("metered_price_id"),
        "provider_count": summary.get("provider_count", 0),
        "model_count": summary.get("model_count", 0),
        "cached": summary.get("cached", False),
    }


def format_providers_json(providers: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Format providers data for JSON output.

    Providers keep the published order.

    Args:
        providers: Provider rows

    Returns:
        Formatted data structure
    """
    return {"providers": providers, "count": len(providers)}


def format_models_list_json(models: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Format models list for JSON output.

    Args:
        models: Model rows

    Returns:
        Formatted data structure
    """
    return {"models": models, "count": len(models)}


def format_env_vars_json(env_vars: Dict[str, Optional[str]]) -> Dict[str, Any]:
    """Format environment variables for JSON output.

    Args:
        env_vars: Environment variables

    Returns:
        Formatted data structure
    """
    return {
        "environment_variables": {key: {"value": value, "set": value is not None} for key, value in env_vars.items()},
        "set_count": sum(1 for v in env_vars.values() if v is not None),
        "total_count": len(env_vars),
    }
