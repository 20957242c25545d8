"""
Key-case helpers for backend payloads.

The upstream backend answers in snake_case while the UI reads camelCase; some
endpoints (payment requests) mix both. Uses Pydantic's alias_generators so the
conversion matches schema validation.
"""
from typing import Any

from pydantic.alias_generators import to_camel


def dict_keys_to_camel(obj: Any) -> Any:
    """Recursively convert dict keys from snake_case to camelCase for API responses."""
    if isinstance(obj, dict):
        return {to_camel(k): dict_keys_to_camel(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [dict_keys_to_camel(x) for x in obj]
    return obj


def pick(record: dict[str, Any], key: str, default: Any = None) -> Any:
    """
    Read `key` from a record that may use either casing.
    `key` is given in snake_case; the camelCase spelling is tried second.
    Empty strings and None fall through to the default.
    """
    for k in (key, to_camel(key)):
        value = record.get(k)
        if value is not None and value != "":
            return value
    return default
