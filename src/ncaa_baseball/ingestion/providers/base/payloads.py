from __future__ import annotations

from typing import Any

from .client import Json
from .errors import ProviderParseError


def require_list(payload: Json, key: str, *, context: str) -> list[Any]:
    """Return payload[key] as a list; missing means empty, any other type is drift."""
    value = payload.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ProviderParseError(
            f"{context}: expected '{key}' to be a list, got {type(value).__name__}"
        )
    return value


def require_dict(payload: Json, key: str, *, context: str) -> dict[str, Any]:
    value = payload.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ProviderParseError(
            f"{context}: expected '{key}' to be an object, got {type(value).__name__}"
        )
    return value
