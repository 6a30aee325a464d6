"""Deterministic cache keys for (file, query) pairs."""

from __future__ import annotations

from typing import Any, Mapping

from json_query.utils.text import canonical_json

KEY_DELIMITER = "|"


def file_prefix(file_name: str) -> str:
    """Prefix shared by every key built for ``file_name``."""
    return f"{file_name}{KEY_DELIMITER}"


def serialize_param(value: Any) -> str:
    """Serialize one parameter value: null, canonical JSON for containers, else str()."""
    if value is None:
        return "null"
    if isinstance(value, (dict, list, tuple)):
        return canonical_json(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_cache_key(file_name: str, params: Mapping[str, Any] | None) -> str:
    """Build the cache key for ``file_name`` and its query parameters.

    Parameters are sorted by name so insertion order never changes the key.
    Values equal in string form (``30`` and ``"30"``) produce the same key.
    """
    pairs = sorted((params or {}).items(), key=lambda item: item[0])
    params_str = KEY_DELIMITER.join(f"{key}:{serialize_param(value)}" for key, value in pairs)
    return f"{file_prefix(file_name)}{params_str}"


__all__ = ["KEY_DELIMITER", "build_cache_key", "file_prefix", "serialize_param"]
