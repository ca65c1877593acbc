"""Field access helpers for the normalized export tree.

This module owns the singleton-versus-list normalization and the
nested path lookups shared by the filter, flattener and projector.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from core.errors import MissingFieldError


def as_list(value: Any) -> list[Any]:
    """Return a list view of a value that may be absent, single or repeated.

    Args:
        value: ``None``, ``""``, a single mapping/scalar, or a list.

    Returns:
        ``[]`` for absent or empty values, the list itself for lists,
        otherwise a one-element list.
    """
    if value is None or value == "":
        return []
    if isinstance(value, list):
        return value
    return [value]


def get_path(mapping: Any, path: Sequence[str], default: Any = None) -> Any:
    """Look up a nested value, returning ``default`` when any step is missing.

    Args:
        mapping: Root mapping.
        path: Keys to follow in order.
        default: Value returned for missing steps.

    Returns:
        Nested value or default.
    """
    current = mapping
    for key in path:
        if not isinstance(current, Mapping) or key not in current:
            return default
        current = current[key]
    return current


def require_number(mapping: Any, path: Sequence[str]) -> float:
    """Look up a nested numeric value.

    Args:
        mapping: Root mapping.
        path: Keys to follow in order.

    Returns:
        The value as float.

    Raises:
        MissingFieldError: If the value is absent or not a number.
    """
    value = get_path(mapping, path)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MissingFieldError(".".join(path))
    return float(value)
