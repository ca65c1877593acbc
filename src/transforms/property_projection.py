"""Quay property projection transform.

This module maps enriched quay records onto the reduced field set
consumed by map and accessibility front ends.

Field order is an explicit contract:

1. ``quaycode`` ... ``compassdirection`` (``_LEADING_FIELDS``)
2. every key of the quay's accessibility adaptations mapping
3. ``direction`` and ``directionfull`` (``_TRAILING_FIELDS``)

Later groups overwrite same-named keys of earlier groups in place, so
an adaptation key can replace a leading field but never the direction
labels.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping

from core.constants import (
    ACCESSIBLE_FLAG,
    QUAY_ADAPTATIONS_PATH,
    QUAY_BEARING_PATH,
    QUAY_CODE_PATH,
    QUAY_DISABLED_ACCESSIBLE_PATH,
    QUAY_NAME_PATH,
    QUAY_STATUS_PATH,
    QUAY_TRANSPORT_MODE_DATA_PATH,
    QUAY_VISUALLY_ACCESSIBLE_PATH,
    TRANSPORT_MODE_KEY,
)
from core.types import EnrichedQuayRecord
from transforms.field_access import as_list, get_path

_FieldGetter = Callable[[EnrichedQuayRecord], Any]


def project_quays(records: Iterable[EnrichedQuayRecord]) -> list[dict[str, Any]]:
    """Project enriched records in order."""
    return [project_quay(record) for record in records]


def project_quay(record: EnrichedQuayRecord) -> dict[str, Any]:
    """Project one enriched record onto the reduced field set.

    Args:
        record: Enriched quay record.

    Returns:
        JSON-ready mapping; missing source fields project to ``None``.
    """
    projected: dict[str, Any] = {}
    for name, getter in _LEADING_FIELDS:
        projected[name] = getter(record)
    projected.update(accessibility_adaptations(record.quay))
    for name, getter in _TRAILING_FIELDS:
        projected[name] = getter(record)
    return projected


def is_accessible_flag(value: Any) -> bool:
    """Return True only for the exact flag string ``"Y"``."""
    return isinstance(value, str) and value == ACCESSIBLE_FLAG


def transport_modes(quay: Mapping[str, Any]) -> Any:
    """Return the quay's transport mode, or a list when it has several."""
    modes = [
        get_path(entry, (TRANSPORT_MODE_KEY,))
        for entry in as_list(get_path(quay, QUAY_TRANSPORT_MODE_DATA_PATH))
    ]
    modes = [mode for mode in modes if mode is not None]
    if not modes:
        return None
    if len(modes) == 1:
        return modes[0]
    return modes


def accessibility_adaptations(quay: Mapping[str, Any]) -> dict[str, Any]:
    """Return the accessibility adaptations mapping, or an empty dict."""
    adaptations = get_path(quay, QUAY_ADAPTATIONS_PATH)
    if not isinstance(adaptations, Mapping):
        return {}
    return dict(adaptations)


def _quay_field(path: tuple[str, ...]) -> _FieldGetter:
    return lambda record: get_path(record.quay, path)


def _flag_field(path: tuple[str, ...]) -> _FieldGetter:
    return lambda record: is_accessible_flag(get_path(record.quay, path))


_LEADING_FIELDS: tuple[tuple[str, _FieldGetter], ...] = (
    ("quaycode", _quay_field(QUAY_CODE_PATH)),
    ("quayname", _quay_field(QUAY_NAME_PATH)),
    ("quaystatus", _quay_field(QUAY_STATUS_PATH)),
    ("transportmode", lambda record: transport_modes(record.quay)),
    ("lat", lambda record: record.geo.lat if record.geo else None),
    ("lon", lambda record: record.geo.lon if record.geo else None),
    ("visuallyaccessible", _flag_field(QUAY_VISUALLY_ACCESSIBLE_PATH)),
    ("disabledaccessible", _flag_field(QUAY_DISABLED_ACCESSIBLE_PATH)),
    ("compassdirection", _quay_field(QUAY_BEARING_PATH)),
)

_TRAILING_FIELDS: tuple[tuple[str, _FieldGetter], ...] = (
    ("direction", lambda record: record.direction.short if record.direction else None),
    ("directionfull", lambda record: record.direction.full if record.direction else None),
)
