"""Quay flattening and enrichment transform.

This module expands filtered stop places into one record per in-use
quay, attaching parent stop context, a WGS84 position and a compass
category.

Quays without usable RD coordinates get ``geo=None`` and quays without
a usable bearing get ``direction=None``. The gap is logged as
``quay_field_missing`` and never aborts sibling quays.
"""

from __future__ import annotations

import copy
from typing import Any, Callable, Iterable, Mapping, TypeVar

from core.constants import (
    OUT_OF_USE_STATUS,
    QUAY_BEARING_PATH,
    QUAY_CODE_PATH,
    QUAY_RD_X_PATH,
    QUAY_RD_Y_PATH,
    QUAY_STATUS_PATH,
    QUAY_TAG,
    QUAYS_TAG,
)
from core.errors import MissingFieldError
from core.logging_config import get_logger
from core.types import CompassDirection, EnrichedQuayRecord, GeoCoordinate
from transforms.compass_direction import compass_direction
from transforms.field_access import as_list, get_path, require_number
from transforms.rd_conversion import rd_to_wgs84

_LOGGER = get_logger(__name__)

_T = TypeVar("_T")
_RD_FIELD_NAME = f"{QUAY_RD_X_PATH[0]}.{QUAY_RD_X_PATH[1]}/{QUAY_RD_Y_PATH[1]}"


def flatten_quays(stop_places: Iterable[Mapping[str, Any]]) -> list[EnrichedQuayRecord]:
    """Flatten stop places into enriched in-use quay records.

    Args:
        stop_places: Filtered stop places in source order.

    Returns:
        Records in stop-then-quay source order.
    """
    records: list[EnrichedQuayRecord] = []
    stop_count = 0
    for stop_place in stop_places:
        stop_count += 1
        snapshot = _stop_place_snapshot(stop_place)
        for quay in in_use_quays(stop_place):
            records.append(enrich_quay(quay, snapshot))
    _LOGGER.info("quays_flattened", stop_count=stop_count, quay_count=len(records))
    return records


def extract_quays(stop_place: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    """Return the quays of a stop place as a list, dropping empty entries.

    The export omits the list wrapper when a stop place has exactly one
    quay, so a bare mapping is wrapped into a one-element list.
    """
    container = stop_place.get(QUAYS_TAG)
    if isinstance(container, Mapping):
        quays = as_list(container.get(QUAY_TAG))
    else:
        quays = as_list(container)
    return [quay for quay in quays if isinstance(quay, Mapping) and quay]


def in_use_quays(stop_place: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    """Return the quays of a stop place whose status is not ``outOfUse``."""
    return [
        quay
        for quay in extract_quays(stop_place)
        if get_path(quay, QUAY_STATUS_PATH) != OUT_OF_USE_STATUS
    ]


def enrich_quay(quay: Mapping[str, Any], stop_place: Mapping[str, Any]) -> EnrichedQuayRecord:
    """Build an enriched record for one quay.

    Args:
        quay: Quay mapping from the normalized tree.
        stop_place: Parent stop place snapshot without quays.

    Returns:
        Enriched record owning deep copies of its inputs.
    """
    quay_code = get_path(quay, QUAY_CODE_PATH)
    return EnrichedQuayRecord(
        quay=copy.deepcopy(dict(quay)),
        stop_place=copy.deepcopy(dict(stop_place)),
        geo=_derive_or_none(quay_code, lambda: _quay_geo(quay)),
        direction=_derive_or_none(quay_code, lambda: _quay_direction(quay)),
    )


def _stop_place_snapshot(stop_place: Mapping[str, Any]) -> dict[str, Any]:
    """Copy a stop place without its quay container."""
    return {key: value for key, value in stop_place.items() if key != QUAYS_TAG}


def _quay_geo(quay: Mapping[str, Any]) -> GeoCoordinate:
    rd_x = require_number(quay, QUAY_RD_X_PATH)
    rd_y = require_number(quay, QUAY_RD_Y_PATH)
    try:
        return rd_to_wgs84(rd_x, rd_y)
    except ValueError as error:
        raise MissingFieldError(_RD_FIELD_NAME) from error


def _quay_direction(quay: Mapping[str, Any]) -> CompassDirection:
    bearing = require_number(quay, QUAY_BEARING_PATH)
    try:
        return compass_direction(bearing)
    except ValueError as error:
        raise MissingFieldError(".".join(QUAY_BEARING_PATH)) from error


def _derive_or_none(quay_code: Any, derive: Callable[[], _T]) -> _T | None:
    """Run a derivation, absorbing missing fields as ``None``."""
    try:
        return derive()
    except MissingFieldError as error:
        _LOGGER.warning("quay_field_missing", quaycode=quay_code, field=error.field_path)
        return None
