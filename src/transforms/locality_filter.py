"""Locality filter transform.

This module selects the stop places of one town from the normalized
export tree, keeping source order.
"""

from __future__ import annotations

from typing import Any, Mapping

from core.constants import (
    DEFAULT_LOCALITY,
    EXPORT_ROOT_TAG,
    STOP_PLACE_TAG,
    STOP_PLACES_TAG,
    STOP_TOWN_PATH,
)
from core.errors import SchemaShapeError
from core.logging_config import get_logger
from transforms.field_access import as_list, get_path

_LOGGER = get_logger(__name__)


def filter_stop_places(
    document: Mapping[str, Any],
    locality: str = DEFAULT_LOCALITY,
) -> list[dict[str, Any]]:
    """Select stop places whose town equals the locality.

    Matching is exact and case-sensitive; stop places of other towns or
    without a town are skipped silently.

    Args:
        document: Normalized export tree.
        locality: Town name to keep.

    Returns:
        Matching stop places in source order.

    Raises:
        SchemaShapeError: If ``export.stopplaces`` is absent.
    """
    stop_places = extract_stop_places(document)
    selected = [
        stop_place
        for stop_place in stop_places
        if get_path(stop_place, STOP_TOWN_PATH) == locality
    ]
    _LOGGER.info(
        "stop_places_filtered",
        locality=locality,
        input_count=len(stop_places),
        output_count=len(selected),
    )
    return selected


def extract_stop_places(document: Mapping[str, Any]) -> list[dict[str, Any]]:
    """Return every stop place of the export as a list.

    Args:
        document: Normalized export tree.

    Returns:
        Stop place mappings, empty when the export lists none.

    Raises:
        SchemaShapeError: If the export root or stop place container is absent.
    """
    export = document.get(EXPORT_ROOT_TAG)
    if not isinstance(export, Mapping):
        root_names = ", ".join(sorted(document)) or "none"
        raise SchemaShapeError(
            f"Invalid export document: expected root element '{EXPORT_ROOT_TAG}', "
            f"found {root_names}. Provide a CHB stop place export."
        )
    if STOP_PLACES_TAG not in export:
        raise SchemaShapeError(
            f"Invalid export document: '{EXPORT_ROOT_TAG}' has no "
            f"'{STOP_PLACES_TAG}' element. Provide a CHB stop place export."
        )
    container = export[STOP_PLACES_TAG]
    if not isinstance(container, Mapping):
        return []
    return [entry for entry in as_list(container.get(STOP_PLACE_TAG)) if isinstance(entry, Mapping)]
