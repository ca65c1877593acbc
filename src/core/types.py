"""Shared typed models.

This module defines immutable data models passed between the
pipeline stages and the document store.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Mapping

JsonDocument = list[dict[str, Any]]


@dataclass(frozen=True)
class GeoCoordinate:
    """WGS84 position derived from RD New coordinates.

    Attributes:
        lat: Latitude in decimal degrees.
        lon: Longitude in decimal degrees.
    """

    lat: float
    lon: float


@dataclass(frozen=True)
class CompassDirection:
    """One of the eight compass categories.

    Attributes:
        short: Arrow glyph, e.g. "↑".
        full: Dutch direction name, e.g. "Noord".
    """

    short: str
    full: str


@dataclass(frozen=True)
class EnrichedQuayRecord:
    """Quay fields merged with parent stop context and derived values.

    Only the field bindings are frozen. ``quay`` and ``stop_place`` are
    plain dicts owned by the record: deep copies of the source tree, so
    changing them never reaches the input document.

    Attributes:
        quay: Copy of all quay fields from the normalized tree.
        stop_place: Copy of the owning stop place without its quays.
        geo: WGS84 position, None when RD coordinates are unusable.
        direction: Compass category, None when the bearing is unusable.
    """

    quay: Mapping[str, Any]
    stop_place: Mapping[str, Any]
    geo: GeoCoordinate | None
    direction: CompassDirection | None

    def to_document(self) -> dict[str, Any]:
        """Render the record as a JSON-ready mapping.

        Quay fields come first, followed by ``stopplace``, ``lat``,
        ``lon``, ``direction`` and ``directionfull``.
        """
        document = copy.deepcopy(dict(self.quay))
        document["stopplace"] = copy.deepcopy(dict(self.stop_place))
        document["lat"] = self.geo.lat if self.geo else None
        document["lon"] = self.geo.lon if self.geo else None
        document["direction"] = self.direction.short if self.direction else None
        document["directionfull"] = self.direction.full if self.direction else None
        return document


@dataclass(frozen=True)
class PipelineResult:
    """Output of one pipeline run.

    Attributes:
        locality: Town the stop places were filtered on.
        stop_places: Filtered stop places with all properties.
        quays: Flattened, enriched in-use quays.
        projected_quays: Reduced-field quay records.
    """

    locality: str
    stop_places: tuple[Mapping[str, Any], ...]
    quays: tuple[EnrichedQuayRecord, ...]
    projected_quays: tuple[Mapping[str, Any], ...]

    def documents(self) -> dict[str, JsonDocument]:
        """Return the three output documents keyed by document kind."""
        return {
            "stopplaces": [copy.deepcopy(dict(stop)) for stop in self.stop_places],
            "quays": [record.to_document() for record in self.quays],
            "quays-projected": [copy.deepcopy(dict(record)) for record in self.projected_quays],
        }
