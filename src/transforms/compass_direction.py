"""Bearing to compass category mapping."""

from __future__ import annotations

import math

from core.constants import COMPASS_FULL_NAMES, COMPASS_SECTOR_DEGREES, COMPASS_SHORT_NAMES
from core.types import CompassDirection

_SECTOR_COUNT = len(COMPASS_SHORT_NAMES)


def compass_sector(bearing: float) -> int:
    """Return the sector index in [0, 8) for a bearing in degrees.

    The bearing is reduced modulo 360 first. Each category covers the
    45 degree arc ending at its heading, so 22.5 maps to sector 1,
    200 to sector 5 and 337.5 wraps to 0.

    Raises:
        ValueError: If the bearing is not finite.
    """
    if not math.isfinite(bearing):
        raise ValueError(f"Bearing must be finite, got {bearing}")
    normalized = bearing % 360.0
    return math.ceil(normalized / COMPASS_SECTOR_DEGREES) % _SECTOR_COUNT


def compass_direction(bearing: float) -> CompassDirection:
    """Map a bearing in degrees to its arrow glyph and Dutch name."""
    sector = compass_sector(bearing)
    return CompassDirection(short=COMPASS_SHORT_NAMES[sector], full=COMPASS_FULL_NAMES[sector])
