"""RD New to WGS84 coordinate conversion.

This module wraps the pyproj EPSG:28992 to EPSG:4326 transformation
used to place quays on a global map.
"""

from __future__ import annotations

from functools import lru_cache
import math

from pyproj import Transformer

from core.constants import COORDINATE_DECIMALS, RD_NEW_CRS, WGS84_CRS
from core.types import GeoCoordinate


def rd_to_wgs84(rd_x: float, rd_y: float) -> GeoCoordinate:
    """Convert RD New easting/northing to WGS84 latitude/longitude.

    Args:
        rd_x: Easting in metres.
        rd_y: Northing in metres.

    Returns:
        Position rounded to a fixed number of decimals so repeated runs
        serialize identically.

    Raises:
        ValueError: If the inputs are not finite or fall outside the
            projection's domain.
    """
    if not (math.isfinite(rd_x) and math.isfinite(rd_y)):
        raise ValueError(f"RD coordinates must be finite, got ({rd_x}, {rd_y})")
    lon, lat = _rd_transformer().transform(rd_x, rd_y)
    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise ValueError(f"RD coordinates ({rd_x}, {rd_y}) are outside the RD New domain")
    return GeoCoordinate(
        lat=round(lat, COORDINATE_DECIMALS),
        lon=round(lon, COORDINATE_DECIMALS),
    )


@lru_cache(maxsize=1)
def _rd_transformer() -> Transformer:
    """Build the shared RD New to WGS84 transformer."""
    return Transformer.from_crs(RD_NEW_CRS, WGS84_CRS, always_xy=True)
