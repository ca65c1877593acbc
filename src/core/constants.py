"""Core constants used across Halte modules.

This module centralizes export layout names and default settings.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path(".halte")
DEFAULT_LOCALITY = "Amsterdam"
DEFAULT_SOURCE_URL = "https://data.ndovloket.nl/haltes/"
DEFAULT_HTTP_TIMEOUT_SECONDS = 60.0
DOWNLOADS_DIR_NAME = "downloads"
OUTPUT_DIR_NAME = "output"
EXPORT_NAME_PREFIX = "ExportCHB"
LATEST_EXPORT_NAME = "ExportCHBLatest"
SUPPORTED_EXPORT_SUFFIXES = (".xml.gz", ".xml")

# Export tree layout.
EXPORT_ROOT_TAG = "export"
STOP_PLACES_TAG = "stopplaces"
STOP_PLACE_TAG = "stopplace"
QUAYS_TAG = "quays"
QUAY_TAG = "quay"
ATTRIBUTES_KEY = "$"
TEXT_KEY = "_"

# Field paths inside stop and quay mappings.
STOP_TOWN_PATH = ("stopplacename", "town")
QUAY_CODE_PATH = ("quaycode",)
QUAY_NAME_PATH = ("quaynamedata", "quayname")
QUAY_STATUS_PATH = ("quaystatusdata", "quaystatus")
QUAY_RD_X_PATH = ("quaylocationdata", "rd-x")
QUAY_RD_Y_PATH = ("quaylocationdata", "rd-y")
QUAY_BEARING_PATH = ("quaybearing", "compassdirection")
QUAY_TRANSPORT_MODE_DATA_PATH = ("quaytransportmodes", "transportmodedata")
TRANSPORT_MODE_KEY = "transportmode"
QUAY_VISUALLY_ACCESSIBLE_PATH = ("quayvisuallyaccessible", "visuallyaccessible")
QUAY_DISABLED_ACCESSIBLE_PATH = ("quaydisabledaccessible", "disabledaccessible")
QUAY_ADAPTATIONS_PATH = ("quayaccessibilityadaptions",)

OUT_OF_USE_STATUS = "outOfUse"
ACCESSIBLE_FLAG = "Y"

# RD New (Amersfoort) to WGS84 geographic.
RD_NEW_CRS = "EPSG:28992"
WGS84_CRS = "EPSG:4326"
COORDINATE_DECIMALS = 7

COMPASS_SECTOR_DEGREES = 45.0
COMPASS_SHORT_NAMES = ("↑", "↗", "→", "↘", "↓", "↙", "←", "↖")
COMPASS_FULL_NAMES = (
    "Noord",
    "Noordoost",
    "Oost",
    "Zuidoost",
    "Zuid",
    "Zuidwest",
    "West",
    "Noordwest",
)
