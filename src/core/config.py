"""Runtime configuration model for Halte.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_DATA_ROOT,
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    DEFAULT_LOCALITY,
    DEFAULT_SOURCE_URL,
)
from core.errors import HalteConfigError


@dataclass(frozen=True)
class HalteConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Local root directory for downloads and output documents.
        locality: Town name used to filter stop places.
        source_url: Directory listing URL publishing CHB exports.
        http_timeout: Timeout in seconds for each HTTP request.
    """

    data_root: Path
    locality: str
    source_url: str
    http_timeout: float

    @classmethod
    def from_env(cls) -> "HalteConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            HalteConfigError: If environment values are invalid.
        """
        data_root_value = os.getenv("HALTE_DATA_ROOT", str(DEFAULT_DATA_ROOT))
        locality = _parse_locality(os.getenv("HALTE_LOCALITY", DEFAULT_LOCALITY))
        source_url = os.getenv("HALTE_SOURCE_URL", DEFAULT_SOURCE_URL)
        http_timeout = _parse_http_timeout(
            os.getenv("HALTE_HTTP_TIMEOUT", str(DEFAULT_HTTP_TIMEOUT_SECONDS))
        )
        return cls(
            data_root=Path(data_root_value).expanduser().resolve(),
            locality=locality,
            source_url=source_url,
            http_timeout=http_timeout,
        )


def _parse_locality(raw_value: str) -> str:
    """Validate the locality environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Locality string, unchanged.

    Raises:
        HalteConfigError: If the value is blank.
    """
    if not raw_value.strip():
        raise HalteConfigError(
            "Invalid HALTE_LOCALITY value: expected a town name, got an empty string. "
            "Unset HALTE_LOCALITY to use the default or set it to a town name."
        )
    return raw_value


def _parse_http_timeout(raw_value: str) -> float:
    """Parse the HTTP timeout environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Positive timeout in seconds.

    Raises:
        HalteConfigError: If value is not a positive number.
    """
    try:
        timeout = float(raw_value)
    except ValueError as error:
        raise HalteConfigError(
            "Invalid HALTE_HTTP_TIMEOUT value: "
            f"expected number of seconds, got '{raw_value}'. "
            "Set HALTE_HTTP_TIMEOUT to a positive number."
        ) from error
    if timeout <= 0:
        raise HalteConfigError(
            f"Invalid HALTE_HTTP_TIMEOUT value {raw_value}: expected value > 0. "
            "Set HALTE_HTTP_TIMEOUT to a positive number."
        )
    return timeout
