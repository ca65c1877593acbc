"""Local export readers.

This module loads CHB export text from plain or gzip-compressed XML
files and locates the newest export in a download directory.
"""

from __future__ import annotations

import gzip
from pathlib import Path

from core.constants import EXPORT_NAME_PREFIX, LATEST_EXPORT_NAME, SUPPORTED_EXPORT_SUFFIXES
from core.errors import HalteSourceError


def read_export_text(source_path: Path) -> str:
    """Read decoded XML text from an export file.

    Args:
        source_path: ``.xml`` or ``.xml.gz`` export file.

    Returns:
        Decoded XML text.

    Raises:
        HalteSourceError: If the file is missing, unsupported or corrupt.
    """
    if not source_path.is_file():
        raise HalteSourceError(
            f"Failed to read export at {source_path}: file does not exist. "
            "Provide an existing .xml or .xml.gz export file."
        )
    if not _is_supported_file(source_path):
        raise HalteSourceError(
            f"Unsupported export file {source_path}. "
            f"Supported extensions: {SUPPORTED_EXPORT_SUFFIXES}."
        )
    try:
        if source_path.name.lower().endswith(".gz"):
            with gzip.open(source_path, "rt", encoding="utf-8") as handle:
                return handle.read()
        return source_path.read_text(encoding="utf-8")
    except (OSError, EOFError, UnicodeDecodeError) as error:
        raise HalteSourceError(
            f"Failed to read export at {source_path}: {error}. "
            "Download the export again and retry."
        ) from error


def resolve_export_path(source: Path) -> Path:
    """Resolve a file or directory argument to one export file.

    Args:
        source: Export file, or directory holding ``ExportCHB*`` files.

    Returns:
        The file itself, or the latest export in the directory.

    Raises:
        HalteSourceError: If the path is missing or holds no export.
    """
    if source.is_dir():
        return find_latest_export(source)
    return source


def find_latest_export(directory: Path) -> Path:
    """Return the newest ``ExportCHB*`` file in a directory.

    Export names embed their publication timestamp, so the last name in
    sorted order is the newest. ``ExportCHBLatest*`` copies are ignored.

    Raises:
        HalteSourceError: If the directory holds no export file.
    """
    candidates = sorted(
        path
        for path in directory.iterdir()
        if path.is_file() and _is_export_name(path.name) and _is_supported_file(path)
    )
    if not candidates:
        raise HalteSourceError(
            f"No {EXPORT_NAME_PREFIX}* export found under {directory}. "
            "Run `halte fetch` or pass an export file path."
        )
    return candidates[-1]


def _is_export_name(name: str) -> bool:
    """Return whether a file name is a dated CHB export."""
    return name.startswith(EXPORT_NAME_PREFIX) and not name.startswith(LATEST_EXPORT_NAME)


def _is_supported_file(path: Path) -> bool:
    """Return whether a file name has a supported export extension."""
    return path.name.lower().endswith(SUPPORTED_EXPORT_SUFFIXES)
