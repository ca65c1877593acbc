"""JSON output document persistence.

This module writes the pipeline views as versioned JSON files and
refreshes the ``ExportCHBLatest-*`` copies next to them.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path
import re
import shutil
from typing import Any

from core.constants import LATEST_EXPORT_NAME, SUPPORTED_EXPORT_SUFFIXES
from core.errors import HalteStoreError
from core.logging_config import get_logger
from core.types import PipelineResult

_LOGGER = get_logger(__name__)

_DOCUMENT_SUFFIXES = {
    "stopplaces": "",
    "quays": "-quays",
    "quays-projected": "-quays-projected",
}
_SLUG_PATTERN = re.compile(r"[^0-9a-z]+")


@dataclass(frozen=True)
class DocumentPaths:
    """Destination paths for one output document.

    Attributes:
        versioned: Path named after the source export.
        latest: Stable ``ExportCHBLatest-*`` path.
    """

    versioned: Path
    latest: Path


def locality_slug(locality: str) -> str:
    """Build a lowercase file-name fragment for a locality."""
    slug = _SLUG_PATTERN.sub("-", locality.lower()).strip("-")
    return slug or "all"


def export_stem(export_name: str) -> str:
    """Strip export archive extensions from a file name."""
    for suffix in SUPPORTED_EXPORT_SUFFIXES:
        if export_name.lower().endswith(suffix):
            return export_name[: -len(suffix)]
    return export_name


def build_document_paths(
    output_dir: Path,
    locality: str,
    export_name: str,
) -> dict[str, DocumentPaths]:
    """Build versioned and latest paths for every document kind.

    Args:
        output_dir: Directory receiving the documents.
        locality: Locality the documents were filtered on.
        export_name: File name of the source export.

    Returns:
        Paths keyed by document kind.
    """
    slug = locality_slug(locality)
    stem = export_stem(export_name)
    return {
        kind: DocumentPaths(
            versioned=output_dir / f"{stem}-{slug}{suffix}.json",
            latest=output_dir / f"{LATEST_EXPORT_NAME}-{slug}{suffix}.json",
        )
        for kind, suffix in _DOCUMENT_SUFFIXES.items()
    }


def serialize_document(document: Any) -> str:
    """Serialize a document deterministically as UTF-8 JSON text."""
    return json.dumps(document, ensure_ascii=False, indent=2) + "\n"


def write_documents(
    result: PipelineResult,
    output_dir: Path,
    export_name: str,
) -> list[Path]:
    """Write all pipeline documents and refresh their latest copies.

    Args:
        result: Pipeline result to persist.
        output_dir: Destination directory, created when missing.
        export_name: File name of the source export.

    Returns:
        Written versioned paths followed by latest paths.

    Raises:
        HalteStoreError: If a file cannot be written.
    """
    paths = build_document_paths(output_dir, result.locality, export_name)
    documents = result.documents()
    versioned_paths: list[Path] = []
    latest_paths: list[Path] = []
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        for kind, document_paths in paths.items():
            document_paths.versioned.write_text(
                serialize_document(documents[kind]), encoding="utf-8"
            )
            if document_paths.latest != document_paths.versioned:
                shutil.copyfile(document_paths.versioned, document_paths.latest)
            versioned_paths.append(document_paths.versioned)
            latest_paths.append(document_paths.latest)
    except OSError as error:
        raise HalteStoreError(
            f"Failed to write output documents under {output_dir}: {error}. "
            "Check the output directory permissions and free space."
        ) from error
    _LOGGER.info(
        "documents_written",
        output_dir=str(output_dir),
        export_name=export_name,
        document_count=len(versioned_paths),
    )
    return versioned_paths + [path for path in latest_paths if path not in versioned_paths]
