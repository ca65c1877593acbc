"""Client API over export download, conversion and persistence.

This module gives the CLI and Python callers one entry object that
binds the pipeline core to its file and network collaborators.
"""

from __future__ import annotations

from pathlib import Path

from core.config import HalteConfig
from core.constants import DOWNLOADS_DIR_NAME, OUTPUT_DIR_NAME
from core.types import PipelineResult
from ingest.pipeline import run_pipeline
from ingest.remote_fetch import download_latest_export
from ingest.source_reader import read_export_text, resolve_export_path
from store.document_writer import write_documents


class HalteClient:
    """Entry point for converting CHB exports into locality documents."""

    def __init__(self, config: HalteConfig) -> None:
        self._config = config

    @property
    def output_dir(self) -> Path:
        """Default directory receiving output documents."""
        return self._config.data_root / OUTPUT_DIR_NAME

    @property
    def downloads_dir(self) -> Path:
        """Directory receiving downloaded export archives."""
        return self._config.data_root / DOWNLOADS_DIR_NAME

    def run(self, source: Path, locality: str | None = None) -> PipelineResult:
        """Run the pipeline on a local export without writing output."""
        export_path = resolve_export_path(source)
        return run_pipeline(read_export_text(export_path), locality or self._config.locality)

    def convert(
        self,
        source: Path,
        locality: str | None = None,
        output_dir: Path | None = None,
    ) -> list[Path]:
        """Convert a local export and write its documents.

        Args:
            source: Export file, or directory holding exports.
            locality: Town override; configured locality when omitted.
            output_dir: Destination override; ``<data_root>/output`` when omitted.

        Returns:
            Written document paths.
        """
        export_path = resolve_export_path(source)
        result = self.run(export_path, locality)
        return write_documents(result, output_dir or self.output_dir, export_path.name)

    def fetch(self) -> Path:
        """Download the newest published export and return its local path."""
        return download_latest_export(self._config)

    def update(self, locality: str | None = None) -> list[Path]:
        """Fetch the newest export and convert it into the output directory."""
        export_path = self.fetch()
        return self.convert(export_path, locality=locality)
