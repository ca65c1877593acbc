"""Public SDK surface for Halte.

This module provides a stable import path for library users.
It re-exports the pipeline entry point, client and typed models.
"""

from __future__ import annotations

from core.config import HalteConfig
from core.errors import (
    HalteError,
    MissingFieldError,
    ParseError,
    SchemaShapeError,
)
from core.types import CompassDirection, EnrichedQuayRecord, GeoCoordinate, PipelineResult
from ingest.pipeline import run_pipeline
from store.export_sdk import HalteClient

__all__ = [
    "CompassDirection",
    "EnrichedQuayRecord",
    "GeoCoordinate",
    "HalteClient",
    "HalteConfig",
    "HalteError",
    "MissingFieldError",
    "ParseError",
    "PipelineResult",
    "SchemaShapeError",
    "run_pipeline",
]
