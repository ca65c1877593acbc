"""Halte exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Fatal errors abort a pipeline run; field-level gaps stay local.
"""

from __future__ import annotations


class HalteError(Exception):
    """Base exception for all Halte failures."""


class HalteConfigError(HalteError):
    """Raised for invalid runtime configuration."""


class ParseError(HalteError):
    """Raised when export XML text cannot be parsed."""


class SchemaShapeError(HalteError):
    """Raised when a structurally required export element is absent."""


class MissingFieldError(HalteError):
    """Raised when a quay lacks a field needed for enrichment.

    The quay flattener absorbs this error per quay and substitutes
    ``None`` for the derived value, so it never reaches pipeline callers.
    """

    def __init__(self, field_path: str) -> None:
        super().__init__(f"Missing or unusable field '{field_path}'")
        self.field_path = field_path


class HalteSourceError(HalteError):
    """Raised for export download and source read failures."""


class HalteStoreError(HalteError):
    """Raised for output document persistence failures."""
