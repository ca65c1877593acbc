"""Pipeline orchestration for CHB export conversion.

This module wires XML normalization, locality filtering, quay
flattening and property projection into one forward-only run.
"""

from __future__ import annotations

from core.constants import DEFAULT_LOCALITY
from core.logging_config import get_logger
from core.types import PipelineResult
from transforms.locality_filter import filter_stop_places
from transforms.property_projection import project_quays
from transforms.quay_enrichment import flatten_quays
from transforms.xml_normalizer import normalize_xml

_LOGGER = get_logger(__name__)


def run_pipeline(xml_text: str, locality: str = DEFAULT_LOCALITY) -> PipelineResult:
    """Convert export XML text into the filtered, flattened and projected views.

    Each stage consumes the previous stage's output and returns new
    values; structural failures abort the run before any output exists.

    Args:
        xml_text: Complete decoded CHB export XML.
        locality: Town name to keep.

    Returns:
        Pipeline result holding all three views.

    Raises:
        ParseError: If the XML is malformed.
        SchemaShapeError: If the export lacks its stop place container.
    """
    document = normalize_xml(xml_text)
    stop_places = filter_stop_places(document, locality)
    quays = flatten_quays(stop_places)
    projected_quays = project_quays(quays)
    result = PipelineResult(
        locality=locality,
        stop_places=tuple(stop_places),
        quays=tuple(quays),
        projected_quays=tuple(projected_quays),
    )
    _log_pipeline_completion(result)
    return result


def _log_pipeline_completion(result: PipelineResult) -> None:
    """Log pipeline completion with output counts."""
    _LOGGER.info(
        "pipeline_completed",
        locality=result.locality,
        stop_place_count=len(result.stop_places),
        quay_count=len(result.quays),
        geo_missing_count=sum(1 for record in result.quays if record.geo is None),
        direction_missing_count=sum(1 for record in result.quays if record.direction is None),
    )
