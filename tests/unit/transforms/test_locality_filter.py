"""Unit tests for the locality filter."""

from __future__ import annotations

import pytest

from core.errors import SchemaShapeError
from transforms.locality_filter import extract_stop_places, filter_stop_places
from transforms.xml_normalizer import normalize_xml


def test_filter_stop_places_keeps_exact_town_in_source_order(sample_export_xml: str) -> None:
    """Only exact, case-sensitive town matches should remain."""
    document = normalize_xml(sample_export_xml)

    stop_places = filter_stop_places(document, "Amsterdam")

    codes = [stop["stopplacecode"] for stop in stop_places]
    assert codes == ["NL:S:30008001", "NL:S:30008002", "NL:S:30008003", "NL:S:30008004"]


def test_filter_stop_places_defaults_to_amsterdam(sample_export_xml: str) -> None:
    """Locality should default to Amsterdam."""
    document = normalize_xml(sample_export_xml)

    assert filter_stop_places(document) == filter_stop_places(document, "Amsterdam")


def test_filter_stop_places_returns_empty_for_unknown_town(sample_export_xml: str) -> None:
    """An unmatched locality yields an empty list rather than an error."""
    document = normalize_xml(sample_export_xml)

    assert filter_stop_places(document, "AMSTERDAM") == []


def test_extract_stop_places_wraps_single_stop_place(single_stop_export_xml: str) -> None:
    """A lone stop place element should still produce a list."""
    document = normalize_xml(single_stop_export_xml)

    assert len(extract_stop_places(document)) == 1


def test_extract_stop_places_accepts_empty_container() -> None:
    """An empty stopplaces element means no stop places."""
    assert extract_stop_places({"export": {"stopplaces": ""}}) == []


@pytest.mark.parametrize(
    "document",
    [{"other": {}}, {"export": {"exportinfo": {"exporttype": "full"}}}, {"export": ""}],
)
def test_extract_stop_places_raises_for_missing_structure(document: dict[str, object]) -> None:
    """Missing export root or stopplaces container is a schema error."""
    with pytest.raises(SchemaShapeError):
        extract_stop_places(document)
