"""Unit tests for export tree field access helpers."""

from __future__ import annotations

import pytest

from core.errors import MissingFieldError
from transforms.field_access import as_list, get_path, require_number


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, []),
        ("", []),
        ({"quaycode": "a"}, [{"quaycode": "a"}]),
        ([{"quaycode": "a"}, {"quaycode": "b"}], [{"quaycode": "a"}, {"quaycode": "b"}]),
    ],
)
def test_as_list_normalizes_singletons(value: object, expected: list[object]) -> None:
    """Absent, single and repeated values should all become lists."""
    assert as_list(value) == expected


def test_get_path_returns_default_for_missing_steps() -> None:
    """Path lookup should stop at non-mapping or missing steps."""
    quay = {"quaylocationdata": {"rd-x": 121000}, "quaybearing": ""}

    assert get_path(quay, ("quaylocationdata", "rd-x")) == 121000
    assert get_path(quay, ("quaybearing", "compassdirection")) is None
    assert get_path(quay, ("missing",), default="-") == "-"


def test_require_number_rejects_non_numeric_values() -> None:
    """Numeric lookups should reject strings and booleans."""
    quay = {"a": {"b": "12a"}, "c": True, "d": 4}

    assert require_number(quay, ("d",)) == 4.0
    with pytest.raises(MissingFieldError) as error_info:
        require_number(quay, ("a", "b"))
    assert error_info.value.field_path == "a.b"
    with pytest.raises(MissingFieldError):
        require_number(quay, ("c",))
