"""Unit tests for remote export download."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any

import pytest
import requests

from core.config import HalteConfig
from core.errors import HalteSourceError
from ingest.remote_fetch import download_latest_export, find_export_links, latest_export_name

_LISTING_URL = "https://data.example.test/haltes/"
_LISTING_HTML = """
<html><body><pre>
<a href="../">../</a>
<a href="ExportCHB20240101.xml.gz">ExportCHB20240101.xml.gz</a>
<a href="ExportCHB20240501.xml.gz">ExportCHB20240501.xml.gz</a>
<a href='https://data.example.test/haltes/ExportCHB20240301.xml.gz'>older</a>
<a href="PassengerStopAssignmentExportCHB20240501.xml.gz">psa</a>
<a href="ExportCHB20240501.xsd">schema</a>
</pre></body></html>
"""


class _FakeResponse:
    def __init__(self, text: str = "", content: bytes = b"", status_code: int = 200) -> None:
        self.text = text
        self._content = content
        self.status_code = status_code

    def __enter__(self) -> "_FakeResponse":
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def iter_content(self, chunk_size: int) -> Any:
        for start in range(0, len(self._content), chunk_size):
            yield self._content[start : start + chunk_size]


def _config(tmp_path: Path) -> HalteConfig:
    return replace(HalteConfig.from_env(), data_root=tmp_path, source_url=_LISTING_URL)


def test_find_export_links_resolves_and_sorts_archives() -> None:
    """Only ExportCHB*.xml.gz links should be returned, absolute and sorted."""
    links = find_export_links(_LISTING_HTML, _LISTING_URL)

    assert links == [
        "https://data.example.test/haltes/ExportCHB20240101.xml.gz",
        "https://data.example.test/haltes/ExportCHB20240301.xml.gz",
        "https://data.example.test/haltes/ExportCHB20240501.xml.gz",
    ]


def test_find_export_links_reads_unquoted_and_escaped_hrefs() -> None:
    """Bare attribute values and character references should still resolve."""
    listing = (
        "<a href=ExportCHB20240501.xml.gz>x</a>"
        "<a href='ExportCHB&#50;0240601.xml.gz?mirror=1&amp;v=2'>y</a>"
        "<a name=top>no link</a>"
    )

    links = find_export_links(listing, _LISTING_URL)

    assert links == [
        "https://data.example.test/haltes/ExportCHB20240501.xml.gz",
        "https://data.example.test/haltes/ExportCHB20240601.xml.gz?mirror=1&v=2",
    ]


def test_find_export_links_returns_nothing_for_blank_listing() -> None:
    """An empty listing body has no links."""
    assert find_export_links("  \n", _LISTING_URL) == []


def test_latest_export_name_uses_sorted_order() -> None:
    """The last dated export name wins; Latest copies do not count."""
    names = ["ExportCHB20240101.xml.gz", "ExportCHBLatest.xml.gz", "ExportCHB20240501.xml.gz"]

    assert latest_export_name(names) == "ExportCHB20240501.xml.gz"
    assert latest_export_name([]) is None


def test_download_latest_export_writes_newest_archive(
    isolated_env: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Download should fetch the listing and store the newest archive."""
    requested: list[str] = []

    def fake_get(url: str, **kwargs: Any) -> _FakeResponse:
        requested.append(url)
        if url == _LISTING_URL:
            return _FakeResponse(text=_LISTING_HTML)
        return _FakeResponse(content=b"archive-bytes")

    monkeypatch.setattr(requests, "get", fake_get)

    path = download_latest_export(_config(tmp_path))

    assert path == tmp_path / "downloads" / "ExportCHB20240501.xml.gz"
    assert path.read_bytes() == b"archive-bytes"
    assert requested[-1].endswith("ExportCHB20240501.xml.gz")


def test_download_latest_export_skips_existing_archive(
    isolated_env: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """An archive already on disk is not downloaded again."""
    existing = tmp_path / "downloads" / "ExportCHB20240501.xml.gz"
    existing.parent.mkdir(parents=True)
    existing.write_bytes(b"cached")
    requested: list[str] = []

    def fake_get(url: str, **kwargs: Any) -> _FakeResponse:
        requested.append(url)
        return _FakeResponse(text=_LISTING_HTML)

    monkeypatch.setattr(requests, "get", fake_get)

    path = download_latest_export(_config(tmp_path))

    assert path == existing and path.read_bytes() == b"cached"
    assert requested == [_LISTING_URL]


def test_download_latest_export_raises_for_http_failure(
    isolated_env: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """HTTP errors on the listing surface as source errors."""
    monkeypatch.setattr(requests, "get", lambda url, **kwargs: _FakeResponse(status_code=503))

    with pytest.raises(HalteSourceError):
        download_latest_export(_config(tmp_path))


def test_download_latest_export_raises_when_nothing_listed(
    isolated_env: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """A listing without exports is a source error."""
    monkeypatch.setattr(requests, "get", lambda url, **kwargs: _FakeResponse(text="<html/>"))

    with pytest.raises(HalteSourceError):
        download_latest_export(_config(tmp_path))
