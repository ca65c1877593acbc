"""Remote CHB export download.

This module reads the published export directory listing, picks the
newest ``ExportCHB*.xml.gz`` archive and downloads it once into the
local data root.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable
from urllib.parse import unquote, urljoin, urlparse

import lxml.html
import requests

from core.config import HalteConfig
from core.constants import DOWNLOADS_DIR_NAME, EXPORT_NAME_PREFIX, LATEST_EXPORT_NAME
from core.errors import HalteSourceError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)

_DOWNLOAD_CHUNK_SIZE = 1024 * 1024


def find_export_links(listing_html: str, base_url: str) -> list[str]:
    """Extract absolute export archive URLs from a directory listing.

    Args:
        listing_html: HTML body of the directory listing.
        base_url: URL the listing was fetched from.

    Returns:
        Unique ``ExportCHB*.xml.gz`` URLs sorted by file name.
    """
    links: dict[str, str] = {}
    for href in _anchor_hrefs(listing_html):
        url = urljoin(base_url, href)
        name = export_file_name(url)
        if name.startswith(EXPORT_NAME_PREFIX) and name.endswith(".xml.gz"):
            links.setdefault(name, url)
    return [links[name] for name in sorted(links)]


def latest_export_name(names: Iterable[str]) -> str | None:
    """Return the last dated ``ExportCHB*`` name in sorted order, if any."""
    candidates = sorted(
        name
        for name in names
        if name.startswith(EXPORT_NAME_PREFIX) and not name.startswith(LATEST_EXPORT_NAME)
    )
    return candidates[-1] if candidates else None


def export_file_name(url: str) -> str:
    """Return the decoded file name part of a URL."""
    return unquote(Path(urlparse(url).path).name)


def download_latest_export(config: HalteConfig) -> Path:
    """Download the newest published export into the data root.

    An archive that already exists locally is not downloaded again.

    Args:
        config: Runtime configuration with source URL and data root.

    Returns:
        Local path of the export archive.

    Raises:
        HalteSourceError: If the listing or download fails, or no export is listed.
    """
    listing_html = _fetch_listing(config)
    links = find_export_links(listing_html, config.source_url)
    links_by_name = {export_file_name(link): link for link in links}
    latest_name = latest_export_name(links_by_name)
    if latest_name is None:
        raise HalteSourceError(
            f"No {EXPORT_NAME_PREFIX}*.xml.gz export listed at {config.source_url}. "
            "Check HALTE_SOURCE_URL."
        )
    target_path = config.data_root / DOWNLOADS_DIR_NAME / latest_name
    if target_path.exists():
        _LOGGER.info("export_already_present", path=str(target_path))
        return target_path
    _download_file(links_by_name[latest_name], target_path, config.http_timeout)
    _LOGGER.info("export_downloaded", url=links_by_name[latest_name], path=str(target_path))
    return target_path


def _fetch_listing(config: HalteConfig) -> str:
    """Fetch the export directory listing body."""
    try:
        response = requests.get(config.source_url, timeout=config.http_timeout)
        response.raise_for_status()
    except requests.RequestException as error:
        raise HalteSourceError(
            f"Failed to fetch export listing {config.source_url}: {error}. "
            "Check network access and HALTE_SOURCE_URL."
        ) from error
    return response.text


def _download_file(url: str, target_path: Path, timeout: float) -> None:
    """Stream a URL into a file, writing through a temporary name.

    Raises:
        HalteSourceError: If the request or file write fails.
    """
    target_path.parent.mkdir(parents=True, exist_ok=True)
    partial_path = target_path.with_name(target_path.name + ".part")
    try:
        with requests.get(url, stream=True, timeout=timeout) as response:
            response.raise_for_status()
            with partial_path.open("wb") as handle:
                for chunk in response.iter_content(chunk_size=_DOWNLOAD_CHUNK_SIZE):
                    handle.write(chunk)
        partial_path.replace(target_path)
    except (requests.RequestException, OSError) as error:
        partial_path.unlink(missing_ok=True)
        raise HalteSourceError(
            f"Failed to download export {url}: {error}. Retry `halte fetch`."
        ) from error


def _anchor_hrefs(listing_html: str) -> list[str]:
    """Return the decoded ``href`` of every anchor in an HTML document."""
    if not listing_html.strip():
        return []
    document = lxml.html.fromstring(listing_html)
    return [anchor.get("href").strip() for anchor in document.iter("a") if anchor.get("href")]
