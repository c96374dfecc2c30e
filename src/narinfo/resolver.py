"""Narinfo resolution against the local mirror.

This module makes sure a package's narinfo file and content blob exist
under the mirror root, fetching whichever is missing, and returns the
package ids the narinfo references.
"""

from __future__ import annotations

from pathlib import Path

import httpx

from core.blocking_io import run_blocking
from core.constants import NARINFO_EXTENSION
from core.errors import MirrorFilesystemError
from core.logging_config import get_logger
from core.mirror_layout import MirrorLayout
from core.types import NarInfo, PackageId
from fetch.atomic_fetcher import fetch_atomically
from narinfo.parser import parse_narinfo

_LOGGER = get_logger(__name__)


class NarInfoResolver:
    """Resolve package ids into mirrored narinfo and NAR files."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        cache_url: str,
        layout: MirrorLayout,
    ) -> None:
        self._client = client
        self._cache_url = cache_url.rstrip("/")
        self._layout = layout

    async def resolve(self, package_id: PackageId) -> frozenset[PackageId]:
        """Mirror one package and return its references.

        Args:
            package_id: Package to mirror.

        Returns:
            Package ids referenced by the package's narinfo.

        Raises:
            MirrorTransportError: If a download fails.
            MirrorIntegrityError: If the content blob digest mismatches.
            MirrorParseError: If the narinfo is malformed.
            MirrorFilesystemError: If local file operations fail.
        """
        narinfo = await self._load_narinfo(package_id)
        await self._ensure_content(package_id, narinfo)
        return narinfo.references

    async def _load_narinfo(self, package_id: PackageId) -> NarInfo:
        narinfo_path = self._layout.narinfo_path(package_id)
        if not narinfo_path.is_file():
            url = f"{self._cache_url}/{package_id}{NARINFO_EXTENSION}"
            await fetch_atomically(self._client, url, narinfo_path)
            _LOGGER.debug("narinfo_fetched", package_id=package_id, url=url)
        text = await run_blocking(_read_text, narinfo_path)
        return parse_narinfo(text, str(narinfo_path))

    async def _ensure_content(self, package_id: PackageId, narinfo: NarInfo) -> None:
        content_path = self._layout.content_path(narinfo.url)
        if content_path.is_file():
            return
        url = f"{self._cache_url}/{narinfo.url}"
        await fetch_atomically(self._client, url, content_path, narinfo.file_hash)
        _LOGGER.debug("nar_fetched", package_id=package_id, url=url)


def _read_text(path: Path) -> str:
    """Read a mirrored narinfo file."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as error:
        raise MirrorFilesystemError(
            f"Failed to read narinfo {path}: {error}. "
            "Delete the file and rerun to fetch a fresh copy."
        ) from error
