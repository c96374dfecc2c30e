"""Atomic, digest-verified downloads.

This module streams an HTTP resource into a scratch file beside its
destination and renames it into place only after the transfer and the
optional digest check succeed. Readers never observe partial files.
Disk writes, fsync, and the rename run on the default executor.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from types import TracebackType
from typing import BinaryIO

import httpx

from core.blocking_io import run_blocking
from core.constants import DOWNLOAD_CHUNK_SIZE, SCRATCH_FILE_SUFFIX
from core.errors import MirrorFilesystemError, MirrorIntegrityError, MirrorTransportError
from core.logging_config import get_logger
from fetch.content_digest import ContentHasher

_LOGGER = get_logger(__name__)


class ScratchFile:
    """Scratch file that is removed on exit unless promoted.

    The file lives in the destination directory so that promotion is a
    same-filesystem rename.
    """

    def __init__(self, destination: Path) -> None:
        self._destination = destination
        self._path: Path | None = None
        self._handle: BinaryIO | None = None
        self._promoted = False
        self._byte_count = 0

    @property
    def byte_count(self) -> int:
        """Number of bytes written to the scratch file."""
        return self._byte_count

    def __enter__(self) -> "ScratchFile":
        directory = self._destination.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            handle = tempfile.NamedTemporaryFile(
                mode="wb",
                dir=directory,
                prefix=f".{self._destination.name}.",
                suffix=SCRATCH_FILE_SUFFIX,
                delete=False,
            )
        except OSError as error:
            raise MirrorFilesystemError(
                f"Failed to create scratch file in {directory}: {error}. "
                "Check that the mirror directory is writable."
            ) from error
        self._handle = handle
        self._path = Path(handle.name)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        if self._handle is not None and not self._handle.closed:
            self._handle.close()
        if not self._promoted and self._path is not None:
            self._path.unlink(missing_ok=True)

    def write(self, chunk: bytes) -> None:
        """Append one chunk to the scratch file."""
        handle = self._require_handle()
        try:
            handle.write(chunk)
        except OSError as error:
            raise MirrorFilesystemError(
                f"Failed to write scratch file {self._path}: {error}. "
                "Check free space on the mirror filesystem."
            ) from error
        self._byte_count += len(chunk)

    def finish(self) -> None:
        """Flush, sync, and close the scratch file."""
        handle = self._require_handle()
        try:
            handle.flush()
            os.fsync(handle.fileno())
            handle.close()
        except OSError as error:
            raise MirrorFilesystemError(
                f"Failed to flush scratch file {self._path}: {error}. "
                "Check free space on the mirror filesystem."
            ) from error

    def promote(self) -> Path:
        """Atomically rename the finished scratch file onto its destination.

        Returns:
            The destination path.

        Raises:
            MirrorFilesystemError: If the rename fails.
        """
        if self._handle is not None and not self._handle.closed:
            self.finish()
        try:
            os.replace(self._path, self._destination)
        except OSError as error:
            raise MirrorFilesystemError(
                f"Failed to move {self._path} to {self._destination}: {error}. "
                "Check permissions on the mirror directory."
            ) from error
        self._promoted = True
        return self._destination

    def _require_handle(self) -> BinaryIO:
        if self._handle is None:
            raise MirrorFilesystemError(
                f"Scratch file for {self._destination} was used outside its context. "
                "Enter the ScratchFile context before writing."
            )
        return self._handle


async def fetch_atomically(
    client: httpx.AsyncClient,
    url: str,
    destination: Path,
    expected_digest: str | None = None,
) -> Path:
    """Download a URL onto a destination path atomically.

    Args:
        client: Shared async HTTP client.
        url: Resource to download.
        destination: Final path of the downloaded file.
        expected_digest: Optional nix-base32 SHA-256 digest to verify.

    Returns:
        The destination path, now holding the complete resource.

    Raises:
        MirrorTransportError: For non-2xx responses or connection failures.
        MirrorIntegrityError: If the content digest does not match.
        MirrorFilesystemError: If local file operations fail.
    """
    hasher = ContentHasher() if expected_digest is not None else None
    try:
        async with client.stream("GET", url) as response:
            _raise_for_status(response, url)
            with ScratchFile(destination) as scratch:
                async for chunk in response.aiter_bytes(DOWNLOAD_CHUNK_SIZE):
                    if hasher is not None:
                        hasher.update(chunk)
                    await run_blocking(scratch.write, chunk)
                await run_blocking(scratch.finish)
                if hasher is not None:
                    _verify_digest(hasher, expected_digest, url, destination)
                fetched_path = await run_blocking(scratch.promote)
    except httpx.HTTPError as error:
        raise MirrorTransportError(
            f"Failed to download {url}: {error}. "
            "Check network connectivity and the cache URL."
        ) from error
    _LOGGER.info(
        "fetch_completed",
        url=url,
        destination=str(fetched_path),
        byte_count=scratch.byte_count,
        verified=hasher is not None,
    )
    return fetched_path


def _raise_for_status(response: httpx.Response, url: str) -> None:
    """Reject non-2xx responses before anything is written."""
    if response.is_success:
        return
    raise MirrorTransportError(
        f"Failed to download {url}: HTTP {response.status_code}. "
        "The cache may not hold this path; check the cache URL."
    )


def _verify_digest(
    hasher: ContentHasher,
    expected_digest: str | None,
    url: str,
    destination: Path,
) -> None:
    """Compare the computed digest with the expected one."""
    computed_digest = hasher.nix_base32_digest()
    if computed_digest == expected_digest:
        return
    _LOGGER.error(
        "fetch_digest_mismatch",
        url=url,
        destination=str(destination),
        expected=expected_digest,
        computed=computed_digest,
    )
    raise MirrorIntegrityError(
        f"Hash of {destination} failed verification: expected {expected_digest}, "
        f"got {computed_digest} from {url}. The file was discarded."
    )
