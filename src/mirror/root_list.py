"""Root store path list reader.

This module loads the package ids a mirror run starts from. Input is a
newline-separated list of store paths, optionally xz-compressed, as
published in channel ``store-paths.xz`` files.
"""

from __future__ import annotations

import lzma
from pathlib import Path

from core.constants import XZ_SUFFIX
from core.errors import MirrorInputError
from core.store_paths import store_path_to_package_id
from core.types import PackageId


def read_root_package_ids(store_paths_path: Path) -> frozenset[PackageId]:
    """Read root package ids from a store paths file.

    Args:
        store_paths_path: Plain or ``.xz`` compressed store paths file.

    Returns:
        Unique package ids of the listed store paths.

    Raises:
        MirrorInputError: If the file is missing, unreadable, or malformed.
    """
    text = _read_store_paths_text(store_paths_path)
    return frozenset(
        store_path_to_package_id(line) for line in text.splitlines() if line.strip()
    )


def _read_store_paths_text(store_paths_path: Path) -> str:
    """Read the store paths file, decompressing xz input."""
    if not store_paths_path.is_file():
        raise MirrorInputError(
            f"Failed to read store paths at {store_paths_path}: file does not exist. "
            "Provide a store-paths file, e.g. a channel's store-paths.xz."
        )
    try:
        if store_paths_path.suffix == XZ_SUFFIX:
            with lzma.open(store_paths_path, "rt", encoding="utf-8") as handle:
                return handle.read()
        return store_paths_path.read_text(encoding="utf-8")
    except (OSError, lzma.LZMAError, UnicodeDecodeError) as error:
        raise MirrorInputError(
            f"Failed to read store paths at {store_paths_path}: {error}. "
            "Check that the file is a valid (optionally xz-compressed) text file."
        ) from error
