"""Store path identifier extraction.

This module maps Nix store paths and file names onto package ids,
the leading hash segment that keys narinfo files in a binary cache.
"""

from __future__ import annotations

from pathlib import PurePosixPath

from core.constants import STORE_PATH_HASH_SEPARATOR
from core.errors import MirrorInputError
from core.types import PackageId


def filename_to_package_id(filename: str) -> PackageId:
    """Extract the package id from a store file name.

    Args:
        filename: File name such as ``0001...-hello-2.12``.

    Returns:
        Text before the first ``-`` separator.

    Raises:
        MirrorInputError: If no hash segment is present.
    """
    package_id = filename.split(STORE_PATH_HASH_SEPARATOR, 1)[0]
    if not package_id:
        raise MirrorInputError(
            f"Failed to parse package id from '{filename}': empty hash segment. "
            "Expected a store name of the form <hash>-<name>."
        )
    return PackageId(package_id)


def store_path_to_package_id(store_path: str) -> PackageId:
    """Extract the package id from a full store path.

    Args:
        store_path: Store path such as ``/nix/store/0001...-hello-2.12``.

    Returns:
        Package id of the final path component.

    Raises:
        MirrorInputError: If the path has no final component.
    """
    filename = PurePosixPath(store_path.strip()).name
    if not filename:
        raise MirrorInputError(
            f"Failed to parse store path '{store_path}': missing file name. "
            "Expected a path like /nix/store/<hash>-<name>."
        )
    return filename_to_package_id(filename)
