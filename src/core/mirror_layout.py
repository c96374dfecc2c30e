"""Local mirror directory layout.

This module maps package ids and narinfo URLs onto cleaned paths
under the mirror root, rejecting paths that escape it.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import NAR_DIR_NAME, NARINFO_EXTENSION
from core.errors import MirrorParseError
from core.types import PackageId


@dataclass(frozen=True)
class MirrorLayout:
    """Path policy for one mirror root.

    Attributes:
        mirror_root: Absolute root directory of the mirror.
    """

    mirror_root: Path

    @property
    def nar_dir(self) -> Path:
        """Directory holding content blobs in the standard cache layout."""
        return self.mirror_root / NAR_DIR_NAME

    def narinfo_path(self, package_id: PackageId) -> Path:
        """Return the local narinfo path for a package id."""
        return self.resolve_relative(f"{package_id}{NARINFO_EXTENSION}")

    def content_path(self, url: str) -> Path:
        """Return the local content blob path for a narinfo URL."""
        return self.resolve_relative(url)

    def resolve_relative(self, relative_path: str) -> Path:
        """Join and normalize a relative path under the mirror root.

        Args:
            relative_path: Externally supplied relative location.

        Returns:
            Cleaned absolute path inside the mirror root.

        Raises:
            MirrorParseError: If the cleaned path is outside the mirror root.
        """
        root = os.path.normpath(self.mirror_root)
        cleaned = os.path.normpath(os.path.join(root, relative_path))
        if cleaned == root or os.path.commonpath([root, cleaned]) != root:
            raise MirrorParseError(
                f"Refusing mirror path '{relative_path}': it resolves outside {root}. "
                "The cache returned an unsafe location."
            )
        return Path(cleaned)
