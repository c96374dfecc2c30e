"""Public SDK surface for nix-mirror.

This module provides a stable import path for library users.
It re-exports the client, typed option models, and errors.
"""

from __future__ import annotations

from core.config import MirrorConfig
from core.errors import (
    MirrorConfigError,
    MirrorError,
    MirrorFilesystemError,
    MirrorInputError,
    MirrorIntegrityError,
    MirrorParseError,
    MirrorTransportError,
)
from core.store_paths import filename_to_package_id, store_path_to_package_id
from core.types import MirrorOptions, MirrorRunResult, NarInfo, PackageId
from fetch.atomic_fetcher import fetch_atomically
from mirror.frontier_scheduler import FrontierScheduler
from mirror.mirror_sdk import MirrorClient
from narinfo.parser import parse_narinfo
from narinfo.resolver import NarInfoResolver

__all__ = [
    "FrontierScheduler",
    "MirrorClient",
    "MirrorConfig",
    "MirrorConfigError",
    "MirrorError",
    "MirrorFilesystemError",
    "MirrorInputError",
    "MirrorIntegrityError",
    "MirrorOptions",
    "MirrorParseError",
    "MirrorRunResult",
    "MirrorTransportError",
    "NarInfo",
    "NarInfoResolver",
    "PackageId",
    "fetch_atomically",
    "filename_to_package_id",
    "parse_narinfo",
    "store_path_to_package_id",
]
