"""Core constants used across mirror modules.

This module centralizes cache protocol names and runtime defaults.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_MIRROR_ROOT = Path("mirror")
DEFAULT_CACHE_URL = "https://cache.nixos.org"
DEFAULT_PARALLELISM = 8
NARINFO_EXTENSION = ".narinfo"
NAR_DIR_NAME = "nar"
NARINFO_KEY_SEPARATOR = ": "
NARINFO_URL_KEY = "URL"
NARINFO_REFERENCES_KEY = "References"
NARINFO_FILE_HASH_KEY = "FileHash"
STORE_PATH_HASH_SEPARATOR = "-"
HASH_ALGORITHM = "sha256"
NIX_BASE32_ALPHABET = "0123456789abcdfghijklmnpqrsvwxyz"
DOWNLOAD_CHUNK_SIZE = 64 * 1024
SCRATCH_FILE_SUFFIX = ".part"
PROGRESS_LOG_INTERVAL = 100
XZ_SUFFIX = ".xz"
