"""Runtime configuration model for the mirror.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import DEFAULT_CACHE_URL, DEFAULT_MIRROR_ROOT, DEFAULT_PARALLELISM
from core.errors import MirrorConfigError


@dataclass(frozen=True)
class MirrorConfig:
    """Validated runtime configuration.

    Attributes:
        mirror_root: Local root directory holding narinfo files and NARs.
        cache_url: Base URL of the binary cache to mirror from.
        parallelism: Maximum number of concurrent narinfo resolutions.
    """

    mirror_root: Path
    cache_url: str
    parallelism: int

    @classmethod
    def from_env(cls) -> "MirrorConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            MirrorConfigError: If environment values are invalid.
        """
        mirror_root_value = os.getenv("NIX_MIRROR_ROOT", str(DEFAULT_MIRROR_ROOT))
        cache_url_value = os.getenv("NIX_MIRROR_CACHE_URL", DEFAULT_CACHE_URL)
        parallelism_value = os.getenv("NIX_MIRROR_PARALLELISM", str(DEFAULT_PARALLELISM))
        return cls(
            mirror_root=Path(mirror_root_value).expanduser().resolve(),
            cache_url=normalize_cache_url(cache_url_value),
            parallelism=parse_parallelism(parallelism_value),
        )


def normalize_cache_url(raw_value: str) -> str:
    """Validate a cache URL and strip trailing slashes.

    Args:
        raw_value: Raw cache URL from environment or CLI.

    Returns:
        Cache URL without trailing slash.

    Raises:
        MirrorConfigError: If the URL is not an http(s) URL.
    """
    cache_url = raw_value.strip().rstrip("/")
    if not cache_url.startswith(("http://", "https://")):
        raise MirrorConfigError(
            f"Invalid cache URL '{raw_value}': expected an http:// or https:// URL. "
            "Set NIX_MIRROR_CACHE_URL or --cache-url to the binary cache base URL."
        )
    return cache_url


def parse_parallelism(raw_value: str | int) -> int:
    """Parse and validate the concurrency limit.

    Args:
        raw_value: Raw value from environment or CLI.

    Returns:
        Parsed positive integer.

    Raises:
        MirrorConfigError: If value is not a positive integer.
    """
    try:
        parallelism = int(raw_value)
    except ValueError as error:
        raise MirrorConfigError(
            f"Invalid parallelism value: expected integer, got '{raw_value}'. "
            "Set NIX_MIRROR_PARALLELISM or --parallelism to a numeric value."
        ) from error
    if parallelism < 1:
        raise MirrorConfigError(
            f"Invalid parallelism {parallelism}: expected at least 1. "
            "Set NIX_MIRROR_PARALLELISM or --parallelism to a positive number."
        )
    return parallelism
