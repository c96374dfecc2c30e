"""Shared typed models.

This module defines immutable data models used by the fetcher,
resolver, scheduler, and SDK layers to keep interfaces explicit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NewType

from core.constants import DEFAULT_CACHE_URL, DEFAULT_PARALLELISM

PackageId = NewType("PackageId", str)


@dataclass(frozen=True)
class NarInfo:
    """Parsed narinfo metadata document.

    Attributes:
        url: Content blob location relative to the cache root.
        file_hash: Digest of the content blob, without its algorithm tag.
        references: Package ids the package depends on.
    """

    url: str
    file_hash: str
    references: frozenset[PackageId] = field(default_factory=frozenset)


@dataclass(frozen=True)
class MirrorOptions:
    """User-facing sync options.

    Attributes:
        root_ids: Package ids the traversal starts from.
        cache_url: Base URL of the binary cache.
        parallelism: Maximum number of concurrent resolutions.
    """

    root_ids: frozenset[PackageId]
    cache_url: str = DEFAULT_CACHE_URL
    parallelism: int = DEFAULT_PARALLELISM


@dataclass(frozen=True)
class MirrorRunResult:
    """Summary of a completed mirror run.

    Attributes:
        seen: Every package id scheduled during the run.
        wave_count: Number of frontier waves executed.
        resolved_count: Number of resolutions performed.
    """

    seen: frozenset[PackageId]
    wave_count: int
    resolved_count: int

