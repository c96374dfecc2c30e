"""Python SDK for mirror runs.

This module wires config, layout, HTTP client, resolver, and
scheduler together behind a small client object.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import httpx

from core.config import MirrorConfig
from core.errors import MirrorFilesystemError
from core.mirror_layout import MirrorLayout
from core.types import MirrorOptions, MirrorRunResult
from mirror.frontier_scheduler import FrontierScheduler
from mirror.progress import MirrorProgressTracker
from mirror.root_list import read_root_package_ids
from narinfo.resolver import NarInfoResolver


class MirrorClient:
    """Primary SDK entry point for mirroring a binary cache."""

    def __init__(
        self,
        config: MirrorConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            transport: Optional httpx transport, used to stub the network.
        """
        self._config = config or MirrorConfig.from_env()
        self._transport = transport

    @property
    def config(self) -> MirrorConfig:
        """Runtime configuration used by this client."""
        return self._config

    def options_from_store_paths(self, store_paths_path: Path) -> MirrorOptions:
        """Build sync options from a store paths file and the config.

        Args:
            store_paths_path: Plain or xz-compressed store paths file.

        Returns:
            Options rooted at the listed store paths.
        """
        return MirrorOptions(
            root_ids=read_root_package_ids(store_paths_path),
            cache_url=self._config.cache_url,
            parallelism=self._config.parallelism,
        )

    def sync(self, options: MirrorOptions) -> MirrorRunResult:
        """Mirror the closure of the option roots, blocking until done.

        Args:
            options: Sync options.

        Returns:
            Run summary.

        Raises:
            MirrorError: On the first unrecoverable failure.
        """
        return asyncio.run(self.sync_async(options))

    async def sync_async(self, options: MirrorOptions) -> MirrorRunResult:
        """Coroutine form of ``sync``."""
        layout = MirrorLayout(self._config.mirror_root)
        _prepare_layout(layout)
        async with httpx.AsyncClient(
            transport=self._transport,
            follow_redirects=True,
        ) as http_client:
            resolver = NarInfoResolver(http_client, options.cache_url, layout)
            scheduler = FrontierScheduler(
                resolver.resolve,
                options.parallelism,
                MirrorProgressTracker(),
            )
            return await scheduler.run(options.root_ids)


def _prepare_layout(layout: MirrorLayout) -> None:
    """Create the mirror root and its NAR directory."""
    try:
        layout.nar_dir.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        raise MirrorFilesystemError(
            f"Failed to create mirror directory {layout.nar_dir}: {error}. "
            "Check permissions on the mirror root."
        ) from error
