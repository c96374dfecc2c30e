"""Wave-based reference closure traversal.

This module resolves the closure of a root set level by level. Each
wave resolves the current frontier with at most ``parallelism``
resolutions in flight; references not seen before form the next
frontier. The first failure aborts the run.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Iterable

from core.errors import MirrorConfigError, MirrorError
from core.logging_config import get_logger
from core.types import MirrorRunResult, PackageId
from mirror.progress import MirrorProgressTracker

_LOGGER = get_logger(__name__)

ResolveFn = Callable[[PackageId], Awaitable[frozenset[PackageId]]]


class FrontierScheduler:
    """Coordinator that owns the seen set and the current frontier."""

    def __init__(
        self,
        resolve: ResolveFn,
        parallelism: int,
        progress: MirrorProgressTracker | None = None,
    ) -> None:
        if parallelism < 1:
            raise MirrorConfigError(
                f"Invalid parallelism {parallelism}: expected at least 1. "
                "Use a positive number of concurrent downloads."
            )
        self._resolve = resolve
        self._parallelism = parallelism
        self._progress = progress or MirrorProgressTracker()

    async def run(self, root_ids: Iterable[PackageId]) -> MirrorRunResult:
        """Resolve every package reachable from the roots.

        Args:
            root_ids: Package ids to start from.

        Returns:
            Run summary with the final seen set.

        Raises:
            MirrorError: The first resolution failure, unchanged.
        """
        frontier = frozenset(root_ids)
        seen: set[PackageId] = set(frontier)
        wave_count = 0
        resolved_count = 0
        self._progress.log_started(len(frontier))
        while frontier:
            wave_count += 1
            self._progress.add_scheduled(len(frontier))
            _LOGGER.info(
                "mirror_wave_started",
                wave=wave_count,
                frontier_size=len(frontier),
                seen=len(seen),
            )
            next_frontier = await self._drain_wave(frontier, seen)
            resolved_count += len(frontier)
            self._progress.log_wave_completed(wave_count, len(next_frontier))
            frontier = next_frontier
        result = MirrorRunResult(
            seen=frozenset(seen),
            wave_count=wave_count,
            resolved_count=resolved_count,
        )
        self._progress.log_completed(result)
        return result

    async def _drain_wave(
        self,
        frontier: frozenset[PackageId],
        seen: set[PackageId],
    ) -> frozenset[PackageId]:
        """Resolve one frontier and fold unseen references into the next."""
        semaphore = asyncio.Semaphore(self._parallelism)
        tasks = [
            asyncio.create_task(self._resolve_bounded(semaphore, package_id))
            for package_id in frontier
        ]
        next_frontier: set[PackageId] = set()
        try:
            for completed in asyncio.as_completed(tasks):
                package_id, references = await completed
                unseen = references.difference(seen)
                seen.update(unseen)
                next_frontier.update(unseen)
                self._progress.log_resolved(package_id, len(unseen))
        finally:
            await _cancel_pending(tasks)
        return frozenset(next_frontier)

    async def _resolve_bounded(
        self,
        semaphore: asyncio.Semaphore,
        package_id: PackageId,
    ) -> tuple[PackageId, frozenset[PackageId]]:
        async with semaphore:
            try:
                references = await self._resolve(package_id)
            except MirrorError as error:
                _LOGGER.error(
                    "mirror_resolution_failed",
                    package_id=package_id,
                    error_kind=type(error).__name__,
                    error=str(error),
                )
                raise
        return package_id, frozenset(references)


async def _cancel_pending(tasks: list[asyncio.Task]) -> None:
    """Cancel unfinished wave tasks and wait for them to settle."""
    for task in tasks:
        if not task.done():
            task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)
