"""Structured mirror progress reporting.

This module emits periodic progress events for long-running mirror
runs. The total grows as references are discovered, so percentages
are relative to what is known at the time of each event.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from core.constants import PROGRESS_LOG_INTERVAL
from core.logging_config import get_logger
from core.types import MirrorRunResult, PackageId

_LOGGER = get_logger(__name__)


@dataclass
class MirrorProgressTracker:
    """Track and emit mirror progress events across waves."""

    log_interval: int = PROGRESS_LOG_INTERVAL
    scheduled_count: int = 0
    resolved_count: int = 0
    run_started_at: float = field(default_factory=time.monotonic)

    def log_started(self, root_count: int) -> None:
        """Log one event when a mirror run starts."""
        self.run_started_at = time.monotonic()
        _LOGGER.info("mirror_started", root_count=root_count)

    def add_scheduled(self, count: int) -> None:
        """Grow the known total by newly scheduled package ids."""
        self.scheduled_count += count

    def log_resolved(self, package_id: PackageId, new_reference_count: int) -> None:
        """Record one finished resolution and log periodically."""
        self.resolved_count += 1
        if not _should_log(self.resolved_count, self.scheduled_count, self.log_interval):
            return
        _LOGGER.info(
            "mirror_progress",
            last_package_id=package_id,
            new_references=new_reference_count,
            resolved=self.resolved_count,
            scheduled=self.scheduled_count,
            progress=round(_progress_fraction(self.resolved_count, self.scheduled_count), 3),
            elapsed_seconds=round(time.monotonic() - self.run_started_at, 3),
        )

    def log_wave_completed(self, wave_index: int, next_frontier_size: int) -> None:
        """Log the end of one frontier wave."""
        _LOGGER.info(
            "mirror_wave_completed",
            wave=wave_index,
            resolved=self.resolved_count,
            scheduled=self.scheduled_count,
            next_frontier_size=next_frontier_size,
        )

    def log_completed(self, result: MirrorRunResult) -> None:
        """Log the run summary."""
        _LOGGER.info(
            "mirror_completed",
            seen=len(result.seen),
            waves=result.wave_count,
            resolved=result.resolved_count,
            elapsed_seconds=round(time.monotonic() - self.run_started_at, 3),
        )


def _should_log(resolved_count: int, scheduled_count: int, interval: int) -> bool:
    """Return true when the current completion should emit an event."""
    if resolved_count <= 1 or resolved_count >= scheduled_count:
        return True
    return resolved_count % max(1, interval) == 0


def _progress_fraction(resolved_count: int, scheduled_count: int) -> float:
    """Compute bounded progress fraction."""
    if scheduled_count <= 0:
        return 0.0
    return min(1.0, max(0.0, resolved_count / scheduled_count))
