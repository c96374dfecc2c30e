"""Unit tests for wave-based closure traversal."""

from __future__ import annotations

import asyncio
from collections import Counter

import pytest

from core.errors import MirrorConfigError, MirrorTransportError
from core.types import MirrorRunResult, PackageId
from mirror.frontier_scheduler import FrontierScheduler


class _GraphResolver:
    """Resolve function backed by an in-memory reference graph."""

    def __init__(self, graph: dict[str, set[str]], delay: float = 0.0) -> None:
        self.graph = graph
        self.delay = delay
        self.calls: Counter[str] = Counter()
        self.in_flight = 0
        self.max_in_flight = 0

    async def __call__(self, package_id: PackageId) -> frozenset[PackageId]:
        self.calls[package_id] += 1
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            if package_id == "broken":
                raise MirrorTransportError("Failed to download broken.narinfo: HTTP 404.")
            return frozenset(PackageId(ref) for ref in self.graph.get(package_id, set()))
        finally:
            self.in_flight -= 1


def _run(resolver: _GraphResolver, roots: set[str], parallelism: int = 4) -> MirrorRunResult:
    scheduler = FrontierScheduler(resolver, parallelism)
    return asyncio.run(scheduler.run(PackageId(root) for root in roots))


def test_run_resolves_two_level_closure() -> None:
    """Root A referencing B should finish after two waves with both seen."""
    resolver = _GraphResolver({"A": {"B"}, "B": set()})

    result = _run(resolver, {"A"})

    assert result.seen == frozenset({"A", "B"})
    assert result.wave_count == 2 and result.resolved_count == 2


def test_run_resolves_each_package_once() -> None:
    """Packages referenced many times, including cycles, resolve exactly once."""
    graph = {"A": {"B", "C", "A"}, "B": {"C", "A"}, "C": {"A", "B", "D"}, "D": {"B"}}
    resolver = _GraphResolver(graph)

    result = _run(resolver, {"A", "B"})

    assert set(resolver.calls.values()) == {1}
    assert result.seen == frozenset({"A", "B", "C", "D"})


def test_run_wave_count_follows_longest_chain() -> None:
    """A chain of four packages needs four waves."""
    resolver = _GraphResolver({"A": {"B"}, "B": {"C"}, "C": {"D"}, "D": set()})

    result = _run(resolver, {"A"})

    assert result.wave_count == 4


def test_run_with_no_roots_does_nothing() -> None:
    """An empty root set terminates immediately."""
    resolver = _GraphResolver({})

    result = _run(resolver, set())

    assert result == MirrorRunResult(seen=frozenset(), wave_count=0, resolved_count=0)


def test_run_bounds_concurrent_resolutions() -> None:
    """No more than ``parallelism`` resolutions may be in flight."""
    roots = {f"root{index}" for index in range(20)}
    resolver = _GraphResolver({}, delay=0.01)

    _run(resolver, roots, parallelism=3)

    assert resolver.max_in_flight == 3


def test_run_aborts_on_first_failure() -> None:
    """A failed resolution aborts the run before later waves start."""
    resolver = _GraphResolver({"A": {"broken", "B"}, "B": {"C"}})

    with pytest.raises(MirrorTransportError):
        _run(resolver, {"A"})

    assert resolver.calls["C"] == 0


def test_scheduler_rejects_zero_parallelism() -> None:
    """At least one resolution must be allowed in flight."""
    with pytest.raises(MirrorConfigError):
        FrontierScheduler(_GraphResolver({}), 0)
