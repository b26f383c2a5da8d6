"""Shared test fixtures."""

from collections.abc import Iterable

import pytest

from vmhealth.errors import MetricUnavailable
from vmhealth.models import CpuSnapshot, DiskSnapshot, MemSnapshot


class FakeSource:
    """Snapshot source replaying fixed readings; None means unavailable."""

    def __init__(
        self,
        cpu: Iterable[CpuSnapshot] | None = None,
        memory: MemSnapshot | None = None,
        disk_percent: float | str | None = None,
    ) -> None:
        self._cpu = list(cpu) if cpu is not None else None
        self._memory = memory
        self._disk_percent = disk_percent
        self.cpu_reads = 0
        self.disk_paths: list[str] = []

    def read_cpu(self) -> CpuSnapshot:
        if self._cpu is None:
            raise MetricUnavailable("cpu", "no counters")
        snapshot = self._cpu[self.cpu_reads]
        self.cpu_reads += 1
        return snapshot

    def read_memory(self) -> MemSnapshot:
        if self._memory is None:
            raise MetricUnavailable("memory", "no meminfo")
        return self._memory

    def read_disk(self, path: str = "/") -> DiskSnapshot:
        self.disk_paths.append(path)
        if self._disk_percent is None:
            raise MetricUnavailable("disk", "no filesystem")
        return DiskSnapshot(path=path, used_percent=self._disk_percent)


def cpu_pair(busy_percent: float) -> list[CpuSnapshot]:
    """Two CPU snapshots 1000 ticks apart with the given busy share."""
    busy = round(busy_percent * 10)
    return [
        CpuSnapshot(user=5000, system=1000, idle=20000, iowait=500),
        CpuSnapshot(user=5000 + busy, system=1000, idle=20000 + (1000 - busy), iowait=500),
    ]


def mem_at(used_percent: float) -> MemSnapshot:
    """Memory snapshot with the given used share of 1000 bytes."""
    used = round(used_percent * 10)
    return MemSnapshot(total=1000, available=1000 - used)


@pytest.fixture
def no_sleep() -> list[float]:
    """Collects requested sleep durations instead of sleeping."""
    return []


@pytest.fixture
def make_source():
    """Factory for a FakeSource reporting the given percentages."""

    def factory(cpu: float | None, mem: float | None, disk: float | None) -> FakeSource:
        return FakeSource(
            cpu=cpu_pair(cpu) if cpu is not None else None,
            memory=mem_at(mem) if mem is not None else None,
            disk_percent=disk,
        )

    return factory
