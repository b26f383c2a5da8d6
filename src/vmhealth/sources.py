"""Snapshot sources for vmhealth."""

import logging
from typing import Protocol

import psutil

from vmhealth.errors import MetricUnavailable
from vmhealth.models import CpuSnapshot, DiskSnapshot, MemSnapshot

logger = logging.getLogger(__name__)

CPU_FIELDS = (
    "user",
    "nice",
    "system",
    "idle",
    "iowait",
    "irq",
    "softirq",
    "steal",
    "guest",
    "guest_nice",
)


class SnapshotSource(Protocol):
    """Anything that can supply point-in-time resource readings."""

    def read_cpu(self) -> CpuSnapshot: ...

    def read_memory(self) -> MemSnapshot: ...

    def read_disk(self, path: str = "/") -> DiskSnapshot: ...


class PsutilSnapshotSource:
    """
    Snapshot source backed by psutil.

    Every read raises MetricUnavailable when psutil cannot supply the data,
    so callers only ever deal with one error type.
    """

    def read_cpu(self) -> CpuSnapshot:
        """Read the system-wide cumulative CPU times."""
        try:
            times = psutil.cpu_times()
        except (psutil.Error, OSError) as exc:
            raise MetricUnavailable("cpu", str(exc)) from exc

        # Platforms other than Linux report a subset of the fields
        counters = {name: getattr(times, name, 0) for name in CPU_FIELDS}
        logger.debug("cpu counters: %s", counters)
        return CpuSnapshot(**counters)

    def read_memory(self) -> MemSnapshot:
        """Read total and available physical memory."""
        try:
            mem = psutil.virtual_memory()
        except (psutil.Error, OSError) as exc:
            raise MetricUnavailable("memory", str(exc)) from exc

        logger.debug("memory total=%d available=%d", mem.total, mem.available)
        return MemSnapshot(total=mem.total, available=mem.available)

    def read_disk(self, path: str = "/") -> DiskSnapshot:
        """Read the used percentage of the filesystem mounted at *path*."""
        try:
            usage = psutil.disk_usage(path)
        except (psutil.Error, OSError) as exc:
            raise MetricUnavailable("disk", str(exc)) from exc

        logger.debug("disk %s used=%s%%", path, usage.percent)
        return DiskSnapshot(path=path, used_percent=usage.percent)
