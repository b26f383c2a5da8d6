"""Usage estimators turning raw snapshots into percentages."""

import math
import time
from collections.abc import Callable

from vmhealth.models import CpuSnapshot, DiskSnapshot, MemSnapshot
from vmhealth.sources import SnapshotSource

DEFAULT_SAMPLE_INTERVAL = 1.0


def round1(value: float) -> float:
    """Round to one decimal place and clamp to 0.0 - 100.0."""
    return round(min(max(value, 0.0), 100.0), 1)


class CpuUsageEstimator:
    """
    Estimates CPU busy percentage from two counter snapshots.

    The counters are cumulative, so a single snapshot says nothing about
    current load. measure() takes two reads separated by a blocking sleep;
    that sleep is the measurement window and must not be skipped.
    """

    def __init__(
        self,
        interval: float = DEFAULT_SAMPLE_INTERVAL,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Initialize the CpuUsageEstimator.

        Args:
            interval: Seconds between the two counter reads. Default 1.0s.
            sleep: Blocking sleep used between reads.
        """
        self._interval = interval
        self._sleep = sleep

    @property
    def interval(self) -> float:
        """Get the sampling interval."""
        return self._interval

    def estimate(
        self,
        first: CpuSnapshot,
        second: CpuSnapshot,
        elapsed: float | None = None,
    ) -> float:
        """
        Return the busy percentage between *first* and *second*.

        The result is a ratio of counter deltas, so *elapsed* (the wall time
        between the reads) does not enter into it.
        """
        total_delta = second.total - first.total
        idle_delta = second.idle_total - first.idle_total

        # Counter reset or no elapsed ticks
        if total_delta <= 0:
            return 0.0

        return round1((1 - idle_delta / total_delta) * 100)

    def measure(self, source: SnapshotSource) -> float:
        """Sample *source* twice, one interval apart, and estimate."""
        first = source.read_cpu()
        self._sleep(self._interval)
        second = source.read_cpu()
        return self.estimate(first, second, elapsed=self._interval)


class MemUsageEstimator:
    """Estimates memory used percentage from total and available bytes."""

    def estimate(self, snap: MemSnapshot) -> float:
        if snap.total == 0:
            return 0.0
        used = snap.total - snap.available
        return round1(used / snap.total * 100)

    def measure(self, source: SnapshotSource) -> float:
        return self.estimate(source.read_memory())


class DiskUsageEstimator:
    """Normalizes a filesystem used percentage to a one-decimal float."""

    def __init__(self, path: str = "/") -> None:
        self._path = path

    @property
    def path(self) -> str:
        return self._path

    def estimate(self, snap: DiskSnapshot) -> float:
        """
        Return the used percentage of *snap*.

        Accepts numbers and df-style text such as " 42% ". Anything that
        does not yield a finite number reads as 0.0.
        """
        raw = snap.used_percent
        if raw is None or isinstance(raw, bool):
            return 0.0
        if isinstance(raw, str):
            raw = raw.strip().rstrip("%").strip()
            try:
                raw = float(raw)
            except ValueError:
                return 0.0

        value = float(raw)
        if not math.isfinite(value):
            return 0.0
        return round1(value)

    def measure(self, source: SnapshotSource) -> float:
        return self.estimate(source.read_disk(self._path))
