"""Data models for vmhealth."""

from dataclasses import dataclass, fields
from enum import Enum


@dataclass(slots=True, frozen=True)
class CpuSnapshot:
    """Cumulative CPU time counters at a point in time."""

    user: float = 0
    nice: float = 0
    system: float = 0
    idle: float = 0
    iowait: float = 0
    irq: float = 0
    softirq: float = 0
    steal: float = 0
    guest: float = 0
    guest_nice: float = 0

    @property
    def total(self) -> float:
        """Sum of all counters."""
        return sum(getattr(self, f.name) for f in fields(self))

    @property
    def idle_total(self) -> float:
        """Time spent doing nothing, including waiting on I/O."""
        return self.idle + self.iowait


@dataclass(slots=True, frozen=True)
class MemSnapshot:
    """Immutable snapshot of system memory accounting."""

    total: int  # Bytes
    available: int  # Bytes


@dataclass(slots=True, frozen=True)
class DiskSnapshot:
    """Filesystem usage as reported for a mount point."""

    path: str
    used_percent: float | int | str | None  # Raw, as the tool reports it


class Metric(Enum):
    """The three metrics checked, in report order."""

    CPU = "CPU"
    MEMORY = "Memory"
    DISK = "Disk (/)"


class Health(Enum):
    """Overall health classification."""

    HEALTHY = "HEALTHY"
    NOT_HEALTHY = "NOT HEALTHY"


@dataclass(slots=True, frozen=True)
class MetricResult:
    """A single metric percentage and its threshold classification."""

    metric: Metric
    percentage: float  # 0.0 - 100.0, one decimal place
    above_threshold: bool


@dataclass(slots=True, frozen=True)
class HealthVerdict:
    """Aggregate verdict over all metrics."""

    overall: Health
    metrics: tuple[MetricResult, ...]
    threshold: float

    @property
    def healthy(self) -> bool:
        return self.overall is Health.HEALTHY

    @property
    def failing(self) -> list[MetricResult]:
        """Metrics at or above the threshold, in report order."""
        return [result for result in self.metrics if result.above_threshold]
