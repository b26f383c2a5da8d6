"""Health decision for vmhealth."""

import logging
from collections.abc import Callable

from vmhealth.errors import MetricUnavailable
from vmhealth.estimators import CpuUsageEstimator, DiskUsageEstimator, MemUsageEstimator
from vmhealth.models import Health, HealthVerdict, Metric, MetricResult
from vmhealth.sources import SnapshotSource

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 60.0


class HealthEvaluator:
    """Classifies metric percentages against a threshold."""

    def evaluate(
        self,
        cpu: float,
        mem: float,
        disk: float,
        threshold: float = DEFAULT_THRESHOLD,
    ) -> HealthVerdict:
        """
        Build a verdict from the three percentages.

        A metric exactly at the threshold counts as unhealthy.
        """
        results = tuple(
            MetricResult(metric=metric, percentage=value, above_threshold=value >= threshold)
            for metric, value in ((Metric.CPU, cpu), (Metric.MEMORY, mem), (Metric.DISK, disk))
        )
        if any(result.above_threshold for result in results):
            overall = Health.NOT_HEALTHY
        else:
            overall = Health.HEALTHY
        return HealthVerdict(overall=overall, metrics=results, threshold=threshold)


class HealthCheck:
    """
    One-shot health check wiring a snapshot source to the estimators.

    Each metric is sampled exactly once. A metric whose source raises
    MetricUnavailable reads as 0.0 so that the check always produces a
    verdict; the failure is only visible in the log.
    """

    def __init__(
        self,
        source: SnapshotSource,
        threshold: float = DEFAULT_THRESHOLD,
        cpu_estimator: CpuUsageEstimator | None = None,
        mem_estimator: MemUsageEstimator | None = None,
        disk_estimator: DiskUsageEstimator | None = None,
        evaluator: HealthEvaluator | None = None,
    ) -> None:
        self._source = source
        self._threshold = threshold
        self._cpu = cpu_estimator or CpuUsageEstimator()
        self._mem = mem_estimator or MemUsageEstimator()
        self._disk = disk_estimator or DiskUsageEstimator()
        self._evaluator = evaluator or HealthEvaluator()

    @property
    def threshold(self) -> float:
        return self._threshold

    def run(self) -> HealthVerdict:
        """Sample all metrics and evaluate them."""
        cpu = self._sample(Metric.CPU, self._cpu.measure)
        mem = self._sample(Metric.MEMORY, self._mem.measure)
        disk = self._sample(Metric.DISK, self._disk.measure)

        verdict = self._evaluator.evaluate(cpu, mem, disk, self._threshold)
        logger.debug(
            "verdict %s: cpu=%.1f mem=%.1f disk=%.1f threshold=%s",
            verdict.overall.value,
            cpu,
            mem,
            disk,
            self._threshold,
        )
        return verdict

    def _sample(self, metric: Metric, measure: Callable[[SnapshotSource], float]) -> float:
        try:
            return measure(self._source)
        except MetricUnavailable as exc:
            logger.warning("%s unavailable (%s), reporting 0.0%%", metric.value, exc.reason)
            return 0.0
