"""Text rendering of health verdicts."""

from vmhealth.models import HealthVerdict, Metric

SHORT_LABELS = {
    Metric.CPU: "CPU:    ",
    Metric.MEMORY: "Memory: ",
    Metric.DISK: "Disk(/):",
}


def format_percent(value: float) -> str:
    """Format a percentage right-aligned in a 6-character field."""
    return f"{value:6.1f}%"


def format_threshold(threshold: float) -> str:
    """Format a threshold without a trailing '.0'."""
    return f"{threshold:g}"


class Reporter:
    """Renders a HealthVerdict in short or explain mode."""

    def render(self, verdict: HealthVerdict, explain: bool = False) -> str:
        lines = [verdict.overall.value]
        for result in verdict.metrics:
            lines.append(f"{SHORT_LABELS[result.metric]}{format_percent(result.percentage)}")

        if explain:
            lines.extend(self._explain(verdict))

        return "\n".join(lines) + "\n"

    def _explain(self, verdict: HealthVerdict) -> list[str]:
        threshold = format_threshold(verdict.threshold)
        lines = [f"Threshold: {threshold}% (a metric >= {threshold}% is considered unhealthy)"]

        for result in verdict.metrics:
            label = f"{result.metric.value} utilization: "
            tag = "EXCEEDS" if result.above_threshold else "OK"
            # CPU and Memory share a column; the longer Disk label overflows it
            lines.append(f"{label:<20}{format_percent(result.percentage)}   -> {tag}")

        if verdict.healthy:
            lines.append(f"All metrics are under {threshold}%. VM is healthy.")
        else:
            lines.append("Reason(s):")
            for result in verdict.failing:
                lines.append(f" - {result.metric.value} utilization is >= {threshold}%")
        return lines


def exit_status(verdict: HealthVerdict) -> int:
    """Process exit status for *verdict*: 0 healthy, 1 not."""
    return 0 if verdict.healthy else 1
