"""Exceptions raised by vmhealth."""


class VmHealthError(Exception):
    """Base class for all vmhealth errors."""


class UsageError(VmHealthError):
    """The command line did not match any supported invocation."""


class ConfigError(VmHealthError):
    """A configuration value from the environment is invalid."""


class MetricUnavailable(VmHealthError):
    """A snapshot source could not supply a reading."""

    def __init__(self, metric: str, reason: str) -> None:
        super().__init__(f"{metric} metric unavailable: {reason}")
        self.metric = metric
        self.reason = reason
