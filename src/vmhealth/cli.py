"""Command-line entry point for vmhealth."""

import argparse
import logging
import signal
import sys
from collections.abc import Mapping, Sequence

from vmhealth.config import Settings, load_settings
from vmhealth.errors import ConfigError, UsageError
from vmhealth.estimators import CpuUsageEstimator
from vmhealth.health import HealthCheck
from vmhealth.report import Reporter, exit_status
from vmhealth.sources import PsutilSnapshotSource, SnapshotSource

logger = logging.getLogger(__name__)

PROG = "vm-health-check"
EXPLAIN = "explain"
USAGE = (
    f"Usage: {PROG} [{EXPLAIN}]\n"
    f"  {EXPLAIN}   Print the measured values and the reason for the health decision.\n"
)

EXIT_USAGE = 2
EXIT_INTERRUPTED = 128 + signal.SIGINT


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of printing its own usage."""

    def error(self, message: str):
        raise UsageError(message)


def parse_args(argv: Sequence[str]) -> bool:
    """
    Parse the command line and return whether explain mode was requested.

    Raises:
        UsageError: For anything but no arguments or the single word 'explain'.
    """
    # argparse would swallow "--" as an end-of-options marker
    if "--" in argv:
        raise UsageError("unexpected argument: --")

    parser = _ArgumentParser(prog=PROG, add_help=False)
    parser.add_argument("mode", nargs="?", choices=[EXPLAIN])
    args = parser.parse_args(argv)
    return args.mode == EXPLAIN


def _raise_terminated(signum, frame) -> None:
    raise SystemExit(128 + signum)


def run(explain: bool, settings: Settings, source: SnapshotSource) -> int:
    """Run one health check, print the report and return the exit status."""
    check = HealthCheck(
        source,
        threshold=settings.threshold,
        cpu_estimator=CpuUsageEstimator(interval=settings.sample_interval),
    )
    verdict = check.run()
    sys.stdout.write(Reporter().render(verdict, explain=explain))
    return exit_status(verdict)


def main(
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
    source: SnapshotSource | None = None,
) -> int:
    """Entry point for the vm-health-check command."""
    if argv is None:
        argv = sys.argv[1:]

    try:
        explain = parse_args(argv)
    except UsageError:
        sys.stderr.write(USAGE)
        return EXIT_USAGE

    try:
        settings = load_settings(environ)
    except ConfigError as exc:
        sys.stderr.write(f"{PROG}: {exc}\n")
        return EXIT_USAGE

    logging.basicConfig(
        level=settings.log_level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    previous = signal.signal(signal.SIGTERM, _raise_terminated)
    try:
        return run(explain, settings, source or PsutilSnapshotSource())
    except KeyboardInterrupt:
        # Interrupted mid-sample: no partial verdict
        logger.debug("interrupted before a verdict was reached")
        return EXIT_INTERRUPTED
    finally:
        signal.signal(signal.SIGTERM, previous)
