"""
Validate Locust CSV output against threshold configuration.

After a Locust run (``--csv <prefix>``) completes, CI invokes this
script to decide whether the run passes.  It reads the ``*_stats.csv``
file, and compares error rate and P95 latency against the limits in
:file:`thresholds.yml`:

- ``aggregated`` limits apply to the ``Aggregated`` row.
- ``requests`` limits apply to individual request names such as
  ``/tasks [POST]``; a name listed there but absent from the CSV is a
  breach, since the scenario never reached that step.

Exit codes:

- ``0`` — all thresholds passed
- ``1`` — at least one threshold was breached
- ``2`` — the script itself failed (missing file, bad YAML, etc.)
"""

from __future__ import annotations

import argparse
import csv
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

EXIT_PASS = 0
EXIT_THRESHOLD_BREACH = 1
EXIT_SCRIPT_ERROR = 2

AGGREGATED = "Aggregated"
DEFAULT_THRESHOLDS = Path(__file__).resolve().parent / "thresholds.yml"


@dataclass(frozen=True)
class Limits:
    max_error_rate_percent: float
    max_p95_ms: float


@dataclass(frozen=True)
class Measurement:
    """Actual figures for one stats row compared with its limits."""

    name: str
    error_rate: float | None
    p95_ms: float | None
    limits: Limits

    @property
    def error_rate_ok(self) -> bool:
        return self.error_rate is not None and self.error_rate <= self.limits.max_error_rate_percent

    @property
    def p95_ok(self) -> bool:
        return self.p95_ms is not None and self.p95_ms <= self.limits.max_p95_ms

    @property
    def passed(self) -> bool:
        return self.error_rate_ok and self.p95_ok


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for the threshold checker."""
    parser = argparse.ArgumentParser(
        description="Check Locust stats CSV against performance thresholds."
    )
    parser.add_argument(
        "--stats",
        required=True,
        type=Path,
        help="Path to Locust *_stats.csv file",
    )
    parser.add_argument(
        "--thresholds",
        type=Path,
        default=DEFAULT_THRESHOLDS,
        help="Path to thresholds YAML file",
    )
    return parser.parse_args(argv)


def _parse_limits(data: Any, where: str) -> Limits:
    if not isinstance(data, dict):
        raise ValueError(f"{where} must be a mapping of limits")
    try:
        return Limits(
            max_error_rate_percent=float(data["max_error_rate_percent"]),
            max_p95_ms=float(data["max_p95_ms"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(
            f"{where} must define numeric max_error_rate_percent and max_p95_ms"
        ) from exc


def load_thresholds(path: Path) -> tuple[Limits, dict[str, Limits]]:
    """
    Read threshold limits from a YAML file.

    Returns:
        The aggregated limits and a mapping of request name to limits.

    Raises:
        ValueError: If the aggregated section is missing or any limit
            is non-numeric.
    """
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    if not isinstance(data, dict):
        raise ValueError("Thresholds file must contain a mapping")

    aggregated = _parse_limits(data.get("aggregated"), "aggregated")

    per_request = data.get("requests") or {}
    if not isinstance(per_request, dict):
        raise ValueError("requests must map request names to limits")

    return aggregated, {
        str(name): _parse_limits(limits, f"requests[{name!r}]")
        for name, limits in per_request.items()
    }


def load_rows(stats_path: Path) -> dict[str, dict[str, str]]:
    """
    Index the rows of a Locust stats CSV by request name.

    The summary row is keyed ``"Aggregated"`` whichever column carries
    that label, since the layout varies between Locust versions.
    """
    with stats_path.open("r", encoding="utf-8", newline="") as handle:
        rows = list(csv.DictReader(handle))

    indexed: dict[str, dict[str, str]] = {}
    for row in rows:
        if row.get("Name") == AGGREGATED or row.get("Type") == AGGREGATED:
            indexed[AGGREGATED] = row
        elif row.get("Name"):
            indexed[row["Name"]] = row

    if AGGREGATED not in indexed:
        raise ValueError("Could not find 'Aggregated' row in stats CSV")
    return indexed


def parse_float(value: Any, field_name: str) -> float:
    """
    Coerce *value* to ``float``, stripping ``%`` suffixes if present.

    Raises:
        ValueError: If the value is missing, empty, or non-numeric.
    """
    if value is None:
        raise ValueError(f"Missing field: {field_name}")

    text = str(value).strip().replace("%", "")
    if text == "":
        raise ValueError(f"Empty value for field: {field_name}")

    try:
        return float(text)
    except ValueError as exc:
        raise ValueError(f"Non-numeric value for {field_name}: {value}") from exc


def extract_p95_ms(row: dict[str, str]) -> float:
    """Extract the 95th-percentile latency, trying known column names."""
    for candidate in ("95%", "95%ile", "95th percentile", "p95"):
        if row.get(candidate) not in (None, ""):
            return parse_float(row[candidate], candidate)
    raise ValueError("Could not find p95 column in stats CSV")


def compute_error_rate_percent(row: dict[str, str]) -> float:
    """
    Return ``Failure Count / Request Count × 100`` for a stats row.

    Raises:
        ValueError: If counts are missing or ``Request Count`` is zero.
    """
    request_count = parse_float(row.get("Request Count"), "Request Count")
    failure_count = parse_float(row.get("Failure Count"), "Failure Count")

    if request_count <= 0:
        raise ValueError("Request Count must be > 0 for threshold checks")

    return (failure_count / request_count) * 100.0


def measure(
    rows: dict[str, dict[str, str]],
    aggregated: Limits,
    per_request: dict[str, Limits],
) -> list[Measurement]:
    """Compare the aggregated row and every configured request row."""
    measurements = []
    for name, limits in [(AGGREGATED, aggregated), *per_request.items()]:
        row = rows.get(name)
        if row is None:
            logger.warning("No stats row for %s", name)
            measurements.append(Measurement(name, None, None, limits))
            continue
        measurements.append(
            Measurement(name, compute_error_rate_percent(row), extract_p95_ms(row), limits)
        )
    return measurements


def _cell(value: float | None) -> str:
    return "missing" if value is None else f"{value:.2f}"


def print_summary(measurements: list[Measurement]) -> None:
    """Print a human-readable results table to stdout for CI logs."""
    width = 96
    print("Performance Threshold Check")
    print("-" * width)
    print(f"{'Request':<34}{'Metric':<18}{'Actual':>12}{'Limit':>14}{'Status':>10}")
    print("-" * width)

    for item in measurements:
        print(
            f"{item.name:<34}{'Error rate (%)':<18}{_cell(item.error_rate):>12}"
            f"{item.limits.max_error_rate_percent:>14.2f}{'PASS' if item.error_rate_ok else 'FAIL':>10}"
        )
        print(
            f"{'':<34}{'P95 latency (ms)':<18}{_cell(item.p95_ms):>12}"
            f"{item.limits.max_p95_ms:>14.2f}{'PASS' if item.p95_ok else 'FAIL':>10}"
        )

    print("-" * width)
    passed = all(item.passed for item in measurements)
    print(f"Overall: {'PASS' if passed else 'FAIL'}")


def main(argv: list[str] | None = None) -> int:
    """
    Entry point: load thresholds, parse CSV, compare, and print results.

    Returns:
        ``EXIT_PASS`` if all thresholds are met, ``EXIT_THRESHOLD_BREACH``
        if any are exceeded, or ``EXIT_SCRIPT_ERROR`` on bad input.
    """
    args = parse_args(argv)

    try:
        aggregated, per_request = load_thresholds(args.thresholds)
        rows = load_rows(args.stats)
        measurements = measure(rows, aggregated, per_request)
    except (OSError, ValueError, csv.Error, yaml.YAMLError) as exc:
        print(f"Threshold check failed: {exc}", file=sys.stderr)
        return EXIT_SCRIPT_ERROR

    print_summary(measurements)
    return EXIT_PASS if all(item.passed for item in measurements) else EXIT_THRESHOLD_BREACH


if __name__ == "__main__":
    raise SystemExit(main())
