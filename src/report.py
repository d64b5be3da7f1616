"""Console rendering and file exports of evaluation results."""

import csv
import json
import logging
from typing import List, Optional

from constants import Constants
from versioning.models import BatchReport, ComponentOutcome, EvaluationMode

ALL_CURRENT = "All dependencies are using the latest versions."
UPDATES_HEADER = "The following dependency updates are available:"

CSV_HEADERS = [
    "component",
    "current",
    "recommended",
    "source",
    "segment",
    "latest_incremental",
    "latest_minor",
    "latest_major",
    "has_updates",
]


def format_update_line(coordinate: str, current: str, newer: str, width: int = Constants.REPORT_LINE_WIDTH) -> str:
    """``group:artifact ....... 1.0 -> 2.0`` padded with dots to ``width``."""
    buf = f"{coordinate} "
    padding = width - len(current) - len(newer) - 4
    if len(buf) < padding:
        buf = buf.ljust(padding, ".")
    return f"{buf} {current} -> {newer}"


def _newest_tier(outcome: ComponentOutcome) -> Optional[str]:
    summary = outcome.summary
    for value in (summary.latest_major, summary.latest_minor, summary.latest_incremental):
        if value is not None:
            return str(value)
    return None


def _text(value) -> str:
    return "-" if value is None else str(value)


def render_lines(report: BatchReport, mode: EvaluationMode) -> List[str]:
    """Text lines for the reportable outcomes, sorted by coordinate."""
    outcomes = sorted(report.updates, key=lambda o: o.request.coordinate)
    if not outcomes:
        return ["", ALL_CURRENT]

    lines = ["", UPDATES_HEADER]
    for outcome in outcomes:
        coordinate = outcome.request.coordinate
        if mode is EvaluationMode.LATEST:
            rec = outcome.recommendation
            lines.append("  " + format_update_line(coordinate, str(rec.current), _text(rec.recommended)))
            continue
        summary = outcome.summary
        lines.append("  " + format_update_line(coordinate, str(summary.current), _text(_newest_tier(outcome))))
        lines.append(
            f"      incremental: {_text(summary.latest_incremental)}"
            f"  minor: {_text(summary.latest_minor)}"
            f"  major: {_text(summary.latest_major)}"
        )
    return lines


def _record(outcome: ComponentOutcome) -> dict:
    data = {"component": outcome.request.coordinate, "has_updates": outcome.has_updates}
    if outcome.summary is not None:
        data.update(outcome.summary.to_dict())
    if outcome.recommendation is not None:
        data.update(outcome.recommendation.to_dict())
    if outcome.details is not None:
        data["details"] = outcome.details.to_dict()
    if outcome.failure is not None:
        data["failure"] = {"kind": outcome.failure.kind.value, "message": outcome.failure.message}
    return data


def export_json(report: BatchReport, path: str) -> None:
    """Write every outcome, including failures, to a JSON file.

    Raises:
        OSError: if the file cannot be written
    """
    data = [_record(o) for o in report.outcomes]
    with open(path, "w", encoding="utf-8") as file:
        json.dump(data, file, ensure_ascii=False, indent=4)
    logging.info("JSON file has been successfully exported at: %s", path)


def export_csv(report: BatchReport, path: str) -> None:
    """Write successful outcomes to a CSV file.

    Raises:
        OSError: if the file cannot be written
    """
    rows = [CSV_HEADERS]
    for outcome in report.outcomes:
        if not outcome.ok:
            continue
        record = _record(outcome)
        rows.append(["" if record.get(h) is None else record.get(h) for h in CSV_HEADERS])
    with open(path, "w", newline="", encoding="utf-8") as file:
        csv.writer(file).writerows(rows)
    logging.info("CSV file has been successfully exported at: %s", path)
