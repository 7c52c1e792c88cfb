# dominion_arena/trial_log.py
from __future__ import annotations

import csv
from typing import Any, Dict, Iterable, List, Optional

from .assertions import CheckResult, format_value

FIELDNAMES = [
    "run_id",
    "phase",
    "trial_index",
    "function",
    "rule",
    "comparison",
    "expected",
    "actual",
    "passed",
]


def build_check_rows(
    results: Iterable[CheckResult],
    run_id: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Build one row per evaluated check for CSV export.

    Each row has keys in FIELDNAMES. ``expected`` is rendered the way the
    report line shows it (``<=-2``, ``[1..3]``, ...), ``actual`` as a plain
    value.
    """
    rows: List[Dict[str, Any]] = []
    for result in results:
        rows.append(
            {
                "run_id": run_id,
                "phase": result.phase,
                "trial_index": result.trial_index,
                "function": result.label,
                "rule": result.rule,
                "comparison": result.comparison.value,
                "expected": result.comparison.describe_expected(result.expected),
                "actual": format_value(result.actual),
                "passed": result.passed,
            }
        )
    return rows


def write_check_results_csv(
    results: Iterable[CheckResult],
    path,
    run_id: Optional[str] = None,
) -> int:
    """
    Write evaluated checks to a CSV file and return the number of rows.

    `path` can be a string or any path-like object accepted by `open`.
    """
    rows = build_check_rows(results, run_id=run_id)

    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
        writer.writeheader()
        for row in rows:
            writer.writerow({field: row.get(field) for field in FIELDNAMES})
    return len(rows)
