# tests/test_trial_log.py
import csv
import io

from dominion_arena.assertions import ReportConfig, Reporter
from dominion_arena.trial_log import (
    FIELDNAMES,
    build_check_rows,
    write_check_results_csv,
)


def _make_results():
    reporter = Reporter(ReportConfig(print_on_success=False), stream=io.StringIO())
    reporter.set_context(1, 0)
    reporter.assert_equal_int("adventurerEffect", "hand grows by 2", 2, 2)
    reporter.assert_at_most("adventurerEffect", "deck shrinks", -2, -1)
    reporter.set_context(2, 4)
    reporter.assert_equal_bool("adventurerEffect", "others unchanged", False, False)
    return reporter.results


def test_build_check_rows_basic():
    rows = build_check_rows(_make_results(), run_id="run-1")

    assert len(rows) == 3
    for row in rows:
        assert set(row) == set(FIELDNAMES)
        assert row["run_id"] == "run-1"

    assert rows[1]["expected"] == "<=-2"
    assert rows[1]["actual"] == "-1"
    assert rows[1]["passed"] is False
    assert (rows[2]["phase"], rows[2]["trial_index"]) == (2, 4)
    assert rows[2]["expected"] == "false"


def test_write_check_results_csv(tmp_path):
    path = tmp_path / "checks.csv"
    count = write_check_results_csv(_make_results(), path, run_id="run-1")
    assert count == 3

    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        assert reader.fieldnames == FIELDNAMES
        rows = list(reader)
    assert [row["passed"] for row in rows] == ["True", "False", "True"]
    assert rows[0]["comparison"] == "equal"
