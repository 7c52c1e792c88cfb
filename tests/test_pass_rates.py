# tests/test_pass_rates.py
import io

import matplotlib

matplotlib.use("Agg")

from dominion_arena.assertions import ReportConfig, Reporter  # noqa: E402
from dominion_arena.results.pass_rates import (  # noqa: E402
    load_check_results,
    plot_pass_rates,
    summarize_pass_rates,
)
from dominion_arena.trial_log import write_check_results_csv  # noqa: E402


def _write_sample_csv(path):
    reporter = Reporter(ReportConfig(print_on_success=False), stream=io.StringIO())
    for trial in range(4):
        reporter.set_context(1, trial)
        reporter.assert_equal_int("seaHagEffect", "hands unchanged", 0, 0)
        reporter.assert_equal_int("seaHagEffect", "curse on top", 1, 1 if trial % 2 else 0)
    write_check_results_csv(reporter.results, path, run_id="sample")
    return path


def test_summarize_pass_rates(tmp_path):
    df = load_check_results(_write_sample_csv(tmp_path / "checks.csv"))
    assert df["passed"].dtype == bool
    assert len(df) == 8

    summary = summarize_pass_rates(df)
    assert list(summary["rule"]) == ["curse on top", "hands unchanged"]
    assert list(summary["checks"]) == [4, 4]
    assert list(summary["passed"]) == [2, 4]
    assert summary["pass_rate"].tolist() == [0.5, 1.0]
    assert abs(summary["ci95"].iloc[0] - 1.96 * 0.25) < 1e-9
    assert summary["ci95"].iloc[1] == 0.0


def test_plot_pass_rates_saves_chart(tmp_path):
    summary = summarize_pass_rates(load_check_results(_write_sample_csv(tmp_path / "c.csv")))
    output = tmp_path / "pass_rates.png"
    plot_pass_rates(summary, output)
    assert output.exists()
    assert output.stat().st_size > 0
