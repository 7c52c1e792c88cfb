# dominion_arena/results/pass_rates.py
from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd


def load_check_results(csv_path: str | Path) -> pd.DataFrame:
    """Load a CSV written by ``trial_log.write_check_results_csv``."""
    df = pd.read_csv(csv_path)
    # csv round-trips booleans as strings when a column mixes types.
    if df["passed"].dtype != bool:
        df["passed"] = df["passed"].astype(str).str.lower() == "true"
    return df


def summarize_pass_rates(df: pd.DataFrame) -> pd.DataFrame:
    """
    Per (function, rule) pass rate with a 95% normal-approximation interval.

    Columns: function, rule, checks, passed, pass_rate, ci95. Sorted with the
    weakest rules first.
    """
    summary = (
        df.groupby(["function", "rule"])["passed"]
        .agg(checks="count", passed="sum")
        .reset_index()
    )
    summary["passed"] = summary["passed"].astype(int)
    summary["pass_rate"] = summary["passed"] / summary["checks"]
    rate = summary["pass_rate"]
    summary["ci95"] = 1.96 * np.sqrt(rate * (1.0 - rate) / summary["checks"])
    return summary.sort_values(["pass_rate", "rule"]).reset_index(drop=True)


def plot_pass_rates(summary: pd.DataFrame, output: Optional[str | Path] = None) -> None:
    """Horizontal bar chart of pass rate per rule; saved when ``output`` is given."""
    height = max(3.0, 0.5 * len(summary) + 1.5)
    fig, ax = plt.subplots(figsize=(10, height))

    labels = [f"{fn}: {rule}" for fn, rule in zip(summary["function"], summary["rule"])]
    positions = np.arange(len(summary))
    ax.barh(positions, summary["pass_rate"], xerr=summary["ci95"], capsize=3)
    ax.set_yticks(positions)
    ax.set_yticklabels(labels, fontsize=8)
    ax.set_xlim(0.0, 1.05)
    ax.axvline(1.0, linestyle="--")
    ax.set_xlabel("Pass rate (95% CI)")
    ax.set_title("Pass rate per checked rule")
    ax.grid(True, axis="x", linestyle=":", alpha=0.5)

    fig.tight_layout()
    if output is not None:
        fig.savefig(output)
        plt.close(fig)
    else:
        plt.show()


def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Summarize and plot per-rule pass rates from a checks CSV."
    )
    parser.add_argument("csv", help="CSV written with dominion_arena.cli --csv.")
    parser.add_argument(
        "--output",
        default=None,
        help="Save the chart to this file instead of showing it.",
    )
    args = parser.parse_args(argv)

    summary = summarize_pass_rates(load_check_results(args.csv))
    print(summary.to_string(index=False))
    plot_pass_rates(summary, args.output)


if __name__ == "__main__":
    main()
