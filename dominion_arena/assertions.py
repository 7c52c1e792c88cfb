# dominion_arena/assertions.py
from __future__ import annotations

import enum
import logging
import sys
from dataclasses import dataclass, field
from typing import Any, List, Optional, TextIO, Tuple, Union

logger = logging.getLogger(__name__)

Expected = Union[bool, int, Tuple[int, int]]


class Comparison(enum.Enum):
    EQUAL = "equal"
    NOT_EQUAL = "not_equal"
    GREATER_THAN = "greater_than"
    AT_LEAST = "at_least"
    LESS_THAN = "less_than"
    AT_MOST = "at_most"
    IN_RANGE = "in_range"

    def evaluate(self, expected: Expected, actual: Any) -> bool:
        if self is Comparison.EQUAL:
            return actual == expected
        if self is Comparison.NOT_EQUAL:
            return actual != expected
        if self is Comparison.GREATER_THAN:
            return actual > expected
        if self is Comparison.AT_LEAST:
            return actual >= expected
        if self is Comparison.LESS_THAN:
            return actual < expected
        if self is Comparison.AT_MOST:
            return actual <= expected
        low, high = expected  # type: ignore[misc]
        return low <= actual <= high

    def describe_expected(self, expected: Expected) -> str:
        if self is Comparison.IN_RANGE:
            low, high = expected  # type: ignore[misc]
            return f"[{low}..{high}]"
        prefix = {
            Comparison.EQUAL: "",
            Comparison.NOT_EQUAL: "!",
            Comparison.GREATER_THAN: ">",
            Comparison.AT_LEAST: ">=",
            Comparison.LESS_THAN: "<",
            Comparison.AT_MOST: "<=",
        }[self]
        return f"{prefix}{format_value(expected)}"


def format_value(value: Any) -> str:
    """Render check values the way report lines show them."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass
class ReportConfig:
    # Emit a PASS line for every passing check; FAIL lines are always emitted.
    print_on_success: bool = True
    # Log each rule at DEBUG before it is evaluated.
    debug: bool = False


@dataclass
class CheckResult:
    """One evaluated property: what was checked, against what, and the verdict."""

    label: str
    rule: str
    comparison: Comparison
    expected: Expected
    actual: Any
    passed: bool
    phase: Optional[int] = None
    trial_index: Optional[int] = None

    def line(self) -> str:
        if self.passed:
            return f"{self.label} :: PASS :: {self.rule}."
        return (
            f"{self.label} :: FAIL :: {self.rule}. "
            f"(EXPECTED: {self.comparison.describe_expected(self.expected)}, "
            f"ACTUAL: {format_value(self.actual)})"
        )


@dataclass
class Reporter:
    """
    Evaluates named checks and writes one report line per check.

    A failing check is never an exception: ``check`` returns False, writes the
    FAIL line and records the result. Tallying is the caller's job.
    """

    config: ReportConfig = field(default_factory=ReportConfig)
    stream: Optional[TextIO] = None
    results: List[CheckResult] = field(default_factory=list)
    phase: Optional[int] = None
    trial_index: Optional[int] = None

    def set_context(self, phase: Optional[int], trial_index: Optional[int]) -> None:
        """Tag subsequent results with the trial they belong to."""
        self.phase = phase
        self.trial_index = trial_index

    def check(
        self,
        label: str,
        rule: str,
        expected: Expected,
        actual: Any,
        comparison: Comparison = Comparison.EQUAL,
    ) -> bool:
        if self.config.debug:
            logger.debug("* %s", rule)

        passed = comparison.evaluate(expected, actual)
        result = CheckResult(
            label=label,
            rule=rule,
            comparison=comparison,
            expected=expected,
            actual=actual,
            passed=passed,
            phase=self.phase,
            trial_index=self.trial_index,
        )
        self.results.append(result)

        if not passed or self.config.print_on_success:
            self._write(result.line())
        return passed

    def _write(self, line: str) -> None:
        out = self.stream if self.stream is not None else sys.stdout
        out.write(line + "\n")

    # ------------------------------------------------------------------
    # Named wrappers
    # ------------------------------------------------------------------

    def assert_equal_bool(self, label: str, rule: str, expected: bool, actual: bool) -> bool:
        return self.check(label, rule, bool(expected), bool(actual), Comparison.EQUAL)

    def assert_not_equal_bool(
        self, label: str, rule: str, expected: bool, actual: bool
    ) -> bool:
        return self.check(label, rule, bool(expected), bool(actual), Comparison.NOT_EQUAL)

    def assert_equal_int(self, label: str, rule: str, expected: int, actual: int) -> bool:
        return self.check(label, rule, expected, actual, Comparison.EQUAL)

    def assert_not_equal_int(self, label: str, rule: str, expected: int, actual: int) -> bool:
        return self.check(label, rule, expected, actual, Comparison.NOT_EQUAL)

    def assert_greater_than(self, label: str, rule: str, expected: int, actual: int) -> bool:
        return self.check(label, rule, expected, actual, Comparison.GREATER_THAN)

    def assert_at_least(self, label: str, rule: str, expected: int, actual: int) -> bool:
        return self.check(label, rule, expected, actual, Comparison.AT_LEAST)

    def assert_less_than(self, label: str, rule: str, expected: int, actual: int) -> bool:
        return self.check(label, rule, expected, actual, Comparison.LESS_THAN)

    def assert_at_most(self, label: str, rule: str, expected: int, actual: int) -> bool:
        return self.check(label, rule, expected, actual, Comparison.AT_MOST)

    def assert_in_range(
        self, label: str, rule: str, range_min: int, range_max: int, actual: int
    ) -> bool:
        return self.check(
            label, rule, (range_min, range_max), actual, Comparison.IN_RANGE
        )
