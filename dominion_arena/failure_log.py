# dominion_arena/failure_log.py
from __future__ import annotations

import json
from pathlib import Path
from threading import Lock
from typing import List, Optional, Sequence

from .assertions import CheckResult
from .state import GameSnapshot, format_snapshot, snapshot_to_dict


class FailureLogger:
    """Collects a dump of every trial with a failing check, written on flush."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._entries: List[str] = []
        self._lock = Lock()

    def log_failure(
        self,
        *,
        label: str,
        phase: int,
        trial_index: int,
        player: int,
        seed: Optional[int],
        failed_checks: Sequence[CheckResult],
        pre: GameSnapshot,
        post: GameSnapshot,
    ) -> None:
        header_parts = [
            f"Function: {label}",
            f"Phase: {phase}",
            f"Trial: {trial_index}",
            f"Player: {player}",
        ]
        if seed is not None:
            header_parts.append(f"Seed: {seed}")
        header = " | ".join(header_parts)

        lines = [f"=== {header} ===", "Failed checks:"]
        lines.extend(f"  {result.line()}" for result in failed_checks)
        lines.extend(
            [
                "",
                "PRE:",
                format_snapshot(pre),
                "",
                "POST:",
                format_snapshot(post),
                "",
                "PRE JSON:",
                json.dumps(snapshot_to_dict(pre), sort_keys=True),
            ]
        )

        entry = "\n".join(lines).strip()
        with self._lock:
            self._entries.append(entry)

    @property
    def entry_count(self) -> int:
        with self._lock:
            return len(self._entries)

    def flush(self) -> None:
        with self._lock:
            if not self._entries:
                return
            to_write = "\n\n".join(self._entries)
            self._entries.clear()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(to_write, encoding="utf-8")
