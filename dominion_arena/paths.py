# dominion_arena/paths.py
from __future__ import annotations

from pathlib import Path

# CSV check logs, failure dumps and pass-rate charts land here by default.
RESULTS_DIR = Path(__file__).resolve().parent / "results"


def ensure_results_dir() -> Path:
    RESULTS_DIR.mkdir(parents=True, exist_ok=True)
    return RESULTS_DIR


def resolve_results_path(path_like: str | Path, **fields: object) -> Path:
    """
    Resolve an output path for one run.

    ``{card}``, ``{seed}`` and any other ``fields`` in the name are filled in,
    so ``"{card}-{seed}.csv"`` names the file after the run that wrote it.
    Other braces are left as written.
    Absolute paths are kept; relative ones are placed under RESULTS_DIR.
    """
    text = str(path_like)
    for name, value in fields.items():
        text = text.replace("{" + name + "}", str(value))
    path = Path(text)
    if path.is_absolute():
        return path
    return ensure_results_dir() / path
