"""Cleanup utilities for collection directories."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Pattern

STALE_ARTIFACT_RE = re.compile(r"^all(_\d+)?\.json$", re.IGNORECASE)


def is_chunk_artifact(name: str) -> bool:
    """Return True for names produced by the chunk and aggregate writers."""

    return STALE_ARTIFACT_RE.match(name) is not None


def clear_existing_files(
    directory: Path, pattern: Pattern[str] = STALE_ARTIFACT_RE
) -> List[Path]:
    """Delete files in ``directory`` whose names match ``pattern``.

    Removal is best-effort: a file that cannot be removed is reported and
    left in place so the rest of the run can proceed.
    """

    if not directory.is_dir():
        return []

    removed: List[Path] = []
    for target in sorted(directory.iterdir()):
        if not pattern.match(target.name) or not target.is_file():
            continue
        try:
            target.unlink()
        except FileNotFoundError:
            continue
        except OSError as exc:
            print(f"⚠️ Unable to remove stale artifact {target}: {exc}")
            continue
        print(f"🧹 Removed stale artifact: {target}")
        removed.append(target)
    return removed
