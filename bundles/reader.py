"""Read per-entity JSON files from a collection directory."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List

from .cleanup import is_chunk_artifact
from .encoding import decode_json, encode_json


def _sort_key(path: Path) -> tuple[str, str]:
    return path.name.casefold(), path.name


def list_record_files(directory: Path) -> List[Path]:
    """Return the record files in ``directory`` in a stable order."""

    if not directory.is_dir():
        return []
    candidates = (
        path
        for path in directory.iterdir()
        if path.is_file()
        and path.name.lower().endswith(".json")
        and not is_chunk_artifact(path.name)
    )
    return sorted(candidates, key=_sort_key)


def read_json_dir(directory: Path) -> List[Any]:
    """Parse every record file, skipping ones that are not usable records."""

    records: List[Any] = []
    for path in list_record_files(directory):
        label = f"{directory.name}/{path.name}"
        try:
            payload = decode_json(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            print(f"⚠️ Skip invalid JSON: {label}: {exc}")
            continue
        if not isinstance(payload, (dict, list)):
            print(
                f"⚠️ Skip non-record JSON: {label}"
                f" holds {type(payload).__name__}"
            )
            continue
        # Records must survive the canonical encoding used for every output.
        try:
            encode_json(payload)
        except ValueError as exc:
            print(f"⚠️ Skip unencodable JSON: {label}: {exc}")
            continue
        records.append(payload)
    return records
