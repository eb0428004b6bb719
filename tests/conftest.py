from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest


def write_record(directory: Path, name: str, payload: Any) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """A repository root with small items, quests and hideout collections."""

    for index in range(3):
        write_record(
            tmp_path / "items",
            f"item_{index}.json",
            {"id": f"item_{index}", "name": f"Item {index}"},
        )
    write_record(tmp_path / "quests", "a_quest.json", {"id": "a_quest"})
    write_record(tmp_path / "quests", "b_quest.json", {"id": "b_quest"})
    write_record(tmp_path / "hideout", "bench.json", {"id": "bench"})
    return tmp_path
