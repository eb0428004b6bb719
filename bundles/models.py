"""Shared dataclasses for bundle aggregation."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

DEFAULT_MAX_CHUNK_BYTES = 1_800_000


@dataclass(frozen=True, slots=True)
class CollectionSpec:
    """Describes one source directory and its legacy flat output."""

    name: str
    legacy_filename: str
    legacy_key: Optional[str] = None


DEFAULT_COLLECTIONS: tuple[CollectionSpec, ...] = (
    CollectionSpec(
        name="items", legacy_filename="items.json", legacy_key="items"
    ),
    CollectionSpec(name="quests", legacy_filename="quests.json"),
    CollectionSpec(name="hideout", legacy_filename="hideoutModules.json"),
)


@dataclass(slots=True)
class AggregateConfig:
    """Inputs controlling an aggregation run."""

    root: Path
    max_chunk_bytes: int = DEFAULT_MAX_CHUNK_BYTES
    version: Optional[str] = None
    max_chunk_items: Optional[int] = None
    collections: tuple[CollectionSpec, ...] = DEFAULT_COLLECTIONS


@dataclass(slots=True)
class ChunkManifest:
    """Tracks the chunk files written for a collection."""

    total_parts: int
    part_paths: List[Path]

    @property
    def filenames(self) -> List[str]:
        return [path.name for path in self.part_paths]


@dataclass(slots=True)
class CollectionResult:
    """Represents the outputs of aggregating a single collection."""

    name: str
    record_count: int
    chunk_manifest: ChunkManifest | None = None
    aggregate_path: Path | None = None
    wrote_manifest: bool = False
    legacy_path: Path | None = None
    removed_paths: List[Path] = field(default_factory=list)
