"""Greedy byte-bounded partitioning and chunk file output."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence

from .encoding import encoded_size, write_json
from .models import ChunkManifest

AGGREGATE_FILENAME = "all.json"


def chunk_filename(index: int) -> str:
    """Return the filename of the 1-based chunk ``index``."""

    return f"all_{index}.json"


def fits_with(chunk: Sequence[Any], candidate: Any, max_bytes: int) -> bool:
    """Return True when ``chunk`` plus ``candidate`` encodes within budget."""

    return encoded_size([*chunk, candidate]) <= max_bytes


def partition_records(
    records: Sequence[Any],
    max_bytes: int,
    max_items: Optional[int] = None,
) -> List[List[Any]]:
    """Split ``records`` into ordered chunks no larger than ``max_bytes``.

    A single pass decides each record once: it joins the open chunk when the
    re-encoded chunk still fits, otherwise the open chunk is sealed and the
    record starts the next one. An empty chunk accepts any record, so a
    record that alone exceeds the budget becomes a singleton chunk instead
    of being split or dropped. ``max_items`` adds a count-based seal point on
    top of the byte rule.
    """

    if max_bytes <= 0:
        raise ValueError(f"max_bytes must be positive, got {max_bytes}")
    if max_items is not None and max_items <= 0:
        raise ValueError(f"max_items must be positive, got {max_items}")

    chunks: List[List[Any]] = []
    current: List[Any] = []
    for record in records:
        if not current:
            current.append(record)
            continue
        full = max_items is not None and len(current) >= max_items
        if not full and fits_with(current, record, max_bytes):
            current.append(record)
        else:
            chunks.append(current)
            current = [record]
    if current:
        chunks.append(current)
    return chunks


def write_chunks(
    *,
    dest_dir: Path,
    chunks: Sequence[Sequence[Any]],
    on_write: Optional[Callable[[Path], None]] = None,
) -> ChunkManifest:
    """Persist chunk arrays using the ``all_<n>.json`` naming convention."""

    part_paths: List[Path] = []
    for index, chunk in enumerate(chunks, start=1):
        chunk_path = dest_dir / chunk_filename(index)
        write_json(chunk_path, list(chunk))
        if on_write is not None:
            on_write(chunk_path)
        part_paths.append(chunk_path)
    return ChunkManifest(total_parts=len(part_paths), part_paths=part_paths)
