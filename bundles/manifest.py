"""Aggregate-slot output: raw data for one chunk, a manifest for several.

``all.json`` deliberately carries two meanings. With a single chunk it is the
record array itself, which keeps older consumers working unchanged. With two
or more chunks it becomes a manifest object. Readers should check for an
object with a ``chunks`` key before treating the document as data.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .chunking import AGGREGATE_FILENAME
from .encoding import write_json
from .models import ChunkManifest


def build_manifest(
    *,
    chunk_files: Sequence[str],
    count: int,
    max_chunk_bytes: int,
    version: Optional[str] = None,
) -> Dict[str, Any]:
    """Return the manifest mapping, omitting ``version`` when unset."""

    manifest: Dict[str, Any] = {
        "chunks": list(chunk_files),
        "count": count,
        "maxChunkBytes": max_chunk_bytes,
    }
    if version:
        manifest["version"] = version
    return manifest


def is_manifest(payload: Any) -> bool:
    return isinstance(payload, dict) and isinstance(
        payload.get("chunks"), list
    )


def write_aggregate_slot(
    *,
    dest_dir: Path,
    chunks: Sequence[Sequence[Any]],
    chunk_manifest: ChunkManifest,
    max_chunk_bytes: int,
    version: Optional[str] = None,
) -> tuple[Path, bool]:
    """Write ``all.json`` and return its path plus whether it is a manifest."""

    aggregate_path = dest_dir / AGGREGATE_FILENAME
    if len(chunks) == 1:
        write_json(aggregate_path, list(chunks[0]))
        print(f"✅ Aggregate written: {aggregate_path}")
        return aggregate_path, False

    count = sum(len(chunk) for chunk in chunks)
    manifest = build_manifest(
        chunk_files=chunk_manifest.filenames,
        count=count,
        max_chunk_bytes=max_chunk_bytes,
        version=version,
    )
    write_json(aggregate_path, manifest)
    print(
        f"✅ Manifest written: {aggregate_path}"
        f" ({chunk_manifest.total_parts} chunks, {count} records)"
    )
    return aggregate_path, True


def resolve_chunk_paths(aggregate_path: Path, payload: Any) -> List[Path]:
    """Return the chunk files referenced by a manifest payload."""

    if not is_manifest(payload):
        return []
    return [aggregate_path.parent / name for name in payload["chunks"]]


def load_aggregate(dest_dir: Path) -> List[Any]:
    """Read a collection back from ``all.json`` in either of its modes."""

    aggregate_path = dest_dir / AGGREGATE_FILENAME
    payload = json.loads(aggregate_path.read_text(encoding="utf-8"))
    if not is_manifest(payload):
        return list(payload)

    records: List[Any] = []
    for chunk_path in resolve_chunk_paths(aggregate_path, payload):
        records.extend(json.loads(chunk_path.read_text(encoding="utf-8")))
    return records
