"""High-level orchestration for bundle aggregation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Sequence

from .chunking import partition_records, write_chunks
from .cleanup import clear_existing_files
from .encoding import write_json
from .manifest import write_aggregate_slot
from .models import AggregateConfig, CollectionResult, CollectionSpec
from .reader import read_json_dir


def aggregate_collection(
    *,
    dest_dir: Path,
    records: Sequence[Any],
    config: AggregateConfig,
) -> CollectionResult:
    """Replace the chunk artifacts of ``dest_dir`` with ``records``."""

    result = CollectionResult(name=dest_dir.name, record_count=len(records))
    if not records:
        return result

    result.removed_paths = clear_existing_files(dest_dir)

    chunks = partition_records(
        records,
        config.max_chunk_bytes,
        max_items=config.max_chunk_items,
    )
    chunk_manifest = write_chunks(
        dest_dir=dest_dir,
        chunks=chunks,
        on_write=lambda path: print(f"✅ Chunk written: {path}"),
    )
    aggregate_path, wrote_manifest = write_aggregate_slot(
        dest_dir=dest_dir,
        chunks=chunks,
        chunk_manifest=chunk_manifest,
        max_chunk_bytes=config.max_chunk_bytes,
        version=config.version,
    )

    result.chunk_manifest = chunk_manifest
    result.aggregate_path = aggregate_path
    result.wrote_manifest = wrote_manifest
    return result


def build_legacy_payload(
    spec: CollectionSpec, records: Sequence[Any], version: str | None
) -> Any:
    """Return the flat legacy document for ``spec``."""

    if spec.legacy_key is None:
        return list(records)
    payload: dict[str, Any] = {}
    if version:
        payload["version"] = version
    payload[spec.legacy_key] = list(records)
    return payload


def write_legacy_output(
    *,
    root: Path,
    spec: CollectionSpec,
    records: Sequence[Any],
    version: str | None,
) -> Path | None:
    """Write the unpartitioned legacy file for a non-empty collection."""

    if not records:
        return None
    legacy_path = root / spec.legacy_filename
    changed = write_json(
        legacy_path, build_legacy_payload(spec, records, version)
    )
    if changed:
        print(f"✅ Legacy file written: {legacy_path}")
    else:
        print(f"⏭️ Legacy file unchanged: {legacy_path}")
    return legacy_path


def run_aggregation(config: AggregateConfig) -> List[CollectionResult]:
    """Aggregate every configured collection under ``config.root`` in turn."""

    root = Path(config.root)
    results: List[CollectionResult] = []
    for spec in config.collections:
        collection_dir = root / spec.name
        records = read_json_dir(collection_dir)
        if not records:
            print(
                f"⏭️ Skipping {spec.name}; no records in {collection_dir}"
            )

        result = aggregate_collection(
            dest_dir=collection_dir,
            records=records,
            config=config,
        )
        result.legacy_path = write_legacy_output(
            root=root,
            spec=spec,
            records=records,
            version=config.version,
        )
        results.append(result)
    return results
