"""Chunked aggregation of per-entity JSON files into bundle files."""

from .chunking import partition_records
from .manifest import build_manifest, load_aggregate
from .models import (
    DEFAULT_COLLECTIONS,
    DEFAULT_MAX_CHUNK_BYTES,
    AggregateConfig,
    CollectionResult,
    CollectionSpec,
)
from .pipeline import aggregate_collection, run_aggregation

__all__ = [
    "DEFAULT_COLLECTIONS",
    "DEFAULT_MAX_CHUNK_BYTES",
    "AggregateConfig",
    "CollectionResult",
    "CollectionSpec",
    "aggregate_collection",
    "build_manifest",
    "load_aggregate",
    "partition_records",
    "run_aggregation",
]
