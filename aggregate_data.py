"""Regenerate chunked and legacy JSON bundles from per-entity files."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from bundles import CollectionResult, run_aggregation
from config_loader import ConfigError, resolve_aggregate_config


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Return CLI arguments for the bundle aggregation tool."""

    parser = argparse.ArgumentParser(
        description=(
            "Aggregate per-entity JSON files into all.json / all_N.json"
            " bundles and flat legacy files."
        ),
    )
    parser.add_argument(
        "--root",
        help="Data repository root (defaults to the working directory).",
    )
    parser.add_argument(
        "--config",
        help="Optional JSON config file (defaults to $AGGREGATE_CONFIG).",
    )
    parser.add_argument(
        "--max-chunk-bytes",
        type=int,
        help="Byte budget per chunk file (defaults to ~1.8MB).",
    )
    parser.add_argument(
        "--max-chunk-items",
        type=int,
        help="Optional cap on records per chunk file.",
    )
    parser.add_argument(
        "--version-stamp",
        help="Version recorded in manifests (defaults to $GITHUB_SHA).",
    )
    return parser.parse_args(argv)


def _describe(result: CollectionResult) -> str:
    if result.chunk_manifest is None:
        return f"{result.name}: no records"
    mode = "manifest" if result.wrote_manifest else "single chunk"
    return (
        f"{result.name}: {result.record_count} records in"
        f" {result.chunk_manifest.total_parts} chunk(s) ({mode})"
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Entry point for the ``aggregate-data`` CLI."""

    args = parse_args(argv)
    try:
        config = resolve_aggregate_config(
            config_path=args.config,
            root=args.root,
            max_chunk_bytes=args.max_chunk_bytes,
            max_chunk_items=args.max_chunk_items,
            version=args.version_stamp,
        )
    except ConfigError as exc:
        raise SystemExit(f"Config error: {exc}") from exc

    try:
        results = run_aggregation(config)
    except Exception as exc:
        raise SystemExit(f"❌ Aggregation failed: {exc}") from exc

    for result in results:
        print(_describe(result))
    print("✅ Aggregation done.")


if __name__ == "__main__":
    main()
