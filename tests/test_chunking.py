from __future__ import annotations

from pathlib import Path

import pytest

from bundles.chunking import chunk_filename, partition_records, write_chunks
from bundles.encoding import encode_json, encoded_size, write_json
from conftest import read_json


def _records(count: int, blob_size: int) -> list[dict]:
    return [{"id": index, "blob": "x" * blob_size} for index in range(count)]


def _flatten(chunks: list[list]) -> list:
    return [record for chunk in chunks for record in chunk]


def test_encoding_is_pretty_printed_utf8_with_trailing_newline():
    payload = encode_json({"name": "Café", "tags": [1, 2]})

    assert payload.endswith(b"\n")
    assert "Café".encode("utf-8") in payload
    assert b'\n  "tags": [\n    1,\n    2\n  ]\n' in payload


def test_empty_input_yields_no_chunks():
    assert partition_records([], 100) == []


def test_everything_fits_in_one_chunk():
    records = _records(5, 10)

    chunks = partition_records(records, 1_000_000)

    assert chunks == [records]


def test_partition_preserves_order_and_respects_budget():
    records = _records(40, 90)
    budget = 1_000

    chunks = partition_records(records, budget)

    assert len(chunks) > 1
    assert _flatten(chunks) == records
    for chunk in chunks:
        assert encoded_size(chunk) <= budget


def test_duplicate_records_are_kept():
    records = [{"id": 1}, {"id": 1}, [1, 2], [1, 2]]

    chunks = partition_records(records, 20)

    assert _flatten(chunks) == records


def test_greedy_seals_chunk_when_next_record_does_not_fit():
    records = _records(3, 10)
    budget = encoded_size(records[:2])

    chunks = partition_records(records, budget)

    assert chunks == [records[:2], records[2:]]


def test_oversized_record_becomes_singleton_chunk():
    small = {"id": "small"}
    huge = {"id": "huge", "blob": "y" * 5_000_000}
    budget = 1_800_000

    chunks = partition_records([small, huge, small], budget)

    assert chunks == [[small], [huge], [small]]
    assert encoded_size(chunks[1]) > budget


def test_single_oversized_record_alone():
    huge = {"blob": "z" * 5_000_000}

    chunks = partition_records([huge], 1_800_000)

    assert chunks == [[huge]]


def test_large_collection_splits_into_two_chunks():
    records = _records(250, 9_970)
    assert 9_900 < encoded_size(records[0]) < 10_100

    chunks = partition_records(records, 1_800_000)

    assert len(chunks) == 2
    assert 170 <= len(chunks[0]) <= 180
    assert len(chunks[0]) + len(chunks[1]) == 250
    assert _flatten(chunks) == records


def test_count_cap_adds_seal_points():
    records = _records(7, 5)

    chunks = partition_records(records, 1_000_000, max_items=3)

    assert [len(chunk) for chunk in chunks] == [3, 3, 1]
    assert _flatten(chunks) == records


def test_count_cap_does_not_relax_byte_budget():
    records = _records(6, 90)
    budget = encoded_size(records[:2])

    chunks = partition_records(records, budget, max_items=10)

    assert all(len(chunk) <= 2 for chunk in chunks)


@pytest.mark.parametrize("budget", [0, -5])
def test_non_positive_budget_is_rejected(budget):
    with pytest.raises(ValueError):
        partition_records([{"id": 1}], budget)


def test_non_positive_count_cap_is_rejected():
    with pytest.raises(ValueError):
        partition_records([{"id": 1}], 100, max_items=0)


def test_write_chunks_uses_numbered_names(tmp_path: Path):
    chunks = [[{"id": 1}, {"id": 2}], [{"id": 3}]]
    written: list[Path] = []

    manifest = write_chunks(
        dest_dir=tmp_path, chunks=chunks, on_write=written.append
    )

    assert manifest.total_parts == 2
    assert manifest.filenames == ["all_1.json", "all_2.json"]
    assert written == manifest.part_paths
    assert read_json(tmp_path / chunk_filename(1)) == chunks[0]
    assert read_json(tmp_path / chunk_filename(2)) == chunks[1]
    assert (tmp_path / "all_2.json").read_bytes() == encode_json(chunks[1])


@pytest.mark.parametrize("value", [float("nan"), float("inf"), "\ud800"])
def test_encoding_rejects_values_strict_json_cannot_hold(value):
    with pytest.raises(ValueError):
        encode_json({"v": value})


def test_write_json_leaves_identical_file_untouched(tmp_path: Path):
    target = tmp_path / "nested" / "out.json"

    assert write_json(target, [{"id": 1}])
    assert not write_json(target, [{"id": 1}])
    assert write_json(target, [{"id": 2}])
    assert read_json(target) == [{"id": 2}]
