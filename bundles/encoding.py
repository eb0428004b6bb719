"""Canonical JSON encoding used for size checks and file output."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def decode_json(text: str) -> Any:
    """Parse ``text`` as strict JSON, refusing ``NaN`` and ``Infinity``."""

    return json.loads(text, parse_constant=_reject_constant)


def encode_json(value: Any) -> bytes:
    """Return the pretty-printed UTF-8 encoding of ``value``.

    Two-space indentation, non-ASCII characters kept literal and a trailing
    newline. Chunk budgets are measured against exactly these bytes. Values
    that strict JSON cannot represent (non-finite floats, lone surrogates)
    raise ``ValueError``.
    """

    text = json.dumps(value, ensure_ascii=False, indent=2, allow_nan=False)
    return (text + "\n").encode("utf-8")


def encoded_size(value: Any) -> int:
    return len(encode_json(value))


def write_json(path: Path, value: Any) -> bool:
    """Persist ``value`` canonically, returning False if unchanged.

    A file whose bytes already equal the canonical encoding is left
    untouched, so reruns over unchanged records keep file timestamps.
    """

    payload = encode_json(value)
    if path.is_file() and path.read_bytes() == payload:
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(payload)
    return True
