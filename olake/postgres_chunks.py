"""Chunk planning and change helpers for PostgreSQL tables."""

from __future__ import annotations

from fractions import Fraction
from typing import Any, Callable, Optional

from olake.base import Chunk, compare_values

DEFAULT_SPLIT_COLUMN = "ctid"
MAX_CTID_PAGE = 0xFFFFFFFF
SUPPORTED_PLUGIN = "wal2json"
SUPPORTED_SLOT_TYPE = "logical"
MAX_DISTRIBUTION_FACTOR = float((1 << 63) - 1)


def _ctid(page: int) -> str:
    return f"'({page},0)'"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def ctid_chunks(rel_pages: int, batch_size: int) -> list:
    """Split a table's heap pages into ``ctid`` ranges of ``batch_size`` pages.

    An empty relation is treated as one page; the last range is open to the
    largest page number.
    """
    if batch_size <= 0:
        raise ValueError(f"batch size must be positive, got {batch_size}")
    pages = rel_pages or 1
    chunks = []
    for start in range(0, pages, batch_size):
        end = start + batch_size
        if end >= pages:
            end = MAX_CTID_PAGE
        chunks.append(Chunk(min=_ctid(start), max=_ctid(end)))
    return chunks


def _add_constant(value: Any, constant: int) -> Any:
    if not _is_number(value):
        raise ValueError(
            f"failed to split batch size chunks: unsupported type {type(value).__name__}"
        )
    return value + constant


def split_via_batch_size(min_value: Any, max_value: Any, chunk_size: int) -> list:
    """Split the numeric range starting at ``min_value`` into equal steps.

    Chunks are produced while their upper bound does not pass ``max_value``;
    a final chunk from the last bound is open above.
    """
    chunks = []
    chunk_start = min_value
    chunk_end = _add_constant(min_value, chunk_size)
    while compare_values(chunk_end, max_value) <= 0:
        chunks.append(Chunk(min=chunk_start, max=chunk_end))
        chunk_start = chunk_end
        chunk_end = _add_constant(chunk_end, chunk_size)
    chunks.append(Chunk(min=chunk_start, max=None))
    return chunks


def split_via_next_query(min_value: Any, next_end: Callable[[Any], Optional[Any]]) -> list:
    """Build chunks by repeatedly asking ``next_end`` for the bound after the last.

    Stops when ``next_end`` returns None or the same bound it was given.
    """
    chunks = []
    chunk_start = min_value
    while True:
        chunk_end = next_end(chunk_start)
        if chunk_end is None or chunk_end == chunk_start:
            break
        chunks.append(Chunk(min=chunk_start, max=chunk_end))
        chunk_start = chunk_end
    return chunks


def calculate_distribution_factor(min_value: Any, max_value: Any, row_count: int) -> float:
    """Return ``(max - min + 1) / row_count`` for numeric key bounds.

    An empty table yields the largest signed 64-bit value.
    """
    if row_count == 0:
        return MAX_DISTRIBUTION_FACTOR
    if not (_is_number(min_value) and _is_number(max_value)):
        raise ValueError("failed to convert min or max value to a number")
    span = Fraction(max_value) - Fraction(min_value) + 1
    return float(span / row_count)


def validate_replication_slot(plugin: str, slot_type: str) -> None:
    """Raise ValueError unless the slot is a logical wal2json slot."""
    if plugin != SUPPORTED_PLUGIN:
        raise ValueError(f"plugin not supported[{plugin}]: driver only supports wal2json")
    if slot_type != SUPPORTED_SLOT_TYPE:
        raise ValueError(f"only logical slots are supported: {slot_type}")


def change_op_type(kind: str) -> str:
    """Map a change kind to the record op code."""
    if kind == "delete":
        return "d"
    if kind == "update":
        return "u"
    return "c"