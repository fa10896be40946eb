"""Sync state, chunk planning and schema helpers for MySQL sources."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional, Sequence

from olake.base import Chunk

MIN_SERVER_ID = 1000
SERVER_ID_SPAN = 9000
CHUNKS_PER_THREAD = 8
MASTER_STATUS_COLUMNS = 5


def _as_string(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


@dataclass
class MySQLGlobalState:
    """Binlog position shared by all CDC streams, plus the streams already backfilled."""

    server_id: int = 0
    position_name: str = ""
    position: int = 0
    streams: set = field(default_factory=set)

    def needs_reset(self) -> bool:
        """True when no usable binlog position has been recorded yet."""
        return self.server_id == 0 or self.position_name == ""

    def streams_needing_backfill(self, stream_ids: Iterable[str]) -> list:
        """Return the ids, in the given order, whose backfill has not completed."""
        return [stream_id for stream_id in stream_ids if stream_id not in self.streams]


def split_chunks(
    min_value: Any,
    chunk_size: int,
    next_end: Callable[[Any, int], Optional[Any]],
) -> list:
    """Plan primary-key chunks starting from the table's smallest key.

    ``next_end(current, chunk_size)`` returns the key that ends the chunk
    beginning at ``current``, or None once the table is exhausted. Bounds are
    stored as strings; the first chunk is open below and the last open above.
    An empty table (``min_value`` of None) yields no chunks.
    """
    if min_value is None:
        return []

    chunks = [Chunk(min=None, max=_as_string(min_value))]
    current = min_value
    while True:
        following = next_end(current, chunk_size)
        if following is None or following == current:
            break
        chunks.append(Chunk(min=_as_string(current), max=_as_string(following)))
        current = following
    chunks.append(Chunk(min=_as_string(current), max=None))
    return chunks


def chunk_size(total_records: int, max_threads: int) -> int:
    """Rows per chunk so that each thread gets about eight chunks."""
    if max_threads <= 0:
        raise ValueError(f"max threads must be positive, got {max_threads}")
    return int(total_records / (max_threads * CHUNKS_PER_THREAD))


def new_server_id(nanos: Optional[int] = None) -> int:
    """Pick a replication server id in ``[1000, 10000)`` from a nanosecond clock."""
    if nanos is None:
        nanos = time.time_ns()
    return MIN_SERVER_ID + nanos % SERVER_ID_SPAN


def parse_stream_name(name: str) -> tuple:
    """Split ``schema.table`` into ``(schema, table)``."""
    parts = name.split(".")
    if len(parts) != 2:
        raise ValueError(f"invalid stream name format: {name}")
    return parts[0], parts[1]


def binlog_position_from_row(row: Optional[Sequence[Any]]) -> tuple:
    """Read ``(file, position)`` from a ``SHOW MASTER STATUS`` row."""
    if row is None:
        raise ValueError("no binlog position available")
    if len(row) != MASTER_STATUS_COLUMNS:
        raise ValueError(
            f"failed to scan binlog position: expected {MASTER_STATUS_COLUMNS} columns, got {len(row)}"
        )
    file_name, position = row[0], row[1]
    try:
        pos = int(position)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"failed to scan binlog position: {exc}") from exc
    if pos < 0:
        raise ValueError(f"failed to scan binlog position: negative position {pos}")
    return _as_string(file_name), pos