import pytest

from olake.base import Chunk
from olake.mysql_sync import (
    MySQLGlobalState,
    binlog_position_from_row,
    chunk_size,
    new_server_id,
    parse_stream_name,
    split_chunks,
)


def _stepper(mapping):
    calls = []

    def next_end(current, size):
        calls.append((current, size))
        return mapping.get(current)

    return next_end, calls


def test_needs_reset_when_empty():
    assert MySQLGlobalState().needs_reset() is True


def test_needs_reset_without_file_name():
    assert MySQLGlobalState(server_id=1234).needs_reset() is True


def test_needs_reset_without_server_id():
    assert MySQLGlobalState(position_name="binlog.000001", position=4).needs_reset() is True


def test_no_reset_with_full_position():
    state = MySQLGlobalState(server_id=1234, position_name="binlog.000001", position=4)
    assert state.needs_reset() is False


def test_streams_needing_backfill_keeps_order():
    state = MySQLGlobalState(streams={"db.b"})
    assert state.streams_needing_backfill(["db.c", "db.b", "db.a"]) == ["db.c", "db.a"]


def test_streams_needing_backfill_all_done():
    state = MySQLGlobalState(streams={"db.a", "db.b"})
    assert state.streams_needing_backfill(["db.a", "db.b"]) == []


def test_split_chunks_empty_table():
    next_end, calls = _stepper({})
    assert split_chunks(None, 10, next_end) == []
    assert calls == []


def test_split_chunks_walks_until_none():
    next_end, calls = _stepper({1: 5, 5: 9, 9: None})
    chunks = split_chunks(1, 4, next_end)
    assert chunks == [
        Chunk(min=None, max="1"),
        Chunk(min="1", max="5"),
        Chunk(min="5", max="9"),
        Chunk(min="9", max=None),
    ]
    assert calls == [(1, 4), (5, 4), (9, 4)]


def test_split_chunks_bounds_link_up():
    next_end, _ = _stepper({10: 20, 20: 30, 30: 40})
    chunks = split_chunks(10, 3, next_end)
    assert chunks[0].min is None
    assert chunks[-1].max is None
    for left, right in zip(chunks, chunks[1:]):
        assert left.max == right.min


def test_split_chunks_single_row():
    next_end, _ = _stepper({})
    assert split_chunks("k", 1, next_end) == [Chunk(min=None, max="k"), Chunk(min="k", max=None)]


def test_split_chunks_stops_on_repeated_bound():
    next_end, _ = _stepper({7: 7})
    assert split_chunks(7, 2, next_end) == [Chunk(min=None, max="7"), Chunk(min="7", max=None)]


def test_split_chunks_decodes_bytes():
    next_end, _ = _stepper({b"a": b"m"})
    chunks = split_chunks(b"a", 1, next_end)
    assert chunks[1] == Chunk(min="a", max="m")


@pytest.mark.parametrize("threads,per_chunk", [(1, 5), (3, 100), (10, 7)])
def test_chunk_size_gives_eight_chunks_per_thread(threads, per_chunk):
    total = threads * 8 * per_chunk
    assert chunk_size(total, threads) == per_chunk


def test_chunk_size_small_table_is_zero():
    assert chunk_size(7, 1) == 0


def test_chunk_size_rejects_zero_threads():
    with pytest.raises(ValueError):
        chunk_size(100, 0)


def test_new_server_id_base():
    assert new_server_id(0) == 1000


@pytest.mark.parametrize("nanos", [1, 8999, 9000, 123456789012345])
def test_new_server_id_range(nanos):
    assert 1000 <= new_server_id(nanos) < 10000


def test_new_server_id_wraps():
    assert new_server_id(9000 + 17) == new_server_id(17)


def test_new_server_id_from_clock():
    assert 1000 <= new_server_id() < 10000


def test_parse_stream_name():
    assert parse_stream_name("shop.orders") == ("shop", "orders")


@pytest.mark.parametrize("name", ["orders", "a.b.c", ""])
def test_parse_stream_name_invalid(name):
    with pytest.raises(ValueError, match="invalid stream name format"):
        parse_stream_name(name)


def test_binlog_position_from_row():
    row = ("binlog.000003", 157, "", "", "")
    assert binlog_position_from_row(row) == ("binlog.000003", 157)


def test_binlog_position_from_row_decodes_bytes():
    row = (b"binlog.000003", "157", b"", b"", b"")
    assert binlog_position_from_row(row) == ("binlog.000003", 157)


def test_binlog_position_missing_row():
    with pytest.raises(ValueError, match="no binlog position available"):
        binlog_position_from_row(None)


def test_binlog_position_wrong_column_count():
    with pytest.raises(ValueError, match="failed to scan binlog position"):
        binlog_position_from_row(("binlog.000003", 157))


def test_binlog_position_bad_number():
    with pytest.raises(ValueError, match="failed to scan binlog position"):
        binlog_position_from_row(("binlog.000003", "abc", "", "", ""))