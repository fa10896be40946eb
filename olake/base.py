"""Stream cache and helpers shared by all source drivers."""

from __future__ import annotations

import functools
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Protocol, TypeVar

from olake import constants
from olake.datatypes import DataType

logger = logging.getLogger(__name__)

DEFAULT_RETRY_COUNT = 3
DEFAULT_THREAD_COUNT = 3

DEFAULT_COLUMNS = {
    constants.OLAKE_ID: DataType.STRING,
    constants.OLAKE_TIMESTAMP: DataType.INT64,
    constants.OP_TYPE: DataType.STRING,
    constants.CDC_TIMESTAMP: DataType.INT64,
}

T = TypeVar("T")


class StreamLike(Protocol):
    """Anything carrying a unique stream identifier."""

    @property
    def id(self) -> str: ...


@dataclass(frozen=True)
class Chunk:
    """A half-open key range ``[min, max)``; ``None`` means unbounded."""

    min: Any = None
    max: Any = None


class Driver:
    """Common state for a source driver: the cached stream catalogue."""

    def __init__(self, cdc_support: bool = False, state: Any = None) -> None:
        self._streams: dict[str, StreamLike] = {}
        self._lock = threading.Lock()
        self.cdc_support = cdc_support
        self.state = state

    def change_stream_supported(self) -> bool:
        return self.cdc_support

    def get_streams(self) -> list:
        """Return every cached stream."""
        with self._lock:
            return list(self._streams.values())

    def add_stream(self, stream: StreamLike) -> None:
        with self._lock:
            self._streams[stream.id] = stream

    def get_stream(self, stream_id: str) -> Optional[StreamLike]:
        """Return the cached stream with this id, or None."""
        with self._lock:
            return self._streams.get(stream_id)


def retry_on_backoff(attempts: int, sleep: float, func: Callable[[], T]) -> Optional[T]:
    """Call ``func`` up to ``attempts`` times, doubling the pause between retries.

    The first failure is retried immediately; later ones wait ``sleep``
    seconds, then twice that, and so on. The last error is re-raised.
    """
    last_error: Optional[BaseException] = None
    for attempt in range(attempts):
        try:
            return func()
        except Exception as exc:  # noqa: BLE001 - any failure is retried
            last_error = exc
            if attempt != 0:
                logger.info(
                    "retry attempt[%d], retrying after %.2f seconds due to err: %s",
                    attempt,
                    sleep,
                    exc,
                )
                time.sleep(sleep)
                sleep *= 2
    if last_error is not None:
        raise last_error
    return None


def compare_values(a: Any, b: Any) -> int:
    """Three-way compare of chunk boundaries; None sorts first.

    Numbers compare numerically, values of one type natively, and values
    of unrelated types by their string form.
    """
    if a is None or b is None:
        if a is None and b is None:
            return 0
        return -1 if a is None else 1
    numeric = (int, float)
    if isinstance(a, numeric) and isinstance(b, numeric) and not (
        isinstance(a, bool) or isinstance(b, bool)
    ):
        return (a > b) - (a < b)
    if type(a) is type(b):
        try:
            return (a > b) - (a < b)
        except TypeError:
            pass
    sa, sb = str(a), str(b)
    return (sa > sb) - (sa < sb)


def sort_chunks(chunks: Iterable[Chunk]) -> list:
    """Return the chunks ordered by their lower bound."""
    return sorted(chunks, key=functools.cmp_to_key(lambda x, y: compare_values(x.min, y.min)))