"""Chunk planning and document shaping for MongoDB collections."""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, Mapping, Optional, Union

from bson import Binary, Decimal128, ObjectId, Timestamp
from bson.datetime_ms import DatetimeMS

from olake.base import Chunk

OBJECT_ID_BSON_TYPE = 7
CHUNK_DENSITY = timedelta(seconds=10)
HOURS_PER_DENSITY_STEP = 6


def generate_pipeline(start: Any, end: Any) -> list:
    """Build the aggregation pipeline reading ObjectId keys in ``[start, end)``.

    With ``end`` of None the range is open above.
    """
    conditions: list = [
        {
            "$and": [
                {"_id": {"$type": OBJECT_ID_BSON_TYPE}},
                {"_id": {"$gte": start}},
            ]
        }
    ]
    if end is not None:
        conditions.append({"_id": {"$lt": end}})
    return [
        {"$match": {"$and": conditions}},
        {"$sort": {"_id": 1}},
    ]


def generate_min_object_id(moment: datetime) -> ObjectId:
    """Return the smallest ObjectId that can carry the given creation time."""
    return ObjectId.from_datetime(moment)


def handle_mongo_object(doc: dict) -> dict:
    """Normalise a decoded document in place and return it.

    Keys are lower-cased; BSON-specific values become plain Python values
    and non-finite floats become None.
    """
    items = list(doc.items())
    doc.clear()
    for key, value in items:
        doc[key.lower()] = _plain_value(value)
    return doc


def _plain_value(value: Any) -> Any:
    if isinstance(value, Timestamp):
        return value.time
    if isinstance(value, DatetimeMS):
        return value.as_datetime()
    if isinstance(value, (Binary, bytes)):
        return bytes(value).hex()
    if isinstance(value, Decimal128):
        return str(value)
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
        return None
    return value


def timestamp_chunks(first: datetime, last: datetime) -> list:
    """Split the creation-time range ``first``..``last`` into ObjectId chunks.

    Every six hours of span widens each chunk by ten seconds; the final
    chunk starts at ``last`` and is open above.
    """
    steps = (last - first).total_seconds() / 3600 / HOURS_PER_DENSITY_STEP
    if steps < 1:
        steps = 1
    density = int(steps) * CHUNK_DENSITY

    chunks = []
    start = first
    while start < last:
        end = start + density
        upper = end if end <= last else last + timedelta(seconds=1)
        chunks.append(Chunk(min=generate_min_object_id(start), max=generate_min_object_id(upper)))
        start = end
    chunks.append(Chunk(min=generate_min_object_id(last), max=None))
    return chunks


def boundary_chunks(min_id: ObjectId, split_keys: Iterable[Mapping], max_id: ObjectId) -> list:
    """Turn ``splitVector`` keys into chunks between the collection's extremes."""
    boundaries = [min_id]
    boundaries.extend(
        key["_id"] for key in split_keys if isinstance(key.get("_id"), ObjectId)
    )
    boundaries.append(max_id)
    chunks = [Chunk(min=low, max=high) for low, high in zip(boundaries, boundaries[1:])]
    chunks.append(Chunk(min=boundaries[-1], max=None))
    return chunks


def bucket_chunks(buckets: Iterable[Mapping]) -> list:
    """Turn ``$bucketAuto`` results into chunks, plus an open tail chunk."""
    chunks = [Chunk(min=bucket["_id"]["min"], max=bucket["_id"]["max"]) for bucket in buckets]
    if chunks:
        chunks.append(Chunk(min=chunks[-1].max, max=None))
    return chunks


def mongo_op_type(operation: str) -> str:
    """Map a change-stream operation type to the record op code."""
    if operation == "update":
        return "u"
    if operation == "delete":
        return "d"
    return "c"


def change_timestamp(
    wall_time: Union[datetime, DatetimeMS, int, None],
    cluster_time: Optional[Timestamp],
) -> datetime:
    """Pick the event time: wall time if set, else the cluster timestamp."""
    if isinstance(wall_time, datetime):
        return wall_time if wall_time.tzinfo else wall_time.replace(tzinfo=timezone.utc)
    if isinstance(wall_time, DatetimeMS):
        millis = int(wall_time)
    else:
        millis = int(wall_time or 0)
    if millis == 0:
        seconds = cluster_time.time if cluster_time is not None else 0
        increment = cluster_time.inc if cluster_time is not None else 0
        millis = seconds * 1000 + increment
    return datetime(1970, 1, 1, tzinfo=timezone.utc) + timedelta(milliseconds=millis)