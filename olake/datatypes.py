"""Column data types and the mappings from source database types."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class DataType(str, Enum):
    """Type of a column as seen by the destination writers."""

    NULL = "null"
    INT32 = "integer_small"
    INT64 = "integer"
    FLOAT32 = "number_small"
    FLOAT64 = "number"
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    BOOL = "boolean"
    TIMESTAMP = "timestamp"
    UNKNOWN = "unknown"


MYSQL_TYPES: Mapping[str, DataType] = MappingProxyType(
    {
        # integer types
        "tinyint": DataType.INT64,
        "smallint": DataType.INT64,
        "mediumint": DataType.INT64,
        "int": DataType.INT64,
        "integer": DataType.INT64,
        "bigint": DataType.INT64,
        # floating point types
        "float": DataType.FLOAT64,
        "double": DataType.FLOAT64,
        "real": DataType.FLOAT64,
        "decimal": DataType.FLOAT64,
        "numeric": DataType.FLOAT64,
        # string types
        "char": DataType.STRING,
        "varchar": DataType.STRING,
        "tinytext": DataType.STRING,
        "text": DataType.STRING,
        "mediumtext": DataType.STRING,
        "longtext": DataType.STRING,
        # binary types
        "binary": DataType.STRING,
        "varbinary": DataType.STRING,
        "tinyblob": DataType.STRING,
        "blob": DataType.STRING,
        "mediumblob": DataType.STRING,
        "longblob": DataType.STRING,
        # date and time types
        "date": DataType.TIMESTAMP,
        "time": DataType.TIMESTAMP,
        "datetime": DataType.TIMESTAMP,
        "timestamp": DataType.TIMESTAMP,
        "year": DataType.INT64,
        "json": DataType.STRING,
        "enum": DataType.STRING,
        "set": DataType.STRING,
        # geometry types
        "geometry": DataType.STRING,
        "point": DataType.STRING,
        "linestring": DataType.STRING,
        "polygon": DataType.STRING,
        "multipoint": DataType.STRING,
        "multilinestring": DataType.STRING,
        "multipolygon": DataType.STRING,
        "geometrycollection": DataType.STRING,
    }
)

POSTGRES_TYPES: Mapping[str, DataType] = MappingProxyType(
    {
        "bigint": DataType.INT64,
        "tinyint": DataType.INT32,
        "integer": DataType.INT32,
        "smallint": DataType.INT32,
        "smallserial": DataType.INT32,
        "int": DataType.INT32,
        "int2": DataType.INT32,
        "int4": DataType.INT32,
        "serial": DataType.INT32,
        "serial2": DataType.INT32,
        "serial4": DataType.INT32,
        "serial8": DataType.INT64,
        "bigserial": DataType.INT64,
        # numbers
        "decimal": DataType.FLOAT32,
        "numeric": DataType.FLOAT32,
        "double precision": DataType.FLOAT64,
        "float": DataType.FLOAT32,
        "float4": DataType.FLOAT32,
        "float8": DataType.FLOAT64,
        "real": DataType.FLOAT32,
        # boolean
        "bool": DataType.BOOL,
        "boolean": DataType.BOOL,
        # strings
        "bit varying": DataType.STRING,
        "box": DataType.STRING,
        "bytea": DataType.STRING,
        "character": DataType.STRING,
        "char": DataType.STRING,
        "varbit": DataType.STRING,
        "bit": DataType.STRING,
        "bit(n)": DataType.STRING,
        "varying(n)": DataType.STRING,
        "cidr": DataType.STRING,
        "inet": DataType.STRING,
        "macaddr": DataType.STRING,
        "macaddr8": DataType.STRING,
        "character varying": DataType.STRING,
        "text": DataType.STRING,
        "varchar": DataType.STRING,
        "longvarchar": DataType.STRING,
        "circle": DataType.STRING,
        "hstore": DataType.STRING,
        "name": DataType.STRING,
        "uuid": DataType.STRING,
        "json": DataType.STRING,
        "jsonb": DataType.STRING,
        "line": DataType.STRING,
        "lseg": DataType.STRING,
        "money": DataType.STRING,
        "path": DataType.STRING,
        "pg_lsn": DataType.STRING,
        "point": DataType.STRING,
        "polygon": DataType.STRING,
        "tsquery": DataType.STRING,
        "tsvector": DataType.STRING,
        "xml": DataType.STRING,
        "enum": DataType.STRING,
        "tsrange": DataType.STRING,
        # date/time
        "time": DataType.STRING,
        "timez": DataType.STRING,
        "interval": DataType.STRING,
        "date": DataType.TIMESTAMP,
        "timestamp": DataType.TIMESTAMP,
        "timestampz": DataType.TIMESTAMP,
        "timestamp with time zone": DataType.TIMESTAMP,
        "timestamp without time zone": DataType.TIMESTAMP,
        # arrays
        "ARRAY": DataType.ARRAY,
        "array": DataType.ARRAY,
    }
)


def mysql_data_type(name: str) -> Optional[DataType]:
    """Map a MySQL ``DATA_TYPE`` name to a DataType, or None if unsupported."""
    return MYSQL_TYPES.get(name)


def postgres_data_type(name: str) -> Optional[DataType]:
    """Map a Postgres ``data_type`` name to a DataType, or None if unsupported."""
    return POSTGRES_TYPES.get(name)


def postgres_base_type(column_type: str) -> str:
    """Strip modifiers from a Postgres column type: ``varchar(50)`` -> ``varchar``."""
    return column_type.split("(", 1)[0].strip().lower()