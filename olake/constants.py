"""Field names and markers shared by every connector."""

PARQUET_FILE_EXT = "parquet"
MONGO_PRIMARY_ID = "_id"
MONGO_PRIMARY_ID_PREFIX = 'ObjectID("'
MONGO_PRIMARY_ID_SUFFIX = '")'
OLAKE_ID = "_olake_id"
OLAKE_TIMESTAMP = "_olake_timestamp"
OP_TYPE = "_op_type"
CDC_TIMESTAMP = "_cdc_timestamp"
DB_NAME = "_db"

OLAKE_INTERNAL_FIELDS = frozenset(
    {OLAKE_ID, OLAKE_TIMESTAMP, OP_TYPE, CDC_TIMESTAMP, DB_NAME}
)


def is_internal_field(name: str) -> bool:
    """Return True if ``name`` is a column added by the sync itself."""
    return name in OLAKE_INTERNAL_FIELDS