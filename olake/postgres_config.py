"""Connection settings for a PostgreSQL source."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional
from urllib.parse import quote_plus, urlencode

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 10000
DEFAULT_MAX_THREADS = 2
DEFAULT_INITIAL_WAIT_TIME = 10


@dataclass
class SSLConfig:
    """TLS settings for the database connection."""

    mode: str = ""
    server_ca: str = ""
    client_cert: str = ""
    client_key: str = ""


@dataclass
class PostgresCDC:
    """Logical replication settings."""

    replication_slot: str = ""
    initial_wait_time: int = 0


@dataclass
class PostgresConfig:
    """User supplied settings for reading from a PostgreSQL server."""

    host: str = ""
    port: int = 0
    database: str = ""
    username: str = ""
    password: str = ""
    jdbc_url_params: dict = field(default_factory=dict)
    ssl: Optional[SSLConfig] = None
    update_method: Any = None
    default_mode: str = ""
    batch_size: int = 0
    max_threads: int = 0
    connection: str = ""

    def validate(self) -> None:
        """Check fields, fill defaults and build ``connection``.

        Raises ValueError on a missing or malformed host or port.
        """
        if not self.host:
            raise ValueError("empty host name")
        if "http" in self.host:
            raise ValueError("host should not contain http or https")
        if self.port <= 0 or self.port > 65535:
            raise ValueError("invalid port number: must be between 1 and 65535")

        if self.batch_size <= 0:
            self.batch_size = DEFAULT_BATCH_SIZE
        if self.max_threads <= 0:
            self.max_threads = DEFAULT_MAX_THREADS

        query: dict = {}
        if self.jdbc_url_params:
            query["options"] = "".join(
                f"{quote_identifier(key)}={quote_literal(value)} "
                for key, value in self.jdbc_url_params.items()
            )

        if self.ssl is None:
            self.ssl = SSLConfig(mode="disable")
        if self.ssl.mode:
            query["sslmode"] = self.ssl.mode
        if self.ssl.server_ca:
            query["sslrootcert"] = self.ssl.server_ca
        if self.ssl.client_cert:
            query["sslcert"] = self.ssl.client_cert
        if self.ssl.client_key:
            query["sslkey"] = self.ssl.client_key

        base = (
            f"postgres://{quote_plus(self.username)}:{quote_plus(self.password)}"
            f"@{self.host}:{self.port}/{quote_plus(self.database)}"
        )
        encoded = urlencode(sorted(query.items()))
        self.connection = f"{base}?{encoded}" if encoded else base


def quote_identifier(name: str) -> str:
    """Quote a SQL identifier, cutting it at the first NUL character."""
    name = name.split("\x00", 1)[0]
    return '"' + name.replace('"', '""') + '"'


def quote_literal(value: str) -> str:
    """Quote a SQL string literal, using the E'' form when it holds backslashes."""
    value = value.replace("'", "''")
    if "\\" in value:
        return " E'" + value.replace("\\", "\\\\") + "'"
    return "'" + value + "'"


def parse_postgres_cdc(update_method: Any) -> Optional[PostgresCDC]:
    """Return the replication settings carried by ``update_method``, or None."""
    if not isinstance(update_method, dict) or "replication_slot" not in update_method:
        logger.info("Standard Replication is selected")
        return None
    logger.info("Found CDC Configuration")
    wait = int(update_method.get("intial_wait_time") or 0)
    return PostgresCDC(
        replication_slot=str(update_method.get("replication_slot") or ""),
        initial_wait_time=wait or DEFAULT_INITIAL_WAIT_TIME,
    )