"""Connection settings for a MySQL source."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import quote_plus

from olake.base import DEFAULT_RETRY_COUNT, DEFAULT_THREAD_COUNT

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3306
DEFAULT_DATABASE = "mysql"
DEFAULT_INITIAL_WAIT_TIME = 10
INITIAL_WAIT_TIME_KEY = "intial_wait_time"


@dataclass
class MySQLCDC:
    """Binlog reading settings."""

    initial_wait_time: int = 0


@dataclass
class MySQLConfig:
    """User supplied settings for reading from a MySQL server."""

    host: str = ""
    username: str = ""
    password: str = ""
    database: str = ""
    port: int = 0
    tls_skip_verify: bool = False
    update_method: Any = None
    default_mode: str = ""
    max_threads: int = 0
    retry_count: int = 0

    def uri(self) -> str:
        """Build the driver DSN, defaulting the port and host."""
        if self.port == 0:
            self.port = DEFAULT_PORT
        host = self.host or "localhost"
        return (
            f"{quote_plus(self.username)}:{quote_plus(self.password)}"
            f"@tcp({host}:{self.port})/{quote_plus(self.database)}"
        )

    def validate(self) -> None:
        """Check required fields and fill defaults; raise ValueError on bad input."""
        if not self.host:
            raise ValueError("empty host name")
        if "http" in self.host:
            raise ValueError(f"host should not contain http or https: {self.host}")
        if self.port <= 0 or self.port > 65535:
            raise ValueError("invalid port number: must be between 1 and 65535")
        if not self.username:
            raise ValueError("username is required")
        if not self.password:
            raise ValueError("password is required")

        if not self.database:
            self.database = DEFAULT_DATABASE
        if self.max_threads <= 0:
            self.max_threads = DEFAULT_THREAD_COUNT
        if self.retry_count <= 0:
            self.retry_count = DEFAULT_RETRY_COUNT


def parse_mysql_cdc(update_method: Any) -> Optional[MySQLCDC]:
    """Return the CDC settings carried by ``update_method``, or None if absent."""
    if not isinstance(update_method, dict) or INITIAL_WAIT_TIME_KEY not in update_method:
        return None
    logger.info("Found CDC Configuration")
    wait = int(update_method.get(INITIAL_WAIT_TIME_KEY) or 0)
    return MySQLCDC(initial_wait_time=wait or DEFAULT_INITIAL_WAIT_TIME)