"""Connection settings for a MongoDB source."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

DEFAULT_MAX_THREADS = 10
DEFAULT_BACKOFF_COUNT = 3
DEFAULT_READ_PREFERENCE = "secondaryPreferred"


@dataclass
class MongoConfig:
    """User supplied settings for reading from a MongoDB deployment."""

    hosts: list = field(default_factory=list)
    username: str = ""
    password: str = ""
    authdb: str = ""
    replica_set: str = ""
    read_preference: str = ""
    srv: bool = False
    server_ram: int = 0
    max_threads: int = 0
    database: str = ""
    default_mode: str = ""
    retry_count: int = 0
    partition_strategy: str = ""

    def uri(self) -> str:
        """Build the connection URI, filling in defaults that are unset."""
        if self.max_threads == 0:
            logger.info("setting max threads to default[%d]", DEFAULT_MAX_THREADS)
            self.max_threads = DEFAULT_MAX_THREADS

        prefix = "mongodb+srv" if self.srv else "mongodb"
        options = f"?authSource={self.authdb}"

        if self.replica_set:
            if not self.read_preference:
                self.read_preference = DEFAULT_READ_PREFERENCE
            options += f"&replicaSet={self.replica_set}&readPreference={self.read_preference}"

        auth = ""
        if self.username:
            auth = f"{self.username}:{self.password}@" if self.password else f"{self.username}@"

        return f"{prefix}://{auth}{','.join(self.hosts)}/{options}"

    def normalize_retry_count(self) -> int:
        """Turn the configured retry count into a total number of attempts.

        A negative count falls back to the default; otherwise one is added
        for the first run.
        """
        if self.retry_count < 0:
            logger.info("setting backoff retry count to default value %d", DEFAULT_BACKOFF_COUNT)
            self.retry_count = DEFAULT_BACKOFF_COUNT
        else:
            self.retry_count += 1
        return self.retry_count