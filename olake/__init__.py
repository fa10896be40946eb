"""Connection configs, type mapping, chunk planning and change-capture helpers for MongoDB, MySQL and PostgreSQL replication."""

__version__ = "0.1.0"