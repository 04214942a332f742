"""
db/connection.py
----------------
Connection sources for the document layer.
A ConnectionSource owns a psycopg2 ThreadedConnectionPool; the execution
layer borrows a connection per operation and hands it back afterwards.
"""

from contextlib import contextmanager
from typing import Iterator

import psycopg2
from psycopg2 import pool

from pgdocs import config
from pgdocs.errors import DatabaseConnectionError
from pgdocs.utils.logger import get_logger

logger = get_logger(__name__)


class ConnectionSource:
    """
    A pool of PostgreSQL connections.

    Once closed, every further attempt to borrow a connection raises
    DatabaseConnectionError.
    """

    def __init__(self, dsn: str, min_conn: int = 1, max_conn: int = 5) -> None:
        """
        Open the pool.

        Args:
            dsn: libpq connection string or URL.
            min_conn: Minimum number of connections to keep open.
            max_conn: Maximum number of connections allowed.

        Raises:
            DatabaseConnectionError: If the database is unreachable.
        """
        try:
            self._pool = pool.ThreadedConnectionPool(min_conn, max_conn, dsn)
        except psycopg2.OperationalError as e:
            logger.error(f"Failed to initialize connection pool: {e}")
            raise DatabaseConnectionError(str(e)) from e
        self._closed = False
        logger.info("Connection pool initialized successfully.")

    @classmethod
    def from_env(cls) -> "ConnectionSource":
        """Build a source from the PGDOCS_* environment settings."""
        return cls(config.DATABASE_URL, config.POOL_MIN_CONN, config.POOL_MAX_CONN)

    @property
    def closed(self) -> bool:
        return self._closed

    def get_connection(self):
        """
        Get a connection from the pool.

        Returns:
            A psycopg2 connection object.

        Raises:
            DatabaseConnectionError: If the source is closed or the pool is exhausted.
        """
        if self._closed:
            raise DatabaseConnectionError("Connection source has been closed.")
        try:
            return self._pool.getconn()
        except (pool.PoolError, psycopg2.OperationalError) as e:
            raise DatabaseConnectionError(str(e)) from e

    def release_connection(self, conn) -> None:
        """
        Return a connection back to the pool.

        Args:
            conn: The psycopg2 connection to release.
        """
        if not self._closed:
            self._pool.putconn(conn)

    @contextmanager
    def connection(self) -> Iterator:
        """
        Borrow a connection for one unit of work.

        Commits when the block exits normally, rolls back when it raises,
        and always returns the connection to the pool.
        """
        conn = self.get_connection()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            self.release_connection(conn)

    def close(self) -> None:
        """Close all connections in the pool."""
        if self._closed:
            return
        self._pool.closeall()
        self._closed = True
        logger.info("Connection pool closed.")

    def __enter__(self) -> "ConnectionSource":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
