"""
db/custom.py
------------
Statement execution shared by every document operation, also usable
directly for queries the builder does not cover.

Each function runs one statement either on a connection borrowed from the
configured source (committed, or rolled back on error, then released) or
on a caller-supplied connection whose transaction the caller owns.
"""

from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional, TypeVar

import psycopg2
from psycopg2 import extensions, extras

from pgdocs.configuration import Configuration, get_configuration
from pgdocs.errors import DatabaseConnectionError
from pgdocs.query import Parameters
from pgdocs.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")
RowMapper = Callable[[Any], T]


def _keep_text(value: str) -> str:
    return value


def _prepare(cur) -> None:
    # json and jsonb values reach the serializer as text, not pre-decoded by psycopg2
    if isinstance(cur, extensions.cursor):
        extras.register_default_json(cur, loads=_keep_text)
        extras.register_default_jsonb(cur, loads=_keep_text)


def _bind(parameters: Optional[Parameters]) -> Optional[dict]:
    # No mapping at all keeps psycopg2 from treating a literal % as a placeholder
    return dict(parameters) if parameters else None


@contextmanager
def connection(conn=None, config: Configuration | None = None) -> Iterator:
    """
    Yield ``conn`` unchanged, or borrow one from the configured source.

    A borrowed connection is committed when the block succeeds, rolled back
    when it raises, and released either way; use it to run several
    operations in one transaction.

    Raises:
        ConfigurationError: If no connection is given and no source is configured.
    """
    if conn is not None:
        yield conn
        return
    source = get_configuration(config).connection_source
    with source.connection() as borrowed:
        yield borrowed


def _run(sql: str, parameters: Optional[Parameters], fetch: Callable, conn, config):
    try:
        with connection(conn, config) as active:
            with active.cursor(cursor_factory=extras.DictCursor) as cur:
                _prepare(cur)
                cur.execute(sql, _bind(parameters))
                return fetch(cur)
    except (psycopg2.OperationalError, psycopg2.InterfaceError) as e:
        logger.error(f"Database unavailable while running [{sql}]: {e}")
        raise DatabaseConnectionError(str(e)) from e
    except psycopg2.Error as e:
        logger.error(f"Query failed [{sql}]: {e}")
        raise


def list_(
    sql: str,
    parameters: Optional[Parameters],
    mapper: RowMapper,
    *,
    conn=None,
    config: Configuration | None = None,
) -> list:
    """
    Execute a query and map every returned row.

    Returns:
        A possibly-empty list, in the order the database returned the rows.
    """
    return _run(sql, parameters, lambda cur: [mapper(row) for row in cur.fetchall()], conn, config)


def single(
    sql: str,
    parameters: Optional[Parameters],
    mapper: RowMapper,
    *,
    conn=None,
    config: Configuration | None = None,
) -> Optional[Any]:
    """
    Execute a query and map its first row.

    Returns:
        The mapped row, or None when the query returned nothing.
    """
    def fetch(cur):
        row = cur.fetchone()
        return mapper(row) if row is not None else None

    return _run(sql, parameters, fetch, conn, config)


def scalar(
    sql: str,
    parameters: Optional[Parameters],
    mapper: RowMapper,
    *,
    conn=None,
    config: Configuration | None = None,
) -> Any:
    """Execute a query returning exactly one row and map it to a single value."""
    return _run(sql, parameters, lambda cur: mapper(cur.fetchone()), conn, config)


def non_query(
    sql: str,
    parameters: Optional[Parameters] = None,
    *,
    conn=None,
    config: Configuration | None = None,
) -> int:
    """
    Execute a statement that returns no rows.

    Returns:
        The number of rows the driver reports as affected (-1 for DDL).
    """
    return _run(sql, parameters, lambda cur: cur.rowcount, conn, config)


# ── Row mappers ───────────────────────────────────────────

def from_document(field: str, cls: Any = None, config: Configuration | None = None) -> RowMapper:
    """Build a mapper deserializing the JSON in column ``field`` into ``cls``."""
    def mapper(row):
        return get_configuration(config).serializer.deserialize(row[field], cls)

    return mapper


def from_data(cls: Any = None, config: Configuration | None = None) -> RowMapper:
    """Build a mapper deserializing the ``data`` column into ``cls``."""
    return from_document("data", cls, config)


def column(name: str, cast: Callable[[Any], T] = lambda value: value) -> RowMapper:
    """Build a mapper reading one column, optionally cast (e.g. ``column("it", int)``)."""
    def mapper(row):
        return cast(row[name])

    return mapper
