"""
db/definition.py
----------------
Creates document tables and their indexes if they do not already exist.
Safe to call multiple times (every statement uses IF NOT EXISTS).
"""

import psycopg2

from pgdocs import query
from pgdocs.configuration import Configuration, get_configuration
from pgdocs.db import custom
from pgdocs.errors import DatabaseConnectionError
from pgdocs.models.document_index import DocumentIndex
from pgdocs.utils.logger import get_logger

logger = get_logger(__name__)


def _run_ddl(statements: list[str], target: str, conn, config: Configuration) -> None:
    try:
        with custom.connection(conn, config) as active:
            for statement in statements:
                custom.non_query(statement, conn=active, config=config)
    except psycopg2.Error as e:
        raise DatabaseConnectionError(f"Unable to create {target}: {e}") from e


def ensure_table(name: str, *, conn=None, config: Configuration | None = None) -> None:
    """
    Create a document table.
    When identity is embedded in the document, the unique key index is created too.
    """
    cfg = get_configuration(config)
    key = cfg.document_key
    statements = [query.create_table(name, key)]
    if key.is_embedded:
        statements.append(query.create_key(name, key))
    _run_ddl(statements, f"table {name}", conn, cfg)
    logger.info(f"Ensured document table {name}")


def ensure_key(name: str, *, conn=None, config: Configuration | None = None) -> None:
    """Create the unique index on the configured identity field inside the document."""
    cfg = get_configuration(config)
    _run_ddl([query.create_key(name, cfg.document_key)], f"key index on {name}", conn, cfg)
    logger.info(f"Ensured key index on {name}")


def ensure_index(
    name: str,
    index: DocumentIndex | str,
    *,
    conn=None,
    config: Configuration | None = None,
) -> None:
    """
    Create a GIN index on documents in the specified table.

    Raises:
        InvalidIndexVariant: If ``index`` is not a known DocumentIndex.
    """
    cfg = get_configuration(config)
    variant = DocumentIndex.from_value(index)
    _run_ddl([query.create_index(name, variant)], f"{variant.value} index on {name}", conn, cfg)
    logger.info(f"Ensured {variant.value} index on {name}")
