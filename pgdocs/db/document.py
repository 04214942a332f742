"""
db/document.py
--------------
Writes of whole documents: insert and save ("upsert").
"""

from typing import Any, Callable

from psycopg2 import errors

from pgdocs import query
from pgdocs.configuration import Configuration, get_configuration
from pgdocs.db import custom
from pgdocs.errors import DuplicateKeyError
from pgdocs.utils.logger import get_logger

logger = get_logger(__name__)


def insert(table: str, doc_id: str, doc: Any, *, conn=None, config: Configuration | None = None) -> None:
    """
    Insert a new document.

    With an embedded key the identity is read from the document itself;
    ``doc_id`` is still bound so both strategies share one call shape.

    Raises:
        DuplicateKeyError: If a document with the same identity already exists.
    """
    cfg = get_configuration(config)
    try:
        custom.non_query(
            query.insert(table, cfg.document_key),
            query.doc_parameters(doc_id, doc, cfg.serializer),
            conn=conn,
            config=cfg,
        )
    except errors.UniqueViolation as e:
        raise DuplicateKeyError(table, doc_id) from e
    logger.debug(f"Inserted document {doc_id} into {table}")


def insert_func(
    table: str,
    id_func: Callable[[Any], str],
    doc: Any,
    *,
    conn=None,
    config: Configuration | None = None,
) -> None:
    """Insert a new document, obtaining its ID from ``id_func(doc)``."""
    insert(table, id_func(doc), doc, conn=conn, config=config)


def save(table: str, doc_id: str, doc: Any, *, conn=None, config: Configuration | None = None) -> None:
    """Save a document, inserting it if it does not exist and replacing it if it does."""
    cfg = get_configuration(config)
    custom.non_query(
        query.save(table, cfg.document_key),
        query.doc_parameters(doc_id, doc, cfg.serializer),
        conn=conn,
        config=cfg,
    )
    logger.debug(f"Saved document {doc_id} in {table}")


def save_func(
    table: str,
    id_func: Callable[[Any], str],
    doc: Any,
    *,
    conn=None,
    config: Configuration | None = None,
) -> None:
    """Save a document, obtaining its ID from ``id_func(doc)``."""
    save(table, id_func(doc), doc, conn=conn, config=config)
