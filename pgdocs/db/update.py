"""
db/update.py
------------
Full and partial document updates.

Matching no documents is not an error; nothing is reported back about how
many documents changed. Partial updates merge top-level keys only, so a
nested object in the patch replaces the stored one wholesale.
"""

from typing import Any, Callable

from pgdocs import query
from pgdocs.configuration import Configuration, get_configuration
from pgdocs.db import custom
from pgdocs.utils.logger import get_logger

logger = get_logger(__name__)


def full(table: str, doc_id: str, doc: Any, *, conn=None, config: Configuration | None = None) -> None:
    """Replace the document with the given ID."""
    cfg = get_configuration(config)
    custom.non_query(
        query.update_full(table, cfg.document_key),
        query.doc_parameters(doc_id, doc, cfg.serializer),
        conn=conn,
        config=cfg,
    )
    logger.debug(f"Updated document {doc_id} in {table}")


def full_func(
    table: str,
    id_func: Callable[[Any], str],
    doc: Any,
    *,
    conn=None,
    config: Configuration | None = None,
) -> None:
    """Replace a document, obtaining its ID from ``id_func(doc)``."""
    full(table, id_func(doc), doc, conn=conn, config=config)


def partial_by_id(
    table: str,
    doc_id: str,
    partial: Any,
    *,
    conn=None,
    config: Configuration | None = None,
) -> None:
    """Merge ``partial`` into the document with the given ID."""
    cfg = get_configuration(config)
    custom.non_query(
        query.update_partial_by_id(table, cfg.document_key),
        query.doc_parameters(doc_id, partial, cfg.serializer),
        conn=conn,
        config=cfg,
    )


def partial_by_contains(
    table: str,
    criteria: Any,
    partial: Any,
    *,
    conn=None,
    config: Configuration | None = None,
) -> None:
    """Merge ``partial`` into every document matching a JSON containment query (``@>``)."""
    cfg = get_configuration(config)
    custom.non_query(
        query.update_partial_by_contains(table),
        query.data_param(partial, cfg.serializer) + query.criteria_param(criteria, cfg.serializer),
        conn=conn,
        config=cfg,
    )


def partial_by_json_path(
    table: str,
    json_path: str,
    partial: Any,
    *,
    conn=None,
    config: Configuration | None = None,
) -> None:
    """Merge ``partial`` into every document matching a JSON Path match query (``@?``)."""
    cfg = get_configuration(config)
    custom.non_query(
        query.update_partial_by_json_path(table),
        query.data_param(partial, cfg.serializer) + query.path_param(json_path),
        conn=conn,
        config=cfg,
    )
