"""
db/find.py
----------
Queries returning documents. No ORDER BY is applied: when several
documents match, their order is whatever the database returns.
"""

from typing import Any, Optional

from pgdocs import query
from pgdocs.configuration import Configuration, get_configuration
from pgdocs.db import custom


def all_(table: str, cls: Any = None, *, conn=None, config: Configuration | None = None) -> list:
    """Retrieve all documents in the given table."""
    cfg = get_configuration(config)
    return custom.list_(query.select_from_table(table), [], custom.from_data(cls, cfg), conn=conn, config=cfg)


def by_id(
    table: str,
    doc_id: str,
    cls: Any = None,
    *,
    conn=None,
    config: Configuration | None = None,
) -> Optional[Any]:
    """
    Retrieve a document by its ID.

    Returns:
        The document, or None if no document has that ID.
    """
    cfg = get_configuration(config)
    return custom.single(
        query.find_by_id(table, cfg.document_key),
        query.id_param(doc_id),
        custom.from_data(cls, cfg),
        conn=conn,
        config=cfg,
    )


def by_contains(
    table: str,
    criteria: Any,
    cls: Any = None,
    *,
    conn=None,
    config: Configuration | None = None,
) -> list:
    """Retrieve documents matching a JSON containment query (``@>``)."""
    cfg = get_configuration(config)
    return custom.list_(
        query.find_by_contains(table),
        query.criteria_param(criteria, cfg.serializer),
        custom.from_data(cls, cfg),
        conn=conn,
        config=cfg,
    )


def by_json_path(
    table: str,
    json_path: str,
    cls: Any = None,
    *,
    conn=None,
    config: Configuration | None = None,
) -> list:
    """Retrieve documents matching a JSON Path match query (``@?``)."""
    cfg = get_configuration(config)
    return custom.list_(
        query.find_by_json_path(table),
        query.path_param(json_path),
        custom.from_data(cls, cfg),
        conn=conn,
        config=cfg,
    )


def first_by_contains(
    table: str,
    criteria: Any,
    cls: Any = None,
    *,
    conn=None,
    config: Configuration | None = None,
) -> Optional[Any]:
    """Retrieve one document matching a JSON containment query, or None if none match."""
    cfg = get_configuration(config)
    return custom.single(
        f"{query.find_by_contains(table)} LIMIT 1",
        query.criteria_param(criteria, cfg.serializer),
        custom.from_data(cls, cfg),
        conn=conn,
        config=cfg,
    )


def first_by_json_path(
    table: str,
    json_path: str,
    cls: Any = None,
    *,
    conn=None,
    config: Configuration | None = None,
) -> Optional[Any]:
    """Retrieve one document matching a JSON Path match query, or None if none match."""
    cfg = get_configuration(config)
    return custom.single(
        f"{query.find_by_json_path(table)} LIMIT 1",
        query.path_param(json_path),
        custom.from_data(cls, cfg),
        conn=conn,
        config=cfg,
    )
