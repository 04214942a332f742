"""
db/exists.py
------------
Queries determining whether documents exist.
"""

from typing import Any

from pgdocs import query
from pgdocs.configuration import Configuration, get_configuration
from pgdocs.db import custom

_EXISTS = custom.column("it", bool)


def by_id(table: str, doc_id: str, *, conn=None, config: Configuration | None = None) -> bool:
    """Determine if a document exists for the given ID."""
    cfg = get_configuration(config)
    return custom.scalar(
        query.exists_by_id(table, cfg.document_key), query.id_param(doc_id), _EXISTS, conn=conn, config=cfg
    )


def by_contains(table: str, criteria: Any, *, conn=None, config: Configuration | None = None) -> bool:
    """Determine if documents exist matching a JSON containment query (``@>``)."""
    cfg = get_configuration(config)
    return custom.scalar(
        query.exists_by_contains(table),
        query.criteria_param(criteria, cfg.serializer),
        _EXISTS,
        conn=conn,
        config=cfg,
    )


def by_json_path(table: str, json_path: str, *, conn=None, config: Configuration | None = None) -> bool:
    """Determine if documents exist matching a JSON Path match query (``@?``)."""
    cfg = get_configuration(config)
    return custom.scalar(
        query.exists_by_json_path(table), query.path_param(json_path), _EXISTS, conn=conn, config=cfg
    )
