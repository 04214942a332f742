"""
db/count.py
-----------
Queries counting documents.
"""

from typing import Any

from pgdocs import query
from pgdocs.configuration import Configuration, get_configuration
from pgdocs.db import custom

_COUNT = custom.column("it", int)


def all_(table: str, *, conn=None, config: Configuration | None = None) -> int:
    """Count all documents in a table."""
    cfg = get_configuration(config)
    return custom.scalar(query.count_all(table, cfg.document_key), [], _COUNT, conn=conn, config=cfg)


def by_contains(table: str, criteria: Any, *, conn=None, config: Configuration | None = None) -> int:
    """Count documents matching a JSON containment query (``@>``)."""
    cfg = get_configuration(config)
    return custom.scalar(
        query.count_by_contains(table, cfg.document_key),
        query.criteria_param(criteria, cfg.serializer),
        _COUNT,
        conn=conn,
        config=cfg,
    )


def by_json_path(table: str, json_path: str, *, conn=None, config: Configuration | None = None) -> int:
    """Count documents matching a JSON Path match query (``@?``)."""
    cfg = get_configuration(config)
    return custom.scalar(
        query.count_by_json_path(table, cfg.document_key),
        query.path_param(json_path),
        _COUNT,
        conn=conn,
        config=cfg,
    )
