"""
db/delete.py
------------
Document removal. Deleting nothing is not an error.
"""

from typing import Any

from pgdocs import query
from pgdocs.configuration import Configuration, get_configuration
from pgdocs.db import custom
from pgdocs.utils.logger import get_logger

logger = get_logger(__name__)


def by_id(table: str, doc_id: str, *, conn=None, config: Configuration | None = None) -> None:
    """Delete a document by its ID."""
    cfg = get_configuration(config)
    custom.non_query(query.delete_by_id(table, cfg.document_key), query.id_param(doc_id), conn=conn, config=cfg)
    logger.debug(f"Deleted document {doc_id} from {table}")


def by_contains(table: str, criteria: Any, *, conn=None, config: Configuration | None = None) -> None:
    """Delete documents matching a JSON containment query (``@>``)."""
    cfg = get_configuration(config)
    custom.non_query(
        query.delete_by_contains(table), query.criteria_param(criteria, cfg.serializer), conn=conn, config=cfg
    )


def by_json_path(table: str, json_path: str, *, conn=None, config: Configuration | None = None) -> None:
    """Delete documents matching a JSON Path match query (``@?``)."""
    cfg = get_configuration(config)
    custom.non_query(query.delete_by_json_path(table), query.path_param(json_path), conn=conn, config=cfg)
