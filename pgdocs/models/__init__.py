"""
models/ - Descriptors
=====================
Small value types shared by the query builder and the execution layer.
"""

from pgdocs.models.document_index import DocumentIndex
from pgdocs.models.document_key import DEFAULT_ID_FIELD, DocumentKey, KeyStrategy

__all__ = ["DEFAULT_ID_FIELD", "DocumentIndex", "DocumentKey", "KeyStrategy"]
