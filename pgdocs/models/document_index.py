"""
models/document_index.py
------------------------
The kinds of GIN index that can be created over a document table.
"""

from enum import Enum

from pgdocs.errors import InvalidIndexVariant


class DocumentIndex(Enum):
    """
    The type of index to generate for the document.

    Attributes:
        FULL: A GIN index with standard operations (all JSONB operators supported).
        OPTIMIZED: A GIN index with ``jsonb_path_ops`` (``@>``, ``@?`` and ``@@`` only).
    """
    FULL = "full"
    OPTIMIZED = "optimized"

    @property
    def operator_class(self) -> str:
        """The suffix appended after ``data`` in the index definition."""
        return " jsonb_path_ops" if self is DocumentIndex.OPTIMIZED else ""

    @classmethod
    def from_value(cls, value) -> "DocumentIndex":
        """
        Convert a loose representation (member, name or value) to a DocumentIndex.

        Raises:
            InvalidIndexVariant: If ``value`` names neither variant.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if lowered == member.value:
                    return member
        raise InvalidIndexVariant(f"Index type {value!r} invalid")
