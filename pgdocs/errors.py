"""
pgdocs/errors.py
----------------
Exceptions raised by the document layer.
Driver exceptions are re-tagged into these categories (never swallowed);
the original psycopg2 exception stays available as ``__cause__``.
"""


class DocumentError(Exception):
    """Base class for every error raised by pgdocs."""


class ConfigurationError(DocumentError):
    """A required piece of configuration (e.g. the connection source) is missing."""


class DatabaseConnectionError(DocumentError):
    """The database could not be reached or refused the operation."""


class DuplicateKeyError(DocumentError):
    """An insert conflicted with a document that already has the same identity."""

    def __init__(self, table: str, doc_id: str | None = None) -> None:
        self.table = table
        self.doc_id = doc_id
        if doc_id is None:
            super().__init__(f"Duplicate document key in {table}")
        else:
            super().__init__(f"Document with key '{doc_id}' already exists in {table}")


class DeserializationError(DocumentError):
    """Stored JSON does not fit the requested Python type."""


class InvalidIndexVariant(DocumentError, ValueError):
    """A value outside the known document index variants was supplied."""
