"""
repositories/document_repo.py
-----------------------------
Object-style access to one document table.
Every method forwards to the functional API in ``pgdocs.db``; documents
are identified through ``id_func`` so callers never pass IDs for writes.
"""

from typing import Any, Callable, Generic, Optional, TypeVar

from pgdocs.configuration import Configuration, get_configuration
from pgdocs.db import count, definition, delete, document, exists, find, update
from pgdocs.models.document_index import DocumentIndex

T = TypeVar("T")


class DocumentRepository(Generic[T]):
    """Repository for CRUD operations on a single document table."""

    def __init__(
        self,
        table: str,
        cls: Optional[type[T]] = None,
        id_func: Optional[Callable[[T], str]] = None,
        config: Configuration | None = None,
    ) -> None:
        """
        Args:
            table: Table name, optionally schema-qualified.
            cls: Type documents are deserialized into (None: plain JSON values).
            id_func: Extracts a document's ID; defaults to reading the configured ID field.
            config: Configuration to use instead of the process-wide default.
        """
        self.table = table
        self.cls = cls
        self._config = config
        self._id_func = id_func or self._configured_id

    @property
    def config(self) -> Configuration:
        return get_configuration(self._config)

    def _configured_id(self, doc: T) -> str:
        field = self.config.id_field
        if isinstance(doc, dict):
            return str(doc[field])
        return str(getattr(doc, field))

    def id_of(self, doc: T) -> str:
        """The ID of ``doc`` according to this repository's ``id_func``."""
        return self._id_func(doc)

    # ── DEFINITION ────────────────────────────────────────

    def ensure_table(self, conn=None) -> None:
        definition.ensure_table(self.table, conn=conn, config=self._config)

    def ensure_index(self, index: DocumentIndex | str = DocumentIndex.FULL, conn=None) -> None:
        definition.ensure_index(self.table, index, conn=conn, config=self._config)

    # ── CREATE ────────────────────────────────────────────

    def insert(self, doc: T, conn=None) -> T:
        """
        Insert a new document.

        Returns:
            The same document, for chaining.

        Raises:
            DuplicateKeyError: If a document with this ID already exists.
        """
        document.insert_func(self.table, self._id_func, doc, conn=conn, config=self._config)
        return doc

    def save(self, doc: T, conn=None) -> T:
        """Insert the document, or replace the stored one with the same ID."""
        document.save_func(self.table, self._id_func, doc, conn=conn, config=self._config)
        return doc

    # ── READ ──────────────────────────────────────────────

    def get_by_id(self, doc_id: str, conn=None) -> Optional[T]:
        """
        Fetch a single document by ID.

        Returns:
            The document, or None if not found.
        """
        return find.by_id(self.table, doc_id, self.cls, conn=conn, config=self._config)

    def list_all(self, conn=None) -> list[T]:
        return find.all_(self.table, self.cls, conn=conn, config=self._config)

    def find_by_contains(self, criteria: Any, conn=None) -> list[T]:
        return find.by_contains(self.table, criteria, self.cls, conn=conn, config=self._config)

    def find_by_json_path(self, json_path: str, conn=None) -> list[T]:
        return find.by_json_path(self.table, json_path, self.cls, conn=conn, config=self._config)

    def first_by_contains(self, criteria: Any, conn=None) -> Optional[T]:
        return find.first_by_contains(self.table, criteria, self.cls, conn=conn, config=self._config)

    def first_by_json_path(self, json_path: str, conn=None) -> Optional[T]:
        return find.first_by_json_path(self.table, json_path, self.cls, conn=conn, config=self._config)

    def count(self, conn=None) -> int:
        return count.all_(self.table, conn=conn, config=self._config)

    def count_by_contains(self, criteria: Any, conn=None) -> int:
        return count.by_contains(self.table, criteria, conn=conn, config=self._config)

    def count_by_json_path(self, json_path: str, conn=None) -> int:
        return count.by_json_path(self.table, json_path, conn=conn, config=self._config)

    def exists(self, doc_id: str, conn=None) -> bool:
        return exists.by_id(self.table, doc_id, conn=conn, config=self._config)

    def exists_by_contains(self, criteria: Any, conn=None) -> bool:
        return exists.by_contains(self.table, criteria, conn=conn, config=self._config)

    def exists_by_json_path(self, json_path: str, conn=None) -> bool:
        return exists.by_json_path(self.table, json_path, conn=conn, config=self._config)

    # ── UPDATE ────────────────────────────────────────────

    def update(self, doc: T, conn=None) -> None:
        """Replace the stored document that has the same ID (no-op if there is none)."""
        update.full_func(self.table, self._id_func, doc, conn=conn, config=self._config)

    def update_partial(self, doc_id: str, partial: Any, conn=None) -> None:
        update.partial_by_id(self.table, doc_id, partial, conn=conn, config=self._config)

    def update_partial_by_contains(self, criteria: Any, partial: Any, conn=None) -> None:
        update.partial_by_contains(self.table, criteria, partial, conn=conn, config=self._config)

    def update_partial_by_json_path(self, json_path: str, partial: Any, conn=None) -> None:
        update.partial_by_json_path(self.table, json_path, partial, conn=conn, config=self._config)

    # ── DELETE ────────────────────────────────────────────

    def delete(self, doc_id: str, conn=None) -> None:
        delete.by_id(self.table, doc_id, conn=conn, config=self._config)

    def delete_by_contains(self, criteria: Any, conn=None) -> None:
        delete.by_contains(self.table, criteria, conn=conn, config=self._config)

    def delete_by_json_path(self, json_path: str, conn=None) -> None:
        delete.by_json_path(self.table, json_path, conn=conn, config=self._config)
