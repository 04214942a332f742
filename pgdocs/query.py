"""
query.py
--------
SQL construction for document tables.

Every function here is pure: it returns SQL text (or parameter lists) and
never touches a connection. Placeholders use psycopg2's named style,
``%(name)s``; parameter lists are ``(name, value)`` pairs in the order the
placeholders appear.

Table and index names are interpolated as given (they are trusted to be
valid SQL identifiers); document values are always bound as parameters.
"""

from typing import Any

from psycopg2.extras import Json

from pgdocs.models.document_index import DocumentIndex
from pgdocs.models.document_key import DocumentKey, KeyStrategy
from pgdocs.serializer import DocumentSerializer

DEFAULT_KEY = DocumentKey()

ID_PARAM = "id"
DATA_PARAM = "data"
CRITERIA_PARAM = "criteria"
PATH_PARAM = "path"

Parameters = list[tuple[str, Any]]


class Jsonb(Json):
    """Already-serialized JSON text, bound as a ``jsonb`` value."""

    @property
    def text(self) -> str:
        return self.adapted

    def dumps(self, obj):
        return obj

    def getquoted(self) -> bytes:
        return super().getquoted() + b"::jsonb"

    def __eq__(self, other) -> bool:
        return isinstance(other, Jsonb) and other.adapted == self.adapted

    def __hash__(self) -> int:
        return hash(self.adapted)

    def __repr__(self) -> str:
        return f"Jsonb({self.adapted!r})"


def placeholder(name: str) -> str:
    """Render a named psycopg2 placeholder."""
    return f"%({name})s"


def _unqualified(name: str) -> str:
    return name.split(".")[-1]


# ── Definition ────────────────────────────────────────────

def create_table(name: str, key: DocumentKey = DEFAULT_KEY) -> str:
    """SQL statement to create a document table."""
    if key.strategy is KeyStrategy.COLUMN:
        return f"CREATE TABLE IF NOT EXISTS {name} (id TEXT NOT NULL PRIMARY KEY, data JSONB NOT NULL)"
    return f"CREATE TABLE IF NOT EXISTS {name} (data JSONB NOT NULL)"


def create_key(name: str, key: DocumentKey = DEFAULT_KEY) -> str:
    """SQL statement to create a unique index on the identity field inside the document."""
    return (
        f"CREATE UNIQUE INDEX IF NOT EXISTS idx_{_unqualified(name)}_key ON {name} "
        f"((data ->> '{key.field}'))"
    )


def create_index(name: str, index: DocumentIndex) -> str:
    """SQL statement to create a GIN index on documents in the specified table."""
    return (
        f"CREATE INDEX IF NOT EXISTS idx_{_unqualified(name)} ON {name} "
        f"USING GIN (data{index.operator_class})"
    )


# ── Fragments ─────────────────────────────────────────────

def select_from_table(table: str) -> str:
    """SELECT clause retrieving the document data from the given table."""
    return f"SELECT data FROM {table}"


def where_by_id(param: str = ID_PARAM, key: DocumentKey = DEFAULT_KEY) -> str:
    """WHERE fragment matching a document by its identity."""
    return f"{key.expression} = {placeholder(param)}"


def where_data_contains(param: str = CRITERIA_PARAM) -> str:
    """WHERE fragment implementing a ``@>`` (JSON contains) condition."""
    return f"data @> {placeholder(param)}"


def where_json_path_matches(param: str = PATH_PARAM) -> str:
    """WHERE fragment implementing a ``@?`` (JSON Path match) condition."""
    return f"data @? {placeholder(param)}::jsonpath"


# ── Parameters ────────────────────────────────────────────

def jsonb_doc_param(value: Any, serializer: DocumentSerializer) -> Jsonb:
    """Serialize a value into a JSONB parameter."""
    return Jsonb(serializer.serialize(value))


def doc_parameters(doc_id: str, doc: Any, serializer: DocumentSerializer) -> Parameters:
    """ID and data parameters for a document write."""
    return [(ID_PARAM, str(doc_id)), (DATA_PARAM, jsonb_doc_param(doc, serializer))]


def id_param(doc_id: str) -> Parameters:
    return [(ID_PARAM, str(doc_id))]


def criteria_param(criteria: Any, serializer: DocumentSerializer) -> Parameters:
    return [(CRITERIA_PARAM, jsonb_doc_param(criteria, serializer))]


def path_param(json_path: str) -> Parameters:
    return [(PATH_PARAM, json_path)]


def data_param(doc: Any, serializer: DocumentSerializer) -> Parameters:
    return [(DATA_PARAM, jsonb_doc_param(doc, serializer))]


# ── Writes ────────────────────────────────────────────────

def insert(table: str, key: DocumentKey = DEFAULT_KEY) -> str:
    """Query to insert a document."""
    data = placeholder(DATA_PARAM)
    if key.strategy is KeyStrategy.COLUMN:
        return f"INSERT INTO {table} (id, data) VALUES ({placeholder(ID_PARAM)}, {data})"
    return f"INSERT INTO {table} VALUES ({data})"


def save(table: str, key: DocumentKey = DEFAULT_KEY) -> str:
    """Query to insert a document, or replace it when its identity already exists ("upsert")."""
    return f"{insert(table, key)} ON CONFLICT ({key.conflict_target}) DO UPDATE SET data = EXCLUDED.data"


def count_all(table: str, key: DocumentKey = DEFAULT_KEY) -> str:
    """Query to count all documents in a table."""
    counted = "id" if key.strategy is KeyStrategy.COLUMN else "*"
    return f"SELECT COUNT({counted}) AS it FROM {table}"


def count_by_contains(table: str, key: DocumentKey = DEFAULT_KEY) -> str:
    """Query to count documents matching a JSON containment query (``@>``)."""
    return f"{count_all(table, key)} WHERE {where_data_contains()}"


def count_by_json_path(table: str, key: DocumentKey = DEFAULT_KEY) -> str:
    """Query to count documents matching a JSON Path match (``@?``)."""
    return f"{count_all(table, key)} WHERE {where_json_path_matches()}"


# ── Existence ─────────────────────────────────────────────

def _exists(table: str, where: str) -> str:
    return f"SELECT EXISTS (SELECT 1 FROM {table} WHERE {where}) AS it"


def exists_by_id(table: str, key: DocumentKey = DEFAULT_KEY) -> str:
    return _exists(table, where_by_id(ID_PARAM, key))


def exists_by_contains(table: str) -> str:
    return _exists(table, where_data_contains())


def exists_by_json_path(table: str) -> str:
    return _exists(table, where_json_path_matches())


# ── Retrieval ─────────────────────────────────────────────

def find_by_id(table: str, key: DocumentKey = DEFAULT_KEY) -> str:
    return f"{select_from_table(table)} WHERE {where_by_id(ID_PARAM, key)}"


def find_by_contains(table: str) -> str:
    return f"{select_from_table(table)} WHERE {where_data_contains()}"


def find_by_json_path(table: str) -> str:
    return f"{select_from_table(table)} WHERE {where_json_path_matches()}"


# ── Updates ───────────────────────────────────────────────
# Partial updates use ``||``, which merges top-level keys only.

def update_full(table: str, key: DocumentKey = DEFAULT_KEY) -> str:
    """Query to replace a whole document."""
    return f"UPDATE {table} SET data = {placeholder(DATA_PARAM)} WHERE {where_by_id(ID_PARAM, key)}"


def _update_partial(table: str, where: str) -> str:
    return f"UPDATE {table} SET data = data || {placeholder(DATA_PARAM)} WHERE {where}"


def update_partial_by_id(table: str, key: DocumentKey = DEFAULT_KEY) -> str:
    return _update_partial(table, where_by_id(ID_PARAM, key))


def update_partial_by_contains(table: str) -> str:
    return _update_partial(table, where_data_contains())


def update_partial_by_json_path(table: str) -> str:
    return _update_partial(table, where_json_path_matches())


# ── Deletes ───────────────────────────────────────────────

def delete_by_id(table: str, key: DocumentKey = DEFAULT_KEY) -> str:
    return f"DELETE FROM {table} WHERE {where_by_id(ID_PARAM, key)}"


def delete_by_contains(table: str) -> str:
    return f"DELETE FROM {table} WHERE {where_data_contains()}"


def delete_by_json_path(table: str) -> str:
    return f"DELETE FROM {table} WHERE {where_json_path_matches()}"
