"""pgdocs - use PostgreSQL JSONB tables as a document database."""

from importlib.metadata import PackageNotFoundError, version

from pgdocs.configuration import (
    Configuration,
    connection_source,
    get_configuration,
    id_field,
    key_strategy,
    use_connection_source,
    use_id_field,
    use_key_strategy,
    use_serializer,
)
from pgdocs.db import count, custom, definition, delete, exists, find, update
from pgdocs.db.connection import ConnectionSource
from pgdocs.db.document import insert, insert_func, save, save_func
from pgdocs.errors import (
    ConfigurationError,
    DatabaseConnectionError,
    DeserializationError,
    DocumentError,
    DuplicateKeyError,
    InvalidIndexVariant,
)
from pgdocs.models import DocumentIndex, DocumentKey, KeyStrategy
from pgdocs.repositories import DocumentRepository
from pgdocs.serializer import DocumentSerializer, JsonSerializer, TypeConverter

try:
    __version__ = version("pgdocs")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "__version__",
    "Configuration",
    "ConfigurationError",
    "ConnectionSource",
    "DatabaseConnectionError",
    "DeserializationError",
    "DocumentError",
    "DocumentIndex",
    "DocumentKey",
    "DocumentRepository",
    "DocumentSerializer",
    "DuplicateKeyError",
    "InvalidIndexVariant",
    "JsonSerializer",
    "KeyStrategy",
    "TypeConverter",
    "connection_source",
    "count",
    "custom",
    "definition",
    "delete",
    "exists",
    "find",
    "get_configuration",
    "id_field",
    "insert",
    "insert_func",
    "key_strategy",
    "save",
    "save_func",
    "update",
    "use_connection_source",
    "use_id_field",
    "use_key_strategy",
    "use_serializer",
]
