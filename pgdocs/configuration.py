"""
configuration.py
----------------
Runtime settings consulted by every document operation: the connection
source, the serializer, and how document identity is stored.

A module-level default Configuration backs the ``use_*`` functions; tests
and multi-tenant hosts can build their own instances and pass them as
``config=`` to any operation.
"""

from pgdocs.errors import ConfigurationError
from pgdocs.models.document_key import DEFAULT_ID_FIELD, DocumentKey, KeyStrategy
from pgdocs.serializer import DocumentSerializer, JsonSerializer
from pgdocs.utils.logger import get_logger

logger = get_logger(__name__)


class Configuration:
    """Connection source, serializer and key settings for the document layer."""

    def __init__(
        self,
        source=None,
        serializer: DocumentSerializer | None = None,
        id_field: str = DEFAULT_ID_FIELD,
        key_strategy: KeyStrategy = KeyStrategy.EMBEDDED,
    ) -> None:
        self._source = source
        self._serializer = serializer or JsonSerializer()
        self._id_field = id_field
        self._key_strategy = key_strategy

    # ── Connection source ─────────────────────────────────

    def use_connection_source(self, source) -> None:
        """
        Register the connection source used for query execution.
        A previously registered source is closed once the new one is in place.
        """
        previous, self._source = self._source, source
        if previous is not None and previous is not source:
            previous.close()
            logger.info("Closed previous connection source.")

    @property
    def connection_source(self):
        if self._source is None:
            raise ConfigurationError(
                "No connection source configured; call use_connection_source() first."
            )
        return self._source

    # ── Serializer ────────────────────────────────────────

    def use_serializer(self, serializer: DocumentSerializer) -> None:
        self._serializer = serializer

    @property
    def serializer(self) -> DocumentSerializer:
        return self._serializer

    # ── Document identity ─────────────────────────────────

    def use_id_field(self, name: str) -> None:
        self._id_field = name

    @property
    def id_field(self) -> str:
        return self._id_field

    def use_key_strategy(self, strategy: KeyStrategy) -> None:
        self._key_strategy = strategy

    @property
    def key_strategy(self) -> KeyStrategy:
        return self._key_strategy

    @property
    def document_key(self) -> DocumentKey:
        return DocumentKey(self._key_strategy, self._id_field)


_default = Configuration()


def get_configuration(config: Configuration | None = None) -> Configuration:
    """Return ``config`` if given, otherwise the process-wide default."""
    return config if config is not None else _default


def use_connection_source(source) -> None:
    """Register a connection source (closes the current one if it exists)."""
    _default.use_connection_source(source)


def connection_source():
    """Retrieve the currently configured connection source."""
    return _default.connection_source


def use_serializer(serializer: DocumentSerializer) -> None:
    """Specify the serializer to use for document serialization/deserialization."""
    _default.use_serializer(serializer)


def serializer() -> DocumentSerializer:
    """Retrieve the currently configured serializer."""
    return _default.serializer


def use_id_field(name: str) -> None:
    """Set the JSON field name holding document identity."""
    _default.use_id_field(name)


def id_field() -> str:
    """Retrieve the currently configured ID field name."""
    return _default.id_field


def use_key_strategy(strategy: KeyStrategy) -> None:
    """Choose between a dedicated ``id`` column and an identity embedded in the document."""
    _default.use_key_strategy(strategy)


def key_strategy() -> KeyStrategy:
    """Retrieve the currently configured key strategy."""
    return _default.key_strategy
