"""
serializer.py
-------------
Translation between Python values and the JSON text stored in ``data``.

Any object with ``serialize`` / ``deserialize`` methods can be registered
through the configuration; ``JsonSerializer`` is the stock implementation.
It is built on pydantic, so it understands dataclasses, pydantic models,
typed collections, enums, dates, UUIDs and decimals. Types pydantic does
not know are handled by registering a ``TypeConverter``.
"""

from dataclasses import dataclass
from typing import Annotated, Any, Callable, Protocol, Sequence, runtime_checkable

from pydantic import PlainSerializer, PlainValidator, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, from_json

from pgdocs.errors import DeserializationError


@runtime_checkable
class DocumentSerializer(Protocol):
    """The capability every serializer must provide."""

    def serialize(self, value: Any) -> str:
        ...

    def deserialize(self, text: str, cls: Any = None) -> Any:
        ...


@dataclass(frozen=True)
class TypeConverter:
    """
    Out-of-band handling for a type pydantic does not know.

    Attributes:
        type: The Python type handled (subclasses are matched too).
        encode: Turns an instance into a JSON-compatible value.
        decode: Rebuilds an instance from its JSON value.
    """
    type: type
    encode: Callable[[Any], Any]
    decode: Callable[[Any], Any]

    @property
    def annotated(self) -> Any:
        """
        The handled type with this converter attached, for use as a field hint.

        Example:
            ``amount: MONEY.annotated`` inside a stored dataclass.
        """
        return Annotated[self.type, PlainValidator(self.decode), PlainSerializer(self.encode)]


class JsonSerializer:
    """
    Stock serializer backed by pydantic ``TypeAdapter``s.

    ``None`` dataclass and model fields are left out of the output rather
    than written as ``null``; give such fields a ``None`` default so reading
    them back restores it.
    """

    def __init__(self, converters: Sequence[TypeConverter] = ()) -> None:
        self._converters: dict[type, TypeConverter] = {c.type: c for c in converters}
        self._adapters: dict[Any, TypeAdapter] = {}

    def _converter_for(self, klass: type) -> TypeConverter | None:
        for base in klass.__mro__:
            converter = self._converters.get(base)
            if converter is not None:
                return converter
        return None

    def _adapter(self, hint: Any) -> TypeAdapter:
        adapter = self._adapters.get(hint)
        if adapter is None:
            converter = self._converter_for(hint) if isinstance(hint, type) else None
            adapter = TypeAdapter(converter.annotated if converter is not None else hint)
            self._adapters[hint] = adapter
        return adapter

    def _fallback(self, value: Any) -> Any:
        converter = self._converter_for(type(value))
        if converter is None:
            raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
        return converter.encode(value)

    def serialize(self, value: Any) -> str:
        try:
            raw = self._adapter(type(value)).dump_json(value, exclude_none=True, fallback=self._fallback)
        except PydanticSerializationError as e:
            raise TypeError(str(e)) from e
        return raw.decode("utf-8")

    def deserialize(self, text: str, cls: Any = None) -> Any:
        """
        Decode ``text`` and shape it as ``cls``.

        Args:
            text: JSON text as stored in the database.
            cls: Target type; ``None`` returns the plain decoded JSON.

        Raises:
            DeserializationError: If the text is not JSON or does not fit ``cls``.
        """
        if cls is None:
            try:
                return from_json(text)
            except (TypeError, ValueError) as e:
                raise DeserializationError(f"Invalid JSON document: {e}") from e
        try:
            return self._adapter(cls).validate_json(text)
        except ValidationError as e:
            raise DeserializationError(f"Cannot read {getattr(cls, '__name__', cls)}: {e}") from e
