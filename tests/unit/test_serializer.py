"""Tests for the stock JSON serializer."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID

import pytest

from pgdocs.errors import DeserializationError
from pgdocs.serializer import DocumentSerializer, JsonSerializer, TypeConverter


@dataclass
class SubDocument:
    Foo: str
    Bar: str


@dataclass
class JsonDocument:
    Id: str
    Value: str = ""
    NumValue: int = 0
    Sub: Optional[SubDocument] = None


class Color(Enum):
    RED = "red"
    GREEN = "green"


@dataclass
class Tagged:
    Id: str
    color: Color
    tags: list[str] = field(default_factory=list)
    scores: dict[str, float] = field(default_factory=dict)
    seen: Optional[datetime] = None


@dataclass
class Shapes:
    Id: str
    pair: tuple = ()
    labels: set = field(default_factory=set)
    items: list = field(default_factory=list)
    frozen: frozenset[int] = frozenset()
    by_color: dict[Color, int] = field(default_factory=dict)
    ref: Optional[UUID] = None
    amount: Optional[Decimal] = None
    day: Optional[date] = None


class Money:
    def __init__(self, cents: int) -> None:
        self.cents = cents

    def __eq__(self, other) -> bool:
        return isinstance(other, Money) and other.cents == self.cents


MONEY = TypeConverter(Money, lambda m: m.cents, Money)


@dataclass
class Priced:
    Id: str
    price: MONEY.annotated


@pytest.fixture
def serializer() -> JsonSerializer:
    return JsonSerializer()


class TestSerialize:
    def test_dict_is_compact(self, serializer: JsonSerializer) -> None:
        assert serializer.serialize({"Hello": "There"}) == '{"Hello":"There"}'

    def test_dataclass_omits_none_fields(self, serializer: JsonSerializer) -> None:
        doc = JsonDocument(Id="one", Value="FIRST!")
        assert serializer.serialize(doc) == '{"Id":"one","Value":"FIRST!","NumValue":0}'

    def test_nested_dataclass(self, serializer: JsonSerializer) -> None:
        doc = JsonDocument(Id="two", Sub=SubDocument(Foo="green", Bar="blue"))
        assert serializer.serialize(doc) == (
            '{"Id":"two","Value":"","NumValue":0,"Sub":{"Foo":"green","Bar":"blue"}}'
        )

    def test_non_ascii_is_kept(self, serializer: JsonSerializer) -> None:
        assert serializer.serialize({"name": "Zoë"}) == '{"name":"Zoë"}'

    def test_well_known_types(self, serializer: JsonSerializer) -> None:
        value = {
            "day": date(2024, 1, 2),
            "ref": UUID("12345678-1234-5678-1234-567812345678"),
            "amount": Decimal("10.50"),
            "color": Color.GREEN,
        }
        assert serializer.serialize(value) == (
            '{"day":"2024-01-02","ref":"12345678-1234-5678-1234-567812345678",'
            '"amount":"10.50","color":"green"}'
        )

    def test_enum_mapping_keys_use_member_values(self, serializer: JsonSerializer) -> None:
        doc = Shapes(Id="s", by_color={Color.RED: 1})
        assert '"by_color":{"red":1}' in serializer.serialize(doc)

    def test_unknown_type_raises(self, serializer: JsonSerializer) -> None:
        with pytest.raises(TypeError):
            serializer.serialize({"money": Money(5)})

    def test_custom_converter(self) -> None:
        serializer = JsonSerializer([MONEY])
        assert serializer.serialize({"money": Money(5)}) == '{"money":5}'


class TestDeserialize:
    def test_without_type_returns_plain_json(self, serializer: JsonSerializer) -> None:
        assert serializer.deserialize('{"a":[1,2]}') == {"a": [1, 2]}

    def test_round_trips_dataclass(self, serializer: JsonSerializer) -> None:
        doc = JsonDocument(Id="four", Value="purple", NumValue=17, Sub=SubDocument("green", "red"))
        assert serializer.deserialize(serializer.serialize(doc), JsonDocument) == doc

    def test_absent_optional_field_becomes_none(self, serializer: JsonSerializer) -> None:
        doc = serializer.deserialize('{"Id":"one","Value":"x","NumValue":1}', JsonDocument)
        assert doc.Sub is None

    def test_nested_collections_enums_and_dates(self, serializer: JsonSerializer) -> None:
        text = (
            '{"Id":"t","color":"red","tags":["a","b"],"scores":{"x":1},'
            '"seen":"2024-01-02T03:04:05+00:00"}'
        )
        tagged = serializer.deserialize(text, Tagged)
        assert tagged.color is Color.RED
        assert tagged.tags == ["a", "b"]
        assert tagged.scores == {"x": 1.0}
        assert tagged.seen == datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    def test_extra_fields_are_ignored(self, serializer: JsonSerializer) -> None:
        sub = serializer.deserialize('{"Foo":"a","Bar":"b","Baz":"c"}', SubDocument)
        assert sub == SubDocument("a", "b")

    def test_custom_converter(self) -> None:
        serializer = JsonSerializer([MONEY])
        assert serializer.deserialize("250", Money) == Money(250)

    def test_invalid_json_raises(self, serializer: JsonSerializer) -> None:
        with pytest.raises(DeserializationError):
            serializer.deserialize("{not json", JsonDocument)

    def test_invalid_untyped_json_raises(self, serializer: JsonSerializer) -> None:
        with pytest.raises(DeserializationError):
            serializer.deserialize("{not json")

    def test_missing_required_field_raises(self, serializer: JsonSerializer) -> None:
        with pytest.raises(DeserializationError, match="Foo"):
            serializer.deserialize('{"Bar":"b"}', SubDocument)

    def test_wrong_shape_raises(self, serializer: JsonSerializer) -> None:
        with pytest.raises(DeserializationError):
            serializer.deserialize("[1,2,3]", JsonDocument)

    def test_wrong_scalar_type_raises(self, serializer: JsonSerializer) -> None:
        with pytest.raises(DeserializationError):
            serializer.deserialize('{"Id":"x","NumValue":"ten"}', JsonDocument)

    def test_invalid_enum_value_raises(self, serializer: JsonSerializer) -> None:
        with pytest.raises(DeserializationError):
            serializer.deserialize('{"Id":"t","color":"mauve"}', Tagged)


class TestRoundTrip:
    """Documents read back equal to what was written."""

    def test_collection_and_enum_key_fields(self, serializer: JsonSerializer) -> None:
        doc = Shapes(
            Id="s",
            pair=("a", 1),
            labels={"x", "y"},
            items=[1, "two", [3]],
            frozen=frozenset({3, 4}),
            by_color={Color.RED: 1, Color.GREEN: 2},
        )
        assert serializer.deserialize(serializer.serialize(doc), Shapes) == doc

    def test_well_known_scalar_fields(self, serializer: JsonSerializer) -> None:
        doc = Shapes(
            Id="s",
            ref=UUID("12345678-1234-5678-1234-567812345678"),
            amount=Decimal("10.50"),
            day=date(2024, 1, 2),
        )
        assert serializer.deserialize(serializer.serialize(doc), Shapes) == doc

    def test_aware_datetime(self, serializer: JsonSerializer) -> None:
        doc = Tagged(Id="t", color=Color.GREEN, seen=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc))
        assert serializer.deserialize(serializer.serialize(doc), Tagged) == doc

    def test_converter_on_dataclass_field(self) -> None:
        serializer = JsonSerializer([MONEY])
        doc = Priced(Id="p", price=Money(999))

        text = serializer.serialize(doc)

        assert text == '{"Id":"p","price":999}'
        assert serializer.deserialize(text, Priced) == doc


def test_json_serializer_satisfies_protocol() -> None:
    assert isinstance(JsonSerializer(), DocumentSerializer)
