"""Tests for _entry.py — parse_entry and parse_basic_entry."""

import textwrap

import pytest
import yaml

from httptasks.config._entry import parse_basic_entry, parse_entry
from httptasks.config._types import (
    InvalidEntryError,
    InvalidItemsError,
    InvalidPropertiesError,
    InvalidSourceError,
    InvalidSourceValueError,
    InvalidTypeError,
    InvalidTypeValueError,
    InvalidValueError,
    MissingFieldError,
)
from httptasks.config._value import (
    Source,
    VArray,
    VBool,
    VFloat,
    VInteger,
    VNull,
    VObject,
    VSource,
    VString,
)


def _yaml(text: str):
    return yaml.safe_load(textwrap.dedent(text))


class TestTypeTag:
    def test_missing_type(self):
        with pytest.raises(MissingFieldError) as exc_info:
            parse_entry({"value": 1})
        assert exc_info.value.field == "type"

    @pytest.mark.parametrize("type_value", [1, None, True, ["string"]])
    def test_type_not_a_string(self, type_value):
        with pytest.raises(InvalidTypeError):
            parse_entry({"type": type_value})

    @pytest.mark.parametrize("parse", [parse_entry, parse_basic_entry])
    def test_unknown_type(self, parse):
        with pytest.raises(InvalidTypeValueError) as exc_info:
            parse({"type": "unsupported"})
        assert exc_info.value == InvalidTypeValueError("unsupported")

    def test_unquoted_yaml_null_type_is_not_a_string(self):
        with pytest.raises(InvalidTypeError):
            parse_entry(_yaml("type: null"))

    @pytest.mark.parametrize("entry", ["string", 1, None, [{"type": "null"}]])
    def test_entry_not_a_mapping(self, entry):
        with pytest.raises(InvalidEntryError):
            parse_entry(entry)


class TestScalars:
    @pytest.mark.parametrize("n", [0, 42, -7, 2**63 - 1, -(2**63)])
    def test_integer(self, n):
        assert parse_entry({"type": "integer", "value": n}) == VInteger(n)

    @pytest.mark.parametrize("value", ["100", 1.5, True, None, 2**63])
    def test_integer_invalid_value(self, value):
        with pytest.raises(InvalidValueError):
            parse_entry({"type": "integer", "value": value})

    def test_integer_missing_value(self):
        with pytest.raises(MissingFieldError) as exc_info:
            parse_entry({"type": "integer"})
        assert exc_info.value.field == "value"

    def test_float(self):
        assert parse_entry({"type": "float", "value": 1.25}) == VFloat(1.25)

    def test_float_from_integer(self):
        assert parse_entry({"type": "float", "value": 3}) == VFloat(3.0)

    @pytest.mark.parametrize("value", ["1.5", False, None])
    def test_float_invalid_value(self, value):
        with pytest.raises(InvalidValueError):
            parse_entry({"type": "float", "value": value})

    def test_string(self):
        assert parse_entry({"type": "string", "value": "hello"}) == VString("hello")

    @pytest.mark.parametrize("value", [1, 2.0, True, None, ["a"]])
    def test_string_invalid_value(self, value):
        with pytest.raises(InvalidValueError):
            parse_entry({"type": "string", "value": value})

    @pytest.mark.parametrize("value", [True, False])
    def test_boolean(self, value):
        assert parse_entry({"type": "boolean", "value": value}) == VBool(value)

    def test_boolean_from_yaml_uppercase(self):
        assert parse_entry(_yaml("{type: boolean, value: TRUE}")) == VBool(True)

    @pytest.mark.parametrize("value", [1, "true", None])
    def test_boolean_invalid_value(self, value):
        with pytest.raises(InvalidValueError):
            parse_entry({"type": "boolean", "value": value})


class TestNull:
    @pytest.mark.parametrize(
        "entry",
        [
            {"type": "null"},
            {"type": "null", "value": 5},
            {"type": "null", "items": "nonsense", "properties": 1},
        ],
    )
    def test_null_ignores_other_fields(self, entry):
        assert parse_entry(entry) == VNull()


class TestSource:
    def test_execute_time(self):
        assert parse_entry({"type": "source", "source": "execute_time"}) == VSource(
            Source.EXECUTE_DATE
        )

    def test_last_execute_time(self):
        assert parse_entry({"type": "source", "source": "last_execute_time"}) == VSource(
            Source.LAST_EXECUTE_DATE
        )

    def test_missing_source(self):
        with pytest.raises(MissingFieldError) as exc_info:
            parse_entry({"type": "source"})
        assert exc_info.value.field == "source"

    @pytest.mark.parametrize("value", [1, None, ["execute_time"]])
    def test_source_not_a_string(self, value):
        with pytest.raises(InvalidSourceError):
            parse_entry({"type": "source", "source": value})

    def test_unknown_source(self):
        with pytest.raises(InvalidSourceValueError) as exc_info:
            parse_entry({"type": "source", "source": "tomorrow"})
        assert exc_info.value.got == "tomorrow"


class TestObject:
    def test_empty_object(self):
        assert parse_entry({"type": "object", "properties": {}}) == VObject({})

    def test_missing_properties(self):
        with pytest.raises(MissingFieldError) as exc_info:
            parse_entry({"type": "object"})
        assert exc_info.value.field == "properties"

    @pytest.mark.parametrize("properties", [[], "a", 1, None])
    def test_properties_not_a_mapping(self, properties):
        with pytest.raises(InvalidPropertiesError):
            parse_entry({"type": "object", "properties": properties})

    def test_property_not_an_entry(self):
        with pytest.raises(InvalidPropertiesError):
            parse_entry({"type": "object", "properties": {"a": "plain"}})

    def test_property_key_not_a_string(self):
        with pytest.raises(InvalidPropertiesError):
            parse_entry({"type": "object", "properties": {1: {"type": "null"}}})

    def test_nested_error_propagates(self):
        entry = {
            "type": "object",
            "properties": {
                "ok": {"type": "string", "value": "fine"},
                "bad": {"type": "source", "source": "tomorrow"},
            },
        }
        with pytest.raises(InvalidSourceValueError):
            parse_entry(entry)

    def test_key_order_irrelevant(self):
        first = parse_entry(
            {
                "type": "object",
                "properties": {"a": {"type": "null"}, "b": {"type": "integer", "value": 1}},
            }
        )
        second = parse_entry(
            {
                "type": "object",
                "properties": {"b": {"type": "integer", "value": 1}, "a": {"type": "null"}},
            }
        )
        assert first == second


class TestArray:
    def test_items_in_order(self):
        entry = {
            "type": "array",
            "items": [
                {"type": "integer", "value": 1},
                {"type": "string", "value": "two"},
                {"type": "null"},
            ],
        }
        assert parse_entry(entry) == VArray((VInteger(1), VString("two"), VNull()))

    def test_missing_items(self):
        with pytest.raises(MissingFieldError) as exc_info:
            parse_entry({"type": "array"})
        assert exc_info.value.field == "items"

    @pytest.mark.parametrize("items", [{}, "abc", 1, None])
    def test_items_not_a_sequence(self, items):
        with pytest.raises(InvalidItemsError):
            parse_entry({"type": "array", "items": items})

    def test_item_not_an_entry(self):
        with pytest.raises(InvalidItemsError):
            parse_entry({"type": "array", "items": [{"type": "null"}, 5]})

    def test_nested_structure(self):
        entry = _yaml(
            """
            type: object
            properties:
              a:
                type: array
                items:
                  - type: boolean
                    value: true
                  - type: source
                    source: execute_time
            """
        )
        assert parse_entry(entry) == VObject(
            {"a": VArray((VBool(True), VSource(Source.EXECUTE_DATE)))}
        )


class TestBasicEntry:
    @pytest.mark.parametrize(
        "entry, expected",
        [
            ({"type": "string", "value": "key"}, VString("key")),
            ({"type": "integer", "value": 5}, VInteger(5)),
            ({"type": "float", "value": 0.5}, VFloat(0.5)),
            ({"type": "source", "source": "execute_time"}, VSource(Source.EXECUTE_DATE)),
        ],
    )
    def test_accepted_types(self, entry, expected):
        assert parse_basic_entry(entry) == expected

    @pytest.mark.parametrize(
        "entry",
        [
            {"type": "object", "properties": {}},
            {"type": "array", "items": []},
            {"type": "boolean", "value": True},
            {"type": "null"},
        ],
    )
    def test_rejected_types(self, entry):
        with pytest.raises(InvalidTypeValueError) as exc_info:
            parse_basic_entry(entry)
        assert exc_info.value.got == entry["type"]

    def test_same_field_errors_as_full_mode(self):
        with pytest.raises(InvalidValueError):
            parse_basic_entry({"type": "integer", "value": "5"})
        with pytest.raises(MissingFieldError):
            parse_basic_entry({"value": "5"})
