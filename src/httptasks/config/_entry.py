"""Parse tagged entries into typed values.

A tagged entry is a mapping with a ``type`` discriminator plus companion
fields::

    {type: object, properties: {<key>: <entry>, ...}}
    {type: array, items: [<entry>, ...]}
    {type: string | integer | float | boolean, value: <scalar>}
    {type: "null"}
    {type: source, source: execute_time | last_execute_time}

``parse_entry`` accepts every type and is used for request bodies.
``parse_basic_entry`` accepts only ``string``, ``integer``, ``float`` and
``source``, since a header carries a single textual value.

Parsing is fail-fast: the first error anywhere in the tree is raised and no
partial value is returned.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Callable

from ._casters import cast_bool, cast_float, cast_integer, cast_string
from ._types import (
    UNDEFINED,
    InvalidEntryError,
    InvalidItemsError,
    InvalidPropertiesError,
    InvalidSourceError,
    InvalidSourceValueError,
    InvalidTypeError,
    InvalidTypeValueError,
    InvalidValueError,
    MissingFieldError,
    _Undefined,
)
from ._value import (
    Source,
    Value,
    VArray,
    VBool,
    VFloat,
    VInteger,
    VNull,
    VObject,
    VSource,
    VString,
)

TYPE_TAG = "type"
PROPERTIES_TAG = "properties"
ITEMS_TAG = "items"
VALUE_TAG = "value"
SOURCE_TAG = "source"

_Parser = Callable[[Mapping[Any, Any]], Value]


# ---------------------------------------------------------------------------
# Field access
# ---------------------------------------------------------------------------


def _require(entry: Mapping[Any, Any], tag: str) -> Any:
    value = entry.get(tag, UNDEFINED)
    if isinstance(value, _Undefined):
        raise MissingFieldError(tag)
    return value


def _get_type(entry: Any) -> str:
    if not isinstance(entry, Mapping):
        raise InvalidEntryError()
    entry_type = _require(entry, TYPE_TAG)
    if not isinstance(entry_type, str):
        raise InvalidTypeError()
    return entry_type


# ---------------------------------------------------------------------------
# Per-type parsers
# ---------------------------------------------------------------------------


def _scalar(cast: Callable[[Any], Any], wrap: Callable[[Any], Value]) -> _Parser:
    def parse(entry: Mapping[Any, Any]) -> Value:
        raw = _require(entry, VALUE_TAG)
        try:
            return wrap(cast(raw))
        except ValueError as exc:
            raise InvalidValueError() from exc

    return parse


_parse_integer = _scalar(cast_integer, VInteger)
_parse_float = _scalar(cast_float, VFloat)
_parse_string = _scalar(cast_string, VString)
_parse_bool = _scalar(cast_bool, VBool)


def _parse_null(entry: Mapping[Any, Any]) -> Value:
    return VNull()


def _parse_source(entry: Mapping[Any, Any]) -> Value:
    raw = _require(entry, SOURCE_TAG)
    if not isinstance(raw, str):
        raise InvalidSourceError()
    try:
        return VSource(Source(raw))
    except ValueError:
        raise InvalidSourceValueError(raw) from None


def _parse_object(entry: Mapping[Any, Any]) -> Value:
    properties = _require(entry, PROPERTIES_TAG)
    if not isinstance(properties, Mapping):
        raise InvalidPropertiesError()

    result: dict[str, Value] = {}
    for key, child in properties.items():
        if not isinstance(key, str) or not isinstance(child, Mapping):
            raise InvalidPropertiesError()
        result[key] = parse_entry(child)
    return VObject(result)


def _parse_array(entry: Mapping[Any, Any]) -> Value:
    items = _require(entry, ITEMS_TAG)
    if isinstance(items, (str, bytes)) or not isinstance(items, Sequence):
        raise InvalidItemsError()

    result: list[Value] = []
    for child in items:
        if not isinstance(child, Mapping):
            raise InvalidItemsError()
        result.append(parse_entry(child))
    return VArray(tuple(result))


_BASIC_PARSERS: dict[str, _Parser] = {
    "source": _parse_source,
    "integer": _parse_integer,
    "float": _parse_float,
    "string": _parse_string,
}

_PARSERS: dict[str, _Parser] = {
    **_BASIC_PARSERS,
    "object": _parse_object,
    "array": _parse_array,
    "boolean": _parse_bool,
    "null": _parse_null,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def _dispatch(entry: Any, parsers: Mapping[str, _Parser]) -> Value:
    entry_type = _get_type(entry)
    parser = parsers.get(entry_type)
    if parser is None:
        raise InvalidTypeValueError(entry_type)
    return parser(entry)


def parse_entry(entry: Any) -> Value:
    """Parse a tagged entry accepting all eight type tags.

    Raises a ``ParseEntryError`` subclass naming the first offending field.
    """
    return _dispatch(entry, _PARSERS)


def parse_basic_entry(entry: Any) -> Value:
    """Parse a tagged entry restricted to ``source``, ``integer``, ``float`` and ``string``.

    Structured, boolean and null entries raise ``InvalidTypeValueError``.
    """
    return _dispatch(entry, _BASIC_PARSERS)
