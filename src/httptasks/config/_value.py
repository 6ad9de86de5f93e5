"""Typed values produced from tagged config entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class Source(str, Enum):
    """Values only known when a task executes, rendered as RFC3339 timestamps."""

    EXECUTE_DATE = "execute_time"
    LAST_EXECUTE_DATE = "last_execute_time"


@dataclass(frozen=True)
class VArray:
    items: tuple["Value", ...] = ()


@dataclass(frozen=True)
class VObject:
    properties: dict[str, "Value"] = field(default_factory=dict)

    def __hash__(self) -> int:
        return hash(frozenset(self.properties.items()))


@dataclass(frozen=True)
class VString:
    value: str


@dataclass(frozen=True)
class VBool:
    value: bool


@dataclass(frozen=True)
class VFloat:
    value: float


@dataclass(frozen=True)
class VInteger:
    value: int


@dataclass(frozen=True)
class VNull:
    pass


@dataclass(frozen=True)
class VSource:
    source: Source


Value = Union[VArray, VObject, VString, VBool, VFloat, VInteger, VNull, VSource]


@dataclass(frozen=True)
class TaggedNode:
    """A YAML node carrying a custom ``!tag``.

    Kept opaque: the environment resolver returns it untouched.
    """

    tag: str
    value: Any
