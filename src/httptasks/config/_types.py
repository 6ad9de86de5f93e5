"""Foundation types for the config module.

Provides the sentinel for absent fields and the exception hierarchy shared by
the environment resolver, the typed-value parser and the loader.
"""

from __future__ import annotations

from typing import Any

# ---------------------------------------------------------------------------
# Sentinel
# ---------------------------------------------------------------------------


class _Undefined:
    """Sentinel for missing document fields (distinct from ``None``)."""

    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------


class ConfigError(Exception):
    """Base exception for config-related errors.

    Instances compare equal when they share a class and payload, so callers
    can assert on the exact error a document produced.
    """

    def _payload(self) -> tuple[Any, ...]:
        return self.args

    def __eq__(self, other: object) -> bool:
        if type(other) is type(self):
            return self._payload() == other._payload()  # type: ignore[attr-defined]
        return NotImplemented

    def __hash__(self) -> int:
        return hash((type(self), self._payload()))


class ConfigLoadError(ConfigError):
    """Raised when a config document cannot be loaded."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.message = message
        self.path = path
        text = f"{path}: {message}" if path else message
        super().__init__(text)

    def _payload(self) -> tuple[Any, ...]:
        return (self.message, self.path)


# ---------------------------------------------------------------------------
# Environment placeholders
# ---------------------------------------------------------------------------


class EnvError(ConfigError):
    """Base exception for ``env!(NAME)`` placeholder resolution."""


class EnvVarNotFoundError(EnvError):
    """Raised when a placeholder names a variable absent from the environment."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"env {name} not found")

    def _payload(self) -> tuple[Any, ...]:
        return (self.name,)


class InvalidEnvSyntaxError(EnvError):
    """Raised when ``env!(`` is not followed by a closing parenthesis."""

    def __init__(self, text: str = "") -> None:
        self.text = text
        super().__init__("invalid env!() syntax")

    def _payload(self) -> tuple[Any, ...]:
        return ()


class EnvSubstitutionLimitError(EnvError):
    """Raised when a string keeps producing placeholders past the limit."""

    def __init__(self, text: str, limit: int) -> None:
        self.text = text
        self.limit = limit
        super().__init__(
            f"env!() substitution limit of {limit} exceeded, "
            "a variable probably expands to itself"
        )

    def _payload(self) -> tuple[Any, ...]:
        return (self.limit,)


# ---------------------------------------------------------------------------
# Tagged entries
# ---------------------------------------------------------------------------

TYPE_TAGS = ("array", "object", "integer", "float", "string", "boolean", "null", "source")
SOURCE_TAGS = ("execute_time", "last_execute_time")


def _one_of(expected: tuple[str, ...]) -> str:
    return ", ".join(f"`{name}`" for name in expected)


class ParseEntryError(ConfigError):
    """Base exception for tagged-entry parsing failures."""

    message = "invalid entry"

    def __init__(self) -> None:
        super().__init__(self.message)

    def _payload(self) -> tuple[Any, ...]:
        return ()


class MissingFieldError(ParseEntryError):
    def __init__(self, field: str) -> None:
        self.field = field
        Exception.__init__(self, f"missing field `{field}`")

    def _payload(self) -> tuple[Any, ...]:
        return (self.field,)


class InvalidTypeError(ParseEntryError):
    message = "invalid 'type' tag"


class InvalidValueError(ParseEntryError):
    message = "invalid 'value' tag"


class InvalidItemsError(ParseEntryError):
    message = "invalid 'items' tag, should be a sequence of entries"


class InvalidPropertiesError(ParseEntryError):
    message = "invalid 'properties' tag, should be a map of entries"


class InvalidSourceError(ParseEntryError):
    message = "invalid 'source' tag"


class InvalidEntryError(ParseEntryError):
    message = "invalid entry, should be a map with a 'type' tag"


class _UnknownVariantError(ParseEntryError):
    expected: tuple[str, ...] = ()

    def __init__(self, got: str) -> None:
        self.got = got
        Exception.__init__(
            self, f"unknown variant `{got}`, expected one of {_one_of(self.expected)}"
        )

    def _payload(self) -> tuple[Any, ...]:
        return (self.got,)


class InvalidSourceValueError(_UnknownVariantError):
    expected = SOURCE_TAGS


class InvalidTypeValueError(_UnknownVariantError):
    expected = TYPE_TAGS
