"""Task configuration models.

The outer schema is plain Pydantic; header values and request bodies are
tagged entries handed to the typed-value parser::

    tasks:
      - type: http
        name: load_data
        method: GET
        url: env!(SERVICE_PATH)/load
        headers:
          X-Api-Key: {type: string, value: env!(API_KEY)}
        success_status_codes: [200]
        body:
          json: {type: object, properties: {...}}
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional

from pydantic import (
    AnyUrl,
    BaseModel,
    ConfigDict,
    Field,
    GetCoreSchemaHandler,
    StrictInt,
    StrictStr,
)
from pydantic_core import CoreSchema, PydanticCustomError, core_schema

from ._entry import parse_basic_entry, parse_entry
from ._types import ParseEntryError
from ._value import Value


class Method(str, Enum):
    """HTTP methods a task may use. Matching is exact and case-sensitive."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


def _entry_error(exc: ParseEntryError, field: str | None = None) -> PydanticCustomError:
    message = f"{field}: {exc}" if field else str(exc)
    return PydanticCustomError("tagged_entry", "{message}", {"message": message})


# ---------------------------------------------------------------------------
# Headers
# ---------------------------------------------------------------------------


class Headers(Dict[str, Value]):
    """Header name to value mapping, each value a restricted tagged entry."""

    @classmethod
    def parse(cls, raw: Any) -> "Headers":
        if not isinstance(raw, Mapping):
            raise PydanticCustomError("headers_type", "headers should be a map of entries")

        headers = cls()
        for name, entry in raw.items():
            if not isinstance(name, str):
                raise PydanticCustomError("headers_type", "header names should be strings")
            try:
                headers[name] = parse_basic_entry(entry)
            except ParseEntryError as exc:
                raise _entry_error(exc, name) from exc
        return headers

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        def _validate(value: Any) -> "Headers":
            if isinstance(value, Headers):
                return value
            return cls.parse(value)

        return core_schema.no_info_plain_validator_function(_validate)


# ---------------------------------------------------------------------------
# Body
# ---------------------------------------------------------------------------

BODY_CONTENT_TYPES = ("json",)


@dataclass(frozen=True)
class JsonBody:
    """A JSON request body built from a full-mode tagged entry."""

    value: Value

    @classmethod
    def parse(cls, raw: Any) -> "JsonBody":
        if not isinstance(raw, Mapping):
            raise PydanticCustomError("body_type", "body should be a map")
        if not raw:
            raise PydanticCustomError("body_type", "invalid body field")

        # Only the first entry selects the content type.
        content_type, entry = next(iter(raw.items()))
        if content_type not in BODY_CONTENT_TYPES:
            raise PydanticCustomError(
                "body_content_type",
                "unknown field `{got}`, expected `json`",
                {"got": content_type},
            )
        try:
            return cls(parse_entry(entry))
        except ParseEntryError as exc:
            raise _entry_error(exc, content_type) from exc

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        def _validate(value: Any) -> "JsonBody":
            if isinstance(value, JsonBody):
                return value
            return cls.parse(value)

        return core_schema.no_info_plain_validator_function(_validate)


Body = JsonBody

StatusCode = Annotated[StrictInt, Field(ge=0, le=65535)]


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------


class HttpTask(BaseModel):
    """A single HTTP call to run on a schedule."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    type: Literal["http"] = "http"
    name: StrictStr
    method: Method
    url: AnyUrl
    headers: Headers = Field(default_factory=Headers)
    success_status_codes: List[StatusCode] = Field(default_factory=list)
    body: Optional[Body] = None


class Config(BaseModel):
    """Root of a task configuration document."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    tasks: List[HttpTask]
