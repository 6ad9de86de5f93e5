"""Turn parsed values into request data once execution timestamps are known."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

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


def format_timestamp(moment: datetime) -> str:
    """Format *moment* as RFC3339. Naive datetimes are taken to be UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.isoformat()


@dataclass(frozen=True)
class ExecutionContext:
    """Timestamps substituted for ``source`` values during one task run."""

    execute_time: datetime
    last_execute_time: datetime

    @classmethod
    def first_run(cls, now: datetime) -> "ExecutionContext":
        """Context for a task that has never run: both timestamps are *now*."""
        return cls(execute_time=now, last_execute_time=now)

    def resolve(self, source: Source) -> str:
        if source is Source.EXECUTE_DATE:
            return format_timestamp(self.execute_time)
        return format_timestamp(self.last_execute_time)


def render_json(value: Value, context: ExecutionContext) -> Any:
    """Convert *value* into JSON-compatible Python data."""
    if isinstance(value, VObject):
        return {key: render_json(child, context) for key, child in value.properties.items()}
    if isinstance(value, VArray):
        return [render_json(child, context) for child in value.items]
    if isinstance(value, VSource):
        return context.resolve(value.source)
    if isinstance(value, VNull):
        return None
    if isinstance(value, (VString, VBool, VFloat, VInteger)):
        return value.value
    raise TypeError(f"Cannot render {type(value).__name__}")


def render_header(value: Value, context: ExecutionContext) -> str:
    """Render a single header value as text."""
    if isinstance(value, VSource):
        return context.resolve(value.source)
    if isinstance(value, (VString, VInteger, VFloat)):
        return str(value.value)
    raise TypeError(f"{type(value).__name__} is not a valid header value")


def render_headers(headers: Mapping[str, Value], context: ExecutionContext) -> dict[str, str]:
    return {name: render_header(value, context) for name, value in headers.items()}
