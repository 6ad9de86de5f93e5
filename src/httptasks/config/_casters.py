"""Strict cast helpers for the ``value`` field of scalar entries.

Unlike loose config casting, these never coerce across YAML types: a quoted
``"100"`` is not an integer and ``true`` is not a number. Each caster raises
``ValueError`` for a value it does not accept.
"""

from __future__ import annotations

from typing import Any

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


# ---------------------------------------------------------------------------
# Scalar casters
# ---------------------------------------------------------------------------


def cast_integer(value: Any) -> int:
    """Accept integral numbers that fit in a signed 64-bit integer.

    ``bool`` is rejected even though it subclasses ``int``.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Cannot cast {type(value).__name__} to integer")
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"{value} does not fit in a 64-bit integer")
    return value


def cast_float(value: Any) -> float:
    """Accept any number, widening integers to ``float``."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Cannot cast {type(value).__name__} to float")
    try:
        return float(value)
    except OverflowError as exc:
        raise ValueError(f"{value} does not fit in a 64-bit float") from exc


def cast_string(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"Cannot cast {type(value).__name__} to string")
    return value


def cast_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"Cannot cast {type(value).__name__} to bool")
    return value
