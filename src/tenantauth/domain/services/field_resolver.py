"""Dot-path lookup into a permission context.

This is the only place that reads loosely-typed data. Lookups walk mappings by
key and other objects by public attribute; camelCase segments fall back to the
snake_case attribute (``user.companyId`` reads ``Actor.company_id``).
"""

import re
from collections.abc import Mapping
from enum import Enum
from typing import Any


class _Missing:
    """Sentinel for an absent value."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(segment: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", segment).lower()


def _step(current: Any, segment: str) -> Any:
    if isinstance(current, Mapping):
        return current[segment] if segment in current else MISSING
    if segment.startswith("_") or isinstance(current, (str, bytes, int, float, bool)):
        return MISSING
    for name in (segment, _snake(segment)):
        try:
            value = getattr(current, name)
        except AttributeError:
            continue
        return MISSING if callable(value) else value
    return MISSING


def resolve_field(path: str, context: Any) -> Any:
    """Return the value at path, or MISSING if any segment is absent. Never raises."""
    current = context
    for segment in path.split("."):
        if current is None or current is MISSING:
            return MISSING
        current = _step(current, segment)
    if isinstance(current, Enum):
        return current.value
    return current


def is_present(value: Any) -> bool:
    return value is not MISSING and value is not None
