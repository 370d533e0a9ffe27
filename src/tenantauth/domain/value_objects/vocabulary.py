"""Closed vocabularies - strict parsing of caller-supplied strings."""

from enum import Enum
from typing import TypeVar

from tenantauth.domain.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def parse_member(enum_cls: type[E], value: object, label: str) -> E:
    """Return the enum member for value or raise ValidationError.

    Members pass through unchanged. Strings must match a member value exactly.
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(str(m.value) for m in enum_cls)
        raise ValidationError(f"Invalid {label} {value!r}; expected one of: {allowed}") from None
