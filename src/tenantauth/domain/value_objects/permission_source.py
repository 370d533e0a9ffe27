"""Provenance of a held permission."""

from enum import StrEnum


class PermissionSource(StrEnum):
    """Where a permission comes from. DIRECT wins over ROLE."""

    DIRECT = "direct"
    ROLE = "role"
    NONE = "none"
