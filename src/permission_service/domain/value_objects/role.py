"""Permission roles."""

from enum import StrEnum


class Role(StrEnum):
    """Role a user holds on a file.

    Roles are categorical tags with no ordering: holding WRITE does not imply
    READ. Compare roles for equality only.
    """

    NONE = "NONE"
    WRITE = "WRITE"
    READ = "READ"
