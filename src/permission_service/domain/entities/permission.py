"""Permission entity - a user's role on a file."""

from dataclasses import dataclass
from uuid import UUID

from permission_service.domain.value_objects import Role


@dataclass
class Permission:
    """Permission - user holds role on file. At most one per (file_id, user_id)."""

    id: UUID
    file_id: str
    user_id: str
    role: Role
    creator: str


@dataclass(frozen=True)
class UserRole:
    """A user's role on a file, as listed per file."""

    user_id: str
    role: Role
    creator: str


@dataclass(frozen=True)
class FileRole:
    """A file a user holds a role on, as listed per user."""

    file_id: str
    role: Role
    creator: str
