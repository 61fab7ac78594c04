"""Domain entities."""

from permission_service.domain.entities.permission import FileRole, Permission, UserRole

__all__ = [
    "FileRole",
    "Permission",
    "UserRole",
]
