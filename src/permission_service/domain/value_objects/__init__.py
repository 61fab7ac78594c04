"""Domain value objects."""

from permission_service.domain.value_objects.role import Role

__all__ = [
    "Role",
]
