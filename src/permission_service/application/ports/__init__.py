"""Application ports - interfaces for external adapters."""

from permission_service.application.ports.permission_store import PermissionStore

__all__ = [
    "PermissionStore",
]
