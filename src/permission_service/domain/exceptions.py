"""Domain exceptions."""

from permission_service.domain.entities import Permission


class PermissionServiceError(Exception):
    """Base exception for the permission service."""

    code = "INTERNAL"


class NotFound(PermissionServiceError):
    """No permission exists for the requested key."""

    code = "NOT_FOUND"


class AlreadyExists(PermissionServiceError):
    """Permission already exists and override was not requested."""

    code = "ALREADY_EXISTS"

    def __init__(self, existing: Permission) -> None:
        super().__init__(
            f"permission {existing.id} already exists for file {existing.file_id!r} "
            f"and user {existing.user_id!r}"
        )
        self.existing = existing


class InvalidArgument(PermissionServiceError):
    """Request argument is malformed."""

    code = "INVALID_ARGUMENT"


class Unavailable(PermissionServiceError):
    """Permission store is unreachable or timed out."""

    code = "UNAVAILABLE"
