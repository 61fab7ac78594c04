"""Permission controller - domain rules over the permission store."""

import asyncio

from loguru import logger

from permission_service.application.ports import PermissionStore
from permission_service.domain.entities import FileRole, Permission, UserRole
from permission_service.domain.exceptions import AlreadyExists, InvalidArgument, NotFound
from permission_service.domain.value_objects import Role


# Two keys share one btree entry, which PostgreSQL caps at about 2.7 kB.
MAX_ID_LENGTH = 256


def _require_id(name: str, value: str) -> None:
    if not value or not value.strip():
        raise InvalidArgument(f"{name} must not be empty")
    if len(value) > MAX_ID_LENGTH:
        raise InvalidArgument(f"{name} must be at most {MAX_ID_LENGTH} characters")
    _require_storable(name, value)


def _require_storable(name: str, value: str) -> None:
    if "\x00" in value:
        raise InvalidArgument(f"{name} must not contain NUL characters")


class PermissionController:
    """Grants, revokes and queries file permissions.

    Holds no state besides the store, so one instance serves all concurrent
    requests.
    """

    def __init__(self, store: PermissionStore) -> None:
        self._store = store

    async def create_permission(
        self,
        file_id: str,
        user_id: str,
        role: Role,
        creator: str,
        override: bool = False,
    ) -> Permission:
        """Create permission for user on file.

        An existing permission for the pair is left untouched unless
        ``override`` is set, in which case only its role changes.
        """
        _require_id("fileID", file_id)
        _require_id("userID", user_id)
        _require_storable("creator", creator)

        permission, inserted = await self._store.upsert(
            file_id, user_id, role, creator, override=override
        )
        if inserted:
            logger.info(
                "created permission {} ({}) for user {} on file {}",
                permission.id, role, user_id, file_id,
            )
            return permission
        if not override:
            raise AlreadyExists(permission)

        logger.info(
            "overrode permission {} to {} for user {} on file {}",
            permission.id, role, user_id, file_id,
        )
        return permission

    async def delete_permission(self, file_id: str, user_id: str) -> Permission:
        """Delete the permission of user on file and return it."""
        _require_id("fileID", file_id)
        _require_id("userID", user_id)

        deleted = await self._store.delete_one(file_id, user_id)
        if deleted is None:
            raise NotFound(f"permission for file {file_id!r} and user {user_id!r} not found")
        logger.info("deleted permission {} of user {} on file {}", deleted.id, user_id, file_id)
        return deleted

    async def get_permission(self, file_id: str, user_id: str) -> Permission:
        _require_id("fileID", file_id)
        _require_id("userID", user_id)

        permission = await self._store.find_one(file_id, user_id)
        if permission is None:
            raise NotFound(f"permission for file {file_id!r} and user {user_id!r} not found")
        return permission

    async def get_file_permissions(self, file_id: str) -> list[UserRole]:
        """List the users holding a role on file."""
        _require_id("fileID", file_id)

        permissions = await self._store.find_by_file(file_id)
        return [UserRole(user_id=p.user_id, role=p.role, creator=p.creator) for p in permissions]

    async def get_user_permissions(self, user_id: str) -> list[FileRole]:
        """List the files user holds a role on."""
        _require_id("userID", user_id)

        permissions = await self._store.find_by_user(user_id)
        return [FileRole(file_id=p.file_id, role=p.role, creator=p.creator) for p in permissions]

    async def is_permitted(self, file_id: str, user_id: str, role: Role) -> bool:
        """True iff user's stored role on file is exactly ``role``."""
        _require_id("fileID", file_id)
        _require_id("userID", user_id)

        permission = await self._store.find_one(file_id, user_id)
        return permission is not None and permission.role == role

    async def delete_file_permissions(self, file_id: str) -> list[Permission]:
        """Delete every permission on file and return the deleted ones."""
        _require_id("fileID", file_id)

        deleted = await self._store.delete_many(file_id)
        logger.info("deleted {} permission(s) of file {}", len(deleted), file_id)
        return deleted

    async def health_check(self, timeout: float) -> bool:
        """Ping the store within ``timeout`` seconds. Never raises."""
        try:
            async with asyncio.timeout(timeout):
                await self._store.ping()
        except Exception as e:
            logger.debug("permission store ping failed: {!r}", e)
            return False
        return True
