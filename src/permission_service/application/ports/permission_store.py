"""Permission store port."""

from typing import Protocol

from permission_service.domain.entities import Permission
from permission_service.domain.value_objects import Role


class PermissionStore(Protocol):
    """Port for permission persistence.

    Each method is a single round trip to the backend. Implementations raise
    ``Unavailable`` when the backend cannot be reached in time.
    """

    async def find_one(self, file_id: str, user_id: str) -> Permission | None: ...

    async def find_by_file(self, file_id: str) -> list[Permission]: ...

    async def find_by_user(self, user_id: str) -> list[Permission]: ...

    async def upsert(
        self,
        file_id: str,
        user_id: str,
        role: Role,
        creator: str,
        *,
        override: bool,
    ) -> tuple[Permission, bool]:
        """Insert a permission, or return the existing one for the key.

        With ``override`` the existing record's role is replaced; its id and
        creator are kept. Returns the stored record and whether it was inserted.
        """
        ...

    async def delete_one(self, file_id: str, user_id: str) -> Permission | None: ...

    async def delete_many(self, file_id: str) -> list[Permission]: ...

    async def ping(self) -> None: ...
