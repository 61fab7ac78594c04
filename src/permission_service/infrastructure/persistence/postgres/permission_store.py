"""PostgreSQL permission store implementation."""

import asyncio
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager, suppress
from typing import Any
from uuid import uuid4

import psycopg
from psycopg import AsyncConnection
from psycopg_pool import AsyncConnectionPool

from permission_service.domain.entities import Permission
from permission_service.domain.exceptions import Unavailable
from permission_service.domain.value_objects import Role

_COLUMNS = "id, file_id, user_id, role, creator"

# A conflicting row is locked and returned either way; without override the
# role is written back unchanged. xmax is 0 only for freshly inserted rows.
_UPSERT = (
    f"INSERT INTO permission ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s) "
    "ON CONFLICT (file_id, user_id) DO UPDATE SET role = {role} "
    f"RETURNING {_COLUMNS}, (xmax = 0) AS inserted"
)
_UPSERT_OVERRIDE = _UPSERT.format(role="EXCLUDED.role")
_UPSERT_KEEP = _UPSERT.format(role="permission.role")


def _to_permission(r: Sequence[Any]) -> Permission:
    return Permission(
        id=r[0],
        file_id=r[1],
        user_id=r[2],
        role=Role(r[3]),
        creator=r[4],
    )


class PostgresPermissionStore:
    """Permission store backed by the ``permission`` table.

    Every method is one statement on a pooled connection, bounded by
    ``timeout`` seconds. Timeouts and connection failures raise ``Unavailable``.
    ``ping`` uses ``probe_pool`` when given, so a saturated request pool does
    not read as a dead database.
    """

    def __init__(
        self,
        pool: AsyncConnectionPool,
        timeout: float = 10.0,
        probe_pool: AsyncConnectionPool | None = None,
    ) -> None:
        self._pool = pool
        self._probe_pool = pool if probe_pool is None else probe_pool
        self._timeout = timeout

    @asynccontextmanager
    async def _connection(
        self, pool: AsyncConnectionPool | None = None
    ) -> AsyncIterator[AsyncConnection]:
        if pool is None:
            pool = self._pool
        try:
            async with asyncio.timeout(self._timeout):
                async with pool.connection() as conn:
                    try:
                        yield conn
                    except asyncio.CancelledError:
                        # Cancel the running statement on the server too.
                        with suppress(psycopg.Error):
                            await conn.cancel_safe(timeout=1.0)
                        raise
        except (TimeoutError, psycopg.OperationalError) as e:
            raise Unavailable(f"permission store unavailable: {e}") from e

    async def find_one(self, file_id: str, user_id: str) -> Permission | None:
        """Get permission of user on file."""
        async with self._connection() as conn:
            cur = await conn.execute(
                f"SELECT {_COLUMNS} FROM permission WHERE file_id = %s AND user_id = %s",
                (file_id, user_id),
            )
            r = await cur.fetchone()
        return _to_permission(r) if r else None

    async def find_by_file(self, file_id: str) -> list[Permission]:
        """List permissions on file."""
        async with self._connection() as conn:
            cur = await conn.execute(
                f"SELECT {_COLUMNS} FROM permission WHERE file_id = %s",
                (file_id,),
            )
            rows = await cur.fetchall()
        return [_to_permission(r) for r in rows]

    async def find_by_user(self, user_id: str) -> list[Permission]:
        """List permissions of user."""
        async with self._connection() as conn:
            cur = await conn.execute(
                f"SELECT {_COLUMNS} FROM permission WHERE user_id = %s",
                (user_id,),
            )
            rows = await cur.fetchall()
        return [_to_permission(r) for r in rows]

    async def upsert(
        self,
        file_id: str,
        user_id: str,
        role: Role,
        creator: str,
        *,
        override: bool,
    ) -> tuple[Permission, bool]:
        """Insert permission or return the existing one, replacing its role on override."""
        query = _UPSERT_OVERRIDE if override else _UPSERT_KEEP
        async with self._connection() as conn:
            cur = await conn.execute(
                query,
                (uuid4(), file_id, user_id, role.value, creator),
            )
            r = await cur.fetchone()
        return _to_permission(r), bool(r[5])

    async def delete_one(self, file_id: str, user_id: str) -> Permission | None:
        """Delete permission of user on file, returning it."""
        async with self._connection() as conn:
            cur = await conn.execute(
                f"DELETE FROM permission WHERE file_id = %s AND user_id = %s RETURNING {_COLUMNS}",
                (file_id, user_id),
            )
            r = await cur.fetchone()
        return _to_permission(r) if r else None

    async def delete_many(self, file_id: str) -> list[Permission]:
        """Delete all permissions on file in one statement, returning them."""
        async with self._connection() as conn:
            cur = await conn.execute(
                f"DELETE FROM permission WHERE file_id = %s RETURNING {_COLUMNS}",
                (file_id,),
            )
            rows = await cur.fetchall()
        return [_to_permission(r) for r in rows]

    async def ping(self) -> None:
        """Round trip to the database."""
        async with self._connection(self._probe_pool) as conn:
            await conn.execute("SELECT 1")
