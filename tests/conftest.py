"""Pytest fixtures for permission service tests."""

from __future__ import annotations

import asyncio
from uuid import uuid4

import pytest

from permission_service.application.permission_controller import PermissionController
from permission_service.domain.entities import Permission
from permission_service.domain.exceptions import Unavailable
from permission_service.domain.value_objects import Role


# --- Fake store ---


class FakePermissionStore:
    """In-memory permission store.

    ``down`` makes every call raise Unavailable; ``ping_delay`` makes ping
    hang for that many seconds.
    """

    def __init__(self) -> None:
        self._by_key: dict[tuple[str, str], Permission] = {}
        self.down = False
        self.ping_delay = 0.0
        self.calls: list[str] = []

    def _enter(self, name: str) -> None:
        self.calls.append(name)
        if self.down:
            raise Unavailable("permission store unavailable: connection refused")

    def add(self, file_id: str, user_id: str, role: Role, creator: str = "creator") -> Permission:
        """Helper to seed a permission for tests."""
        permission = Permission(
            id=uuid4(), file_id=file_id, user_id=user_id, role=role, creator=creator
        )
        self._by_key[(file_id, user_id)] = permission
        return permission

    async def find_one(self, file_id: str, user_id: str) -> Permission | None:
        self._enter("find_one")
        return self._by_key.get((file_id, user_id))

    async def find_by_file(self, file_id: str) -> list[Permission]:
        self._enter("find_by_file")
        return [p for p in self._by_key.values() if p.file_id == file_id]

    async def find_by_user(self, user_id: str) -> list[Permission]:
        self._enter("find_by_user")
        return [p for p in self._by_key.values() if p.user_id == user_id]

    async def upsert(
        self,
        file_id: str,
        user_id: str,
        role: Role,
        creator: str,
        *,
        override: bool,
    ) -> tuple[Permission, bool]:
        self._enter("upsert")
        existing = self._by_key.get((file_id, user_id))
        if existing is None:
            return self.add(file_id, user_id, role, creator), True
        if override:
            existing.role = role
        return existing, False

    async def delete_one(self, file_id: str, user_id: str) -> Permission | None:
        self._enter("delete_one")
        return self._by_key.pop((file_id, user_id), None)

    async def delete_many(self, file_id: str) -> list[Permission]:
        self._enter("delete_many")
        keys = [k for k in self._by_key if k[0] == file_id]
        return [self._by_key.pop(k) for k in keys]

    async def ping(self) -> None:
        self._enter("ping")
        if self.ping_delay:
            await asyncio.sleep(self.ping_delay)


# --- Fixtures ---


@pytest.fixture
def fake_store() -> FakePermissionStore:
    """Fresh in-memory store for each test."""
    return FakePermissionStore()


@pytest.fixture
def controller(fake_store: FakePermissionStore) -> PermissionController:
    """Controller over the in-memory store."""
    return PermissionController(fake_store)
