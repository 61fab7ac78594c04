"""JSON shapes of the permission RPC messages."""

import json
from typing import Any

import falcon.asgi

from permission_service.domain.entities import FileRole, Permission, UserRole
from permission_service.domain.exceptions import InvalidArgument
from permission_service.domain.value_objects import Role


async def read_body(req: falcon.asgi.Request) -> dict[str, Any]:
    """Request body as a JSON object; an empty body reads as {}.

    Uses the body already buffered by BodyLimitMiddleware when there is one.
    """
    raw = getattr(req.context, "body", None)
    try:
        if raw is None:
            body = await req.get_media(default_when_empty={})
        else:
            body = json.loads(raw) if raw.strip() else {}
    except (falcon.MediaMalformedError, ValueError) as e:
        raise InvalidArgument("request body is not valid JSON") from e
    if not isinstance(body, dict):
        raise InvalidArgument("request body must be a JSON object")
    return body


def get_str(body: dict[str, Any], key: str) -> str:
    value = body.get(key, "")
    if not isinstance(value, str):
        raise InvalidArgument(f"{key} must be a string")
    return value


def get_bool(body: dict[str, Any], key: str) -> bool:
    value = body.get(key, False)
    if not isinstance(value, bool):
        raise InvalidArgument(f"{key} must be a boolean")
    return value


def get_role(body: dict[str, Any], key: str = "role") -> Role:
    """Role by name. A missing role reads as NONE, the wire default."""
    value = body.get(key, Role.NONE.value)
    try:
        return Role(value)
    except ValueError as e:
        names = ", ".join(r.value for r in Role)
        raise InvalidArgument(f"{key} must be one of {names}") from e


def permission_to_dict(p: Permission) -> dict[str, Any]:
    return {
        "id": str(p.id),
        "fileID": p.file_id,
        "userID": p.user_id,
        "role": p.role.value,
        "creator": p.creator,
    }


def user_role_to_dict(r: UserRole) -> dict[str, Any]:
    return {"userID": r.user_id, "role": r.role.value, "creator": r.creator}


def file_role_to_dict(r: FileRole) -> dict[str, Any]:
    return {"fileID": r.file_id, "role": r.role.value, "creator": r.creator}
