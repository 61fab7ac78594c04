"""Permission RPC resources."""

import falcon.asgi

from permission_service.application.permission_controller import PermissionController
from permission_service.interfaces.api.resources.serialization import (
    file_role_to_dict,
    get_bool,
    get_role,
    get_str,
    permission_to_dict,
    read_body,
    user_role_to_dict,
)

RPC_METHODS = {
    "CreatePermission": "create_permission",
    "DeletePermission": "delete_permission",
    "GetPermission": "get_permission",
    "GetFilePermissions": "get_file_permissions",
    "GetUserPermissions": "get_user_permissions",
    "IsPermitted": "is_permitted",
    "DeleteFilePermissions": "delete_file_permissions",
}


class PermissionRpcResource:
    """POST /v1/permission/{Method} - one responder per RPC method.

    Domain errors propagate to the app's error handler.
    """

    def __init__(self, controller: PermissionController) -> None:
        self._controller = controller

    async def on_post_create_permission(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Create permission, or override an existing one when asked."""
        body = await read_body(req)
        permission = await self._controller.create_permission(
            get_str(body, "fileID"),
            get_str(body, "userID"),
            get_role(body),
            get_str(body, "creator"),
            override=get_bool(body, "override"),
        )
        resp.media = permission_to_dict(permission)
        resp.status = falcon.HTTP_200

    async def on_post_delete_permission(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Delete permission and return it."""
        body = await read_body(req)
        permission = await self._controller.delete_permission(
            get_str(body, "fileID"), get_str(body, "userID")
        )
        resp.media = permission_to_dict(permission)
        resp.status = falcon.HTTP_200

    async def on_post_get_permission(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        body = await read_body(req)
        permission = await self._controller.get_permission(
            get_str(body, "fileID"), get_str(body, "userID")
        )
        resp.media = permission_to_dict(permission)
        resp.status = falcon.HTTP_200

    async def on_post_get_file_permissions(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        body = await read_body(req)
        roles = await self._controller.get_file_permissions(get_str(body, "fileID"))
        resp.media = {"permissions": [user_role_to_dict(r) for r in roles]}
        resp.status = falcon.HTTP_200

    async def on_post_get_user_permissions(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        body = await read_body(req)
        roles = await self._controller.get_user_permissions(get_str(body, "userID"))
        resp.media = {"permissions": [file_role_to_dict(r) for r in roles]}
        resp.status = falcon.HTTP_200

    async def on_post_is_permitted(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        body = await read_body(req)
        permitted = await self._controller.is_permitted(
            get_str(body, "fileID"), get_str(body, "userID"), get_role(body)
        )
        resp.media = {"permitted": permitted}
        resp.status = falcon.HTTP_200

    async def on_post_delete_file_permissions(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Delete all permissions of a file, e.g. when the file is removed."""
        body = await read_body(req)
        deleted = await self._controller.delete_file_permissions(get_str(body, "fileID"))
        resp.media = {"permissions": [permission_to_dict(p) for p in deleted]}
        resp.status = falcon.HTTP_200


def add_rpc_routes(app: falcon.asgi.App, resource: PermissionRpcResource) -> None:
    """Mount every RPC method of ``resource`` under /v1/permission/."""
    for method, suffix in RPC_METHODS.items():
        app.add_route(f"/v1/permission/{method}", resource, suffix=suffix)
