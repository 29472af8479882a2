"""Falcon ASGI application."""

from collections.abc import Sequence

import falcon.asgi
from falcon.asgi import App

from accesscontrol.application.dispatcher import Dispatcher
from accesscontrol.interfaces.api.errors import register_error_handlers
from accesscontrol.interfaces.api.resources.health import HealthResource, ReadinessCheck
from accesscontrol.interfaces.api.resources.permissions import (
    PermissionCheckResource,
    UserPermissionsResource,
)
from accesscontrol.interfaces.api.resources.roles import (
    ROLES_PATH,
    RoleAssignmentsResource,
    RoleResource,
    RolesResource,
)


def create_app(
    dispatcher: Dispatcher,
    middleware: Sequence[object] = (),
    readiness_check: ReadinessCheck | None = None,
) -> App:
    """Create Falcon ASGI app with routes and problem+json error handling."""
    app = falcon.asgi.App(middleware=list(middleware))
    register_error_handlers(app)

    health = HealthResource(readiness_check)
    app.add_route("/health", health)
    app.add_route("/health/ready", health, suffix="ready")
    app.add_route(ROLES_PATH, RolesResource(dispatcher))
    app.add_route(ROLES_PATH + "/{role_id:uuid}", RoleResource(dispatcher))
    app.add_route(
        ROLES_PATH + "/{role_id:uuid}/assignments", RoleAssignmentsResource(dispatcher)
    )
    app.add_route("/api/v1/permissions/check", PermissionCheckResource(dispatcher))
    app.add_route(
        "/api/v1/users/{user_id:uuid}/permissions", UserPermissionsResource(dispatcher)
    )
    return app
