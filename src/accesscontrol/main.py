"""Application entry point and composition root."""

import argparse
import logging
import sys

from falcon.asgi import App

from accesscontrol import __version__
from accesscontrol.application.dispatcher import Dispatcher
from accesscontrol.application.ports import EventPublisher
from accesscontrol.application.use_cases.permission.check_permission import (
    CheckPermissionQuery,
    CheckPermissionUseCase,
)
from accesscontrol.application.use_cases.permission.get_user_permissions import (
    GetUserPermissionsQuery,
    GetUserPermissionsUseCase,
)
from accesscontrol.application.use_cases.role.create_role import (
    CreateRoleCommand,
    CreateRoleUseCase,
)
from accesscontrol.application.use_cases.role.delete_role import (
    DeleteRoleCommand,
    DeleteRoleUseCase,
)
from accesscontrol.application.use_cases.role.get_role import GetRoleQuery, GetRoleUseCase
from accesscontrol.application.use_cases.role.list_roles import (
    ListRolesByScopeQuery,
    ListRolesByScopeUseCase,
)
from accesscontrol.application.use_cases.role.update_role import (
    UpdateRoleCommand,
    UpdateRoleUseCase,
)
from accesscontrol.application.use_cases.role_assignment.assign_role import (
    AssignRoleCommand,
    AssignRoleUseCase,
)
from accesscontrol.application.use_cases.role_assignment.revoke_role import (
    RevokeRoleCommand,
    RevokeRoleUseCase,
)
from accesscontrol.application.validation import RequestValidators
from accesscontrol.config import Settings, get_settings
from accesscontrol.infrastructure.auth.keycloak_provider import KeycloakProvider
from accesscontrol.infrastructure.events import (
    AuditServiceEventPublisher,
    CompositeEventPublisher,
    LoggingEventPublisher,
)
from accesscontrol.infrastructure.persistence.migrations import upgrade_head
from accesscontrol.infrastructure.persistence.postgres.connection import create_pool, ping
from accesscontrol.infrastructure.persistence.postgres.unit_of_work import (
    create_uow_factory,
)
from accesscontrol.interfaces.api.app import create_app
from accesscontrol.interfaces.api.middleware.auth import AuthMiddleware
from accesscontrol.interfaces.api.middleware.correlation import CorrelationIdMiddleware
from accesscontrol.interfaces.api.middleware.cors import CORSMiddleware
from accesscontrol.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from accesscontrol.logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_event_publisher(settings: Settings) -> EventPublisher:
    """Always log events; also forward to the audit service when configured."""
    publishers: list[EventPublisher] = [LoggingEventPublisher()]
    if settings.audit_service_url:
        publishers.append(
            AuditServiceEventPublisher(
                base_url=settings.audit_service_url,
                service_name=settings.service_name,
                timeout=settings.audit_timeout_seconds,
            )
        )
    return CompositeEventPublisher(publishers)


def build_dispatcher(
    uow_factory, event_publisher: EventPublisher, permission_pattern: str
) -> Dispatcher:
    """Wire every command and query to its use case and validators."""
    handlers = {
        CreateRoleCommand: CreateRoleUseCase(uow_factory),
        UpdateRoleCommand: UpdateRoleUseCase(uow_factory),
        DeleteRoleCommand: DeleteRoleUseCase(uow_factory),
        GetRoleQuery: GetRoleUseCase(uow_factory),
        ListRolesByScopeQuery: ListRolesByScopeUseCase(uow_factory),
        AssignRoleCommand: AssignRoleUseCase(uow_factory),
        RevokeRoleCommand: RevokeRoleUseCase(uow_factory),
        CheckPermissionQuery: CheckPermissionUseCase(uow_factory),
        GetUserPermissionsQuery: GetUserPermissionsUseCase(uow_factory),
    }
    return Dispatcher(
        handlers, RequestValidators(permission_pattern).table(), event_publisher
    )


def create_app_from_settings(settings: Settings | None = None) -> App:
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()
    setup_logging(settings)
    logger.info("Starting accesscontrol v%s (%s)", __version__, settings.environment)

    pool = create_pool(
        settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
    )
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        level = logging.ERROR if settings.environment == "production" else logging.WARNING
        logger.log(level, "No Keycloak client secret configured; requests run as anonymous")

    dispatcher = build_dispatcher(
        uow_factory, build_event_publisher(settings), settings.permission_pattern
    )

    async def readiness() -> bool:
        return await ping(pool)

    return create_app(
        dispatcher,
        middleware=[
            CorrelationIdMiddleware(),
            CORSMiddleware(settings.cors_origin_list),
            PoolLifespanMiddleware(
                pool,
                settings.database_url if settings.run_migrations_on_startup else None,
            ),
            AuthMiddleware(keycloak),
        ],
        readiness_check=readiness,
    )


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "accesscontrol.main:create_app_from_settings",
        factory=True,
        host=args.host or settings.host,
        port=args.port or settings.port,
        log_config=None,
    )
    return 0


def _migrate(args: argparse.Namespace) -> int:
    settings = get_settings()
    setup_logging(settings)
    upgrade_head(settings.database_url)
    return 0


def _version(args: argparse.Namespace) -> int:
    print(f"accesscontrol v{__version__}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="accesscontrol", description="Role-based access control service"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API with uvicorn")
    serve.add_argument("--host", default=None, help="Bind address (default: settings.host)")
    serve.add_argument("--port", type=int, default=None, help="Bind port (default: settings.port)")
    serve.set_defaults(func=_serve)

    migrate = sub.add_parser("migrate", help="Apply database migrations (alembic upgrade head)")
    migrate.set_defaults(func=_migrate)

    version = sub.add_parser("version", help="Print the version")
    version.set_defaults(func=_version)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
