"""Forwards domain events to the audit service over HTTP."""

import json
import logging
from collections.abc import Sequence
from dataclasses import asdict
from typing import Any
from uuid import UUID

import httpx

from accesscontrol.domain.events import (
    DomainEvent,
    RoleAssignmentCreated,
    RoleAssignmentRevoked,
    RoleCreated,
    RoleDeleted,
    RoleUpdated,
)
from accesscontrol.domain.value_objects import Scope, ScopeType
from accesscontrol.request_context import get_actor_uuid, get_correlation_id

logger = logging.getLogger(__name__)

_ACTIONS: dict[type[DomainEvent], tuple[str, str]] = {
    RoleCreated: ("role.created", "Role"),
    RoleUpdated: ("role.updated", "Role"),
    RoleDeleted: ("role.deleted", "Role"),
    RoleAssignmentCreated: ("role_assignment.created", "RoleAssignment"),
    RoleAssignmentRevoked: ("role_assignment.revoked", "RoleAssignment"),
}


def _entity_id(event: DomainEvent) -> UUID:
    if isinstance(event, RoleAssignmentCreated | RoleAssignmentRevoked):
        return event.assignment_id
    return event.role_id


def _scope_fields(scope: Scope | None) -> dict[str, str]:
    if scope is None:
        return {}
    if scope.type is ScopeType.ORGANIZATION:
        return {"organizationId": str(scope.id)}
    return {"workspaceId": str(scope.id)}


def _details(event: DomainEvent) -> str:
    data = asdict(event)
    scope = getattr(event, "scope", None)
    if scope is not None:
        data["scope"] = {"type": scope.type.value, "id": str(scope.id)}
    return json.dumps(data, default=str)


def build_audit_entry(
    event: DomainEvent, actor_id: UUID, service_name: str, correlation_id: str | None
) -> dict[str, Any]:
    """Map a domain event to the audit service's create-entry payload."""
    action, entity_type = _ACTIONS[type(event)]
    payload: dict[str, Any] = {
        "userId": str(actor_id),
        "action": action,
        "entityType": entity_type,
        "entityId": str(_entity_id(event)),
        "serviceName": service_name,
        "details": _details(event),
        **_scope_fields(getattr(event, "scope", None)),
    }
    if correlation_id:
        payload["correlationId"] = correlation_id[:100]
    return payload


class AuditServiceEventPublisher:
    """Posts each event to ``{base_url}/api/v1/audit``.

    The write that produced the events has already committed, so delivery
    failures are logged and dropped.
    """

    def __init__(
        self,
        base_url: str,
        service_name: str = "access-control",
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._service_name = service_name
        self._timeout = timeout
        self._transport = transport

    async def publish(self, events: Sequence[DomainEvent]) -> None:
        if not events:
            return
        correlation_id = get_correlation_id()
        async with httpx.AsyncClient(
            base_url=self._base_url, timeout=self._timeout, transport=self._transport
        ) as client:
            for event in events:
                actor = get_actor_uuid()
                if actor is None and isinstance(event, RoleAssignmentCreated):
                    actor = event.assigned_by
                if actor is None:
                    logger.warning("No actor for %s; not sent to audit service", event.name)
                    continue
                payload = build_audit_entry(
                    event, actor, self._service_name, correlation_id
                )
                try:
                    r = await client.post("/api/v1/audit", json=payload)
                    r.raise_for_status()
                except httpx.HTTPError as e:
                    logger.warning("Audit delivery failed for %s: %s", event.name, e)
