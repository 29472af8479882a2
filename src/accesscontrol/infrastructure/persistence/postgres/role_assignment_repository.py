"""PostgreSQL role assignment repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection
from psycopg.errors import UniqueViolation

from accesscontrol.domain.entities import RoleAssignment
from accesscontrol.domain.exceptions import Conflict
from accesscontrol.domain.value_objects import scope_of
from accesscontrol.infrastructure.persistence.postgres.role_repository import (
    ROLE_COLUMNS,
    load_permissions,
    row_to_role,
)

_SELECT = (
    "SELECT ra.id, ra.role_id, ra.user_id, ra.scope_id, ra.scope_type, "
    f"ra.assigned_at, ra.assigned_by, {ROLE_COLUMNS} "
    "FROM access_control.role_assignments ra "
    "JOIN access_control.roles r ON r.id = ra.role_id"
)
_ROLE_OFFSET = 7


class PostgresRoleAssignmentRepository:
    """Role assignment repository implementation. Loads the assigned role."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def _fetch(self, where: str, params: tuple) -> list[RoleAssignment]:
        cur = await self._conn.execute(f"{_SELECT} WHERE {where}", params)
        rows = await cur.fetchall()
        perms = await load_permissions(self._conn, list({r[1] for r in rows}))
        return [
            RoleAssignment(
                id=r[0],
                role_id=r[1],
                user_id=r[2],
                scope=scope_of(r[4], r[3]),
                assigned_at=r[5],
                assigned_by=r[6],
                role=row_to_role(r[_ROLE_OFFSET:], perms.get(r[1])),
            )
            for r in rows
        ]

    async def get_by_id(self, assignment_id: UUID) -> RoleAssignment | None:
        """Get assignment by id."""
        found = await self._fetch("ra.id = %s", (assignment_id,))
        return found[0] if found else None

    async def find(
        self, role_id: UUID, user_id: UUID, scope_id: UUID
    ) -> RoleAssignment | None:
        """Get the assignment for (role, user, scope)."""
        found = await self._fetch(
            "ra.role_id = %s AND ra.user_id = %s AND ra.scope_id = %s",
            (role_id, user_id, scope_id),
        )
        return found[0] if found else None

    async def exists(self, role_id: UUID, user_id: UUID, scope_id: UUID) -> bool:
        """Check for an assignment of (role, user, scope)."""
        cur = await self._conn.execute(
            "SELECT 1 FROM access_control.role_assignments "
            "WHERE role_id = %s AND user_id = %s AND scope_id = %s LIMIT 1",
            (role_id, user_id, scope_id),
        )
        return await cur.fetchone() is not None

    async def list_by_user_and_scope(
        self, user_id: UUID, scope_id: UUID
    ) -> list[RoleAssignment]:
        """List user's assignments in scope, roles and permissions loaded."""
        return await self._fetch(
            "ra.user_id = %s AND ra.scope_id = %s ORDER BY ra.assigned_at",
            (user_id, scope_id),
        )

    async def count_by_role(self, role_id: UUID) -> int:
        """Count assignments referencing role."""
        cur = await self._conn.execute(
            "SELECT COUNT(*) FROM access_control.role_assignments WHERE role_id = %s",
            (role_id,),
        )
        r = await cur.fetchone()
        return r[0] if r else 0

    async def create(self, assignment: RoleAssignment) -> RoleAssignment:
        """Insert assignment."""
        try:
            await self._conn.execute(
                "INSERT INTO access_control.role_assignments "
                "(id, role_id, user_id, scope_id, scope_type, assigned_at, assigned_by) "
                "VALUES (%s, %s, %s, %s, %s, %s, %s)",
                (
                    assignment.id,
                    assignment.role_id,
                    assignment.user_id,
                    assignment.scope.id,
                    assignment.scope.type.value,
                    assignment.assigned_at,
                    assignment.assigned_by,
                ),
            )
        except UniqueViolation as e:
            raise Conflict("Role assignment already exists.") from e
        return assignment

    async def delete(self, assignment_id: UUID) -> None:
        """Delete assignment."""
        await self._conn.execute(
            "DELETE FROM access_control.role_assignments WHERE id = %s",
            (assignment_id,),
        )
