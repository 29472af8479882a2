"""PostgreSQL role repository implementation."""

from collections import defaultdict
from uuid import UUID

from psycopg import AsyncConnection
from psycopg.errors import UniqueViolation

from accesscontrol.domain.entities import Permission, Role
from accesscontrol.domain.exceptions import Conflict
from accesscontrol.domain.value_objects import Scope, scope_of

ROLE_COLUMNS = (
    "r.id, r.name, r.description, r.scope_id, r.scope_type, "
    "r.is_system, r.created_at, r.updated_at"
)


def row_to_role(r: tuple, permissions: list[Permission] | None = None) -> Role:
    """Map a row selected with ROLE_COLUMNS (at offset 0) to a Role."""
    return Role(
        id=r[0],
        name=r[1],
        description=r[2],
        scope=scope_of(r[4], r[3]),
        is_system=r[5],
        created_at=r[6],
        updated_at=r[7],
        permissions=permissions or [],
    )


async def load_permissions(
    conn: AsyncConnection, role_ids: list[UUID]
) -> dict[UUID, list[Permission]]:
    """Permissions per role, in creation order."""
    if not role_ids:
        return {}
    cur = await conn.execute(
        "SELECT id, role_id, action, created_at FROM access_control.permissions "
        "WHERE role_id = ANY(%s) ORDER BY created_at, id",
        (role_ids,),
    )
    rows = await cur.fetchall()
    by_role: dict[UUID, list[Permission]] = defaultdict(list)
    for r in rows:
        by_role[r[1]].append(
            Permission(id=r[0], role_id=r[1], action=r[2], created_at=r[3])
        )
    return by_role


class PostgresRoleRepository:
    """Role repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, role_id: UUID) -> Role | None:
        """Get role by id, with permissions."""
        cur = await self._conn.execute(
            f"SELECT {ROLE_COLUMNS} FROM access_control.roles r WHERE r.id = %s",
            (role_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        perms = await load_permissions(self._conn, [r[0]])
        return row_to_role(r, perms.get(r[0]))

    async def list_by_scope(self, scope: Scope) -> list[Role]:
        """List roles defined in scope, with permissions."""
        cur = await self._conn.execute(
            f"SELECT {ROLE_COLUMNS} FROM access_control.roles r "
            "WHERE r.scope_id = %s AND r.scope_type = %s ORDER BY r.name",
            (scope.id, scope.type.value),
        )
        rows = await cur.fetchall()
        perms = await load_permissions(self._conn, [r[0] for r in rows])
        return [row_to_role(r, perms.get(r[0])) for r in rows]

    async def name_exists_in_scope(
        self, name: str, scope: Scope, exclude_role_id: UUID | None = None
    ) -> bool:
        """Check whether another role in scope already uses name."""
        q = (
            "SELECT 1 FROM access_control.roles "
            "WHERE name = %s AND scope_id = %s AND scope_type = %s"
        )
        params: list[object] = [name, scope.id, scope.type.value]
        if exclude_role_id is not None:
            q += " AND id <> %s"
            params.append(exclude_role_id)
        cur = await self._conn.execute(q + " LIMIT 1", tuple(params))
        return await cur.fetchone() is not None

    async def create(self, role: Role) -> Role:
        """Insert role and its permissions."""
        try:
            await self._conn.execute(
                "INSERT INTO access_control.roles "
                "(id, name, description, scope_id, scope_type, is_system, created_at, updated_at) "
                "VALUES (%s, %s, %s, %s, %s, %s, %s, %s)",
                (
                    role.id,
                    role.name,
                    role.description,
                    role.scope.id,
                    role.scope.type.value,
                    role.is_system,
                    role.created_at,
                    role.updated_at,
                ),
            )
        except UniqueViolation as e:
            raise Conflict(
                f"Role with name '{role.name}' already exists in this scope."
            ) from e
        await self._insert_permissions(role.permissions)
        return role

    async def update(self, role: Role) -> None:
        """Update role row and make stored permissions match role.permissions."""
        try:
            await self._conn.execute(
                "UPDATE access_control.roles SET name=%s, description=%s, updated_at=%s "
                "WHERE id=%s",
                (role.name, role.description, role.updated_at, role.id),
            )
        except UniqueViolation as e:
            raise Conflict(
                f"Role with name '{role.name}' already exists in this scope."
            ) from e
        await self._conn.execute(
            "DELETE FROM access_control.permissions "
            "WHERE role_id = %s AND NOT (action = ANY(%s))",
            (role.id, role.actions),
        )
        await self._insert_permissions(role.permissions)

    async def delete(self, role_id: UUID) -> None:
        """Delete role. Permissions cascade."""
        await self._conn.execute(
            "DELETE FROM access_control.roles WHERE id = %s",
            (role_id,),
        )

    async def _insert_permissions(self, permissions: list[Permission]) -> None:
        if not permissions:
            return
        async with self._conn.cursor() as cur:
            await cur.executemany(
                "INSERT INTO access_control.permissions (id, role_id, action, created_at) "
                "VALUES (%s, %s, %s, %s) ON CONFLICT (role_id, action) DO NOTHING",
                [(p.id, p.role_id, p.action, p.created_at) for p in permissions],
            )
