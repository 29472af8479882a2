"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from psycopg import AsyncConnection
from psycopg_pool import AsyncConnectionPool

from accesscontrol.infrastructure.persistence.postgres.role_assignment_repository import (
    PostgresRoleAssignmentRepository,
)
from accesscontrol.infrastructure.persistence.postgres.role_repository import (
    PostgresRoleRepository,
)


class PostgresUnitOfWork:
    """One pooled connection, one transaction, both repositories bound to it."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn
        self._roles = PostgresRoleRepository(conn)
        self._assignments = PostgresRoleAssignmentRepository(conn)

    @property
    def roles(self) -> PostgresRoleRepository:
        return self._roles

    @property
    def assignments(self) -> PostgresRoleAssignmentRepository:
        return self._assignments

    async def commit(self) -> None:
        await self._conn.commit()

    async def rollback(self) -> None:
        await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory (async context manager).

    Commits when the block exits normally, rolls back on any exception.
    """

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        async with pool.connection() as conn:
            uow = PostgresUnitOfWork(conn)
            try:
                yield uow
                await uow.commit()
            except BaseException:
                await uow.rollback()
                raise

    return factory
