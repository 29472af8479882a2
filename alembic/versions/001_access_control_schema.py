"""Access control schema - roles, permissions, role assignments.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

SCHEMA = "access_control"


def upgrade() -> None:
    op.execute(f"CREATE SCHEMA IF NOT EXISTS {SCHEMA}")

    op.create_table(
        "roles",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("scope_id", sa.UUID(), nullable=False),
        sa.Column("scope_type", sa.String(20), nullable=False),
        sa.Column("is_system", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "scope_type IN ('Organization', 'Workspace')", name="ck_roles_scope_type"
        ),
        schema=SCHEMA,
    )
    op.create_index(
        "ix_roles_name_scope",
        "roles",
        ["name", "scope_id", "scope_type"],
        unique=True,
        schema=SCHEMA,
    )
    op.create_index("ix_roles_scope", "roles", ["scope_id", "scope_type"], schema=SCHEMA)

    op.create_table(
        "permissions",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column(
            "role_id",
            sa.UUID(),
            sa.ForeignKey(f"{SCHEMA}.roles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("action", sa.String(200), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        schema=SCHEMA,
    )
    op.create_index(
        "ix_permissions_role_action",
        "permissions",
        ["role_id", "action"],
        unique=True,
        schema=SCHEMA,
    )

    op.create_table(
        "role_assignments",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column(
            "role_id",
            sa.UUID(),
            sa.ForeignKey(f"{SCHEMA}.roles.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("scope_id", sa.UUID(), nullable=False),
        sa.Column("scope_type", sa.String(20), nullable=False),
        sa.Column("assigned_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("assigned_by", sa.UUID(), nullable=False),
        schema=SCHEMA,
    )
    op.create_index(
        "ix_role_assignments_role_user_scope",
        "role_assignments",
        ["role_id", "user_id", "scope_id"],
        unique=True,
        schema=SCHEMA,
    )
    # Serves permission checks: all assignments of a user in one scope
    op.create_index(
        "ix_role_assignments_user_scope",
        "role_assignments",
        ["user_id", "scope_id"],
        schema=SCHEMA,
    )


def downgrade() -> None:
    op.drop_table("role_assignments", schema=SCHEMA)
    op.drop_table("permissions", schema=SCHEMA)
    op.drop_table("roles", schema=SCHEMA)
    op.execute(f"DROP SCHEMA IF EXISTS {SCHEMA}")
