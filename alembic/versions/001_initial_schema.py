"""Initial schema - organization members, groups, projects, secrets, access policies.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

# discriminator -> (subject column, resource column)
_POLICY_KEYS = {
    "user_project": ("organization_user_id", "granted_project_id"),
    "group_project": ("group_id", "granted_project_id"),
    "service_account_project": ("service_account_id", "granted_project_id"),
    "user_service_account": ("organization_user_id", "granted_service_account_id"),
    "group_service_account": ("group_id", "granted_service_account_id"),
}


def upgrade() -> None:
    op.create_table(
        "organization_user",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("organization_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=True),
        sa.Column("type", sa.String(20), nullable=False, server_default="user"),
    )
    op.create_index("ix_organization_user_user_id", "organization_user", ["user_id"])
    op.create_index(
        "ix_organization_user_organization_id", "organization_user", ["organization_id"]
    )

    op.create_table(
        "group",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("organization_id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
    )

    op.create_table(
        "group_user",
        sa.Column("group_id", sa.UUID(), sa.ForeignKey("group.id", ondelete="CASCADE"), primary_key=True),
        sa.Column(
            "organization_user_id",
            sa.UUID(),
            sa.ForeignKey("organization_user.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )
    op.create_index("ix_group_user_organization_user_id", "group_user", ["organization_user_id"])

    op.create_table(
        "project",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("organization_id", sa.UUID(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("creation_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("revision_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("deleted_date", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_project_organization_id", "project", ["organization_id"])

    op.create_table(
        "service_account",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("organization_id", sa.UUID(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("creation_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("revision_date", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_service_account_organization_id", "service_account", ["organization_id"])

    # key/value/note arrive encrypted from the client and are stored verbatim
    op.create_table(
        "secret",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("organization_id", sa.UUID(), nullable=False),
        sa.Column("key", sa.Text(), nullable=False),
        sa.Column("value", sa.Text(), nullable=False),
        sa.Column("note", sa.Text(), nullable=False),
        sa.Column("creation_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("revision_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("deleted_date", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_secret_organization_id", "secret", ["organization_id"])

    op.create_table(
        "project_secret",
        sa.Column("project_id", sa.UUID(), sa.ForeignKey("project.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("secret_id", sa.UUID(), sa.ForeignKey("secret.id", ondelete="CASCADE"), primary_key=True),
    )
    op.create_index("ix_project_secret_secret_id", "project_secret", ["secret_id"])

    op.create_table(
        "access_policy",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("discriminator", sa.String(50), nullable=False),
        sa.Column(
            "organization_user_id",
            sa.UUID(),
            sa.ForeignKey("organization_user.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("group_id", sa.UUID(), sa.ForeignKey("group.id", ondelete="CASCADE"), nullable=True),
        sa.Column(
            "service_account_id",
            sa.UUID(),
            sa.ForeignKey("service_account.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column(
            "granted_project_id",
            sa.UUID(),
            sa.ForeignKey("project.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column(
            "granted_service_account_id",
            sa.UUID(),
            sa.ForeignKey("service_account.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("write", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("creation_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("revision_date", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("NOT write OR read", name="ck_access_policy_write_requires_read"),
        sa.CheckConstraint(
            "discriminator IN ("
            + ", ".join(f"'{d}'" for d in _POLICY_KEYS)
            + ")",
            name="ck_access_policy_discriminator",
        ),
    )
    op.create_index("ix_access_policy_granted_project_id", "access_policy", ["granted_project_id"])
    op.create_index(
        "ix_access_policy_granted_service_account_id",
        "access_policy",
        ["granted_service_account_id"],
    )
    # At most one grant per (subject, resource) for each policy kind
    for discriminator, columns in _POLICY_KEYS.items():
        op.create_index(
            f"ux_access_policy_{discriminator}",
            "access_policy",
            list(columns),
            unique=True,
            postgresql_where=sa.text(f"discriminator = '{discriminator}'"),
        )


def downgrade() -> None:
    for discriminator in _POLICY_KEYS:
        op.drop_index(f"ux_access_policy_{discriminator}", table_name="access_policy")
    op.drop_table("access_policy")
    op.drop_table("project_secret")
    op.drop_table("secret")
    op.drop_table("service_account")
    op.drop_table("project")
    op.drop_table("group_user")
    op.drop_table("group")
    op.drop_table("organization_user")
