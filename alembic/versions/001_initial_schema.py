"""Initial schema - users, ABAC rules, permission templates, audit log.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

ROLES = ("SUPER_ADMIN", "COMPANY_ADMIN", "COMPANY_MANAGER", "COMPANY_USER", "INDIVIDUAL_USER")
TIERS = ("free", "premium", "enterprise")


def upgrade() -> None:
    op.create_table(
        "app_user",
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("role", sa.String(50), nullable=False, server_default="INDIVIDUAL_USER"),
        sa.Column("company_id", sa.String(255), nullable=True),
        sa.Column(
            "permissions",
            postgresql.ARRAY(sa.String(64)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("subscription_tier", sa.String(20), nullable=False, server_default="free"),
        sa.Column("email_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint(f"role IN {ROLES!r}", name="ck_app_user_role"),
        sa.CheckConstraint(f"subscription_tier IN {TIERS!r}", name="ck_app_user_tier"),
    )
    op.create_index("ix_app_user_company_id", "app_user", ["company_id"])
    op.create_index("ix_app_user_email", "app_user", ["email"], unique=True)

    op.create_table(
        "permission_rule",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("resource_type", sa.String(100), nullable=False),
        sa.Column("action", sa.String(100), nullable=False),
        sa.Column("effect", sa.String(10), nullable=False),
        sa.Column("conditions", postgresql.JSONB(), nullable=False, server_default="[]"),
        sa.Column("priority", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_by", sa.String(255), nullable=True),
        sa.Column("updated_by", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("effect IN ('allow', 'deny')", name="ck_permission_rule_effect"),
    )
    op.create_index(
        "ix_permission_rule_lookup",
        "permission_rule",
        ["resource_type", "action", "is_active"],
    )

    op.create_table(
        "permission_template",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "permissions",
            postgresql.ARRAY(sa.String(64)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column("created_by", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_permission_template_name", "permission_template", ["name"], unique=True)

    op.create_table(
        "permission_audit",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("permission", sa.String(64), nullable=True),
        sa.Column("action", sa.String(100), nullable=True),
        sa.Column("resource_type", sa.String(100), nullable=True),
        sa.Column("resource_id", sa.String(255), nullable=True),
        sa.Column("result", sa.Boolean(), nullable=False),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column("context", postgresql.JSONB(), nullable=False, server_default="{}"),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_permission_audit_user_time", "permission_audit", ["user_id", "timestamp"])
    op.create_index("ix_permission_audit_time", "permission_audit", ["timestamp"])


def downgrade() -> None:
    op.drop_table("permission_audit")
    op.drop_table("permission_template")
    op.drop_table("permission_rule")
    op.drop_table("app_user")
