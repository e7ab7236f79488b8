"""create users, deeds and deed_catalog tables

Revision ID: 3f1d2c7a9b10
Revises:
Create Date: 2025-01-12 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3f1d2c7a9b10"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create the schema the handlers expect."""

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column(
            "role", sa.String(length=16), nullable=False, server_default=sa.text("'user'")
        ),
        sa.Column("credits", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("region", sa.String(length=120), nullable=True),
        sa.Column("sector", sa.String(length=120), nullable=True),
        sa.Column(
            "verification_status",
            sa.String(length=32),
            nullable=False,
            server_default=sa.text("'pending'"),
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("credits >= 0", name="ck_users_credits"),
    )

    op.create_table(
        "deeds",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "category",
            sa.String(length=64),
            nullable=False,
            server_default=sa.text("'general'"),
        ),
        sa.Column("proof_url", sa.String(length=2048), nullable=False),
        sa.Column("impact", sa.String(length=255), nullable=True),
        sa.Column("duration", sa.String(length=120), nullable=True),
        sa.Column(
            "status", sa.String(length=16), nullable=False, server_default=sa.text("'pending'")
        ),
        sa.Column("reward", sa.Integer(), nullable=True),
        sa.Column("credits", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("verified_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_deeds_user_id", "deeds", ["user_id"])
    op.create_index("ix_deeds_status", "deeds", ["status"])

    op.create_table(
        "deed_catalog",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=200), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("impact", sa.String(length=255), nullable=True),
        sa.Column("duration", sa.String(length=120), nullable=True),
    )


def downgrade() -> None:
    """Drop the deeds schema."""

    op.drop_table("deed_catalog")
    op.drop_index("ix_deeds_status", table_name="deeds")
    op.drop_index("ix_deeds_user_id", table_name="deeds")
    op.drop_table("deeds")
    op.drop_table("users")
