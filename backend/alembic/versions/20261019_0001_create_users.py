"""Create users table."""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

revision: str = "20261019_0001"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_digest", sa.String(length=255), nullable=False),
        sa.Column("remember_token", sa.String(length=64), nullable=False),
        sa.Column(
            "admin",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    # Emails are stored lower-cased, so a plain unique index is case-insensitive.
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_remember_token", "users", ["remember_token"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_users_remember_token", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
