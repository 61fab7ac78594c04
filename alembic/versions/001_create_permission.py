"""Create permission table.

Revision ID: 001
Revises:
Create Date: 2026-10-17

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "permission",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("file_id", sa.Text(), nullable=False),
        sa.Column("user_id", sa.Text(), nullable=False),
        sa.Column("role", sa.String(16), nullable=False),
        sa.Column("creator", sa.Text(), nullable=False, server_default=""),
        sa.CheckConstraint("role IN ('NONE', 'WRITE', 'READ')", name="ck_permission_role"),
    )
    # ON CONFLICT (file_id, user_id) in the store relies on this index.
    op.create_index("ix_permission_file_user", "permission", ["file_id", "user_id"], unique=True)
    op.create_index("ix_permission_user", "permission", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_permission_user", table_name="permission")
    op.drop_index("ix_permission_file_user", table_name="permission")
    op.drop_table("permission")
