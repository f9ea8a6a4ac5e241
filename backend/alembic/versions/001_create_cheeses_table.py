"""Create cheeses table

Revision ID: 001
Revises: None
Create Date: 2024-06-01 00:00:00.000000+00:00

What:  Creates the `cheeses` table: one row per cheese, image bytes inline.

Rollback: downgrade() drops the table (all cheeses and images are lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "cheeses",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("price", sa.Float(), nullable=False),
        # Enum member name (WHITE, CREAM, YELLOW, ORANGE, BROWN) as VARCHAR
        sa.Column(
            "color",
            sa.Enum(
                "WHITE", "CREAM", "YELLOW", "ORANGE", "BROWN",
                native_enum=False,
                length=16,
                name="cheese_color",
            ),
            nullable=False,
        ),
        sa.Column("image_name", sa.String(255), nullable=True),
        sa.Column("image_type", sa.String(255), nullable=True),
        # bytea on PostgreSQL, BLOB on SQLite
        sa.Column("image_blob", sa.LargeBinary(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("cheeses")
