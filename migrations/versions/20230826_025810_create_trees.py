"""create Trees

Revision ID: 20230826_025810
Revises: None
Create Date: 2023-08-26 02:58:10.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20230826_025810"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "Trees",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("tree", sa.String(255), nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("heightFt", sa.Numeric(10, 2), nullable=False),
        sa.Column("groundCircumferenceFt", sa.Numeric(10, 2), nullable=False),
        sa.Column("createdAt", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updatedAt", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_Trees")),
    )


def downgrade() -> None:
    op.drop_table("Trees")
