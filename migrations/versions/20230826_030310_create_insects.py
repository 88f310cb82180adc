"""create Insects

Revision ID: 20230826_030310
Revises: 20230826_025810
Create Date: 2023-08-26 03:03:10.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20230826_030310"
down_revision: Union[str, None] = "20230826_025810"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "Insects",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("createdAt", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updatedAt", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_Insects")),
        sa.UniqueConstraint("name", name=op.f("uq_Insects_name")),
    )


def downgrade() -> None:
    op.drop_table("Insects")
