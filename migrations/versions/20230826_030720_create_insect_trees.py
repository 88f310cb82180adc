"""create InsectTrees

Revision ID: 20230826_030720
Revises: 20230826_030310
Create Date: 2023-08-26 03:07:20.000000

Join table for the Insect <-> Tree many-to-many relationship. Both foreign
keys cascade on delete.
"""
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20230826_030720"
down_revision: Union[str, None] = "20230826_030310"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "InsectTrees",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("insectId", sa.Integer(), nullable=False),
        sa.Column("treeId", sa.Integer(), nullable=False),
        sa.Column("createdAt", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updatedAt", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(
            ["insectId"], ["Insects.id"],
            name=op.f("fk_InsectTrees_insectId_Insects"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["treeId"], ["Trees.id"],
            name=op.f("fk_InsectTrees_treeId_Trees"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_InsectTrees")),
    )


def downgrade() -> None:
    op.drop_table("InsectTrees")
