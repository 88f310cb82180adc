from sqlalchemy import DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func
from datetime import datetime
from trees_api.database.base import Base


class InsectTree(Base):
    """
    Join entity for the Insect <-> Tree many-to-many relationship.

    Both foreign keys cascade on delete: removing a Tree or an Insect removes
    its join rows. There is no unique constraint on (insectId, treeId); the
    insect-tree seeder checks for an existing pair before associating.
    """
    __tablename__ = "InsectTrees"

    id: Mapped[int] = mapped_column(
        primary_key=True,
        autoincrement=True
    )

    insect_id: Mapped[int] = mapped_column(
        "insectId",
        ForeignKey("Insects.id", ondelete="CASCADE"),
        nullable=False
    )

    tree_id: Mapped[int] = mapped_column(
        "treeId",
        ForeignKey("Trees.id", ondelete="CASCADE"),
        nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(
        "createdAt",
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    updated_at: Mapped[datetime] = mapped_column(
        "updatedAt",
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<InsectTree(insect_id={self.insect_id!r}, tree_id={self.tree_id!r})>"
