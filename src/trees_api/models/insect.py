from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from datetime import datetime
from trees_api.database.base import Base
from .insect_tree import InsectTree
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .tree import Tree


class Insect(Base):
    """
    SQLAlchemy model for an Insect living on one or more trees.
    """
    __tablename__ = "Insects"

    id: Mapped[int] = mapped_column(
        primary_key=True,
        autoincrement=True
    )

    # Insect names are unique; seeders look insects up by exact name
    name: Mapped[str] = mapped_column(
        String(255),
        unique=True,
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

    # --- Relationships ---

    trees: Mapped[list["Tree"]] = relationship(
        "Tree",
        secondary=InsectTree.__table__,
        back_populates="insects",
        passive_deletes=True,
        lazy="select"
    )

    def __repr__(self) -> str:
        return f"<Insect(id={self.id!r}, name={self.name!r})>"
