from sqlalchemy import String, DateTime, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from datetime import datetime
from trees_api.database.base import Base
from .insect_tree import InsectTree
from typing import TYPE_CHECKING

# Avoid circular import issues when using type hints for related models
if TYPE_CHECKING:
    from .insect import Insect


class Tree(Base):
    """
    SQLAlchemy model for a Tree.

    Python attributes are snake_case; the mapped column names keep the
    camelCase spelling used by the public JSON payloads (`heightFt`, ...).
    """
    __tablename__ = "Trees"

    # Auto-assigned integer primary key
    id: Mapped[int] = mapped_column(
        primary_key=True,
        autoincrement=True
    )

    # Common name of the tree, e.g. "General Sherman"
    tree: Mapped[str] = mapped_column(
        String(255),
        nullable=False
    )

    location: Mapped[str] = mapped_column(
        String(255),
        nullable=False
    )

    # Decimal columns, returned to Python as floats so JSON stays numeric
    height_ft: Mapped[float] = mapped_column(
        "heightFt",
        Numeric(10, 2, asdecimal=False),
        nullable=False
    )

    ground_circumference_ft: Mapped[float] = mapped_column(
        "groundCircumferenceFt",
        Numeric(10, 2, asdecimal=False),
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

    # Many-to-Many through InsectTrees. passive_deletes leaves join-row removal to
    # the ON DELETE CASCADE foreign keys instead of loading the collection first.
    insects: Mapped[list["Insect"]] = relationship(
        "Insect",
        secondary=InsectTree.__table__,
        back_populates="trees",
        passive_deletes=True,
        lazy="select"
    )

    def __repr__(self) -> str:
        return f"<Tree(id={self.id!r}, tree={self.tree!r}, height_ft={self.height_ft!r})>"
