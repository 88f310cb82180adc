"""
Declarative base shared by every ORM model of the Trees API.

Tables use pluralised, capitalised names and camelCase columns
(`Trees.heightFt`, `InsectTrees.insectId`, ...); the Python
attributes on the models are snake_case and map onto those names explicitly.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


# Naming convention for constraints and indexes, so alembic revisions and
# metadata.create_all() produce identical constraint names.
Base.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}
