"""
Centralized access to all database models of the Trees API.

Importing this package registers every table on `Base.metadata`, which is what
alembic autogenerate and the test fixtures rely on.

    from trees_api.models import Tree, Insect, InsectTree
"""

from .insect_tree import InsectTree
from .tree import Tree
from .insect import Insect

__all__ = [
    "Tree",
    "Insect",
    "InsectTree"
]
