"""
Repository layer initialization module.

Usage:
    from trees_api.repositories import TreeRepository, InsectRepository
"""

from .base_repository import BaseRepository
from .tree_repository import TreeRepository
from .insect_repository import InsectRepository

__all__ = [
    "BaseRepository",
    "TreeRepository",
    "InsectRepository",
]
