"""
Repository layer.

    from category_api.repositories import CategoryRepository
"""

from .category_repository import CategoryRepository

__all__ = [
    "CategoryRepository",
]
