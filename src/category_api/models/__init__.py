r"""
Centralized access to the database models.

    from category_api.models import Category
"""

from .category import Category, NAME_MAX_LENGTH

__all__ = [
    "Category",
    "NAME_MAX_LENGTH",
]
