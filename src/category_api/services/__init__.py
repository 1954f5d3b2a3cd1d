from .category_service import CategoryService, to_category_response

__all__ = ["CategoryService", "to_category_response"]
