from .category import CategoryRequest, CategoryResponse
from .web import WebResponse, status_text

__all__ = [
    "CategoryRequest",
    "CategoryResponse",
    "WebResponse",
    "status_text",
]
