from pydantic import BaseModel, ConfigDict, Field

from ..models.category import NAME_MAX_LENGTH


class CategoryRequest(BaseModel):
    """Body of POST /api/categories and PUT /api/categories/{id}."""

    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)


class CategoryResponse(BaseModel):
    """Public projection of a Category row."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
