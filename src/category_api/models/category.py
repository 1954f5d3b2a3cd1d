from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from ..database.base import Base

NAME_MAX_LENGTH = 200


class Category(Base):
    """
    SQLAlchemy model for Category.

    `id` is assigned by the store on insert and never changes afterwards;
    `name` is the only mutable column.
    """
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    name: Mapped[str] = mapped_column(
        String(NAME_MAX_LENGTH),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id!r}, name={self.name!r})>"
