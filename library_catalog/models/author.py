from datetime import date

from sqlmodel import Field

from library_catalog.constants import AUTHOR_NAME_MAX_LENGTH
from library_catalog.models.base import BaseModel


class Author(BaseModel, table=True):
    """
    SQLModel representing an author entity in the database.

    Use AuthorRepository (or CatalogStore) for all database operations.

    Attributes:
        id: Primary key identifier for the author
        name: Name of the author
        birth_date: Date of birth
    """

    __table_args__ = {"extend_existing": True}

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=AUTHOR_NAME_MAX_LENGTH)
    birth_date: date
