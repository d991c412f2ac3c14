from decimal import Decimal

from sqlalchemy import Column, ForeignKey, Integer
from sqlmodel import Field

from library_catalog.constants import (
    BOOK_TITLE_MAX_LENGTH,
    PRICE_DECIMAL_PLACES,
    PRICE_MAX_DIGITS,
)
from library_catalog.models.base import BaseModel


class Book(BaseModel, table=True):
    """
    SQLModel representing a book entity in the database.

    ``author_id`` is a plain foreign key. The store refuses to delete an
    author that is still referenced (``ON DELETE RESTRICT``).

    Attributes:
        id: Primary key identifier for the book
        title: Title of the book
        published_year: Year of first publication
        author_id: Primary key of the owning author
        price: Catalog price
    """

    __table_args__ = {"extend_existing": True}

    id: int | None = Field(default=None, primary_key=True)
    title: str = Field(max_length=BOOK_TITLE_MAX_LENGTH)
    published_year: int
    author_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("author.id", ondelete="RESTRICT"),
            nullable=False,
            index=True,
        )
    )
    price: Decimal = Field(
        max_digits=PRICE_MAX_DIGITS, decimal_places=PRICE_DECIMAL_PLACES
    )
