from decimal import Decimal
from typing import Annotated

from pydantic import ConfigDict, Field, PlainSerializer

from library_catalog.constants import (
    BOOK_TITLE_MAX_LENGTH,
    IDENTITY_MAX,
    PRICE_DECIMAL_PLACES,
    PRICE_MAX_DIGITS,
    PUBLISHED_YEAR_MAX,
    PUBLISHED_YEAR_MIN,
)
from library_catalog.schemas.author import CatalogSchema

# Prices travel as JSON numbers, not strings
JsonDecimal = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json")
]


class BookInput(CatalogSchema):
    """Payload for creating or updating a book."""

    id: int | None = Field(
        default=None,
        ge=0,
        le=IDENTITY_MAX,
        description="Explicit identity; omit or send 0 to let the store assign one",
    )
    title: str = Field(
        ..., min_length=1, max_length=BOOK_TITLE_MAX_LENGTH, description="Book title"
    )
    published_year: int = Field(
        ..., ge=PUBLISHED_YEAR_MIN, le=PUBLISHED_YEAR_MAX
    )
    author_id: int = Field(
        ..., le=IDENTITY_MAX, description="Identity of an existing author"
    )
    price: Decimal = Field(
        ...,
        ge=0,
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "title": "The Hobbit",
                    "publishedYear": 1937,
                    "authorId": 1,
                    "price": 12.99,
                }
            ]
        }
    )


class BookRead(CatalogSchema):
    """Book as returned to clients."""

    id: int
    title: str
    published_year: int
    author_id: int
    price: JsonDecimal
