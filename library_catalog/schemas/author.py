from datetime import date

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from library_catalog.constants import AUTHOR_NAME_MAX_LENGTH, IDENTITY_MAX


class CatalogSchema(BaseModel):  # type: ignore[misc]
    """
    Base for catalog payloads.

    Field names are camelCase on the wire (``birthDate``) and snake_case in
    Python. Both spellings are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class AuthorInput(CatalogSchema):
    """Payload for creating or updating an author."""

    id: int | None = Field(
        default=None,
        ge=0,
        le=IDENTITY_MAX,
        description="Explicit identity; omit or send 0 to let the store assign one",
    )
    name: str = Field(
        ..., min_length=1, max_length=AUTHOR_NAME_MAX_LENGTH, description="Author name"
    )
    birth_date: date = Field(..., description="Date of birth")

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [{"name": "J. R. R. Tolkien", "birthDate": "1892-01-03"}]
        }
    )


class AuthorRead(CatalogSchema):
    """Author as returned to clients."""

    id: int
    name: str
    birth_date: date
