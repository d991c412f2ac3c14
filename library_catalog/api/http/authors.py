"""
Author endpoints.

Endpoints are thin: they hand the raw body to CatalogService and let the
registered exception handlers render any failure.

Example:
    ```
    POST /api/authors
    {"name": "J. R. R. Tolkien", "birthDate": "1892-01-03"}
    ```
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, status

from library_catalog.dependencies import CatalogServiceDep
from library_catalog.models.author import Author
from library_catalog.models.book import Book
from library_catalog.schemas.author import AuthorRead
from library_catalog.schemas.book import BookRead
from library_catalog.schemas.errors import HTTPErrorResponse

router = APIRouter(prefix="/api/authors", tags=["authors"])

AUTHOR_EXAMPLES = {
    "tolkien": {
        "summary": "Store-assigned identity",
        "value": {"name": "J. R. R. Tolkien", "birthDate": "1892-01-03"},
    },
    "explicit_id": {
        "summary": "Explicit identity",
        "value": {"id": 2, "name": "H. P. Lovecraft", "birthDate": "1890-08-20"},
    },
}

AuthorBody = Annotated[
    dict[str, Any] | None, Body(openapi_examples=AUTHOR_EXAMPLES)
]


@router.get(
    "",
    response_model=list[AuthorRead],
    summary="Get all authors",
)
async def get_authors(service: CatalogServiceDep) -> list[Author]:
    return await service.list_authors()


@router.get(
    "/{author_id}",
    response_model=AuthorRead,
    summary="Get an author",
    responses={404: {"model": HTTPErrorResponse}},
)
async def get_author(author_id: int, service: CatalogServiceDep) -> Author:
    return await service.get_author(author_id)


@router.get(
    "/{author_id}/books",
    response_model=list[BookRead],
    summary="Get the books of an author",
    responses={404: {"model": HTTPErrorResponse}},
)
async def get_author_books(author_id: int, service: CatalogServiceDep) -> list[Book]:
    """
    List every book whose ``authorId`` is ``author_id``.

    Returns 404 when the author itself does not exist, and an empty list
    when it exists but owns no books.
    """
    return await service.list_author_books(author_id)


@router.post(
    "",
    response_model=AuthorRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new author",
    responses={
        400: {"model": HTTPErrorResponse},
        409: {"model": HTTPErrorResponse},
    },
)
async def create_author(
    service: CatalogServiceDep, payload: AuthorBody = None
) -> Author:
    """
    Create a new author.

    Send no ``id`` (or ``0``) to let the store assign one. An explicit
    ``id`` that is already taken is rejected with 409.

    Args:
        service: Catalog service (injected via dependency).
        payload: Author fields.

    Returns:
        Created author with its identity.
    """
    return await service.create_author(payload)


@router.put(
    "/{author_id}",
    response_model=AuthorRead,
    summary="Update an author",
    responses={
        400: {"model": HTTPErrorResponse},
        404: {"model": HTTPErrorResponse},
        409: {"model": HTTPErrorResponse},
    },
)
async def update_author(
    author_id: int, service: CatalogServiceDep, payload: AuthorBody = None
) -> Author:
    """
    Replace the fields of an existing author.

    The body ``id`` may be omitted, ``0``, or equal to ``author_id``; any
    other value is a 409.

    Args:
        author_id: ID of author to update.
        service: Catalog service (injected via dependency).
        payload: New author data.

    Returns:
        Updated author.
    """
    return await service.update_author(author_id, payload)


@router.delete(
    "/{author_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an author",
    responses={
        404: {"model": HTTPErrorResponse},
        409: {"model": HTTPErrorResponse},
    },
)
async def delete_author(author_id: int, service: CatalogServiceDep) -> None:
    """
    Delete an author that owns no books.

    Args:
        author_id: ID of author to delete.
        service: Catalog service (injected via dependency).
    """
    await service.delete_author(author_id)
