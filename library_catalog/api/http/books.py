"""Book endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, status

from library_catalog.dependencies import CatalogServiceDep
from library_catalog.models.book import Book
from library_catalog.schemas.book import BookRead
from library_catalog.schemas.errors import HTTPErrorResponse

router = APIRouter(prefix="/api/books", tags=["books"])

BOOK_EXAMPLES = {
    "hobbit": {
        "summary": "Store-assigned identity",
        "value": {
            "title": "The Hobbit",
            "publishedYear": 1937,
            "authorId": 1,
            "price": 12.99,
        },
    },
}

BookBody = Annotated[dict[str, Any] | None, Body(openapi_examples=BOOK_EXAMPLES)]


@router.get("", response_model=list[BookRead], summary="Get all books")
async def get_books(service: CatalogServiceDep) -> list[Book]:
    return await service.list_books()


@router.get(
    "/{book_id}",
    response_model=BookRead,
    summary="Get a book",
    responses={404: {"model": HTTPErrorResponse}},
)
async def get_book(book_id: int, service: CatalogServiceDep) -> Book:
    return await service.get_book(book_id)


@router.post(
    "",
    response_model=BookRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new book",
    responses={
        400: {"model": HTTPErrorResponse},
        409: {"model": HTTPErrorResponse},
        422: {"model": HTTPErrorResponse},
    },
)
async def create_book(service: CatalogServiceDep, payload: BookBody = None) -> Book:
    """
    Create a new book for an existing author.

    Returns 422 with code ``reference_missing`` when ``authorId`` names no
    author.
    """
    return await service.create_book(payload)


@router.put(
    "/{book_id}",
    response_model=BookRead,
    summary="Update a book",
    responses={
        400: {"model": HTTPErrorResponse},
        404: {"model": HTTPErrorResponse},
        409: {"model": HTTPErrorResponse},
        422: {"model": HTTPErrorResponse},
    },
)
async def update_book(
    book_id: int, service: CatalogServiceDep, payload: BookBody = None
) -> Book:
    return await service.update_book(book_id, payload)


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a book",
    responses={404: {"model": HTTPErrorResponse}},
)
async def delete_book(book_id: int, service: CatalogServiceDep) -> None:
    await service.delete_book(book_id)
