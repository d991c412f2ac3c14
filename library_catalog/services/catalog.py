"""
Catalog service: the single entry point for catalog operations.

Each public method runs exactly one command inside one store transaction,
so either every write of the operation is committed or none is.

Example:
    ```python
    async with async_session() as session:
        service = CatalogService(CatalogStore(session))
        author = await service.create_author(
            {"name": "J. R. R. Tolkien", "birthDate": "1892-01-03"}
        )
    ```
"""

from typing import Any

from library_catalog.commands.author_commands import (
    CreateAuthorCommand,
    DeleteAuthorCommand,
    GetAuthorCommand,
    ListAuthorBooksCommand,
    ListAuthorsCommand,
    UpdateAuthorCommand,
)
from library_catalog.commands.base import BaseCommand, Payload, UpdateRequest
from library_catalog.commands.book_commands import (
    CreateBookCommand,
    DeleteBookCommand,
    GetBookCommand,
    ListBooksCommand,
    UpdateBookCommand,
)
from library_catalog.logging import reset_log_context, set_log_context
from library_catalog.models.author import Author
from library_catalog.models.book import Book
from library_catalog.protocols import CatalogStoreProtocol


class CatalogService:
    """
    Author and Book operations with transactional guarantees.

    Attributes:
        store: Store the commands read from and write to.
    """

    def __init__(self, store: CatalogStoreProtocol):
        self.store = store

    async def _run(self, command: BaseCommand[Any, Any], input_data: Any = None):
        token = set_log_context(command=type(command).__name__)
        try:
            async with self.store.transaction():
                return await command.execute(input_data)
        finally:
            reset_log_context(token)

    # Authors

    async def list_authors(self) -> list[Author]:
        return await self._run(ListAuthorsCommand(self.store))

    async def get_author(self, author_id: int) -> Author:
        return await self._run(GetAuthorCommand(self.store), author_id)

    async def create_author(self, payload: Payload) -> Author:
        """
        Create an author.

        Args:
            payload: Author fields; ``id`` of 0 or absent lets the store
                assign one.

        Raises:
            ValidationError: Payload missing or invalid.
            ConflictError: Explicit identity already taken.
        """
        return await self._run(CreateAuthorCommand(self.store), payload)

    async def update_author(self, author_id: int, payload: Payload) -> Author:
        """
        Replace the fields of an existing author.

        Raises:
            NotFoundError: No author with ``author_id``.
            ValidationError: Payload missing or invalid.
            ConflictError: Body identity differs from ``author_id``.
        """
        return await self._run(
            UpdateAuthorCommand(self.store), UpdateRequest(author_id, payload)
        )

    async def delete_author(self, author_id: int) -> None:
        """
        Delete an author that owns no books.

        Raises:
            NotFoundError: No author with ``author_id``.
            HasDependentsError: The author still owns books.
        """
        await self._run(DeleteAuthorCommand(self.store), author_id)

    async def list_author_books(self, author_id: int) -> list[Book]:
        return await self._run(ListAuthorBooksCommand(self.store), author_id)

    # Books

    async def list_books(self) -> list[Book]:
        return await self._run(ListBooksCommand(self.store))

    async def get_book(self, book_id: int) -> Book:
        return await self._run(GetBookCommand(self.store), book_id)

    async def create_book(self, payload: Payload) -> Book:
        """
        Create a book for an existing author.

        Raises:
            ValidationError: Payload missing or invalid.
            ConflictError: Explicit identity already taken.
            ReferenceMissingError: ``authorId`` names no author.
        """
        return await self._run(CreateBookCommand(self.store), payload)

    async def update_book(self, book_id: int, payload: Payload) -> Book:
        """
        Replace the fields of an existing book.

        Raises:
            NotFoundError: No book with ``book_id``.
            ValidationError: Payload missing or invalid.
            ConflictError: Body identity differs from ``book_id``.
            ReferenceMissingError: New ``authorId`` names no author.
        """
        return await self._run(
            UpdateBookCommand(self.store), UpdateRequest(book_id, payload)
        )

    async def delete_book(self, book_id: int) -> None:
        await self._run(DeleteBookCommand(self.store), book_id)
