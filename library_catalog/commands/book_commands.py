"""
Commands for Book business operations.

Every write that sets ``author_id`` first confirms the Author exists, so
the store never holds a Book that points at nothing.
"""

from library_catalog.commands.base import (
    BaseCommand,
    Payload,
    UpdateRequest,
    parse_payload,
)
from library_catalog.consistency import (
    ConflictDetector,
    IdentityResolver,
    ReferentialIntegrityGuard,
    in_identity_range,
    is_unassigned,
)
from library_catalog.exceptions import ConflictError, NotFoundError
from library_catalog.logging import logger
from library_catalog.models.book import Book
from library_catalog.protocols import CatalogStoreProtocol
from library_catalog.schemas.book import BookInput
from library_catalog.types import EntityKind


async def get_book_or_404(
    store: CatalogStoreProtocol, book_id: int, *, for_update: bool = False
) -> Book:
    """
    Load a book or raise NotFoundError.

    Args:
        store: Catalog store.
        book_id: Identity of the book.
        for_update: Lock the row for the rest of the transaction.

    Returns:
        The stored book.

    Raises:
        NotFoundError: If no book has this identity.
    """
    book = None
    if in_identity_range(book_id):
        book = await store.get(EntityKind.BOOK, book_id, for_update=for_update)
    if book is None:
        raise NotFoundError(
            f"Book with ID {book_id} was not found.",
            details={"book_id": book_id},
        )
    return book


class ListBooksCommand(BaseCommand[None, list[Book]]):
    """Command to get every book."""

    def __init__(self, store: CatalogStoreProtocol):
        self.store = store

    async def execute(self, input_data: None = None) -> list[Book]:
        return await self.store.list(EntityKind.BOOK)


class GetBookCommand(BaseCommand[int, Book]):
    """Command to get one book by identity."""

    def __init__(self, store: CatalogStoreProtocol):
        self.store = store

    async def execute(self, book_id: int) -> Book:
        return await get_book_or_404(self.store, book_id)


class CreateBookCommand(BaseCommand[Payload, Book]):
    """
    Command to create a new book.

    Checks, in order: payload present and valid, explicit identity free,
    referenced author exists.
    """

    def __init__(self, store: CatalogStoreProtocol):
        """
        Initialize command with store.

        Args:
            store: Catalog store for data access.
        """
        self.store = store
        self.conflicts = ConflictDetector(store)
        self.integrity = ReferentialIntegrityGuard(store)

    async def execute(self, payload: Payload) -> Book:
        """
        Execute command to create book.

        Args:
            payload: Book fields, optionally with an explicit ``id``.

        Returns:
            Created book with its resolved identity.

        Raises:
            ValidationError: If the payload is missing or invalid.
            ConflictError: If the explicit identity already exists.
            ReferenceMissingError: If ``authorId`` names no author.

        Example:
            ```python
            book = await command.execute(
                {
                    "title": "The Hobbit",
                    "publishedYear": 1937,
                    "authorId": 1,
                    "price": 12.99,
                }
            )
            ```
        """
        data = parse_payload(BookInput, payload, EntityKind.BOOK)

        await self.conflicts.ensure_available(EntityKind.BOOK, data.id)
        await self.integrity.validate_author_exists(data.author_id)

        book = Book(
            id=IdentityResolver.resolve(data.id),
            title=data.title,
            published_year=data.published_year,
            author_id=data.author_id,
            price=data.price,
        )
        book = await self.store.insert(book)
        logger.info(f"Created book {book.id} for author {book.author_id}")
        return book


class UpdateBookCommand(BaseCommand[UpdateRequest, Book]):
    """
    Command to update an existing book.

    Checks, in order: book exists, payload present and valid, body identity
    matches the path identity, a changed author exists.
    """

    def __init__(self, store: CatalogStoreProtocol):
        """
        Initialize command with store.

        Args:
            store: Catalog store for data access.
        """
        self.store = store
        self.integrity = ReferentialIntegrityGuard(store)

    async def execute(self, input_data: UpdateRequest) -> Book:
        """
        Execute command to update book.

        Args:
            input_data: Path identity and new field values.

        Returns:
            Updated book.

        Raises:
            NotFoundError: If book not found.
            ValidationError: If the payload is missing or invalid.
            ConflictError: If the body identity differs from the path.
            ReferenceMissingError: If a new ``authorId`` names no author.
        """
        book = await get_book_or_404(self.store, input_data.id, for_update=True)

        data = parse_payload(BookInput, input_data.payload, EntityKind.BOOK)

        if not is_unassigned(data.id) and data.id != input_data.id:
            raise ConflictError(
                "Book ID in URL does not match the ID in the body.",
                details={"path_id": input_data.id, "body_id": data.id},
            )

        if data.author_id != book.author_id:
            await self.integrity.validate_author_exists(data.author_id)

        book.title = data.title
        book.published_year = data.published_year
        book.author_id = data.author_id
        book.price = data.price
        book = await self.store.update(book)
        logger.info(f"Updated book {book.id}")
        return book


class DeleteBookCommand(BaseCommand[int, None]):
    """Command to delete a book. Books have no dependents."""

    def __init__(self, store: CatalogStoreProtocol):
        self.store = store

    async def execute(self, book_id: int) -> None:
        """
        Execute command to delete book.

        Raises:
            NotFoundError: If book not found.
        """
        book = await get_book_or_404(self.store, book_id, for_update=True)

        await self.store.delete(book)
        logger.info(f"Deleted book {book_id}")
