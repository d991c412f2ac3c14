"""
Repository for Book entity with author-scoped queries.

An author's books are never stored on the Author row. They are always
derived from ``book.author_id`` through the methods below.
"""

from sqlmodel.ext.asyncio.session import AsyncSession

from library_catalog.models.book import Book
from library_catalog.repositories.base import BaseRepository


class BookRepository(BaseRepository[Book]):
    """
    Repository for Book entity operations.

    Provides CRUD operations inherited from BaseRepository plus
    lookups by owning author.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize Book repository.

        Args:
            session: Database session for executing queries.
        """
        super().__init__(session, Book)

    async def count_by_author(self, author_id: int) -> int:
        """
        Count books owned by an author.

        Args:
            author_id: Primary key of the author.

        Returns:
            Number of books whose author_id equals ``author_id``.
        """
        return await self.count(author_id=author_id)

    async def get_by_author(self, author_id: int) -> list[Book]:
        """
        Get all books owned by an author, ordered by ID.

        Args:
            author_id: Primary key of the author.

        Returns:
            List of the author's books (empty if none).
        """
        return await self.get_all(author_id=author_id)
