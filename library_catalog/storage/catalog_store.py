"""
Store adapter used by the catalog core.

CatalogStore hides the two repositories and the session behind the small,
kind-addressed interface described by CatalogStoreProtocol.

Example:
    ```python
    from library_catalog.storage.catalog_store import CatalogStore
    from library_catalog.storage.db import async_session
    from library_catalog.types import EntityKind

    async with async_session() as session:
        store = CatalogStore(session)
        async with store.transaction():
            author = await store.get(EntityKind.AUTHOR, 1)
    ```
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from library_catalog.exceptions import DatabaseError
from library_catalog.logging import logger
from library_catalog.models.author import Author
from library_catalog.models.book import Book
from library_catalog.protocols import Repository
from library_catalog.repositories.author_repository import AuthorRepository
from library_catalog.repositories.book_repository import BookRepository
from library_catalog.types import EntityKind


class CatalogStore:
    """
    Kind-addressed persistence over one AsyncSession.

    Attributes:
        session: The session shared by both repositories.
        authors: Author repository.
        books: Book repository.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize the store.

        Args:
            session: Database session scoped to the current request.
        """
        self.session = session
        self.authors = AuthorRepository(session)
        self.books = BookRepository(session)

    def _repository(self, kind: EntityKind) -> Repository[Any]:
        if kind is EntityKind.AUTHOR:
            return self.authors
        return self.books

    def _repository_for(self, entity: Any) -> Repository[Any]:
        if isinstance(entity, Author):
            return self.authors
        if isinstance(entity, Book):
            return self.books
        raise TypeError(f"Unsupported catalog entity: {type(entity).__name__}")

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["CatalogStore"]:
        """
        Run the enclosed store calls as a single transaction.

        Commits when the block exits normally and rolls back otherwise.
        Store errors are re-raised as DatabaseError; any other exception
        (including catalog validation failures) propagates unchanged.

        Yields:
            This store.

        Raises:
            DatabaseError: If the database rejects a statement or the commit.
        """
        try:
            yield self
            await self.session.commit()
        except SQLAlchemyError as ex:
            await self.session.rollback()
            logger.error(f"Catalog transaction rolled back: {ex}", exc_info=True)
            raise DatabaseError("Database error occurred.") from ex
        except BaseException:
            await self.session.rollback()
            raise

    async def get(
        self, kind: EntityKind, id: int, *, for_update: bool = False
    ) -> Any | None:
        return await self._repository(kind).get_by_id(id, for_update=for_update)

    async def insert(self, entity: Any) -> Any:
        """
        Insert ``entity``; the database assigns an id when it has none.

        After an insert with an explicit id the id sequence is moved past it,
        so later store-assigned ids do not collide with it.
        """
        repository = self._repository_for(entity)
        explicit_id = entity.id
        entity = await repository.create(entity)
        if explicit_id is not None:
            await repository.sync_identity_sequence(explicit_id)
        return entity

    async def update(self, entity: Any) -> Any:
        return await self._repository_for(entity).update(entity)

    async def delete(self, entity: Any) -> None:
        await self._repository_for(entity).delete(entity)

    async def count_dependents(self, author_id: int) -> int:
        return await self.books.count_by_author(author_id)

    async def list_dependents(self, author_id: int) -> list[Book]:
        return await self.books.get_by_author(author_id)

    # Keep last: the method name shadows the builtin inside the class body
    async def list(self, kind: EntityKind) -> list[Any]:
        return await self._repository(kind).get_all()
