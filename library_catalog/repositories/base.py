"""
Generic table access shared by the author and book repositories.

A repository owns the SQL for one table and nothing else. It never commits:
writes are flushed so the database assigns keys and checks constraints, and
the surrounding CatalogStore transaction decides whether they stick.

Example:
    ```python
    from library_catalog.models.book import Book
    from library_catalog.repositories.base import BaseRepository


    class BookRepository(BaseRepository[Book]):
        def __init__(self, session: AsyncSession):
            super().__init__(session, Book)

        async def get_by_title(self, title: str) -> list[Book]:
            return await self.get_all(title=title)
    ```
"""

from typing import Any, Generic, Type, TypeVar

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from library_catalog.logging import logger

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Lookups and flushed writes for a single SQLModel table.

    Failed statements are logged with the model name and re-raised as the
    original SQLAlchemyError. A failed write also rolls the session back.

    Attributes:
        session: Session the statements run on.
        model: Table class, e.g. ``Author``.
    """

    def __init__(self, session: AsyncSession, model: Type[T]):
        self.session = session
        self.model = model

    async def get_by_id(self, id: int, *, for_update: bool = False) -> T | None:
        """
        Look up one row by primary key.

        ``for_update`` holds a row lock until the transaction ends on
        dialects that support ``SELECT ... FOR UPDATE``; SQLite ignores it.
        Returns None when no row has this key.
        """
        try:
            return await self.session.get(
                self.model, id, with_for_update=for_update or None
            )
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving {self.model.__name__} {id}: {e}")
            raise

    async def get_all(self, **filters: Any) -> list[T]:
        """
        Rows whose columns equal the given values, in ascending id order.

        Filters whose value is None are skipped, so ``get_all(author_id=None)``
        returns every row.
        """
        try:
            stmt = select(self.model)
            for key, value in filters.items():
                if value is not None:
                    stmt = stmt.where(getattr(self.model, key) == value)
            stmt = stmt.order_by(self.model.id)  # type: ignore[attr-defined]
            result = await self.session.exec(stmt)
            return list(result.all())
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving {self.model.__name__}: {e}")
            raise

    async def create(self, entity: T) -> T:
        """
        Add ``entity`` and flush it.

        An entity without an id gets one from the database. The instance is
        refreshed and returned with every column loaded.
        """
        try:
            self.session.add(entity)
            await self.session.flush()
            await self.session.refresh(entity)
            return entity
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error creating {self.model.__name__}: {e}")
            raise

    async def update(self, entity: T) -> T:
        try:
            self.session.add(entity)
            await self.session.flush()
            await self.session.refresh(entity)
            return entity
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error updating {self.model.__name__}: {e}")
            raise

    async def delete(self, entity: T) -> None:
        """Delete ``entity`` and flush, so foreign keys are checked now."""
        try:
            await self.session.delete(entity)
            await self.session.flush()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error deleting {self.model.__name__}: {e}")
            raise

    async def count(self, **filters: Any) -> int:
        """Number of rows matching ``filters`` (same rules as get_all)."""
        try:
            stmt = select(func.count()).select_from(self.model)
            for key, value in filters.items():
                if value is not None:
                    stmt = stmt.where(getattr(self.model, key) == value)
            result = await self.session.exec(stmt)
            return result.one()
        except SQLAlchemyError as e:
            logger.error(f"Error counting {self.model.__name__}: {e}")
            raise

    async def sync_identity_sequence(self, id: int) -> None:
        """
        Move the table's id sequence past an explicitly inserted ``id``.

        PostgreSQL serial columns do not notice rows inserted with a given
        key, so the next generated key could collide with it. The sequence
        only ever moves forward. Other dialects derive the next key from
        the table and need nothing.
        """
        if self.session.get_bind().dialect.name != "postgresql":
            return

        try:
            result = await self.session.exec(
                text("SELECT pg_get_serial_sequence(:table, 'id')").bindparams(
                    table=self.model.__tablename__  # type: ignore[attr-defined]
                )
            )
            sequence = result.scalar_one()
            if sequence is None:
                return

            await self.session.exec(
                text(
                    "SELECT setval(CAST(:sequence AS regclass), GREATEST("
                    "CAST(:id AS bigint), "
                    "pg_sequence_last_value(CAST(:sequence AS regclass)), 1))"
                ).bindparams(sequence=sequence, id=id)
            )
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                f"Error syncing id sequence of {self.model.__name__}: {e}"
            )
            raise
