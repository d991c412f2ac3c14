"""
Repository for Author entity.

Example:
    ```python
    from library_catalog.repositories.author_repository import AuthorRepository
    from library_catalog.storage.db import async_session

    async with async_session() as session:
        repo = AuthorRepository(session)
        authors = await repo.get_all()
        tolkien = await repo.get_by_id(1)
    ```
"""

from sqlmodel.ext.asyncio.session import AsyncSession

from library_catalog.models.author import Author
from library_catalog.repositories.base import BaseRepository


class AuthorRepository(BaseRepository[Author]):
    """Repository for Author entity operations."""

    def __init__(self, session: AsyncSession):
        """
        Initialize Author repository.

        Args:
            session: Database session for executing queries.
        """
        super().__init__(session, Author)
