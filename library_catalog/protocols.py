"""
Protocol classes for structural subtyping (duck typing with type safety).

Protocols define interfaces without requiring explicit inheritance. The
consistency checks and commands depend on these protocols rather than on
SQLAlchemy, so they can be exercised with any object that has the same
methods (an AsyncMock in unit tests, CatalogStore in production).

Example:
    ```python
    from library_catalog.protocols import CatalogStoreProtocol
    from library_catalog.types import EntityKind


    async def author_exists(store: CatalogStoreProtocol, author_id: int) -> bool:
        return await store.get(EntityKind.AUTHOR, author_id) is not None
    ```
"""

from contextlib import AbstractAsyncContextManager
from typing import Any, Protocol, TypeVar, runtime_checkable

from library_catalog.models.book import Book
from library_catalog.types import EntityKind

T = TypeVar("T")


@runtime_checkable
class Repository(Protocol[T]):
    """
    Protocol for repository pattern.

    Defines the interface for data access objects that manage entities
    of type T.

    Type Parameters:
        T: The entity type this repository manages.
    """

    async def get_by_id(self, id: int, *, for_update: bool = False) -> T | None:
        """Get entity by primary key ID."""
        ...

    async def get_all(self, **filters: Any) -> list[T]:
        """Get all entities matching the provided filters."""
        ...

    async def create(self, entity: T) -> T:
        """Create new entity in database."""
        ...

    async def update(self, entity: T) -> T:
        """Update existing entity in database."""
        ...

    async def delete(self, entity: T) -> None:
        """Delete entity from database."""
        ...

    async def count(self, **filters: Any) -> int:
        """Count entities matching the provided filters."""
        ...

    async def sync_identity_sequence(self, id: int) -> None:
        """Keep generated ids clear of an explicitly inserted ``id``."""
        ...


@runtime_checkable
class CatalogStoreProtocol(Protocol):
    """
    Persistence interface consumed by the catalog core.

    Every method is awaited by the caller. ``transaction()`` groups the
    calls of one catalog operation so they commit together or not at all.
    """

    async def get(
        self, kind: EntityKind, id: int, *, for_update: bool = False
    ) -> Any | None:
        """
        Get an entity of ``kind`` by identity.

        Args:
            kind: Entity kind to look up.
            id: Primary key value.
            for_update: Lock the row for the rest of the transaction.

        Returns:
            The entity, or None when absent.
        """
        ...

    async def insert(self, entity: Any) -> Any:
        """Insert an entity; assigns its identity when unassigned."""
        ...

    async def update(self, entity: Any) -> Any:
        """Persist changes made to an entity."""
        ...

    async def delete(self, entity: Any) -> None:
        """Remove an entity."""
        ...

    async def count_dependents(self, author_id: int) -> int:
        """Count the books owned by an author."""
        ...

    async def list_dependents(self, author_id: int) -> list[Book]:
        """Get the books owned by an author."""
        ...

    def transaction(self) -> AbstractAsyncContextManager[Any]:
        """Run the enclosed calls as one committed unit."""
        ...

    # Keep last: the method name shadows the builtin inside the class body
    async def list(self, kind: EntityKind) -> list[Any]:
        """Get every entity of ``kind``."""
        ...
