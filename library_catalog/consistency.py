"""
Consistency checks shared by the catalog commands.

- IdentityResolver decides which primary key a new record gets.
- ConflictDetector rejects explicit identities that are already taken.
- ReferentialIntegrityGuard keeps Book.author_id pointing at a real Author
  and stops an Author from being deleted while it still owns Books.

None of these classes write to the store. They only read through it and
raise catalog exceptions, so they can run any number of times before the
single write of an operation.
"""

from library_catalog.constants import IDENTITY_MAX, IDENTITY_MIN, UNASSIGNED_ID
from library_catalog.exceptions import (
    ConflictError,
    HasDependentsError,
    ReferenceMissingError,
)
from library_catalog.models.author import Author
from library_catalog.protocols import CatalogStoreProtocol
from library_catalog.types import EntityKind


def is_unassigned(id: int | None) -> bool:
    """Check whether a payload identity asks the store to assign one."""
    return id is None or id == UNASSIGNED_ID


def in_identity_range(id: int) -> bool:
    """Check whether ``id`` fits a stored primary key."""
    return IDENTITY_MIN <= id <= IDENTITY_MAX


class IdentityResolver:
    """Chooses the identity of a record about to be inserted."""

    @staticmethod
    def resolve(requested_id: int | None) -> int | None:
        """
        Resolve the identity for a new record.

        Args:
            requested_id: Identity supplied by the caller, if any. It must
                already have passed ConflictDetector.

        Returns:
            The requested identity, or None when the store's auto-increment
            should assign one on insert.
        """
        if is_unassigned(requested_id):
            return None
        return requested_id


class ConflictDetector:
    """Detects caller-supplied identities that collide with stored records."""

    def __init__(self, store: CatalogStoreProtocol):
        self.store = store

    async def exists(self, kind: EntityKind, id: int) -> bool:
        """
        Check whether a record of ``kind`` already holds ``id``.

        Args:
            kind: Entity kind to check.
            id: Identity to look up.

        Returns:
            True if the identity is taken.
        """
        return await self.store.get(kind, id) is not None

    async def ensure_available(self, kind: EntityKind, id: int | None) -> None:
        """
        Reject an explicit identity that is already in use.

        Unassigned identities always pass.

        Args:
            kind: Entity kind being created.
            id: Identity supplied by the caller.

        Raises:
            ConflictError: If a record with this identity exists.
        """
        if is_unassigned(id):
            return

        if await self.exists(kind, id):
            raise ConflictError(
                f"{kind.label} with ID {id} already exists.",
                details={"entity": kind.value, "id": id},
            )


class ReferentialIntegrityGuard:
    """Enforces the Author <- Book reference before any write happens."""

    def __init__(self, store: CatalogStoreProtocol):
        self.store = store

    async def validate_author_exists(self, author_id: int) -> Author:
        """
        Make sure a Book may point at ``author_id``.

        The author row is read with ``for_update`` so a concurrent delete of
        the same author waits for this transaction to finish.

        Args:
            author_id: Identity referenced by the Book.

        Returns:
            The referenced Author.

        Raises:
            ReferenceMissingError: If no Author has this identity.
        """
        author = None
        if in_identity_range(author_id):
            author = await self.store.get(
                EntityKind.AUTHOR, author_id, for_update=True
            )
        if author is None:
            raise ReferenceMissingError(
                f"Author with ID {author_id} was not found.",
                details={"author_id": author_id},
            )
        return author

    async def can_delete_author(self, author_id: int) -> None:
        """
        Make sure an Author owns no Books before it is deleted.

        Args:
            author_id: Identity of the Author about to be deleted.

        Raises:
            HasDependentsError: If at least one Book references the Author.
        """
        dependents = await self.store.count_dependents(author_id)
        if dependents > 0:
            raise HasDependentsError(
                "Author has books and cannot be deleted.",
                details={"author_id": author_id, "book_count": dependents},
            )
