"""
Commands for Author business operations.

Validation order inside each command is part of its contract: the first
failing check decides which error the caller sees.

Example:
    ```python
    store = CatalogStore(session)
    async with store.transaction():
        await DeleteAuthorCommand(store).execute(1)
    ```
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
from library_catalog.models.author import Author
from library_catalog.models.book import Book
from library_catalog.protocols import CatalogStoreProtocol
from library_catalog.schemas.author import AuthorInput
from library_catalog.types import EntityKind


async def get_author_or_404(
    store: CatalogStoreProtocol, author_id: int, *, for_update: bool = False
) -> Author:
    """
    Load an author or raise NotFoundError.

    Args:
        store: Catalog store.
        author_id: Identity of the author.
        for_update: Lock the row for the rest of the transaction.

    Returns:
        The stored author.

    Raises:
        NotFoundError: If no author has this identity.
    """
    author = None
    if in_identity_range(author_id):
        author = await store.get(
            EntityKind.AUTHOR, author_id, for_update=for_update
        )
    if author is None:
        raise NotFoundError(
            f"Author with ID {author_id} was not found.",
            details={"author_id": author_id},
        )
    return author


class ListAuthorsCommand(BaseCommand[None, list[Author]]):
    """Command to get every author."""

    def __init__(self, store: CatalogStoreProtocol):
        self.store = store

    async def execute(self, input_data: None = None) -> list[Author]:
        return await self.store.list(EntityKind.AUTHOR)


class GetAuthorCommand(BaseCommand[int, Author]):
    """Command to get one author by identity."""

    def __init__(self, store: CatalogStoreProtocol):
        self.store = store

    async def execute(self, author_id: int) -> Author:
        """
        Execute command to get an author.

        Raises:
            NotFoundError: If author not found.
        """
        return await get_author_or_404(self.store, author_id)


class CreateAuthorCommand(BaseCommand[Payload, Author]):
    """
    Command to create a new author.

    Checks, in order: payload present and valid, explicit identity free.
    """

    def __init__(self, store: CatalogStoreProtocol):
        """
        Initialize command with store.

        Args:
            store: Catalog store for data access.
        """
        self.store = store
        self.conflicts = ConflictDetector(store)

    async def execute(self, payload: Payload) -> Author:
        """
        Execute command to create author.

        Args:
            payload: Author fields, optionally with an explicit ``id``.

        Returns:
            Created author with its resolved identity.

        Raises:
            ValidationError: If the payload is missing or invalid.
            ConflictError: If the explicit identity already exists.

        Example:
            ```python
            author = await command.execute(
                {"name": "J. R. R. Tolkien", "birthDate": "1892-01-03"}
            )
            print(f"Created author with ID: {author.id}")
            ```
        """
        data = parse_payload(AuthorInput, payload, EntityKind.AUTHOR)

        await self.conflicts.ensure_available(EntityKind.AUTHOR, data.id)

        author = Author(
            id=IdentityResolver.resolve(data.id),
            name=data.name,
            birth_date=data.birth_date,
        )
        author = await self.store.insert(author)
        logger.info(f"Created author {author.id}")
        return author


class UpdateAuthorCommand(BaseCommand[UpdateRequest, Author]):
    """
    Command to update an existing author.

    Checks, in order: author exists, payload present and valid, body
    identity matches the path identity.
    """

    def __init__(self, store: CatalogStoreProtocol):
        """
        Initialize command with store.

        Args:
            store: Catalog store for data access.
        """
        self.store = store

    async def execute(self, input_data: UpdateRequest) -> Author:
        """
        Execute command to update author.

        Args:
            input_data: Path identity and new field values.

        Returns:
            Updated author.

        Raises:
            NotFoundError: If author not found.
            ValidationError: If the payload is missing or invalid.
            ConflictError: If the body identity differs from the path.
        """
        author = await get_author_or_404(
            self.store, input_data.id, for_update=True
        )

        data = parse_payload(AuthorInput, input_data.payload, EntityKind.AUTHOR)

        if not is_unassigned(data.id) and data.id != input_data.id:
            raise ConflictError(
                "Author ID in URL does not match the ID in the body.",
                details={"path_id": input_data.id, "body_id": data.id},
            )

        author.name = data.name
        author.birth_date = data.birth_date
        author = await self.store.update(author)
        logger.info(f"Updated author {author.id}")
        return author


class DeleteAuthorCommand(BaseCommand[int, None]):
    """
    Command to delete an author.

    Checks, in order: author exists, author owns no books.
    """

    def __init__(self, store: CatalogStoreProtocol):
        """
        Initialize command with store.

        Args:
            store: Catalog store for data access.
        """
        self.store = store
        self.integrity = ReferentialIntegrityGuard(store)

    async def execute(self, author_id: int) -> None:
        """
        Execute command to delete author.

        Args:
            author_id: ID of author to delete.

        Raises:
            NotFoundError: If author not found.
            HasDependentsError: If the author still owns books.
        """
        author = await get_author_or_404(self.store, author_id, for_update=True)

        await self.integrity.can_delete_author(author_id)

        await self.store.delete(author)
        logger.info(f"Deleted author {author_id}")


class ListAuthorBooksCommand(BaseCommand[int, list[Book]]):
    """Command to get the books owned by an author."""

    def __init__(self, store: CatalogStoreProtocol):
        self.store = store

    async def execute(self, author_id: int) -> list[Book]:
        """
        Execute command to list an author's books.

        Raises:
            NotFoundError: If author not found.
        """
        await get_author_or_404(self.store, author_id)
        return await self.store.list_dependents(author_id)
