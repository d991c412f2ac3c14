"""
Tests for the identity, conflict and referential integrity checks.

The store is an AsyncMock, so these tests only verify which store calls
are made and which exceptions are raised.
"""

from datetime import date
from unittest.mock import AsyncMock

import pytest

from library_catalog.consistency import (
    ConflictDetector,
    IdentityResolver,
    ReferentialIntegrityGuard,
    in_identity_range,
    is_unassigned,
)
from library_catalog.exceptions import (
    ConflictError,
    HasDependentsError,
    ReferenceMissingError,
)
from library_catalog.models.author import Author
from library_catalog.types import EntityKind


class TestIdentityResolver:
    """Tests for IdentityResolver."""

    @pytest.mark.parametrize("requested", [None, 0])
    def test_unassigned_identity_defers_to_store(self, requested):
        assert is_unassigned(requested)
        assert IdentityResolver.resolve(requested) is None

    def test_explicit_identity_is_kept(self):
        assert not is_unassigned(7)
        assert IdentityResolver.resolve(7) == 7

    @pytest.mark.parametrize(
        "id, expected",
        [(1, True), (2_147_483_647, True), (0, False), (-1, False), (2**31, False)],
    )
    def test_identity_range(self, id, expected):
        assert in_identity_range(id) is expected


class TestConflictDetector:
    """Tests for ConflictDetector."""

    @pytest.mark.asyncio
    async def test_unassigned_identity_skips_lookup(self):
        store = AsyncMock()
        detector = ConflictDetector(store)

        await detector.ensure_available(EntityKind.AUTHOR, 0)
        await detector.ensure_available(EntityKind.AUTHOR, None)

        store.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_free_identity_passes(self):
        store = AsyncMock()
        store.get.return_value = None
        detector = ConflictDetector(store)

        await detector.ensure_available(EntityKind.BOOK, 5)

        store.get.assert_called_once_with(EntityKind.BOOK, 5)

    @pytest.mark.asyncio
    async def test_taken_identity_raises_conflict(self):
        store = AsyncMock()
        store.get.return_value = Author(
            id=5, name="Existing", birth_date=date(1900, 1, 1)
        )
        detector = ConflictDetector(store)

        with pytest.raises(ConflictError) as exc_info:
            await detector.ensure_available(EntityKind.AUTHOR, 5)

        assert exc_info.value.message == "Author with ID 5 already exists."
        assert exc_info.value.details == {"entity": "author", "id": 5}


class TestReferentialIntegrityGuard:
    """Tests for ReferentialIntegrityGuard."""

    @pytest.mark.asyncio
    async def test_existing_author_is_returned_and_locked(self):
        author = Author(id=1, name="Tolkien", birth_date=date(1892, 1, 3))
        store = AsyncMock()
        store.get.return_value = author
        guard = ReferentialIntegrityGuard(store)

        result = await guard.validate_author_exists(1)

        assert result is author
        store.get.assert_called_once_with(
            EntityKind.AUTHOR, 1, for_update=True
        )

    @pytest.mark.asyncio
    async def test_missing_author_raises_reference_missing(self):
        store = AsyncMock()
        store.get.return_value = None
        guard = ReferentialIntegrityGuard(store)

        with pytest.raises(ReferenceMissingError) as exc_info:
            await guard.validate_author_exists(999)

        assert exc_info.value.message == "Author with ID 999 was not found."
        assert exc_info.value.details == {"author_id": 999}

    @pytest.mark.asyncio
    async def test_out_of_range_author_is_missing_without_lookup(self):
        store = AsyncMock()
        guard = ReferentialIntegrityGuard(store)

        with pytest.raises(ReferenceMissingError):
            await guard.validate_author_exists(2**64)

        store.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_author_without_books_can_be_deleted(self):
        store = AsyncMock()
        store.count_dependents.return_value = 0
        guard = ReferentialIntegrityGuard(store)

        await guard.can_delete_author(1)

        store.count_dependents.assert_called_once_with(1)

    @pytest.mark.asyncio
    async def test_author_with_books_cannot_be_deleted(self):
        store = AsyncMock()
        store.count_dependents.return_value = 2
        guard = ReferentialIntegrityGuard(store)

        with pytest.raises(HasDependentsError) as exc_info:
            await guard.can_delete_author(1)

        assert (
            exc_info.value.message == "Author has books and cannot be deleted."
        )
        assert exc_info.value.details == {"author_id": 1, "book_count": 2}
