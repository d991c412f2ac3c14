"""
Integration tests for CatalogService against an in-memory SQLite store.

Every call runs in its own store transaction, exactly as an HTTP request
would, so these tests observe only committed state.
"""

import logging
from datetime import date
from decimal import Decimal

import pytest

from library_catalog.exceptions import (
    ConflictError,
    HasDependentsError,
    NotFoundError,
    ReferenceMissingError,
    ValidationError,
)
from library_catalog.logging import get_log_context, logger


def book_payload(author_id: int, **overrides):
    payload = {
        "title": "The Hobbit",
        "publishedYear": 1937,
        "authorId": author_id,
        "price": 12.99,
    }
    payload.update(overrides)
    return payload


class TestTolkienScenario:
    """Create, block delete, unblock delete."""

    @pytest.mark.asyncio
    async def test_author_delete_blocked_until_books_removed(
        self, service, tolkien_payload
    ):
        author = await service.create_author(tolkien_payload)
        author_id = author.id
        assert author_id == 1

        book = await service.create_book(book_payload(author_id))
        book_id = book.id
        assert book.author_id == author_id

        with pytest.raises(HasDependentsError):
            await service.delete_author(author_id)

        # The failed delete left everything in place
        assert [a.id for a in await service.list_authors()] == [author_id]
        assert [b.id for b in await service.list_books()] == [book_id]

        await service.delete_book(book_id)
        await service.delete_author(author_id)

        assert await service.list_authors() == []
        with pytest.raises(NotFoundError):
            await service.get_author(author_id)

    @pytest.mark.asyncio
    async def test_book_for_missing_author_is_rejected(self, service):
        with pytest.raises(ReferenceMissingError):
            await service.create_book(book_payload(999))

        assert await service.list_books() == []


class TestIdentity:
    """Explicit and store-assigned identities."""

    @pytest.mark.asyncio
    async def test_explicit_id_is_used(self, service):
        author = await service.create_author(
            {"id": 10, "name": "H. P. Lovecraft", "birthDate": "1890-08-20"}
        )

        assert author.id == 10
        assert (await service.get_author(10)).name == "H. P. Lovecraft"

    @pytest.mark.asyncio
    async def test_duplicate_explicit_id_conflicts(self, service, tolkien):
        tolkien_id = tolkien.id

        with pytest.raises(ConflictError):
            await service.create_author(
                {"id": tolkien_id, "name": "Other", "birthDate": "1950-05-05"}
            )

        authors = await service.list_authors()
        assert [(a.id, a.name) for a in authors] == [
            (tolkien_id, "J. R. R. Tolkien")
        ]

    @pytest.mark.asyncio
    async def test_duplicate_explicit_book_id_conflicts(
        self, service, tolkien, hobbit
    ):
        with pytest.raises(ConflictError):
            await service.create_book(
                book_payload(tolkien.id, id=hobbit.id, title="Other")
            )

    @pytest.mark.asyncio
    async def test_zero_id_is_store_assigned(self, service, tolkien):
        author = await service.create_author(
            {"id": 0, "name": "H. P. Lovecraft", "birthDate": "1890-08-20"}
        )

        assert author.id not in (0, None)
        assert author.id != tolkien.id

    @pytest.mark.asyncio
    async def test_oversized_explicit_id_is_invalid(self, service, tolkien):
        with pytest.raises(ValidationError) as exc_info:
            await service.create_author(
                {"id": 2**70, "name": "H. P. Lovecraft", "birthDate": "1890-08-20"}
            )
        assert exc_info.value.details["errors"][0]["loc"] == ["id"]

        with pytest.raises(ValidationError):
            await service.create_book(book_payload(2**70))

        with pytest.raises(ValidationError):
            await service.create_book(book_payload(tolkien.id, id=2**31))

        assert await service.list_books() == []

    @pytest.mark.asyncio
    async def test_oversized_lookup_id_is_not_found(self, service, tolkien):
        with pytest.raises(NotFoundError):
            await service.get_author(2**70)
        with pytest.raises(NotFoundError):
            await service.update_book(2**63, book_payload(tolkien.id))
        with pytest.raises(NotFoundError):
            await service.delete_author(-(2**70))
        with pytest.raises(NotFoundError):
            await service.list_author_books(2**31)


class TestRoundTrip:
    """create followed by get returns the payload plus identity."""

    @pytest.mark.asyncio
    async def test_author_round_trip(self, service, session, tolkien_payload):
        created = await service.create_author(tolkien_payload)
        session.expunge_all()

        fetched = await service.get_author(created.id)

        assert fetched is not created
        assert fetched.id == created.id
        assert fetched.name == "J. R. R. Tolkien"
        assert fetched.birth_date == date(1892, 1, 3)

    @pytest.mark.asyncio
    async def test_book_round_trip(self, service, session, tolkien):
        created = await service.create_book(book_payload(tolkien.id))
        session.expunge_all()

        fetched = await service.get_book(created.id)

        assert fetched.title == "The Hobbit"
        assert fetched.published_year == 1937
        assert fetched.author_id == tolkien.id
        assert fetched.price == Decimal("12.99")


class TestUpdate:
    """Updates replace fields and keep identity."""

    @pytest.mark.asyncio
    async def test_update_is_idempotent(self, service, session, tolkien):
        payload = {
            "id": tolkien.id,
            "name": "John Ronald Reuel Tolkien",
            "birthDate": "1892-01-03",
        }

        first = await service.update_author(tolkien.id, payload)
        first_state = (first.id, first.name, first.birth_date)
        second = await service.update_author(tolkien.id, payload)
        session.expunge_all()
        stored = await service.get_author(tolkien.id)

        assert (second.id, second.name, second.birth_date) == first_state
        assert (stored.id, stored.name, stored.birth_date) == first_state

    @pytest.mark.asyncio
    async def test_update_missing_author_wins_over_invalid_payload(self, service):
        with pytest.raises(NotFoundError):
            await service.update_author(404, None)

    @pytest.mark.asyncio
    async def test_update_invalid_payload(self, service, tolkien):
        with pytest.raises(ValidationError):
            await service.update_author(tolkien.id, {"name": ""})

    @pytest.mark.asyncio
    async def test_update_identity_mismatch(self, service, tolkien):
        with pytest.raises(ConflictError):
            await service.update_author(
                tolkien.id,
                {"id": tolkien.id + 1, "name": "X", "birthDate": "1900-01-01"},
            )

    @pytest.mark.asyncio
    async def test_move_book_to_missing_author_keeps_old_author(
        self, service, session, tolkien, hobbit
    ):
        book_id, author_id = hobbit.id, tolkien.id

        with pytest.raises(ReferenceMissingError):
            await service.update_book(book_id, book_payload(999))

        session.expunge_all()
        assert (await service.get_book(book_id)).author_id == author_id

    @pytest.mark.asyncio
    async def test_move_book_to_other_author(self, service, tolkien, hobbit):
        other = await service.create_author(
            {"name": "H. P. Lovecraft", "birthDate": "1890-08-20"}
        )

        moved = await service.update_book(hobbit.id, book_payload(other.id))

        assert moved.author_id == other.id
        assert await service.list_author_books(tolkien.id) == []
        assert [b.id for b in await service.list_author_books(other.id)] == [
            hobbit.id
        ]


class TestAuthorBooks:
    """Books-by-author lookup."""

    @pytest.mark.asyncio
    async def test_list_author_books(self, service, tolkien, hobbit):
        books = await service.list_author_books(tolkien.id)

        assert [b.title for b in books] == ["The Hobbit"]

    @pytest.mark.asyncio
    async def test_list_books_of_missing_author(self, service):
        with pytest.raises(NotFoundError):
            await service.list_author_books(1)


class ContextRecorder(logging.Handler):
    """Keeps the log context seen by each record."""

    def __init__(self):
        super().__init__()
        self.contexts = []

    def emit(self, record):
        self.contexts.append(dict(get_log_context()))


class TestLogContext:
    """Command name attached to log records."""

    @pytest.mark.asyncio
    async def test_command_name_in_log_context(self, service, tolkien_payload):
        recorder = ContextRecorder()
        level = logger.level
        logger.setLevel(logging.INFO)
        logger.addHandler(recorder)
        try:
            await service.create_author(tolkien_payload)
        finally:
            logger.removeHandler(recorder)
            logger.setLevel(level)

        assert {"command": "CreateAuthorCommand"} in recorder.contexts
        assert get_log_context() == {}

    @pytest.mark.asyncio
    async def test_log_context_reset_after_failure(self, service):
        with pytest.raises(NotFoundError):
            await service.delete_book(999)

        assert get_log_context() == {}
