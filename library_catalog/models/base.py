"""
Base model for all database tables with async relationship support.

This module provides the BaseModel class that all SQLModel table models
inherit from. It includes SQLAlchemy's AsyncAttrs mixin so attributes that
are loaded lazily can be awaited instead of raising MissingGreenlet.
"""

from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlmodel import SQLModel


class BaseModel(SQLModel, AsyncAttrs):  # type: ignore[misc]
    """
    Base model for all database tables with async relationship support.

    Table models carry no behaviour of their own. All reads and writes go
    through the repositories in ``library_catalog.repositories``.

    Note:
        Catalog tables have no ORM ``Relationship`` between Author and
        Book. The Book side stores ``author_id`` and the Author
        side asks the Book repository for its dependents.
    """

    pass
