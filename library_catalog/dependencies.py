"""
Dependency injection configuration for FastAPI.

Routers receive a CatalogService built on a request-scoped session. Tests
swap the session through ``app.dependency_overrides[get_session]``.

Example:
    ```python
    from fastapi import APIRouter
    from library_catalog.dependencies import CatalogServiceDep

    router = APIRouter()

    @router.get("/authors")
    async def get_authors(service: CatalogServiceDep) -> list[AuthorRead]:
        return await service.list_authors()
    ```
"""

from typing import Annotated

from fastapi import Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from library_catalog.services.catalog import CatalogService
from library_catalog.storage.catalog_store import CatalogStore
from library_catalog.storage.db import get_session

# ============================================================================
# Database Session Dependencies
# ============================================================================

SessionDep = Annotated[AsyncSession, Depends(get_session)]


# ============================================================================
# Store and Service Dependencies
# ============================================================================


def get_catalog_store(session: SessionDep) -> CatalogStore:
    """
    Get a catalog store bound to the request session.

    Args:
        session: Database session (injected).

    Returns:
        CatalogStore instance.
    """
    return CatalogStore(session)


CatalogStoreDep = Annotated[CatalogStore, Depends(get_catalog_store)]


def get_catalog_service(store: CatalogStoreDep) -> CatalogService:
    """
    Get the catalog service for the current request.

    Args:
        store: Catalog store (injected).

    Returns:
        CatalogService instance.
    """
    return CatalogService(store)


CatalogServiceDep = Annotated[CatalogService, Depends(get_catalog_service)]
