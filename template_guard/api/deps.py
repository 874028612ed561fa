"""FastAPI dependencies for the consistency routes.

Everything a route needs hangs off ``app.state`` (see ``create_app``):
- the settings the app was created with
- the component factory, which owns the shared analyzer
- the integrity scan cache
"""

import logging
from collections.abc import AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from template_guard.api.cache import IntegrityScanCache
from template_guard.core.config import Settings
from template_guard.core.factory import ComponentFactory
from template_guard.db.repository import SqlContentRepository
from template_guard.db.session import get_async_session
from template_guard.strategies.consistency import ConsistencyService

logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""
    return request.app.state.settings


async def get_db(
    settings: Settings = Depends(get_app_settings),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a read session on the application's database.

    Args:
        settings: Application settings.

    Yields:
        An async database session.

    Raises:
        HTTPException: 500 if the database cannot be reached. HTTP errors
            raised by the route itself pass through untouched.
    """
    try:
        async for session in get_async_session(settings):
            yield session
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error getting database session: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database connection error",
        ) from e


def get_factory(request: Request) -> ComponentFactory:
    return request.app.state.factory


def get_consistency_service(
    session: AsyncSession = Depends(get_db),
    factory: ComponentFactory = Depends(get_factory),
) -> ConsistencyService:
    """Build a consistency service reading through the request's session.

    Args:
        session: Request-scoped database session.
        factory: Application component factory.

    Returns:
        ConsistencyService over a SqlContentRepository.
    """
    return factory.get_service(SqlContentRepository(session))


def get_scan_cache(request: Request) -> IntegrityScanCache:
    """Return the application-wide integrity scan cache."""
    return request.app.state.scan_cache
