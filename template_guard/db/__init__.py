"""Database models, session management and the SQL repository."""

from template_guard.db.models import (
    ContentRecord,
    ContentStatus,
    ContentTemplate,
    UrlTemplate,
)
from template_guard.db.repository import SqlContentRepository
from template_guard.db.session import (
    AsyncSession,
    close_db,
    create_all_tables,
    get_async_session,
)

__all__ = [
    # Models
    "ContentTemplate",
    "UrlTemplate",
    "ContentRecord",
    "ContentStatus",
    # Session
    "AsyncSession",
    "get_async_session",
    "create_all_tables",
    "close_db",
    # Repository
    "SqlContentRepository",
]
