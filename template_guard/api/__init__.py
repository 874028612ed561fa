"""FastAPI routers and dependencies."""

from template_guard.api.consistency import router as consistency_router
from template_guard.api.deps import (
    get_consistency_service,
    get_db,
    get_scan_cache,
)

__all__ = [
    "consistency_router",
    "get_consistency_service",
    "get_db",
    "get_scan_cache",
]
