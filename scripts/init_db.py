"""Database initialization script.

Creates the template and content tables on the configured database. Meant
for local development against SQLite; production schemas are owned by the
editing application.

Usage:
    python -m scripts.init_db
    or
    python scripts/init_db.py (after pip install -e .)
"""

import asyncio
import logging

from template_guard.core.config import get_settings
from template_guard.core.logging_config import setup_logging
from template_guard.db.session import close_db, create_all_tables

logger = logging.getLogger(__name__)


async def main() -> None:
    """Create all tables, then release the engine."""
    settings = get_settings()
    setup_logging(settings)

    try:
        await create_all_tables(settings)
        logger.info(f"Database initialized: {settings.database_url}")
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(main())
