"""SQL-backed content repository.

Read-only implementation of ``BaseContentRepository`` over the SQLModel
tables. Rows are converted to frozen snapshots before they leave this
module so the analyzer never touches ORM state.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from template_guard.db.models import ContentRecord, ContentStatus, ContentTemplate, UrlTemplate
from template_guard.interfaces.repository import (
    BaseContentRepository,
    BoundContent,
    ContentSnapshot,
    TemplateSnapshot,
    UrlTemplateSnapshot,
)

logger = logging.getLogger(__name__)


def _template_snapshot(row: ContentTemplate) -> TemplateSnapshot:
    return TemplateSnapshot(id=row.id, name=row.name, body=row.html)


def _url_template_snapshot(row: UrlTemplate) -> UrlTemplateSnapshot:
    return UrlTemplateSnapshot(id=row.id, name=row.name, pattern=row.url_template)


def _content_snapshot(row: ContentRecord) -> ContentSnapshot:
    return ContentSnapshot(
        id=row.id,
        name=row.name,
        status=ContentStatus(row.status).value,
        content_data=row.content_data,
        template_id=row.template_id,
        url_template_id=row.url_template_id,
    )


class SqlContentRepository(BaseContentRepository):
    """Reads templates and content records through an async session."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: Request-scoped async session. Never committed here.
        """
        self._session = session

    async def fetch_template_by_id(self, template_id: int) -> TemplateSnapshot | None:
        row = await self._session.get(ContentTemplate, template_id)
        return _template_snapshot(row) if row is not None else None

    async def fetch_url_template_by_id(self, template_id: int) -> UrlTemplateSnapshot | None:
        row = await self._session.get(UrlTemplate, template_id)
        return _url_template_snapshot(row) if row is not None else None

    async def fetch_content_by_id(self, content_id: int) -> ContentSnapshot | None:
        row = await self._session.get(ContentRecord, content_id)
        return _content_snapshot(row) if row is not None else None

    async def fetch_records_bound_to_template(self, template_id: int) -> list[BoundContent]:
        statement = (
            select(ContentRecord, UrlTemplate)
            .outerjoin(UrlTemplate, ContentRecord.url_template_id == UrlTemplate.id)
            .where(ContentRecord.template_id == template_id)
            .order_by(ContentRecord.updated_at.desc(), ContentRecord.id)
        )
        result = await self._session.execute(statement)
        rows = result.all()

        logger.debug(f"Template {template_id} has {len(rows)} bound records")

        return [
            BoundContent(
                record=_content_snapshot(record),
                url_template=_url_template_snapshot(url_template) if url_template is not None else None,
            )
            for record, url_template in rows
        ]

    async def fetch_records_bound_to_url_template(self, template_id: int) -> list[ContentSnapshot]:
        statement = (
            select(ContentRecord)
            .where(ContentRecord.url_template_id == template_id)
            .order_by(ContentRecord.updated_at.desc(), ContentRecord.id)
        )
        result = await self._session.execute(statement)
        records = result.scalars().all()

        logger.debug(f"URL template {template_id} has {len(records)} bound records")

        return [_content_snapshot(record) for record in records]

    async def fetch_all_content_with_templates(self) -> list[BoundContent]:
        statement = (
            select(ContentRecord, ContentTemplate, UrlTemplate)
            .outerjoin(ContentTemplate, ContentRecord.template_id == ContentTemplate.id)
            .outerjoin(UrlTemplate, ContentRecord.url_template_id == UrlTemplate.id)
            .order_by(ContentRecord.id)
        )
        result = await self._session.execute(statement)

        return [
            BoundContent(
                record=_content_snapshot(record),
                template=_template_snapshot(template) if template is not None else None,
                url_template=_url_template_snapshot(url_template) if url_template is not None else None,
            )
            for record, template, url_template in result.all()
        ]
