"""Consistency service.

Fetches snapshots from a content repository and hands them to the pure
``ConsistencyAnalyzer``. Targeted calls fail fast with a NotFoundError when
an id does not resolve; nothing is cached between calls.
"""

import logging

from template_guard.interfaces.repository import (
    BaseContentRepository,
    ContentNotFoundError,
    TemplateNotFoundError,
    UrlTemplateNotFoundError,
)
from template_guard.strategies.consistency.analyzer import ConsistencyAnalyzer
from template_guard.strategies.consistency.models import (
    ImpactReport,
    IntegrityStatus,
    RecordIntegrityResult,
)

logger = logging.getLogger(__name__)


class ConsistencyService:
    """Entry point for change previews and integrity checks."""

    def __init__(
        self,
        repository: BaseContentRepository,
        analyzer: ConsistencyAnalyzer | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            repository: Read-only source of templates and content records.
            analyzer: Analyzer to delegate to. Defaults to built-in rules.
        """
        self._repository = repository
        self._analyzer = analyzer or ConsistencyAnalyzer()

    async def preview_template_change(
        self,
        template_id: int,
        candidate_body: str,
        candidate_name: str | None = None,
    ) -> ImpactReport:
        """Preview a content-template edit before it is saved.

        Raises:
            TemplateNotFoundError: If the template id does not resolve.
            MalformedContentDataError: If a bound record's data is corrupt.
        """
        template = await self._repository.fetch_template_by_id(template_id)
        if template is None:
            logger.warning(f"Impact preview requested for missing template {template_id}")
            raise TemplateNotFoundError(template_id)

        bound = []
        if template.body != candidate_body:
            bound = await self._repository.fetch_records_bound_to_template(template_id)

        return self._analyzer.preview_template_change(template, candidate_body, bound, candidate_name)

    async def preview_url_template_change(
        self,
        template_id: int,
        candidate_pattern: str,
        candidate_name: str | None = None,
    ) -> ImpactReport:
        """Preview a URL-template edit before it is saved.

        Raises:
            UrlTemplateNotFoundError: If the URL template id does not resolve.
            MalformedContentDataError: If a bound record's data is corrupt.
        """
        url_template = await self._repository.fetch_url_template_by_id(template_id)
        if url_template is None:
            logger.warning(f"Impact preview requested for missing URL template {template_id}")
            raise UrlTemplateNotFoundError(template_id)

        records = []
        if url_template.pattern != candidate_pattern:
            records = await self._repository.fetch_records_bound_to_url_template(template_id)

        return self._analyzer.preview_url_template_change(
            url_template, candidate_pattern, records, candidate_name
        )

    async def validate_record_integrity(self, content_id: int) -> RecordIntegrityResult:
        """Check one content record against its saved content template.

        Raises:
            ContentNotFoundError: If the content id does not resolve.
            TemplateNotFoundError: If the record's template does not resolve.
            MalformedContentDataError: If the record's data is corrupt.
        """
        record = await self._repository.fetch_content_by_id(content_id)
        if record is None:
            raise ContentNotFoundError(content_id)

        template = None
        if record.template_id is not None:
            template = await self._repository.fetch_template_by_id(record.template_id)
        if template is None:
            raise TemplateNotFoundError(record.template_id)

        return self._analyzer.validate_record(record, template)

    async def run_system_integrity_scan(self) -> IntegrityStatus:
        """Scan every content record and report mismatches and orphans."""
        entries = await self._repository.fetch_all_content_with_templates()
        logger.info(f"Running system integrity scan over {len(entries)} records")
        return self._analyzer.scan(entries)
