"""Shared fixtures for unit tests."""

import pytest

from template_guard.interfaces.repository import (
    BaseContentRepository,
    BoundContent,
    ContentSnapshot,
    TemplateSnapshot,
    UrlTemplateSnapshot,
)
from template_guard.strategies.consistency import ConsistencyAnalyzer, ConsistencyService


class InMemoryContentRepository(BaseContentRepository):
    """Dict-backed repository for exercising the service without a database."""

    def __init__(
        self,
        templates: list[TemplateSnapshot] | None = None,
        url_templates: list[UrlTemplateSnapshot] | None = None,
        records: list[ContentSnapshot] | None = None,
    ) -> None:
        self.templates = {t.id: t for t in templates or []}
        self.url_templates = {t.id: t for t in url_templates or []}
        self.records = list(records or [])

    async def fetch_template_by_id(self, template_id):
        return self.templates.get(template_id)

    async def fetch_url_template_by_id(self, template_id):
        return self.url_templates.get(template_id)

    async def fetch_content_by_id(self, content_id):
        return next((r for r in self.records if r.id == content_id), None)

    async def fetch_records_bound_to_template(self, template_id):
        return [
            BoundContent(record=r, url_template=self.url_templates.get(r.url_template_id))
            for r in self.records
            if r.template_id == template_id
        ]

    async def fetch_records_bound_to_url_template(self, template_id):
        return [r for r in self.records if r.url_template_id == template_id]

    async def fetch_all_content_with_templates(self):
        return [
            BoundContent(
                record=r,
                template=self.templates.get(r.template_id),
                url_template=self.url_templates.get(r.url_template_id),
            )
            for r in self.records
        ]


def make_record(
    record_id: int,
    data=None,
    template_id: int | None = 1,
    url_template_id: int | None = None,
    status: str = "active",
) -> ContentSnapshot:
    return ContentSnapshot(
        id=record_id,
        name=f"Content {record_id}",
        status=status,
        content_data=data,
        template_id=template_id,
        url_template_id=url_template_id,
    )


@pytest.fixture
def analyzer():
    """Analyzer with the built-in rule tables."""
    return ConsistencyAnalyzer()


@pytest.fixture
def title_template():
    return TemplateSnapshot(id=1, name="Title Banner", body="<div>{{title}}</div>")


@pytest.fixture
def tracking_url_template():
    return UrlTemplateSnapshot(
        id=10,
        name="Tracking",
        pattern="{{baseUrl}}?utm_source={{utm_source}}&utm_medium={{utm_medium}}",
    )


@pytest.fixture
def make_service():
    """Build a service over an in-memory repository."""

    def _make(templates=None, url_templates=None, records=None, analyzer=None):
        repository = InMemoryContentRepository(templates, url_templates, records)
        return ConsistencyService(repository, analyzer)

    return _make
