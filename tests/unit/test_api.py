"""Unit tests for the consistency API routes.

Most tests override the SQL-backed service dependency with one reading
from an in-memory repository; the full-stack test uses a SQLite file.
"""

import pytest
from fastapi.testclient import TestClient

from conftest import InMemoryContentRepository, make_record
from template_guard.api.deps import get_consistency_service
from template_guard.core.config import Settings
from template_guard.interfaces.repository import TemplateSnapshot
from template_guard.main import create_app
from template_guard.strategies.consistency import ConsistencyService


class ScanCountingRepository(InMemoryContentRepository):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.scans = 0

    async def fetch_all_content_with_templates(self):
        self.scans += 1
        return await super().fetch_all_content_with_templates()


class FailingRepository(InMemoryContentRepository):
    async def fetch_template_by_id(self, template_id):
        raise RuntimeError("connection reset")


@pytest.fixture
def settings():
    return Settings(database_url="sqlite+aiosqlite:///:memory:", integrity_cache_ttl_seconds=60)


@pytest.fixture
def repository(title_template, tracking_url_template):
    records = [
        make_record(1, {"title": "A", "utm_medium": "cpc"}, url_template_id=10),
        make_record(2, {"title": "B"}),
        make_record(3, {"title": "C"}, template_id=99),
        make_record(4, "{broken", template_id=2),
    ]
    return ScanCountingRepository([title_template], [tracking_url_template], records)


@pytest.fixture
def client(settings, repository):
    """Test client with the service bound to the in-memory repository."""
    app = create_app(settings)
    service = ConsistencyService(repository, app.state.factory.get_analyzer())
    app.dependency_overrides[get_consistency_service] = lambda: service
    return TestClient(app)


# =============================================================================
# Change Preview Endpoint Tests
# =============================================================================


class TestAnalyzeTemplateChanges:
    """Test suite for POST /templates/{id}/analyze-changes."""

    def test_preview(self, client):
        response = client.post(
            "/templates/1/analyze-changes",
            json={"new_body": "<div>{{title}}{{image}}</div>"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["template_name"] == "Title Banner"
        assert body["changed"] is True
        assert body["placeholder_diff"] == {"added": ["image"], "removed": [], "unchanged": ["title"]}
        assert body["total_affected"] == 2
        assert body["severity"] == "medium"
        assert {c["id"] for c in body["affected_contents"]} == {1, 2}
        assert all(c["missing_placeholders"] == ["image"] for c in body["affected_contents"])

    def test_unknown_template(self, client):
        response = client.post("/templates/77/analyze-changes", json={"new_body": "{{title}}"})

        assert response.status_code == 404
        assert "77" in response.json()["detail"]

    def test_empty_body_rejected(self, client):
        response = client.post("/templates/1/analyze-changes", json={"new_body": ""})

        assert response.status_code == 422
        assert response.json()["detail"] == "Validation error"

    def test_malformed_stored_data(self, client, repository):
        repository.templates[2] = TemplateSnapshot(id=2, name="Legacy", body="{{title}}")

        response = client.post("/templates/2/analyze-changes", json={"new_body": "{{image}}"})

        assert response.status_code == 422
        assert "content 4" in response.json()["detail"]

    def test_unexpected_failure(self, settings):
        app = create_app(settings)
        app.dependency_overrides[get_consistency_service] = lambda: ConsistencyService(FailingRepository())

        response = TestClient(app).post("/templates/1/analyze-changes", json={"new_body": "{{title}}"})

        assert response.status_code == 500
        assert "connection reset" in response.json()["detail"]


class TestAnalyzeUrlTemplateChanges:
    """Test suite for POST /url-templates/{id}/analyze-changes."""

    def test_preview(self, client):
        response = client.post(
            "/url-templates/10/analyze-changes",
            json={"new_pattern": "{{baseUrl}}?utm_source={{utm_source}}", "new_name": "Short"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["template_name"] == "Short"
        assert body["placeholder_diff"]["removed"] == ["utm_medium"]
        assert body["old_parameters"] == ["baseUrl", "utm_medium", "utm_source"]
        assert body["affected_contents"][0]["unused_placeholders"] == ["utm_medium"]
        assert body["total_affected"] == 1

    def test_unknown_url_template(self, client):
        response = client.post("/url-templates/5/analyze-changes", json={"new_pattern": "{{baseUrl}}"})

        assert response.status_code == 404


# =============================================================================
# Integrity Endpoint Tests
# =============================================================================


class TestIntegrityCheck:
    """Test suite for GET /integrity-check."""

    def test_system_scan(self, client):
        response = client.get("/integrity-check")

        assert response.status_code == 200
        body = response.json()
        assert body["overall_status"] == "critical"
        assert body["critical_issues"] == 2
        assert [issue["content_id"] for issue in body["issues"]] == [1, 3, 4]
        assert body["issues"][0]["type"] == "placeholder_mismatch"
        assert body["issues"][1]["type"] == "orphaned_content"

    def test_scan_is_cached(self, client, repository):
        first = client.get("/integrity-check").json()
        second = client.get("/integrity-check").json()

        assert repository.scans == 1
        assert first == second

    def test_refresh_bypasses_cache(self, client, repository):
        client.get("/integrity-check")
        client.get("/integrity-check", params={"refresh": True})

        assert repository.scans == 2

    def test_cache_disabled(self, repository):
        app = create_app(Settings(integrity_cache_ttl_seconds=0))
        app.dependency_overrides[get_consistency_service] = lambda: ConsistencyService(repository)
        client = TestClient(app)

        client.get("/integrity-check")
        client.get("/integrity-check")

        assert repository.scans == 2

    def test_single_record(self, client):
        response = client.get("/integrity-check", params={"content_id": 2})

        assert response.status_code == 200
        assert response.json() == {
            "is_valid": True,
            "missing_placeholders": [],
            "unused_placeholders": [],
            "template_name": "Title Banner",
        }

    def test_single_record_mismatch(self, client):
        body = client.get("/integrity-check", params={"content_id": 1}).json()

        assert body["is_valid"] is False
        assert body["unused_placeholders"] == ["utm_medium"]

    def test_single_record_not_found(self, client):
        assert client.get("/integrity-check", params={"content_id": 404}).status_code == 404

    def test_single_orphan_not_found(self, client):
        """Test that a record whose template is gone cannot be validated."""
        assert client.get("/integrity-check", params={"content_id": 3}).status_code == 404


# =============================================================================
# Placeholder Validation and Health Tests
# =============================================================================


class TestValidatePlaceholders:
    """Test suite for POST /placeholders/validate."""

    def test_valid(self, client):
        response = client.post("/placeholders/validate", json={"text": "<h1>{{title}}</h1>{{price}}"})

        body = response.json()
        assert body["is_valid"] is True
        assert body["placeholders"] == ["price", "title"]
        assert body["errors"] == []
        assert body["message"] is None
        assert body["sample_values"] == {"price": "Free", "title": "Sample Title"}

    def test_invalid(self, client):
        body = client.post("/placeholders/validate", json={"text": "{{foo}}{{title}}"}).json()

        assert body["is_valid"] is False
        assert len(body["errors"]) == 2
        assert body["message"].startswith("Placeholders violating the naming convention: foo")


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


# =============================================================================
# Full Stack Tests
# =============================================================================


class TestSqlBackedApp:
    """Runs the app against a real SQLite file without dependency overrides."""

    def test_empty_database(self, tmp_path):
        settings = Settings(
            _env_file=None,
            database_url=f"sqlite+aiosqlite:///{tmp_path / 'api.db'}",
            create_tables_on_startup=True,
        )

        with TestClient(create_app(settings)) as client:
            scan = client.get("/integrity-check")
            missing = client.post("/templates/1/analyze-changes", json={"new_body": "{{title}}"})

        assert scan.status_code == 200
        assert scan.json()["overall_status"] == "healthy"
        assert scan.json()["total_issues"] == 0
        assert missing.status_code == 404
