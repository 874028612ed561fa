"""Content repository interfaces.

Defines the read-only snapshots handed to the consistency analyzer and the
abstract repository that supplies them. Storage and transport live behind
this interface; the analyzer never sees a session or a connection.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class TemplateSnapshot:
    """Saved state of a content (HTML) template.

    Attributes:
        id: Template primary key.
        name: Display name.
        body: Markup containing ``{{name}}`` placeholders.
    """

    id: int
    name: str
    body: str


@dataclass(frozen=True)
class UrlTemplateSnapshot:
    """Saved state of a URL template.

    Attributes:
        id: URL template primary key.
        name: Display name.
        pattern: URL pattern containing ``{{name}}`` placeholders.
    """

    id: int
    name: str
    pattern: str


@dataclass(frozen=True)
class ContentSnapshot:
    """Saved state of a content record.

    Attributes:
        id: Content record primary key.
        name: Display name.
        status: One of draft, active, paused, archived.
        content_data: Stored values as persisted. Either a mapping or its
            JSON text; decoded by the analyzer, never by callers.
        template_id: Bound content template id, if any.
        url_template_id: Bound URL template id, if any.
    """

    id: int
    name: str
    status: str
    content_data: Any = None
    template_id: int | None = None
    url_template_id: int | None = None


@dataclass(frozen=True)
class BoundContent:
    """A content record together with whatever its template ids resolve to.

    ``template`` is None when the content template id is null or dangling,
    which is how orphaned records are detected.
    """

    record: ContentSnapshot
    template: TemplateSnapshot | None = None
    url_template: UrlTemplateSnapshot | None = None


class BaseContentRepository(ABC):
    """Abstract base class for read-only access to templates and records.

    Lookups by id return None when the id does not resolve; the service
    layer turns that into the matching NotFoundError.
    """

    @abstractmethod
    async def fetch_template_by_id(self, template_id: int) -> TemplateSnapshot | None:
        """Return the saved content template or None."""

    @abstractmethod
    async def fetch_url_template_by_id(self, template_id: int) -> UrlTemplateSnapshot | None:
        """Return the saved URL template or None."""

    @abstractmethod
    async def fetch_content_by_id(self, content_id: int) -> ContentSnapshot | None:
        """Return a single content record or None."""

    @abstractmethod
    async def fetch_records_bound_to_template(self, template_id: int) -> list[BoundContent]:
        """Return records bound to a content template, with their URL template.

        The URL template is resolved so previews can honour parameters the
        record supplies for the URL side.
        """

    @abstractmethod
    async def fetch_records_bound_to_url_template(self, template_id: int) -> list[ContentSnapshot]:
        """Return records bound to a URL template."""

    @abstractmethod
    async def fetch_all_content_with_templates(self) -> list[BoundContent]:
        """Return every content record with its templates resolved."""


# =============================================================================
# Errors
# =============================================================================


class ConsistencyError(Exception):
    """Base exception for consistency analysis failures."""

    pass


class NotFoundError(ConsistencyError):
    """Raised when a referenced template or content id does not resolve."""

    entity = "entity"

    def __init__(self, entity_id: int | None) -> None:
        self.entity_id = entity_id
        super().__init__(f"{self.entity} not found: {entity_id}")


class TemplateNotFoundError(NotFoundError):
    entity = "Template"


class UrlTemplateNotFoundError(NotFoundError):
    entity = "URL template"


class ContentNotFoundError(NotFoundError):
    entity = "Content"


class MalformedContentDataError(ConsistencyError):
    """Raised when stored content data is not a JSON object."""

    def __init__(self, content_id: int | None, reason: str) -> None:
        self.content_id = content_id
        self.reason = reason
        super().__init__(f"Malformed content data for content {content_id}: {reason}")
