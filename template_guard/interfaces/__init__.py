"""Abstract base classes and snapshots for template consistency checks."""

from template_guard.interfaces.repository import (
    BaseContentRepository,
    BoundContent,
    ConsistencyError,
    ContentNotFoundError,
    ContentSnapshot,
    MalformedContentDataError,
    NotFoundError,
    TemplateNotFoundError,
    TemplateSnapshot,
    UrlTemplateNotFoundError,
    UrlTemplateSnapshot,
)

__all__ = [
    "BaseContentRepository",
    "BoundContent",
    "ConsistencyError",
    "ContentNotFoundError",
    "ContentSnapshot",
    "MalformedContentDataError",
    "NotFoundError",
    "TemplateNotFoundError",
    "TemplateSnapshot",
    "UrlTemplateNotFoundError",
    "UrlTemplateSnapshot",
]
