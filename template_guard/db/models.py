"""Database models using SQLModel.

Defines the stored entities the consistency checks read:
- ContentTemplate: HTML body with ``{{name}}`` placeholders
- UrlTemplate: URL pattern with ``{{name}}`` parameters
- ContentRecord: binds one of each to a stored key/value mapping

Templates and records are edited elsewhere; this package only reads them.
"""

import datetime
import enum
import json
from typing import Any

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text, func
from sqlalchemy.types import TypeDecorator
from sqlmodel import Field, SQLModel


class ContentStatus(str, enum.Enum):
    """Lifecycle status of a content record."""

    DRAFT = "draft"
    ACTIVE = "active"
    PAUSED = "paused"
    ARCHIVED = "archived"


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class RawJSONText(TypeDecorator):
    """JSON stored as text and handed back undecoded.

    Mappings are serialized on write. On read the stored text is returned
    as-is, so rows holding invalid JSON (older importers wrote free text)
    still load and are judged by ``decode_content_data`` instead of failing
    the whole query.
    """

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: Any, dialect) -> str | None:
        if value is None or isinstance(value, str):
            return value
        return json.dumps(value, ensure_ascii=False)

    def process_result_value(self, value: Any, dialect) -> Any:
        return value


# =============================================================================
# Database Models
# =============================================================================


class ContentTemplate(SQLModel, table=True):
    """Reusable HTML body for content records."""

    __tablename__ = "ad_templates"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)
    html: str = Field(sa_column=Column(Text, nullable=False))
    description: str | None = Field(default=None, max_length=1024)
    created_at: datetime.datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(DateTime(timezone=True), server_default=func.now()),
    )
    updated_at: datetime.datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now()),
    )


class UrlTemplate(SQLModel, table=True):
    """Reusable URL pattern for content records."""

    __tablename__ = "url_templates"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)
    url_template: str = Field(sa_column=Column(Text, nullable=False))
    description: str | None = Field(default=None, max_length=1024)
    created_at: datetime.datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(DateTime(timezone=True), server_default=func.now()),
    )
    updated_at: datetime.datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now()),
    )


class ContentRecord(SQLModel, table=True):
    """A content template and URL template bound to concrete values.

    ``template_id`` is deliberately not a foreign key with ON DELETE:
    templates can be removed underneath records, which the integrity scan
    reports as orphaned content.
    """

    __tablename__ = "ad_contents"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)
    status: ContentStatus = Field(default=ContentStatus.DRAFT)
    template_id: int | None = Field(default=None, sa_column=Column(Integer, index=True))
    url_template_id: int | None = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("url_templates.id", ondelete="SET NULL"), index=True),
    )
    # Read back as raw text; decode_content_data is the only place it is parsed.
    content_data: dict[str, Any] | str | None = Field(default=None, sa_column=Column(RawJSONText))
    created_at: datetime.datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(DateTime(timezone=True), server_default=func.now()),
    )
    updated_at: datetime.datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now()),
    )
