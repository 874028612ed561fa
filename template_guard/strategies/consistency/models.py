"""Consistency analysis domain models.

Pydantic models for impact reports and integrity results. These are
computed per call and never persisted.
"""

import enum
from datetime import datetime

from pydantic import BaseModel, Field


class Severity(str, enum.Enum):
    """How disruptive a template change is."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class IssueSeverity(str, enum.Enum):
    """Severity of an integrity issue."""

    CRITICAL = "critical"
    WARNING = "warning"


class IssueType(str, enum.Enum):
    """Kind of integrity issue found by the system scan."""

    PLACEHOLDER_MISMATCH = "placeholder_mismatch"
    ORPHANED_CONTENT = "orphaned_content"


class OverallStatus(str, enum.Enum):
    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"


class PlaceholderDiff(BaseModel):
    """Placeholder delta between a saved and a candidate template."""

    added: list[str] = Field(default_factory=list, description="Present only in the candidate")
    removed: list[str] = Field(default_factory=list, description="Present only in the saved template")
    unchanged: list[str] = Field(default_factory=list, description="Present in both")

    @property
    def is_empty(self) -> bool:
        return not self.added and not self.removed


class RecordClassification(BaseModel):
    """Mismatch buckets for one content record."""

    missing_placeholders: list[str] = Field(
        default_factory=list,
        description="Content template placeholders the stored data does not supply",
    )
    unused_ad_template_placeholders: list[str] = Field(
        default_factory=list,
        description="Stored keys referenced by neither template",
    )
    unused_url_template_placeholders: list[str] = Field(
        default_factory=list,
        description="URL template parameters the stored data cannot supply",
    )

    @property
    def has_mismatch(self) -> bool:
        return bool(
            self.missing_placeholders
            or self.unused_ad_template_placeholders
            or self.unused_url_template_placeholders
        )


class AffectedContent(BaseModel):
    """Summary of a content record touched by a template change."""

    id: int
    name: str
    status: str
    missing_placeholders: list[str] = Field(default_factory=list)
    unused_placeholders: list[str] = Field(default_factory=list)


class ImpactReport(BaseModel):
    """Result of previewing a template edit before it is saved."""

    template_id: int
    template_name: str
    changed: bool = Field(description="Whether the candidate text differs from the saved text")
    placeholder_diff: PlaceholderDiff
    old_parameters: list[str] = Field(default_factory=list)
    new_parameters: list[str] = Field(default_factory=list)
    affected_contents: list[AffectedContent] = Field(default_factory=list)
    total_affected: int = 0
    severity: Severity = Severity.LOW


class IntegrityIssue(BaseModel):
    """A single problem found by the system-wide integrity scan."""

    type: IssueType
    content_id: int
    content_name: str
    template_id: int | None = None
    template_name: str | None = None
    url_template_id: int | None = None
    url_template_name: str | None = None
    description: str
    missing_placeholders: list[str] | None = None
    unused_ad_template_placeholders: list[str] | None = None
    unused_url_template_placeholders: list[str] | None = None
    severity: IssueSeverity


class IntegrityStatus(BaseModel):
    """Aggregate result of the system-wide integrity scan."""

    overall_status: OverallStatus
    last_checked: datetime
    total_issues: int
    critical_issues: int
    warning_issues: int
    issues: list[IntegrityIssue] = Field(default_factory=list)


class RecordIntegrityResult(BaseModel):
    """Integrity of one content record against its saved content template."""

    is_valid: bool
    missing_placeholders: list[str] = Field(default_factory=list)
    unused_placeholders: list[str] = Field(default_factory=list)
    template_name: str
