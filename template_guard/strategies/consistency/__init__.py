"""Cross-template consistency strategies.

Placeholder diffing, severity rating, change-impact previews and the
system-wide integrity scan.
"""

from template_guard.strategies.consistency.analyzer import ConsistencyAnalyzer, decode_content_data
from template_guard.strategies.consistency.diff import (
    classify_severity,
    diff_placeholder_sets,
    diff_placeholders,
)
from template_guard.strategies.consistency.models import (
    AffectedContent,
    ImpactReport,
    IntegrityIssue,
    IntegrityStatus,
    IssueSeverity,
    IssueType,
    OverallStatus,
    PlaceholderDiff,
    RecordClassification,
    RecordIntegrityResult,
    Severity,
)
from template_guard.strategies.consistency.rules import DEFAULT_RULES, ConsistencyRules
from template_guard.strategies.consistency.service import ConsistencyService

__all__ = [
    "AffectedContent",
    "ConsistencyAnalyzer",
    "ConsistencyRules",
    "ConsistencyService",
    "DEFAULT_RULES",
    "ImpactReport",
    "IntegrityIssue",
    "IntegrityStatus",
    "IssueSeverity",
    "IssueType",
    "OverallStatus",
    "PlaceholderDiff",
    "RecordClassification",
    "RecordIntegrityResult",
    "Severity",
    "classify_severity",
    "decode_content_data",
    "diff_placeholder_sets",
    "diff_placeholders",
]
