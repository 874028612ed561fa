"""Template Guard.

Keeps content templates, URL templates and the stored data of content
records consistent: placeholder extraction and validation, change-impact
previews and the system-wide integrity scan.
"""

from template_guard.interfaces.repository import (
    ContentNotFoundError,
    MalformedContentDataError,
    NotFoundError,
    TemplateNotFoundError,
    UrlTemplateNotFoundError,
)
from template_guard.strategies.consistency import (
    ConsistencyAnalyzer,
    ConsistencyRules,
    ConsistencyService,
    classify_severity,
    diff_placeholders,
)
from template_guard.strategies.placeholders import (
    extract_placeholders,
    is_valid_placeholder_name,
    sample_value,
)

__all__ = [
    "ConsistencyAnalyzer",
    "ConsistencyRules",
    "ConsistencyService",
    "ContentNotFoundError",
    "MalformedContentDataError",
    "NotFoundError",
    "TemplateNotFoundError",
    "UrlTemplateNotFoundError",
    "classify_severity",
    "diff_placeholders",
    "extract_placeholders",
    "is_valid_placeholder_name",
    "sample_value",
]
