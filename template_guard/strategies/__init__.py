"""Concrete strategy implementations."""

from template_guard.strategies.consistency import (
    ConsistencyAnalyzer,
    ConsistencyRules,
    ConsistencyService,
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
    "extract_placeholders",
    "is_valid_placeholder_name",
    "sample_value",
]
