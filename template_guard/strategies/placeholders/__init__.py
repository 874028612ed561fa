"""Placeholder strategies.

Extraction, naming validation and sample-value generation for ``{{name}}``
tokens.
"""

from template_guard.strategies.placeholders.extraction import extract_placeholders
from template_guard.strategies.placeholders.samples import build_preview_data, sample_value
from template_guard.strategies.placeholders.validation import (
    VALID_PLACEHOLDER_KEYWORDS,
    format_validation_errors,
    is_valid_placeholder_name,
    validate_template_placeholders,
)

__all__ = [
    "VALID_PLACEHOLDER_KEYWORDS",
    "build_preview_data",
    "extract_placeholders",
    "format_validation_errors",
    "is_valid_placeholder_name",
    "sample_value",
    "validate_template_placeholders",
]
