"""Pydantic schemas for API request/response validation.

Impact reports and integrity results are returned as the analyzer's own
models; only request bodies and envelopes are defined here.
"""

from typing import Any

from pydantic import BaseModel, Field


# =============================================================================
# Error Schemas
# =============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str = Field(description="Error message")
    error_code: str | None = Field(default=None, description="Application-specific error code")
    extra: dict[str, Any] | None = Field(default=None, description="Additional error context")


# =============================================================================
# Change Preview Schemas
# =============================================================================


class TemplateChangeRequest(BaseModel):
    """Candidate content-template edit to preview."""

    new_body: str = Field(min_length=1, description="Template body about to be saved")
    new_name: str | None = Field(default=None, description="New template name, if renamed")


class UrlTemplateChangeRequest(BaseModel):
    """Candidate URL-template edit to preview."""

    new_pattern: str = Field(min_length=1, description="URL pattern about to be saved")
    new_name: str | None = Field(default=None, description="New template name, if renamed")


# =============================================================================
# Placeholder Schemas
# =============================================================================


class PlaceholderValidationRequest(BaseModel):
    """Template text whose placeholder names should be checked."""

    text: str = Field(description="Template body or URL pattern")


class PlaceholderValidationResponse(BaseModel):
    """Naming check for every placeholder of a template."""

    is_valid: bool
    placeholders: list[str]
    errors: list[str] = Field(default_factory=list)
    message: str | None = Field(default=None, description="Errors joined for display")
    sample_values: dict[str, str] = Field(
        default_factory=dict,
        description="Preview stand-in value per placeholder",
    )
