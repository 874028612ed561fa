"""Sample values for template previews.

Used to fill placeholders when a preview is requested before a content
record supplies real data. Values are never persisted.
"""

from collections.abc import Mapping
from typing import Any

# Ordered: the first category with a keyword contained in the name wins.
SAMPLE_CATEGORIES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("image", "img", "picture", "photo", "thumbnail", "banner", "logo"), "/images/sample-ad.svg"),
    (("url", "link", "href"), "#"),
    (("title", "headline", "header", "heading"), "Sample Title"),
    (
        ("description", "desc", "text", "content", "body", "summary", "caption"),
        "This is a sample description. The actual content will be displayed here.",
    ),
    (("price", "cost", "fee", "amount"), "Free"),
    (("button", "btn", "cta"), "Sign up now"),
    (("date", "deadline", "period"), "December 31, 2025"),
    (("name", "brand", "company"), "Sample Brand"),
    (("icon", "badge"), "/images/sample-icon.svg"),
    (("service", "benefit", "job", "career", "salary", "recruit"), "Career support service"),
    (("rating", "review", "score", "star"), "★★★★★ 4.8"),
    (("category", "tag", "genre"), "Sample Category"),
)


def sample_value(name: str) -> str:
    """Return a human-readable stand-in value for a placeholder."""
    lowered = name.lower()
    for keywords, value in SAMPLE_CATEGORIES:
        if any(keyword in lowered for keyword in keywords):
            return value
    return f"Sample {name}"


def build_preview_data(
    placeholders: list[str],
    data: Mapping[str, Any] | None = None,
) -> dict[str, str]:
    """Map every placeholder to its stored value, or a sample when absent.

    Args:
        placeholders: Placeholder names of the template being previewed.
        data: Stored content data, if a record is being previewed.

    Returns:
        Placeholder name to display string.
    """
    data = data or {}
    preview: dict[str, str] = {}
    for name in placeholders:
        value = data.get(name)
        if value is None or value == "":
            preview[name] = sample_value(name)
        else:
            preview[name] = str(value)
    return preview
