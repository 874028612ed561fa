"""Placeholder naming validation.

A placeholder name is accepted when it mentions one of the domain keywords
editors are expected to use, e.g. ``productImage``, ``ctaLink`` or
``jobTitle``. Names such as ``field1`` or ``xyz`` are rejected so that the
purpose of every slot stays readable in the template editor.
"""

from template_guard.strategies.placeholders.extraction import extract_placeholders

VALID_PLACEHOLDER_KEYWORDS: tuple[str, ...] = (
    # Images
    "image", "img", "picture", "photo", "thumbnail", "banner", "logo", "alt",
    # URLs
    "url", "link", "href",
    # Titles
    "title", "headline", "header", "heading", "subtitle",
    # Descriptions
    "description", "desc", "text", "content", "body", "summary", "caption",
    "message", "copy",
    # Prices
    "price", "cost", "fee", "amount", "discount",
    # Buttons
    "button", "btn", "cta",
    # Dates
    "date", "deadline", "period", "time",
    # Names
    "name", "brand", "company", "label",
    # Icons
    "icon", "badge",
    # Job market
    "service", "benefit", "job", "career", "salary", "recruit", "intern",
    "industry", "location", "offer",
    # Ratings
    "rating", "review", "score", "star",
    # Categories
    "category", "tag", "genre",
)


def is_valid_placeholder_name(name: str | None) -> bool:
    """Check a placeholder name against the keyword whitelist.

    Matching is case-insensitive and by substring. Never raises.
    """
    if not name or not name.strip():
        return False

    lowered = name.lower()
    return any(keyword in lowered for keyword in VALID_PLACEHOLDER_KEYWORDS)


def validate_template_placeholders(text: str | None) -> list[str]:
    """Collect naming violations for every placeholder of a template.

    Args:
        text: Template body or URL pattern.

    Returns:
        Human-readable error messages; empty when every name is valid.
    """
    invalid = [name for name in extract_placeholders(text) if not is_valid_placeholder_name(name)]
    if not invalid:
        return []

    return [
        f"Placeholders violating the naming convention: {', '.join(invalid)}",
        "Placeholder names must contain one of: " + ", ".join(VALID_PLACEHOLDER_KEYWORDS),
    ]


def format_validation_errors(messages: list[str]) -> str:
    """Join validation messages into a single multi-line failure message."""
    return "\n".join(messages)
