"""Placeholder extraction.

Finds ``{{ name }}`` tokens in template bodies and URL patterns and
normalizes them into a sorted, deduplicated placeholder set.
"""

import re

PLACEHOLDER_PATTERN = re.compile(r"\{\{([^}]+)\}\}")


def extract_placeholders(text: str | None) -> list[str]:
    """Extract the placeholder set of a template.

    Captures are trimmed and whitespace-only captures dropped. The result is
    deduplicated and sorted lexicographically, so order of first appearance
    is not preserved.

    Args:
        text: Template body or URL pattern. None is treated as empty.

    Returns:
        Sorted list of unique placeholder names.

    Example:
        >>> extract_placeholders("<a href='{{ link }}'>{{title}}</a>{{title}}")
        ['link', 'title']
    """
    if not text:
        return []

    names = {match.strip() for match in PLACEHOLDER_PATTERN.findall(text)}
    names.discard("")
    return sorted(names)
