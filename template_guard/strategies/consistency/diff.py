"""Placeholder diff and severity classification."""

from template_guard.strategies.consistency.models import PlaceholderDiff, Severity
from template_guard.strategies.placeholders.extraction import extract_placeholders

HIGH_SEVERITY_THRESHOLD = 5


def diff_placeholder_sets(old_names: list[str], new_names: list[str]) -> PlaceholderDiff:
    """Compute added/removed/unchanged between two placeholder lists.

    ``added`` keeps the order of ``new_names``; ``removed`` and ``unchanged``
    keep the order of ``old_names``.
    """
    old_set = set(old_names)
    new_set = set(new_names)

    return PlaceholderDiff(
        added=[name for name in new_names if name not in old_set],
        removed=[name for name in old_names if name not in new_set],
        unchanged=[name for name in old_names if name in new_set],
    )


def diff_placeholders(old_names: list[str], new_text: str) -> PlaceholderDiff:
    """Diff a saved placeholder set against the placeholders of new text."""
    return diff_placeholder_sets(old_names, extract_placeholders(new_text))


def classify_severity(
    diff: PlaceholderDiff,
    affected_count: int,
    threshold: int = HIGH_SEVERITY_THRESHOLD,
) -> Severity:
    """Rate a template change.

    More than ``threshold`` affected records is always high, whatever the
    diff. Otherwise any placeholder delta is medium, and everything else
    (no bound records, or a cosmetic change) is low.
    """
    if affected_count > threshold:
        return Severity.HIGH
    if diff.added or diff.removed:
        return Severity.MEDIUM
    return Severity.LOW
