"""Cross-template consistency analyzer.

Compares three independently edited things per content record: the
placeholders of its content template (``P_ad``), the parameters of its URL
template (``P_url``) and the keys of its stored data (``K``). Everything
here is a pure function of the snapshots passed in; fetching them is the
job of ``ConsistencyService``.
"""

import json
import logging
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

from template_guard.interfaces.repository import (
    BoundContent,
    ContentSnapshot,
    MalformedContentDataError,
    TemplateSnapshot,
    UrlTemplateSnapshot,
)
from template_guard.strategies.consistency.diff import (
    HIGH_SEVERITY_THRESHOLD,
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
)
from template_guard.strategies.consistency.rules import DEFAULT_RULES, ConsistencyRules
from template_guard.strategies.placeholders.extraction import extract_placeholders

logger = logging.getLogger(__name__)


def decode_content_data(raw: Any, content_id: int | None = None) -> dict[str, Any]:
    """Decode stored content data into a mapping.

    Stored data arrives either as a mapping or as its JSON text, which is
    how the SQL repository hands it over. None and empty text decode to an
    empty mapping.

    Args:
        raw: The persisted value.
        content_id: Owning record, for error reporting.

    Returns:
        Placeholder name to stored value.

    Raises:
        MalformedContentDataError: If the text is not JSON or does not
            decode to an object.
    """
    if raw is None:
        return {}
    if isinstance(raw, Mapping):
        return dict(raw)
    if isinstance(raw, (str, bytes, bytearray)):
        if not raw.strip():
            return {}
        try:
            decoded = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedContentDataError(content_id, f"invalid JSON: {e}") from e
        if decoded is None:
            return {}
        if not isinstance(decoded, dict):
            raise MalformedContentDataError(
                content_id, f"expected a JSON object, got {type(decoded).__name__}"
            )
        return decoded
    raise MalformedContentDataError(content_id, f"unsupported type {type(raw).__name__}")


class ConsistencyAnalyzer:
    """Classifies placeholder mismatches between templates and stored data.

    Rules (aliases, standard parameters) and the severity threshold are
    injected so deployments with different URL conventions can swap them
    without touching the algorithm.

    Example:
        ```python
        analyzer = ConsistencyAnalyzer(settings.consistency_rules())
        report = analyzer.preview_template_change(template, new_body, bound)
        ```
    """

    def __init__(
        self,
        rules: ConsistencyRules | None = None,
        high_severity_threshold: int = HIGH_SEVERITY_THRESHOLD,
    ) -> None:
        """Initialize the analyzer.

        Args:
            rules: Alias and standard-parameter tables. Defaults to the
                built-in link/url -> baseUrl and UTM tables.
            high_severity_threshold: Affected-record count above which a
                change is rated high.
        """
        self._rules = rules or DEFAULT_RULES
        self._threshold = high_severity_threshold

    @property
    def rules(self) -> ConsistencyRules:
        return self._rules

    # =========================================================================
    # Classification
    # =========================================================================

    def classify(
        self,
        ad_placeholders: list[str],
        url_placeholders: list[str],
        data_keys: Iterable[str],
    ) -> RecordClassification:
        """Sort one record's mismatches into the three buckets.

        Args:
            ad_placeholders: Placeholder set of the content template.
            url_placeholders: Parameter set of the URL template.
            data_keys: Keys of the record's stored data.

        Returns:
            RecordClassification with missing / unused lists.
        """
        keys = list(data_keys)
        key_set = set(keys)
        ad_set = set(ad_placeholders)
        url_set = set(url_placeholders)

        missing = [name for name in ad_placeholders if name not in key_set]

        unused_ad = [
            key
            for key in keys
            if not self._is_key_used(key, ad_set, url_set) and not self._rules.is_standard(key)
        ]

        unused_url = [
            parameter
            for parameter in url_placeholders
            if not self._has_value(parameter, key_set)
        ]

        return RecordClassification(
            missing_placeholders=missing,
            unused_ad_template_placeholders=unused_ad,
            unused_url_template_placeholders=unused_url,
        )

    def _is_key_used(self, key: str, ad_set: set[str], url_set: set[str]) -> bool:
        if key in ad_set or key in url_set:
            return True

        alias = self._rules.alias_of(key)
        if alias is not None and alias in url_set:
            return True

        return any(source in ad_set for source in self._rules.names_aliased_to(key))

    def _has_value(self, parameter: str, key_set: set[str]) -> bool:
        if parameter in key_set:
            return True
        return any(source in key_set for source in self._rules.names_aliased_to(parameter))

    # =========================================================================
    # Change Previews
    # =========================================================================

    def preview_template_change(
        self,
        template: TemplateSnapshot,
        candidate_body: str,
        bound: list[BoundContent],
        candidate_name: str | None = None,
    ) -> ImpactReport:
        """Preview the impact of a content-template edit.

        Only the content-template buckets (missing, unused) are reported.
        When the body changed but no bound record has a mismatch, every
        bound record is still listed because its rendered output changes.

        Args:
            template: Saved template.
            candidate_body: Body about to be saved.
            bound: Records bound to the template, with their URL templates.
            candidate_name: New name, if the edit renames the template.

        Returns:
            ImpactReport for the edit.

        Raises:
            MalformedContentDataError: If a bound record's data cannot be decoded.
        """
        name = candidate_name or template.name

        if template.body == candidate_body:
            logger.info(f"Template {template.id} body unchanged, skipping impact analysis")
            return ImpactReport(
                template_id=template.id,
                template_name=name,
                changed=False,
                placeholder_diff=PlaceholderDiff(),
            )

        current = extract_placeholders(template.body)
        candidate = extract_placeholders(candidate_body)
        placeholder_diff = diff_placeholders(current, candidate_body)

        affected: list[AffectedContent] = []
        for entry in bound:
            record = entry.record
            data = decode_content_data(record.content_data, record.id)
            url_parameters = extract_placeholders(entry.url_template.pattern) if entry.url_template else []

            result = self.classify(candidate, url_parameters, data.keys())
            if result.missing_placeholders or result.unused_ad_template_placeholders:
                affected.append(
                    _affected(
                        record,
                        result.missing_placeholders,
                        result.unused_ad_template_placeholders,
                    )
                )

        if not affected:
            affected = [_affected(entry.record) for entry in bound]

        severity = classify_severity(placeholder_diff, len(affected), self._threshold)

        logger.info(
            f"Template {template.id} impact: added={len(placeholder_diff.added)}, "
            f"removed={len(placeholder_diff.removed)}, affected={len(affected)}, "
            f"severity={severity.value}"
        )

        return ImpactReport(
            template_id=template.id,
            template_name=name,
            changed=True,
            placeholder_diff=placeholder_diff,
            old_parameters=current,
            new_parameters=candidate,
            affected_contents=affected,
            total_affected=len(affected),
            severity=severity,
        )

    def preview_url_template_change(
        self,
        url_template: UrlTemplateSnapshot,
        candidate_pattern: str,
        records: list[ContentSnapshot],
        candidate_name: str | None = None,
    ) -> ImpactReport:
        """Preview the impact of a URL-template edit.

        Added parameters are never reported as missing since URL
        parameters are populated dynamically. Stored keys naming a removed
        parameter are reported as unused. Every bound record counts towards
        ``total_affected``.

        Raises:
            MalformedContentDataError: If a bound record's data cannot be decoded.
        """
        name = candidate_name or url_template.name

        if url_template.pattern == candidate_pattern:
            logger.info(f"URL template {url_template.id} pattern unchanged, skipping impact analysis")
            return ImpactReport(
                template_id=url_template.id,
                template_name=name,
                changed=False,
                placeholder_diff=PlaceholderDiff(),
            )

        old_parameters = extract_placeholders(url_template.pattern)
        new_parameters = extract_placeholders(candidate_pattern)
        parameter_diff = diff_placeholder_sets(old_parameters, new_parameters)
        removed = set(parameter_diff.removed)

        affected: list[AffectedContent] = []
        for record in records:
            data = decode_content_data(record.content_data, record.id)
            affected.append(_affected(record, [], [key for key in data if key in removed]))

        severity = classify_severity(parameter_diff, len(records), self._threshold)

        logger.info(
            f"URL template {url_template.id} impact: added={len(parameter_diff.added)}, "
            f"removed={len(parameter_diff.removed)}, bound={len(records)}, "
            f"severity={severity.value}"
        )

        return ImpactReport(
            template_id=url_template.id,
            template_name=name,
            changed=True,
            placeholder_diff=parameter_diff,
            old_parameters=old_parameters,
            new_parameters=new_parameters,
            affected_contents=affected,
            total_affected=len(records),
            severity=severity,
        )

    # =========================================================================
    # Integrity
    # =========================================================================

    def validate_record(
        self,
        record: ContentSnapshot,
        template: TemplateSnapshot,
    ) -> RecordIntegrityResult:
        """Check one record's stored data against its saved content template.

        Raises:
            MalformedContentDataError: If the record's data cannot be decoded.
        """
        data = decode_content_data(record.content_data, record.id)
        placeholders = extract_placeholders(template.body)
        placeholder_set = set(placeholders)

        missing = [name for name in placeholders if name not in data]
        unused = [key for key in data if key not in placeholder_set]

        return RecordIntegrityResult(
            is_valid=not missing and not unused,
            missing_placeholders=missing,
            unused_placeholders=unused,
            template_name=template.name,
        )

    def scan(
        self,
        entries: list[BoundContent],
        checked_at: datetime | None = None,
    ) -> IntegrityStatus:
        """Run the full three-bucket classification over every record.

        Records whose content template does not resolve are reported as
        orphaned. A record with undecodable data is scanned as if it had no
        data; the rest of the scan is unaffected.

        Args:
            entries: Every content record with its templates resolved.
            checked_at: Timestamp to stamp on the result. Defaults to now.

        Returns:
            IntegrityStatus with mismatch issues first, then orphans.
        """
        mismatches: list[IntegrityIssue] = []
        orphans: list[IntegrityIssue] = []

        for entry in entries:
            record = entry.record

            if entry.template is None:
                orphans.append(
                    IntegrityIssue(
                        type=IssueType.ORPHANED_CONTENT,
                        content_id=record.id,
                        content_name=record.name,
                        description="The referenced content template has been deleted",
                        severity=IssueSeverity.CRITICAL,
                    )
                )
                continue

            data = self._decode_for_scan(record)
            ad_placeholders = extract_placeholders(entry.template.body)
            url_placeholders = extract_placeholders(entry.url_template.pattern) if entry.url_template else []

            result = self.classify(ad_placeholders, url_placeholders, data.keys())
            if not result.has_mismatch:
                continue

            mismatches.append(
                IntegrityIssue(
                    type=IssueType.PLACEHOLDER_MISMATCH,
                    content_id=record.id,
                    content_name=record.name,
                    template_id=entry.template.id,
                    template_name=entry.template.name,
                    url_template_id=entry.url_template.id if entry.url_template else None,
                    url_template_name=entry.url_template.name if entry.url_template else None,
                    description=_describe(result),
                    missing_placeholders=result.missing_placeholders,
                    unused_ad_template_placeholders=result.unused_ad_template_placeholders,
                    unused_url_template_placeholders=result.unused_url_template_placeholders,
                    severity=IssueSeverity.WARNING,
                )
            )

        issues = mismatches + orphans
        critical = sum(1 for issue in issues if issue.severity == IssueSeverity.CRITICAL)
        warning = sum(1 for issue in issues if issue.severity == IssueSeverity.WARNING)

        if critical:
            overall = OverallStatus.CRITICAL
        elif warning:
            overall = OverallStatus.WARNING
        else:
            overall = OverallStatus.HEALTHY

        logger.info(
            f"Integrity scan complete: records={len(entries)}, issues={len(issues)}, "
            f"critical={critical}, warning={warning}"
        )

        return IntegrityStatus(
            overall_status=overall,
            last_checked=checked_at or datetime.now(timezone.utc),
            total_issues=len(issues),
            critical_issues=critical,
            warning_issues=warning,
            issues=issues,
        )

    def _decode_for_scan(self, record: ContentSnapshot) -> dict[str, Any]:
        """Decode stored data, substituting an empty mapping on failure.

        This is the single recovery point for malformed stored data: the
        system scan must cover every other record even if one row is bad.
        """
        try:
            return decode_content_data(record.content_data, record.id)
        except MalformedContentDataError as e:
            logger.warning(f"Scanning content {record.id} with empty data: {e.reason}")
            return {}


def _affected(
    record: ContentSnapshot,
    missing: list[str] | None = None,
    unused: list[str] | None = None,
) -> AffectedContent:
    return AffectedContent(
        id=record.id,
        name=record.name,
        status=record.status,
        missing_placeholders=missing or [],
        unused_placeholders=unused or [],
    )


def _describe(result: RecordClassification) -> str:
    parts = []
    if result.missing_placeholders:
        parts.append(f"Missing placeholders: {', '.join(result.missing_placeholders)}")
    if result.unused_ad_template_placeholders:
        parts.append(
            f"Unused by content template: {', '.join(result.unused_ad_template_placeholders)}"
        )
    if result.unused_url_template_placeholders:
        parts.append(
            f"Not supplied for URL template: {', '.join(result.unused_url_template_placeholders)}"
        )
    return " / ".join(parts)
