from datetime import datetime, timezone

from sanitizer.processor.models import DocumentSanitization
from sanitizer.redaction.categories import auto_detected_categories, get_redaction_summary
from sanitizer.redaction.custom_terms import filter_custom_strings
from sanitizer.redaction.models import PrivacyModeConfig, RedactionCategory

REPORT_VERSION = "v1"


class ReportExporter:
    """Converts a document sanitization into its JSON-serializable report record."""

    def export(
        self,
        result: DocumentSanitization,
        config: PrivacyModeConfig,
        created_at: datetime | None = None,
    ) -> dict[str, object]:
        """Build the persisted report metadata.

        ``counts`` lists every enabled category, zeros included, plus
        ``custom`` when custom terms are in use. ``createdAt`` defaults to now.
        """
        custom_strings, _ = filter_custom_strings(config.custom_strings)
        categories = [c for c in auto_detected_categories() if config.is_enabled(c)]
        if custom_strings:
            categories.append(RedactionCategory.CUSTOM)

        counts = result.report.counts
        stamp = created_at if created_at is not None else datetime.now(timezone.utc)
        return {
            "privacyMode": True,
            "version": REPORT_VERSION,
            "categoriesEnabled": [c.value for c in categories],
            "counts": {c.value: counts.get(c, 0) for c in categories},
            "pagesAffected": list(result.report.pages_affected),
            "customStringsCount": len(custom_strings),
            "pagesFailed": [f.page_number for f in result.failures],
            "summary": get_redaction_summary(counts),
            "createdAt": self._format_timestamp(stamp),
        }

    def _format_timestamp(self, stamp: datetime) -> str:
        if stamp.tzinfo is None:
            stamp = stamp.replace(tzinfo=timezone.utc)
        return stamp.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
            "+00:00", "Z"
        )
