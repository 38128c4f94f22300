from collections import Counter
from collections.abc import Iterable

from sanitizer.processor.models import PageCounts, SanitizationReport
from sanitizer.redaction.models import RedactionCategory


class ReportAggregator:
    """Folds per-page counts into a document report."""

    def aggregate(self, per_page_counts: Iterable[PageCounts]) -> SanitizationReport:
        """Sum counts across pages and list the pages with any redaction.

        Input order does not matter. ``pages_affected`` is sorted and unique.
        """
        totals: Counter[RedactionCategory] = Counter()
        affected: set[int] = set()
        for page in per_page_counts:
            page_total = 0
            for category, count in page.counts.items():
                if count > 0:
                    totals[category] += count
                    page_total += count
            if page_total:
                affected.add(page.page_number)
        return SanitizationReport(counts=totals, pages_affected=sorted(affected))
