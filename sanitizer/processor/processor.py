from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace

from sanitizer.config.settings import Settings
from sanitizer.logging.logger import Log
from sanitizer.processor.exceptions import DocumentSanitizationError, InvalidPageError
from sanitizer.processor.models import (
    DocumentSanitization,
    PageCounts,
    PageFailure,
    PageText,
    SanitizedPage,
)
from sanitizer.processor.report import ReportAggregator
from sanitizer.redaction.base import BaseSanitizer
from sanitizer.redaction.custom_terms import filter_custom_strings
from sanitizer.redaction.exceptions import MatcherFaultError
from sanitizer.redaction.factory import SanitizerFactory
from sanitizer.redaction.models import PrivacyModeConfig

_PageOutcome = tuple[SanitizedPage, PageFailure | None]


class Processor:
    """Sanitizes every page of a document and aggregates the report.

    Pipeline: validate pages -> filter custom terms -> sanitize each page ->
    aggregate counts. Pages are independent; output keeps input order.
    """

    def __init__(
        self,
        sanitizer: BaseSanitizer,
        report_aggregator: ReportAggregator,
        *,
        fail_closed: bool = False,
        max_workers: int = 1,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._sanitizer = sanitizer
        self._report_aggregator = report_aggregator
        self._fail_closed = fail_closed
        self._max_workers = max_workers

    def sanitize_pages(
        self, pages: Sequence[PageText], config: PrivacyModeConfig
    ) -> DocumentSanitization:
        """Run the sanitizer over *pages* under *config*.

        A page whose sanitization faults is passed through unmasked and
        recorded in ``failures``, unless the processor fails closed.

        Raises:
            InvalidPageError: if the page list is malformed. Nothing is processed.
            DocumentSanitizationError: on any page fault when failing closed.
        """
        pages = list(pages)
        self._validate(pages)
        if not pages:
            return DocumentSanitization()

        config = self._with_valid_custom_strings(config)
        Log.info(
            "Sanitizing document",
            pages=len(pages),
            categories=len(config.enabled_categories),
            custom_terms=len(config.custom_strings),
        )

        if self._max_workers > 1 and len(pages) > 1:
            with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
                outcomes = list(executor.map(lambda p: self._sanitize_page(p, config), pages))
        else:
            outcomes = [self._sanitize_page(page, config) for page in pages]

        sanitized = [page for page, _ in outcomes]
        failures = [failure for _, failure in outcomes if failure is not None]
        report = self._report_aggregator.aggregate(
            PageCounts(page_number=p.page_number, counts=p.counts) for p in sanitized
        )
        Log.info(
            "Sanitized document",
            pages=len(sanitized),
            redactions=sum(report.counts.values()),
            pages_affected=len(report.pages_affected),
            pages_failed=len(failures),
        )
        return DocumentSanitization(pages=sanitized, report=report, failures=failures)

    def _sanitize_page(self, page: PageText, config: PrivacyModeConfig) -> _PageOutcome:
        try:
            result = self._sanitizer.sanitize(page.text, config)
        except MatcherFaultError as exc:
            if self._fail_closed:
                Log.error("Page sanitization failed, aborting document", page=page.page_number)
                raise DocumentSanitizationError(
                    f"Sanitization failed on page {page.page_number}: {exc}",
                    page_number=page.page_number,
                ) from exc
            Log.warning(
                "Page sanitization failed, passing page through unmasked",
                page=page.page_number,
                category=exc.category,
            )
            return (
                SanitizedPage(page_number=page.page_number, sanitized_text=page.text),
                PageFailure(page_number=page.page_number, error=str(exc)),
            )

        return (
            SanitizedPage(
                page_number=page.page_number,
                sanitized_text=result.sanitized_text,
                counts=result.matches_by_category,
            ),
            None,
        )

    def _with_valid_custom_strings(self, config: PrivacyModeConfig) -> PrivacyModeConfig:
        kept, rejected = filter_custom_strings(config.custom_strings)
        if rejected:
            Log.warning("Ignoring invalid custom terms", ignored=len(rejected))
        if kept == config.custom_strings:
            return config
        return replace(config, custom_strings=kept)

    def _validate(self, pages: list[PageText]) -> None:
        previous: int | None = None
        for index, page in enumerate(pages):
            if not isinstance(page, PageText):
                raise InvalidPageError(
                    f"Item {index} is {type(page).__name__}, expected PageText"
                )
            number = page.page_number
            if isinstance(number, bool) or not isinstance(number, int) or number <= 0:
                raise InvalidPageError(f"Item {index} has invalid page number {number!r}")
            if not isinstance(page.text, str):
                raise InvalidPageError(f"Page {number} text must be str")
            if previous is not None and number <= previous:
                raise InvalidPageError(
                    f"Page numbers must be unique and increasing: {number} follows {previous}"
                )
            previous = number


def build_processor(settings: Settings) -> Processor:
    """Build a Processor with the configured sanitizer and page policy."""
    sanitizer = SanitizerFactory.create(settings)
    return Processor(
        sanitizer=sanitizer,
        report_aggregator=ReportAggregator(),
        fail_closed=settings.sanitizer_fail_closed,
        max_workers=settings.sanitizer_max_workers,
    )
