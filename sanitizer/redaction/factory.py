from sanitizer.config.settings import Settings
from sanitizer.redaction.base import BaseSanitizer
from sanitizer.redaction.categories import default_matchers
from sanitizer.redaction.custom_terms import CustomTermMatcher
from sanitizer.redaction.engine import RedactionEngine
from sanitizer.redaction.matchers import national_id_matcher
from sanitizer.redaction.models import RedactionCategory


class SanitizerFactory:
    """Creates the configured sanitizer."""

    @classmethod
    def create(cls, settings: Settings) -> BaseSanitizer:
        """Build a RedactionEngine for the configured locale and term matching.

        Raises:
            ValueError: on an unknown national ID locale or custom term mode.
        """
        matchers = default_matchers()
        matchers[RedactionCategory.NATIONAL_ID] = national_id_matcher(
            settings.national_id_locale
        )
        return RedactionEngine(
            matchers=matchers,
            custom_term_matcher=CustomTermMatcher(settings.custom_term_matching.lower()),
        )
