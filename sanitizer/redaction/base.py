from abc import ABC, abstractmethod

from sanitizer.redaction.models import PrivacyModeConfig, SanitizationResult


class BaseSanitizer(ABC):
    """Contract for all text sanitizers."""

    @abstractmethod
    def sanitize(self, text: str, config: PrivacyModeConfig) -> SanitizationResult:
        """Mask sensitive spans in one page's text.

        Args:
            text: Extracted page text.
            config: Enabled categories and custom terms.

        Returns:
            SanitizationResult with the rewritten text and per-category counts.

        Raises:
            MatcherFaultError: if detection fails on this text.
        """
