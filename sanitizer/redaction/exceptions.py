class SanitizationError(Exception):
    """Base exception for all sanitizer errors."""


class InvalidConfigError(SanitizationError):
    """Raised when a privacy config cannot be parsed (unknown category, wrong types)."""


class MatcherFaultError(SanitizationError):
    """Raised when a matcher fails on a page's text."""

    def __init__(self, message: str, category: str | None = None) -> None:
        super().__init__(message)
        self.category = category
