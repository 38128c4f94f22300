from sanitizer.redaction.exceptions import SanitizationError


class InvalidPageError(SanitizationError):
    """Raised when the page list violates the caller contract."""


class DocumentSanitizationError(SanitizationError):
    """Raised in fail-closed mode when any page cannot be sanitized."""

    def __init__(self, message: str, page_number: int) -> None:
        super().__init__(message)
        self.page_number = page_number
