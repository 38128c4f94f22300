from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from sanitizer.processor.exceptions import InvalidPageError
from sanitizer.redaction.models import RedactionCategory


@dataclass(frozen=True)
class PageText:
    """Extracted text of one page. Page numbers are 1-based."""

    page_number: int
    text: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PageText":
        """Build a page from ``{"pageNumber": 1, "text": "..."}``.

        Raises:
            InvalidPageError: if a key is missing or the object is not a mapping.
        """
        if not isinstance(data, Mapping):
            raise InvalidPageError("Page must be an object")
        try:
            return cls(page_number=data["pageNumber"], text=data["text"])
        except KeyError as exc:
            raise InvalidPageError(f"Page is missing key {exc.args[0]!r}") from exc


@dataclass(frozen=True)
class SanitizedPage:
    page_number: int
    sanitized_text: str
    counts: Counter[RedactionCategory] = field(default_factory=Counter)


@dataclass(frozen=True)
class PageFailure:
    """A page that could not be sanitized and was passed through unmasked."""

    page_number: int
    error: str


@dataclass(frozen=True)
class PageCounts:
    page_number: int
    counts: Mapping[RedactionCategory, int]


@dataclass
class SanitizationReport:
    """Document-wide totals. Only positive counts are stored."""

    counts: Counter[RedactionCategory] = field(default_factory=Counter)
    pages_affected: list[int] = field(default_factory=list)


@dataclass
class DocumentSanitization:
    pages: list[SanitizedPage] = field(default_factory=list)
    report: SanitizationReport = field(default_factory=SanitizationReport)
    failures: list[PageFailure] = field(default_factory=list)
