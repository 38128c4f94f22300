from collections import Counter
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from sanitizer.redaction.exceptions import InvalidConfigError


class RedactionCategory(str, Enum):
    """Closed set of redaction categories. Values are the wire names."""

    EMAIL = "email"
    PHONE = "phone"
    IBAN = "iban"
    NATIONAL_ID = "nationalId"
    CREDIT_CARD = "creditCard"
    CR_NUMBER = "crNumber"
    UNIFIED_NUMBER = "unifiedNumber"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value: object) -> "RedactionCategory":
        """Resolve an enum member or wire name.

        Raises:
            InvalidConfigError: if *value* names no category.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError as exc:
            raise InvalidConfigError(f"Unknown redaction category: {value!r}") from exc


@dataclass(frozen=True, slots=True)
class Match:
    """A detected span in one page's text. ``end`` is exclusive."""

    category: RedactionCategory
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end <= self.start:
            raise ValueError(f"Invalid match span [{self.start}, {self.end})")

    @property
    def raw_length(self) -> int:
        return self.end - self.start


Matcher = Callable[[str], list[Match]]


@dataclass(frozen=True)
class PrivacyModeConfig:
    """Per-invocation redaction policy chosen by the user."""

    enabled_categories: frozenset[RedactionCategory] = frozenset()
    custom_strings: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "enabled_categories",
            frozenset(RedactionCategory.parse(c) for c in self.enabled_categories),
        )
        object.__setattr__(self, "custom_strings", tuple(self.custom_strings))

    def is_enabled(self, category: RedactionCategory | str) -> bool:
        return RedactionCategory.parse(category) in self.enabled_categories

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PrivacyModeConfig":
        """Build a config from its JSON form.

        ``{"enabledCategories": [...], "customStrings": [...]}``. A missing
        ``enabledCategories`` key enables every auto-detected category.

        Raises:
            InvalidConfigError: on unknown categories or wrongly typed fields.
        """
        if not isinstance(data, Mapping):
            raise InvalidConfigError("Privacy config must be an object")

        if "enabledCategories" in data:
            categories = data["enabledCategories"]
            if isinstance(categories, str) or not isinstance(categories, (list, tuple)):
                raise InvalidConfigError("'enabledCategories' must be a list")
        else:
            categories = [c for c in RedactionCategory if c is not RedactionCategory.CUSTOM]

        custom = data.get("customStrings", [])
        if isinstance(custom, str) or not isinstance(custom, (list, tuple)):
            raise InvalidConfigError("'customStrings' must be a list")

        return cls(
            enabled_categories=frozenset(RedactionCategory.parse(c) for c in categories),
            custom_strings=tuple(custom),
        )


@dataclass
class SanitizationResult:
    """Output of sanitizing one text buffer."""

    sanitized_text: str
    matches_by_category: Counter[RedactionCategory] = field(default_factory=Counter)
    redactions: list[Match] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(self.matches_by_category.values())
