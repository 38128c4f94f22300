"""Static registry of redaction categories.

Every category is registered exactly once, and every built-in carries a
matcher. Both are checked when the module is imported, so adding a category
to ``RedactionCategory`` without registering it fails immediately.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from sanitizer.redaction.matchers import (
    match_credit_card,
    match_cr_number,
    match_email,
    match_iban,
    match_national_id,
    match_phone,
    match_unified_number,
)
from sanitizer.redaction.models import Matcher, PrivacyModeConfig, RedactionCategory


@dataclass(frozen=True)
class CategoryInfo:
    """Display and detection details of one category."""

    category: RedactionCategory
    display_name: str
    example_mask: str
    mask_token: str
    matcher: Matcher | None = None


_CATEGORIES: tuple[CategoryInfo, ...] = (
    CategoryInfo(
        RedactionCategory.EMAIL, "Emails", "a****@d****.com", "[EMAIL]", match_email
    ),
    CategoryInfo(
        RedactionCategory.PHONE, "Phone Numbers", "+966*****78", "[PHONE]", match_phone
    ),
    CategoryInfo(
        RedactionCategory.IBAN, "IBANs", "SA**********7519", "[IBAN]", match_iban
    ),
    CategoryInfo(
        RedactionCategory.NATIONAL_ID,
        "National IDs",
        "********90",
        "[NATIONAL_ID]",
        match_national_id,
    ),
    CategoryInfo(
        RedactionCategory.CREDIT_CARD,
        "Credit Cards",
        "************1234",
        "[CREDIT_CARD]",
        match_credit_card,
    ),
    CategoryInfo(
        RedactionCategory.CR_NUMBER, "CR Numbers", "********10", "[CR_NUMBER]", match_cr_number
    ),
    CategoryInfo(
        RedactionCategory.UNIFIED_NUMBER,
        "700 Numbers",
        "700*******89",
        "[UNIFIED_NUMBER]",
        match_unified_number,
    ),
    CategoryInfo(RedactionCategory.CUSTOM, "Custom Terms", "████████", "[CUSTOM]"),
)

_REGISTRY: dict[RedactionCategory, CategoryInfo] = {c.category: c for c in _CATEGORIES}

# Tie-break for matches with the same start and length: checksum-validated
# identifiers beat the looser shapes, phone is the loosest.
DETECTION_PRECEDENCE: tuple[RedactionCategory, ...] = (
    RedactionCategory.EMAIL,
    RedactionCategory.IBAN,
    RedactionCategory.CREDIT_CARD,
    RedactionCategory.NATIONAL_ID,
    RedactionCategory.UNIFIED_NUMBER,
    RedactionCategory.CR_NUMBER,
    RedactionCategory.CUSTOM,
    RedactionCategory.PHONE,
)


def _check_registry() -> None:
    if len(_REGISTRY) != len(_CATEGORIES):
        raise RuntimeError("Redaction category registered twice")
    for category in RedactionCategory:
        info = _REGISTRY.get(category)
        if info is None:
            raise RuntimeError(f"Redaction category {category.value!r} is not registered")
        if category is not RedactionCategory.CUSTOM and info.matcher is None:
            raise RuntimeError(f"Redaction category {category.value!r} has no matcher")
    if set(DETECTION_PRECEDENCE) != set(RedactionCategory):
        raise RuntimeError("Detection precedence must rank every category")


_check_registry()


def list_categories() -> list[CategoryInfo]:
    return list(_CATEGORIES)


def info_for(category: RedactionCategory | str) -> CategoryInfo:
    """Look up a category by enum member or wire name.

    Raises:
        InvalidConfigError: if the name is unknown.
    """
    return _REGISTRY[RedactionCategory.parse(category)]


def auto_detected_categories() -> list[RedactionCategory]:
    """Every built-in category. ``custom`` is user-driven and has no pattern."""
    return [c.category for c in _CATEGORIES if c.category is not RedactionCategory.CUSTOM]


def default_matchers() -> dict[RedactionCategory, Matcher]:
    return {c.category: c.matcher for c in _CATEGORIES if c.matcher is not None}


def get_default_privacy_config() -> PrivacyModeConfig:
    """Fresh config with every auto-detected category on and no custom terms."""
    return PrivacyModeConfig(
        enabled_categories=frozenset(auto_detected_categories()),
        custom_strings=(),
    )


def get_redaction_summary(counts: Mapping[RedactionCategory | str, int]) -> str:
    """Human-readable summary, e.g. ``Masked: 2 emails, 1 phone numbers``."""
    # Wire-name keys and enum keys are merged.
    totals: dict[RedactionCategory, int] = {}
    for key, count in counts.items():
        category = RedactionCategory.parse(key)
        totals[category] = totals.get(category, 0) + count
    if sum(totals.values()) == 0:
        return "No sensitive data detected"

    parts: list[str] = []
    for info in _CATEGORIES:
        count = totals.get(info.category, 0)
        if count > 0:
            parts.append(f"{count} {info.display_name.lower()}")
    return "Masked: " + ", ".join(parts)
