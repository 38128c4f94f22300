from sanitizer.redaction.base import BaseSanitizer
from sanitizer.redaction.categories import (
    CategoryInfo,
    auto_detected_categories,
    get_default_privacy_config,
    get_redaction_summary,
    info_for,
    list_categories,
)
from sanitizer.redaction.engine import RedactionEngine
from sanitizer.redaction.factory import SanitizerFactory
from sanitizer.redaction.models import Match, PrivacyModeConfig, RedactionCategory, SanitizationResult

__all__ = [
    "BaseSanitizer",
    "CategoryInfo",
    "Match",
    "PrivacyModeConfig",
    "RedactionCategory",
    "RedactionEngine",
    "SanitizationResult",
    "SanitizerFactory",
    "auto_detected_categories",
    "get_default_privacy_config",
    "get_redaction_summary",
    "info_for",
    "list_categories",
]
