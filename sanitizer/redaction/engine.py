"""Deterministic, rule-based redaction of one page of text.

Processing flow:
1. Collect matches from every enabled built-in matcher and the custom terms.
2. Resolve overlaps: earliest start wins, then the longer span, then the
   detection precedence.
3. Rewrite each accepted span with a fixed per-category mask token and count
   the replacements.

Mask tokens never reveal the length or shape of the original span.
"""

from collections.abc import Mapping

from sanitizer.logging.logger import Log
from sanitizer.redaction.base import BaseSanitizer
from sanitizer.redaction.categories import default_matchers
from sanitizer.redaction.custom_terms import CustomTermMatcher, filter_custom_strings
from sanitizer.redaction.exceptions import MatcherFaultError, SanitizationError
from sanitizer.redaction.models import (
    Matcher,
    PrivacyModeConfig,
    RedactionCategory,
    SanitizationResult,
)
from sanitizer.redaction.pipeline import RedactionContext, RedactionStep
from sanitizer.redaction.steps import CollectMatchesStep, ResolveOverlapsStep, RewriteStep


class RedactionEngine(BaseSanitizer):
    """Pure, synchronous sanitizer: same text and config, same output."""

    def __init__(
        self,
        matchers: Mapping[RedactionCategory, Matcher] | None = None,
        custom_term_matcher: CustomTermMatcher | None = None,
        mask_tokens: Mapping[RedactionCategory, str] | None = None,
    ) -> None:
        self._steps: list[RedactionStep] = [
            CollectMatchesStep(
                matchers if matchers is not None else default_matchers(),
                custom_term_matcher or CustomTermMatcher(),
            ),
            ResolveOverlapsStep(),
            RewriteStep(mask_tokens),
        ]

    def sanitize(self, text: str, config: PrivacyModeConfig) -> SanitizationResult:
        try:
            return self._run(text, config)
        except SanitizationError:
            raise
        except Exception as exc:
            raise MatcherFaultError(f"Sanitization failed: {exc}") from exc

    def _run(self, text: str, config: PrivacyModeConfig) -> SanitizationResult:
        if not isinstance(text, str):
            raise MatcherFaultError(f"Expected text as str, got {type(text).__name__}")
        if not text:
            return SanitizationResult(sanitized_text=text)

        custom_strings, _ = filter_custom_strings(config.custom_strings)
        context = RedactionContext(text=text, config=config, custom_strings=custom_strings)
        for step in self._steps:
            context = step.run(context)

        Log.debug(
            "Sanitized text",
            candidates=len(context.matches),
            redactions=len(context.accepted),
        )
        return SanitizationResult(
            sanitized_text=context.sanitized_text,
            matches_by_category=context.counts,
            redactions=list(context.accepted),
        )
