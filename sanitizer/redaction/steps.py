from collections import Counter
from collections.abc import Callable, Mapping

from sanitizer.logging.logger import Log
from sanitizer.redaction.categories import DETECTION_PRECEDENCE, list_categories
from sanitizer.redaction.custom_terms import CustomTermMatcher
from sanitizer.redaction.exceptions import MatcherFaultError
from sanitizer.redaction.models import Match, Matcher, RedactionCategory
from sanitizer.redaction.pipeline import RedactionContext, RedactionStep

_PRECEDENCE_RANK: dict[RedactionCategory, int] = {
    category: rank for rank, category in enumerate(DETECTION_PRECEDENCE)
}


class CollectMatchesStep(RedactionStep):
    """Runs every enabled matcher, plus the custom term matcher, over the full text."""

    def __init__(
        self,
        matchers: Mapping[RedactionCategory, Matcher],
        custom_term_matcher: CustomTermMatcher,
    ) -> None:
        self._matchers = dict(matchers)
        self._custom_term_matcher = custom_term_matcher

    def run(self, context: RedactionContext) -> RedactionContext:
        matches: list[Match] = []
        for category, matcher in self._matchers.items():
            if context.config.is_enabled(category):
                matches.extend(self._invoke(category, matcher, context.text))

        if context.custom_strings:
            terms = context.custom_strings
            matches.extend(
                self._invoke(
                    RedactionCategory.CUSTOM,
                    lambda text: self._custom_term_matcher.match(text, terms),
                    context.text,
                )
            )

        context.matches = matches
        return context

    @staticmethod
    def _invoke(
        category: RedactionCategory,
        matcher: Callable[[str], list[Match]],
        text: str,
    ) -> list[Match]:
        try:
            found = list(matcher(text))
        except Exception as exc:
            raise MatcherFaultError(
                f"{category.value} matcher failed: {exc}", category=category.value
            ) from exc
        for match in found:
            if not isinstance(match, Match) or match.end > len(text):
                raise MatcherFaultError(
                    f"{category.value} matcher returned an invalid span",
                    category=category.value,
                )
        return found


class ResolveOverlapsStep(RedactionStep):
    """Keeps a non-overlapping subset of matches, scanning left to right.

    Order: start ascending, then longer span first, then detection precedence.
    Anything overlapping an already accepted match is discarded.
    """

    def run(self, context: RedactionContext) -> RedactionContext:
        ordered = sorted(
            context.matches,
            key=lambda m: (m.start, -m.raw_length, _PRECEDENCE_RANK[m.category]),
        )
        accepted: list[Match] = []
        accepted_end = 0
        for match in ordered:
            if match.start >= accepted_end:
                accepted.append(match)
                accepted_end = match.end

        discarded = len(ordered) - len(accepted)
        if discarded:
            Log.debug("Discarded overlapping matches", discarded=discarded)
        context.accepted = accepted
        return context


class RewriteStep(RedactionStep):
    """Replaces each accepted span with its category's fixed mask token."""

    def __init__(self, mask_tokens: Mapping[RedactionCategory, str] | None = None) -> None:
        tokens = {info.category: info.mask_token for info in list_categories()}
        if mask_tokens:
            tokens.update(mask_tokens)
        self._mask_tokens = tokens

    def run(self, context: RedactionContext) -> RedactionContext:
        pieces: list[str] = []
        counts: Counter[RedactionCategory] = Counter()
        cursor = 0
        for match in context.accepted:
            pieces.append(context.text[cursor:match.start])
            pieces.append(self._mask_tokens[match.category])
            counts[match.category] += 1
            cursor = match.end
        pieces.append(context.text[cursor:])

        context.sanitized_text = "".join(pieces)
        context.counts = counts
        return context
