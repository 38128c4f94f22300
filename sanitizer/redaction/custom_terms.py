"""Literal, case-insensitive matching of user-supplied terms.

Terms and page text are folded character by character through an ICU
transform. Each folded character remembers the index of the original
character that produced it, so spans found in the folded text map back onto
the original even when folding changes the length (``İ`` lowers to two code
points).

Terms are escaped before compilation and compiled per call. User text such
as ``Smith & Co. (Pty)`` is always matched literally.
"""

import re
from collections.abc import Iterable
from typing import ClassVar, Literal

import icu  # type: ignore[import-untyped]

from sanitizer.redaction.models import Match, RedactionCategory

CustomTermMode = Literal["case_insensitive", "transliterated"]

MIN_TERM_LENGTH = 2


def filter_custom_strings(terms: Iterable[object]) -> tuple[tuple[str, ...], list[object]]:
    """Split *terms* into usable (trimmed, unique) and rejected entries.

    A term is rejected when it is not a string, is shorter than
    ``MIN_TERM_LENGTH`` after trimming, or repeats an earlier term
    (case-sensitive).
    """
    kept: list[str] = []
    rejected: list[object] = []
    seen: set[str] = set()
    for term in terms:
        if not isinstance(term, str):
            rejected.append(term)
            continue
        trimmed = term.strip()
        if len(trimmed) < MIN_TERM_LENGTH or trimmed in seen:
            rejected.append(term)
            continue
        seen.add(trimmed)
        kept.append(trimmed)
    return tuple(kept), rejected


class CustomTermMatcher:
    """Finds every occurrence of every custom term, overlaps included."""

    _ICU_TRANSFORMS: ClassVar[dict[str, str]] = {
        "case_insensitive": "Lower",
        "transliterated": "Any-Latin; Latin-ASCII; Lower",
    }

    def __init__(self, mode: CustomTermMode = "case_insensitive") -> None:
        if mode not in self._ICU_TRANSFORMS:
            raise ValueError(
                f"Unknown custom term mode '{mode}'. Choose from: {list(self._ICU_TRANSFORMS)}"
            )
        self._mode = mode

    @property
    def mode(self) -> str:
        return self._mode

    def match(self, text: str, custom_strings: Iterable[str]) -> list[Match]:
        terms = [t for t in custom_strings if t]
        if not text or not terms:
            return []

        # Transliterators are created per call and never shared between threads.
        transliterator = icu.Transliterator.createInstance(self._ICU_TRANSFORMS[self._mode])
        cache: dict[str, str] = {}
        folded_text, folded_to_orig = self._fold_with_mapping(text, transliterator, cache)

        matches: list[Match] = []
        for term in terms:
            folded_term, _ = self._fold_with_mapping(term, transliterator, cache)
            if not folded_term:
                continue
            # Zero-width lookahead reports overlapping occurrences too.
            pattern = re.compile(f"(?=({re.escape(folded_term)}))")
            for m in pattern.finditer(folded_text):
                start = folded_to_orig[m.start(1)]
                end = folded_to_orig[m.end(1) - 1] + 1
                matches.append(Match(RedactionCategory.CUSTOM, start, end))

        matches.sort(key=lambda m: (m.start, m.end))
        return matches

    @staticmethod
    def _fold_with_mapping(
        text: str,
        transliterator: "icu.Transliterator",
        cache: dict[str, str],
    ) -> tuple[str, list[int]]:
        """Fold *text* per character.

        Returns:
            (folded_text, folded_to_orig) where folded_to_orig[j] is the index
            in *text* of the character that produced folded character j.
        """
        parts: list[str] = []
        folded_to_orig: list[int] = []
        for orig_idx, ch in enumerate(text):
            folded = cache.get(ch)
            if folded is None:
                folded = transliterator.transliterate(ch)
                cache[ch] = folded
            parts.append(folded)
            folded_to_orig.extend([orig_idx] * len(folded))
        return "".join(parts), folded_to_orig


def match_custom_terms(text: str, custom_strings: Iterable[str]) -> list[Match]:
    """Case-insensitive literal match of *custom_strings* in *text*."""
    return CustomTermMatcher().match(text, custom_strings)
