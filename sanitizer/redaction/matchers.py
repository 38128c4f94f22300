"""Pattern matchers for the built-in redaction categories.

Each matcher is a pure function ``text -> list[Match]`` returning spans in
left-to-right order. Compiled patterns are module constants and matchers keep
no state, so they can run on several pages at once.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial

from sanitizer.redaction.checksums import (
    IBAN_LENGTHS,
    IBAN_MAX_LENGTH,
    iban_is_valid,
    luhn_is_valid,
)
from sanitizer.redaction.models import Match, Matcher, RedactionCategory

_EMAIL_RE = re.compile(
    r"(?<![\w.%+-])[A-Za-z0-9._%+-]+@[A-Za-z0-9-]+(?:\.[A-Za-z0-9-]+)*\.[A-Za-z]{2,}\b"
)

# Digits with at most one separator between them: space, dot, dash or a
# parenthesised area code. ". " never continues a number.
_PHONE_RE = re.compile(
    r"(?<![\w+])\+?\(?\d(?:(?:[ .\-]|\) ?|[ \-]?\()?\d){6,}(?!\w)"
)
# Phone windows are cut at spaces only, so "2024-01-15 2024-01-16" stays two dates.
_PHONE_GROUP_RE = re.compile(r"[^ ]+")
_PHONE_MIN_DIGITS = 9
_PHONE_MAX_DIGITS = 15
_DECIMAL_AMOUNT_RE = re.compile(r"\d+\.\d{1,2}")

_IBAN_START_RE = re.compile(r"(?<![A-Za-z0-9])[A-Za-z]{2}[0-9]{2}")

# Digit groups joined by single spaces or dashes.
_CARD_RUN_RE = re.compile(r"(?<!\w)\d+(?:[ \-]\d+)*(?!\w)")
_CARD_GROUP_RE = re.compile(r"\d+")
_CARD_MIN_DIGITS = 13
_CARD_MAX_DIGITS = 19

# Saudi commercial registration: ten digits, leading regional office code 1-5.
_CR_NUMBER_RE = re.compile(r"(?<!\w)[1-5]\d{9}(?!\w)")

# Saudi unified ("700") establishment number.
_UNIFIED_NUMBER_RE = re.compile(r"(?<!\w)700\d{7}(?!\w)")


@dataclass(frozen=True)
class NationalIdScheme:
    """Shape and check-digit rule of one locale's national identifier."""

    pattern: re.Pattern[str]
    length: int
    checksum: Callable[[str], bool] = luhn_is_valid


NATIONAL_ID_SCHEMES: dict[str, NationalIdScheme] = {
    # Saudi ID: 1 = citizen, 2 = resident (iqama).
    "sa": NationalIdScheme(re.compile(r"(?<!\w)[12]\d{9}(?!\w)"), length=10),
    # Emirates ID: 784-YYYY-NNNNNNN-C.
    "ae": NationalIdScheme(
        re.compile(r"(?<!\w)784-?\d{4}-?\d{7}-?\d(?!\w)"), length=15
    ),
}


def _digits(value: str) -> str:
    return "".join(ch for ch in value if ch.isdecimal())


def _scan(
    pattern: re.Pattern[str],
    category: RedactionCategory,
    text: str,
    accept: Callable[[str], bool] | None = None,
) -> list[Match]:
    return [
        Match(category, m.start(), m.end())
        for m in pattern.finditer(text)
        if accept is None or accept(m.group())
    ]


def match_email(text: str) -> list[Match]:
    return _scan(_EMAIL_RE, RedactionCategory.EMAIL, text)


def _group_windows(
    candidate: str,
    group_re: re.Pattern[str],
    min_digits: int,
    max_digits: int,
    accept: Callable[[str], bool],
) -> list[tuple[int, int]]:
    """Group-aligned sub-spans of *candidate* that hold an accepted number.

    A digit run joined by separators may hold several values side by side,
    such as a quantity before a card. Windows start and end on group
    boundaries. From each starting group the longest accepted window wins
    and the scan resumes after it.
    """
    groups = [(m.start(), m.end(), len(_digits(m.group()))) for m in group_re.finditer(candidate)]
    windows: list[tuple[int, int]] = []
    i = 0
    while i < len(groups):
        found: int | None = None
        total = 0
        for j in range(i, len(groups)):
            total += groups[j][2]
            if total > max_digits:
                break
            if total >= min_digits and accept(candidate[groups[i][0]:groups[j][1]]):
                found = j
        if found is None:
            i += 1
            continue
        windows.append((groups[i][0], groups[found][1]))
        i = found + 1
    return windows


def _is_phone_number(window: str) -> bool:
    return _DECIMAL_AMOUNT_RE.fullmatch(window) is None


def match_phone(text: str) -> list[Match]:
    matches: list[Match] = []
    for m in _PHONE_RE.finditer(text):
        windows = _group_windows(
            m.group(),
            _PHONE_GROUP_RE,
            _PHONE_MIN_DIGITS,
            _PHONE_MAX_DIGITS,
            _is_phone_number,
        )
        matches.extend(
            Match(RedactionCategory.PHONE, m.start() + start, m.start() + end)
            for start, end in windows
        )
    return matches


def _is_iban_char(ch: str) -> bool:
    return ch.isascii() and ch.isalnum()


def _iban_end(text: str, start: int) -> int | None:
    """Walk an IBAN candidate from *start*; return its end or None if invalid.

    Single spaces between groups are skipped. The walk stops at the length
    registered for the country code, so trailing text is never absorbed.
    Lower- or mixed-case candidates must name a registered country.
    """
    prefix = text[start:start + 2]
    country = prefix.upper()
    if not prefix.isupper() and country not in IBAN_LENGTHS:
        return None
    limit = IBAN_LENGTHS.get(country, IBAN_MAX_LENGTH)
    compact: list[str] = []
    pos = end = start
    while pos < len(text) and len(compact) < limit:
        ch = text[pos]
        if ch == " " and pos + 1 < len(text) and _is_iban_char(text[pos + 1]):
            pos += 1
            continue
        if not _is_iban_char(ch):
            break
        compact.append(ch)
        pos += 1
        end = pos
    if end < len(text) and text[end].isalnum():
        return None
    if not iban_is_valid("".join(compact).upper()):
        return None
    return end


def match_iban(text: str) -> list[Match]:
    matches: list[Match] = []
    resume = 0
    for m in _IBAN_START_RE.finditer(text):
        if m.start() < resume:
            continue
        end = _iban_end(text, m.start())
        if end is not None:
            matches.append(Match(RedactionCategory.IBAN, m.start(), end))
            resume = end
    return matches


def _is_card_number(window: str) -> bool:
    return luhn_is_valid(_digits(window))


def match_credit_card(text: str) -> list[Match]:
    matches: list[Match] = []
    for m in _CARD_RUN_RE.finditer(text):
        windows = _group_windows(
            m.group(),
            _CARD_GROUP_RE,
            _CARD_MIN_DIGITS,
            _CARD_MAX_DIGITS,
            _is_card_number,
        )
        matches.extend(
            Match(RedactionCategory.CREDIT_CARD, m.start() + start, m.start() + end)
            for start, end in windows
        )
    return matches


def _match_national_id(scheme: NationalIdScheme, text: str) -> list[Match]:
    def accept(candidate: str) -> bool:
        digits = _digits(candidate)
        return len(digits) == scheme.length and scheme.checksum(digits)

    return _scan(scheme.pattern, RedactionCategory.NATIONAL_ID, text, accept)


def national_id_matcher(locale: str) -> Matcher:
    """Matcher for the national identifier of *locale*.

    Raises:
        ValueError: if no scheme is registered for the locale.
    """
    scheme = NATIONAL_ID_SCHEMES.get(locale.lower())
    if scheme is None:
        raise ValueError(
            f"Unknown national ID locale '{locale}'. Choose from: {sorted(NATIONAL_ID_SCHEMES)}"
        )
    return partial(_match_national_id, scheme)


match_national_id = national_id_matcher("sa")


def match_cr_number(text: str) -> list[Match]:
    return _scan(_CR_NUMBER_RE, RedactionCategory.CR_NUMBER, text)


def match_unified_number(text: str) -> list[Match]:
    return _scan(_UNIFIED_NUMBER_RE, RedactionCategory.UNIFIED_NUMBER, text)
