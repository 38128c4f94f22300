import pytest

from sanitizer.redaction.matchers import (
    match_cr_number,
    match_credit_card,
    match_email,
    match_iban,
    match_national_id,
    match_phone,
    match_unified_number,
    national_id_matcher,
)
from sanitizer.redaction.models import Match, Matcher, RedactionCategory


def _spans(matcher: Matcher, text: str) -> list[str]:
    return [text[m.start:m.end] for m in matcher(text)]


class TestEmailMatcher:
    def test_finds_simple_address(self) -> None:
        text = "Write to john@acme.com today"
        assert match_email(text) == [Match(RedactionCategory.EMAIL, 9, 22)]

    def test_multi_label_domain_excludes_trailing_dot(self) -> None:
        assert _spans(match_email, "Mail a.b-c@mail.example.co.uk.") == [
            "a.b-c@mail.example.co.uk"
        ]

    def test_domain_without_tld_is_not_an_email(self) -> None:
        assert match_email("user@localhost and @handle") == []

    def test_returns_matches_left_to_right(self) -> None:
        text = "b@y.org then a@x.com"
        starts = [m.start for m in match_email(text)]
        assert starts == sorted(starts)
        assert len(starts) == 2


class TestPhoneMatcher:
    @pytest.mark.parametrize(
        "phone",
        ["+1 415 555 0100", "+966 50 123 4567", "(415) 555-0100", "0501234567", "+44.20.7946.0958"],
    )
    def test_accepts_common_formats(self, phone: str) -> None:
        assert _spans(match_phone, f"call {phone} now") == [phone]

    def test_sentence_end_is_not_part_of_number(self) -> None:
        assert _spans(match_phone, "Call +1 415 555 0100. Thanks") == ["+1 415 555 0100"]

    @pytest.mark.parametrize("text", ["2024-01-15", "code 1234567", "total 1234567.89"])
    def test_rejects_dates_short_codes_and_amounts(self, text: str) -> None:
        assert match_phone(text) == []

    def test_rejects_digit_runs_longer_than_e164(self) -> None:
        assert match_phone("4532015112830366") == []

    def test_not_matched_inside_alphanumeric_run(self) -> None:
        assert match_phone("ref ABC123456789") == []

    def test_trailing_year_does_not_hide_number(self) -> None:
        text = "Mobile +966 50 123 4567 2024"
        assert _spans(match_phone, text) == ["+966 50 123 4567"]

    def test_number_next_to_card_is_found(self) -> None:
        assert _spans(match_phone, "0501234567 4532015112830366") == ["0501234567"]

    def test_adjacent_dates_are_not_a_number(self) -> None:
        assert match_phone("2024-01-15 2024-01-16") == []


class TestIbanMatcher:
    def test_grouped_iban(self) -> None:
        text = "IBAN: SA03 8000 0000 6080 1016 7519 please"
        assert _spans(match_iban, text) == ["SA03 8000 0000 6080 1016 7519"]

    @pytest.mark.parametrize(
        "iban", ["GB82WEST12345698765432", "DE89 3704 0044 0532 0130 00", "GB82 WEST 1234 5698 7654 32"]
    )
    def test_valid_ibans(self, iban: str) -> None:
        assert _spans(match_iban, f"pay {iban}") == [iban]

    def test_stops_at_country_length(self) -> None:
        text = "SA03 8000 0000 6080 1016 7519 1234"
        assert _spans(match_iban, text) == ["SA03 8000 0000 6080 1016 7519"]

    def test_failed_checksum_is_rejected(self) -> None:
        assert match_iban("SA03 8000 0000 6080 1016 7518") == []

    def test_trailing_alphanumeric_is_rejected(self) -> None:
        assert match_iban("GB82WEST12345698765432X") == []

    def test_short_candidate_is_rejected(self) -> None:
        assert match_iban("AB12 3456") == []

    @pytest.mark.parametrize(
        "iban", ["sa03 8000 0000 6080 1016 7519", "Gb82 west 1234 5698 7654 32", "de89370400440532013000"]
    )
    def test_case_insensitive(self, iban: str) -> None:
        assert _spans(match_iban, f"iban {iban}") == [iban]

    def test_lowercase_needs_known_country(self) -> None:
        assert match_iban("xx82west12345698765432") == []


class TestCreditCardMatcher:
    @pytest.mark.parametrize(
        "card",
        ["4532015112830366", "4111 1111 1111 1111", "4111-1111-1111-1111", "378282246310005"],
    )
    def test_luhn_valid_cards(self, card: str) -> None:
        assert _spans(match_credit_card, f"card {card}.") == [card]

    def test_luhn_invalid_number_is_not_a_card(self) -> None:
        assert match_credit_card("4111111111111112") == []

    def test_trailing_group_is_trimmed(self) -> None:
        assert _spans(match_credit_card, "Card 4532 0151 1283 0366 12/25") == [
            "4532 0151 1283 0366"
        ]

    def test_short_runs_are_ignored(self) -> None:
        assert match_credit_card("123456789012") == []

    def test_leading_quantity_is_not_part_of_card(self) -> None:
        assert _spans(match_credit_card, "Qty 2 4532015112830366") == ["4532015112830366"]

    def test_card_after_another_number(self) -> None:
        assert _spans(match_credit_card, "0501234567 4532015112830366") == ["4532015112830366"]

    def test_grouped_card_between_numbers(self) -> None:
        text = "row 7 4111 1111 1111 1111 5"
        assert _spans(match_credit_card, text) == ["4111 1111 1111 1111"]


class TestNationalIdMatcher:
    def test_saudi_citizen_id(self) -> None:
        assert _spans(match_national_id, "ID 1234567897.") == ["1234567897"]

    def test_saudi_resident_id(self) -> None:
        assert _spans(match_national_id, "Iqama 2000000006") == ["2000000006"]

    def test_failed_checksum_is_rejected(self) -> None:
        assert match_national_id("ID 1234567890") == []

    def test_wrong_leading_digit_is_rejected(self) -> None:
        assert match_national_id("3234567897") == []

    def test_emirates_id_with_dashes(self) -> None:
        matcher = national_id_matcher("ae")
        assert _spans(matcher, "EID 784-1990-1234567-6") == ["784-1990-1234567-6"]
        assert _spans(matcher, "EID 784199012345676") == ["784199012345676"]

    def test_locale_is_case_insensitive(self) -> None:
        assert _spans(national_id_matcher("SA"), "1234567897") == ["1234567897"]

    def test_unknown_locale_raises(self) -> None:
        with pytest.raises(ValueError, match="xx"):
            national_id_matcher("xx")


class TestRegistrationNumberMatchers:
    def test_cr_number(self) -> None:
        assert _spans(match_cr_number, "CR 1010123456") == ["1010123456"]
        assert _spans(match_cr_number, "CR 4030123456") == ["4030123456"]

    def test_cr_number_rejects_other_office_codes_and_lengths(self) -> None:
        assert match_cr_number("6010123456") == []
        assert match_cr_number("10101234567") == []

    def test_unified_number(self) -> None:
        assert _spans(match_unified_number, "Unified 7001234567") == ["7001234567"]

    def test_unified_number_requires_ten_digits(self) -> None:
        assert match_unified_number("70012345678") == []
        assert match_unified_number("700123456") == []
