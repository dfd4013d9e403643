"""Tests for mail-id literal parsing."""

import pytest

from mailctl.domain.ids import MAIL_ID_MAX, MAIL_ID_MIN, parse_mail_id


class TestParseMailId:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("0", 0),
            ("42", 42),
            ("+7", 7),
            ("-3", -3),
            ("007", 7),
            ("2147483647", MAIL_ID_MAX),
            ("-2147483648", MAIL_ID_MIN),
        ],
    )
    def test_valid_literals(self, text: str, expected: int) -> None:
        assert parse_mail_id(text) == expected

    @pytest.mark.parametrize("text", ["abc", "1a", "1_000", " 1", "1.0", "-", "+", "0x10", "١٢"])
    def test_invalid_digit(self, text: str) -> None:
        with pytest.raises(ValueError, match="invalid digit found in string"):
            parse_mail_id(text)

    def test_empty(self) -> None:
        with pytest.raises(ValueError, match="cannot parse integer from empty string"):
            parse_mail_id("")

    def test_too_large(self) -> None:
        with pytest.raises(ValueError, match="too large"):
            parse_mail_id("2147483648")

    def test_too_small(self) -> None:
        with pytest.raises(ValueError, match="too small"):
            parse_mail_id("-2147483649")
