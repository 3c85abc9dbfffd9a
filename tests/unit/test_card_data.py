"""Unit tests for card data redaction helpers."""

import pytest

from payment_gateway.domain.card_data import (
    CVV_MASK,
    PAN_MASK,
    extract_last_four,
    mask_card_number,
    mask_cvv,
)


class TestMaskCardNumber:
    """Test suite for mask_card_number."""

    def test_masks_all_but_last_four(self):
        assert mask_card_number("4242424242424242") == "************4242"

    def test_exactly_four_characters_unmasked(self):
        assert mask_card_number("1234") == "1234"

    @pytest.mark.parametrize("pan", [None, "", "1", "123"])
    def test_short_or_absent_returns_fixed_mask(self, pan):
        assert mask_card_number(pan) == PAN_MASK
        assert len(PAN_MASK) == 4

    def test_keeps_length(self):
        pan = "2222405343248877"
        assert len(mask_card_number(pan)) == len(pan)


class TestMaskCvv:
    """Test suite for mask_cvv."""

    @pytest.mark.parametrize("cvv", ["123", "9876", "0", None])
    def test_always_fixed_mask(self, cvv):
        masked = mask_cvv(cvv)
        assert masked == CVV_MASK == "***"
        if cvv:
            assert cvv not in masked

    def test_no_argument(self):
        assert mask_cvv() == "***"


class TestExtractLastFour:
    """Test suite for extract_last_four."""

    def test_extracts_digits(self):
        assert extract_last_four("2222405343248877") == 8877

    def test_leading_zeros(self):
        assert extract_last_four("4000000000000042") == 42

    @pytest.mark.parametrize("pan", [None, "", "12", "123"])
    def test_short_or_absent_returns_zero(self, pan):
        assert extract_last_four(pan) == 0

    @pytest.mark.parametrize("pan", ["abcdabcdabcdabcd", "42424242424242x1", "4242 42 42 4 2 ab"])
    def test_non_digit_tail_returns_zero(self, pan):
        assert extract_last_four(pan) == 0
