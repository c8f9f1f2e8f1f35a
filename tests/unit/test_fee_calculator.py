"""
Unit tests for the fixed-point fee calculator and fee-rate invariant.

Pure domain tests: no database.
"""

import pytest

from ledger_kernel.domain.fees import (
    BASIS_POINT_DENOMINATOR,
    MAX_FEE_RATE_BP,
    FeeRates,
    compute_fee,
    split_amount,
    validate_fee_rates,
)
from ledger_kernel.domain.values import MAX_SUPPLY
from ledger_kernel.exceptions import (
    FeeRateOrderingViolationError,
    FeeRateOutOfBoundsError,
    InvalidAmountError,
)


class TestComputeFee:
    """fee = floor(amount * rate_bp / 10_000)."""

    def test_referral_rate_example(self):
        assert compute_fee(1_000, 50) == 5

    def test_beneficiary_rate_example(self):
        assert compute_fee(2_000, 100) == 20

    def test_truncates_toward_zero(self):
        # 199 * 50 / 10_000 = 0.995
        assert compute_fee(199, 50) == 0
        assert compute_fee(200, 50) == 1
        assert compute_fee(399, 50) == 1

    def test_zero_rate_yields_zero_fee(self):
        assert compute_fee(1_000_000, 0) == 0

    def test_zero_amount_yields_zero_fee(self):
        assert compute_fee(0, MAX_FEE_RATE_BP) == 0

    def test_max_rate_is_five_percent(self):
        assert compute_fee(10_000, MAX_FEE_RATE_BP) == 500

    def test_max_supply_does_not_overflow(self):
        fee = compute_fee(MAX_SUPPLY, MAX_FEE_RATE_BP)
        assert fee == (MAX_SUPPLY * MAX_FEE_RATE_BP) // BASIS_POINT_DENOMINATOR
        assert 0 <= fee <= MAX_SUPPLY

    def test_negative_amount_rejected(self):
        with pytest.raises(InvalidAmountError):
            compute_fee(-1, 50)

    def test_rate_above_cap_rejected(self):
        with pytest.raises(FeeRateOutOfBoundsError):
            compute_fee(1_000, MAX_FEE_RATE_BP + 1)


class TestSplitAmount:
    """fee + net == amount, always."""

    @pytest.mark.parametrize(
        "amount,rate_bp,fee,net",
        [
            (1_000, 50, 5, 995),
            (2_000, 100, 20, 1_980),
            (1, 500, 0, 1),
            (19, 500, 0, 19),
            (20, 500, 1, 19),
        ],
    )
    def test_split(self, amount, rate_bp, fee, net):
        split = split_amount(amount, rate_bp)
        assert split.fee == fee
        assert split.net == net
        assert split.fee + split.net == amount
        assert split.rate_bp == rate_bp


class TestValidateFeeRates:
    """0 <= referral <= beneficiary <= 500."""

    def test_valid_pair(self):
        validate_fee_rates(50, 100)

    def test_equal_rates_allowed(self):
        validate_fee_rates(100, 100)

    def test_both_zero_allowed(self):
        validate_fee_rates(0, 0)

    def test_both_at_cap_allowed(self):
        validate_fee_rates(MAX_FEE_RATE_BP, MAX_FEE_RATE_BP)

    def test_referral_above_beneficiary_rejected(self):
        with pytest.raises(FeeRateOrderingViolationError) as exc_info:
            validate_fee_rates(150, 100)
        assert exc_info.value.referral_rate_bp == 150
        assert exc_info.value.beneficiary_rate_bp == 100
        assert exc_info.value.code == "FEE_RATE_ORDERING_VIOLATION"

    def test_beneficiary_above_cap_rejected(self):
        with pytest.raises(FeeRateOutOfBoundsError) as exc_info:
            validate_fee_rates(50, 501)
        assert exc_info.value.rate_name == "beneficiary_rate_bp"
        assert exc_info.value.maximum == MAX_FEE_RATE_BP

    def test_negative_rate_rejected(self):
        with pytest.raises(FeeRateOutOfBoundsError) as exc_info:
            validate_fee_rates(-1, 100)
        assert exc_info.value.rate_name == "referral_rate_bp"

    def test_bounds_reported_before_ordering(self):
        """A rate both over the cap and mis-ordered reports the bound."""
        with pytest.raises(FeeRateOutOfBoundsError):
            validate_fee_rates(600, 100)

    @pytest.mark.parametrize("bad", [1.5, "50", True, None])
    def test_non_integer_rate_rejected(self, bad):
        with pytest.raises(FeeRateOutOfBoundsError):
            validate_fee_rates(bad, 100)


class TestFeeRates:
    """FeeRates value object always satisfies the ordering invariant."""

    def test_construction_validates(self):
        with pytest.raises(FeeRateOrderingViolationError):
            FeeRates(200, 100)

    def test_with_referral_rate(self):
        rates = FeeRates(50, 100).with_referral_rate(75)
        assert rates == FeeRates(75, 100)

    def test_with_beneficiary_rate_cannot_drop_below_referral(self):
        with pytest.raises(FeeRateOrderingViolationError):
            FeeRates(50, 100).with_beneficiary_rate(40)

    def test_rate_for(self):
        rates = FeeRates(50, 100)
        assert rates.rate_for(has_referrer=True) == 50
        assert rates.rate_for(has_referrer=False) == 100
