"""
Fees -- fixed-point fee calculator and the fee-rate invariant.

Responsibility:
    Computes the fee taken from a transfer and validates the pair of fee
    rates the ledger runs with.  Everything here is a pure function or a
    frozen value object.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    FEE_RATE_ORDERING -- 0 <= referral_rate_bp <= beneficiary_rate_bp
        <= MAX_FEE_RATE_BP.  Bounds are checked before ordering, so a
        rate that is both out of range and mis-ordered reports the bound.
    Truncation -- fee = floor(amount * rate_bp / 10_000).  Integer-only.
        Python ints are unbounded, so the product cannot overflow for any
        amount the ledger can store (see values.MAX_SUPPLY).

Failure modes:
    - FeeRateOutOfBoundsError for a rate outside [0, MAX_FEE_RATE_BP].
    - FeeRateOrderingViolationError when referral rate > beneficiary rate.
    - InvalidAmountError for a negative or non-integer amount.
"""

from dataclasses import dataclass

from ledger_kernel.domain.values import require_amount
from ledger_kernel.exceptions import (
    FeeRateOrderingViolationError,
    FeeRateOutOfBoundsError,
)

# Rates are hundredths of a percent.
BASIS_POINT_DENOMINATOR = 10_000

# 5% cap on either rate.
MAX_FEE_RATE_BP = 500

REFERRAL_RATE = "referral_rate_bp"
BENEFICIARY_RATE = "beneficiary_rate_bp"


def require_rate(rate_bp: object, rate_name: str) -> int:
    """Validate a single rate against [0, MAX_FEE_RATE_BP]."""
    if isinstance(rate_bp, bool) or not isinstance(rate_bp, int):
        raise FeeRateOutOfBoundsError(rate_name, rate_bp, 0, MAX_FEE_RATE_BP)
    if rate_bp < 0 or rate_bp > MAX_FEE_RATE_BP:
        raise FeeRateOutOfBoundsError(rate_name, rate_bp, 0, MAX_FEE_RATE_BP)
    return rate_bp


def validate_fee_rates(referral_rate_bp: object, beneficiary_rate_bp: object) -> None:
    """
    Check both bounds and the ordering relation of a candidate rate pair.

    The pair is checked as a whole so that a rate update can be rejected
    before anything is written.

    Raises:
        FeeRateOutOfBoundsError: If either rate is outside [0, 500].
        FeeRateOrderingViolationError: If referral > beneficiary.
    """
    referral = require_rate(referral_rate_bp, REFERRAL_RATE)
    beneficiary = require_rate(beneficiary_rate_bp, BENEFICIARY_RATE)
    if referral > beneficiary:
        raise FeeRateOrderingViolationError(referral, beneficiary)


def compute_fee(amount: int, rate_bp: int) -> int:
    """
    Fee taken from ``amount`` at ``rate_bp`` basis points, truncated.

    Preconditions: ``amount`` >= 0; ``rate_bp`` in [0, MAX_FEE_RATE_BP].
    Postconditions: 0 <= result <= amount.
    """
    amount = require_amount(amount)
    rate_bp = require_rate(rate_bp, "rate_bp")
    return (amount * rate_bp) // BASIS_POINT_DENOMINATOR


@dataclass(frozen=True)
class FeeRates:
    """
    The validated pair of fee rates in force.

    Construction validates the pair, so a FeeRates instance always
    satisfies FEE_RATE_ORDERING.  Use the ``with_*`` methods to derive a
    candidate pair for an update; they raise instead of returning an
    invalid pair.
    """

    referral_rate_bp: int
    beneficiary_rate_bp: int

    def __post_init__(self) -> None:
        validate_fee_rates(self.referral_rate_bp, self.beneficiary_rate_bp)

    def with_referral_rate(self, rate_bp: int) -> "FeeRates":
        return FeeRates(rate_bp, self.beneficiary_rate_bp)

    def with_beneficiary_rate(self, rate_bp: int) -> "FeeRates":
        return FeeRates(self.referral_rate_bp, rate_bp)

    def rate_for(self, has_referrer: bool) -> int:
        """Referral rate when the sender has a referrer, else beneficiary rate."""
        return self.referral_rate_bp if has_referrer else self.beneficiary_rate_bp


@dataclass(frozen=True)
class FeeSplit:
    """A transfer amount decomposed into its fee leg and net leg."""

    amount: int
    rate_bp: int
    fee: int
    net: int


def split_amount(amount: int, rate_bp: int) -> FeeSplit:
    """Split ``amount`` so that ``fee + net == amount``."""
    fee = compute_fee(amount, rate_bp)
    return FeeSplit(amount=amount, rate_bp=rate_bp, fee=fee, net=amount - fee)
