"""
Kernel Invariants Contract.

These invariants are structural law. They are hardcoded in the services and
in database check constraints. No ledger profile, rate update, or caller
capability may override them.

This module exists solely to declare these invariants explicitly. The
enforcement is distributed across BalanceLedger, AllowanceRegistry,
ReferralRegistry, FeePolicyService, and TransferOrchestrator.
"""

from enum import Enum, unique


@unique
class KernelInvariant(str, Enum):
    """Non-configurable invariants enforced by the kernel.

    Each value names one structural guarantee that the kernel provides
    unconditionally. Configuration may influence *how much* fee is taken,
    but never *whether* these rules apply.
    """

    CONSERVATION = "conservation"
    """The sum of all balances equals total supply. Only genesis mints;
    every transfer debits exactly what it credits. Checked by
    LedgerSelector.verify_conservation()."""

    NON_NEGATIVE_BALANCE = "non_negative_balance"
    """Balances never drop below zero. Enforced by BalanceLedger.debit and
    a DB check constraint."""

    NON_NEGATIVE_ALLOWANCE = "non_negative_allowance"
    """Allowances never drop below zero. Enforced by
    AllowanceRegistry.consume and a DB check constraint."""

    REFERRAL_WRITE_ONCE = "referral_write_once"
    """An account's referrer is assigned at most once, never to itself or
    the null account. Enforced by ReferralRegistry and a unique
    constraint."""

    FEE_RATE_ORDERING = "fee_rate_ordering"
    """0 <= referral_rate_bp <= beneficiary_rate_bp <= 500. Enforced by
    domain.fees.validate_fee_rates before any rate write, and by DB check
    constraints."""

    ATOMICITY = "atomicity"
    """A rejected request leaves balances, allowances, referrals, rates and
    events unchanged. Enforced by running every mutating operation inside
    a savepoint."""


# All invariants as a frozenset for programmatic checks.
ALL_KERNEL_INVARIANTS: frozenset[KernelInvariant] = frozenset(KernelInvariant)

# The kernel package may not import from these packages.
# This is enforced by tests/architecture/test_kernel_boundary.py.
FORBIDDEN_KERNEL_IMPORTS: tuple[str, ...] = (
    "ledger_services",
    "ledger_config",
)
