"""
Profile validation.

Collects every problem with a profile instead of stopping at the first,
so a reviewer sees the whole list.  Fee rates are checked with the
kernel's own validate_fee_rates so config and runtime agree on the rule.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ledger_config.schema import LedgerProfile
from ledger_kernel.domain.values import MAX_SUPPLY
from ledger_kernel.domain.fees import validate_fee_rates
from ledger_kernel.exceptions import FeePolicyError

MAX_DECIMALS = 18


class ConfigValidationError(ValueError):
    """A ledger profile failed validation."""

    code: str = "CONFIG_VALIDATION_FAILED"

    def __init__(self, profile_id: str, errors: list[str]):
        self.profile_id = profile_id
        self.errors = errors
        super().__init__(
            f"Profile '{profile_id}' is invalid: " + "; ".join(errors)
        )


@dataclass
class ValidationResult:
    """Outcome of validate_profile()."""

    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_profile(profile: LedgerProfile) -> ValidationResult:
    """Validate metadata, supply, and fee schedule of ``profile``."""
    result = ValidationResult()
    meta = profile.metadata

    if not isinstance(meta.name, str) or not meta.name.strip():
        result.errors.append("metadata.name must be a non-empty string")
    if not isinstance(meta.symbol, str) or not meta.symbol.strip():
        result.errors.append("metadata.symbol must be a non-empty string")

    decimals_ok = _is_int(meta.decimals) and 0 <= meta.decimals <= MAX_DECIMALS
    if not decimals_ok:
        result.errors.append(f"metadata.decimals must be an integer in [0, {MAX_DECIMALS}]")

    if not _is_int(profile.initial_units) or profile.initial_units <= 0:
        result.errors.append("supply.initial_units must be a positive integer")
    elif decimals_ok and profile.initial_supply > MAX_SUPPLY:
        result.errors.append(
            f"initial supply {profile.initial_supply} exceeds maximum {MAX_SUPPLY}"
        )

    try:
        validate_fee_rates(profile.fees.referral_rate_bp, profile.fees.beneficiary_rate_bp)
    except FeePolicyError as exc:
        result.errors.append(f"fees: {exc}")

    return result
