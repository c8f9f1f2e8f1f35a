"""
Ledger profile schema.

Defines the human-authored, reviewable source artifact for deploying a
ledger.  YAML profiles are parsed into these types by the loader, checked
by the validator, and handed to ledger_services.bootstrap.deploy_ledger.

A profile carries only construction-time parameters: opaque token
metadata, the initial supply, and the default fee rates.  Running ledgers
change rates through governance, never by editing a profile.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TokenMetadata:
    """Opaque, immutable token metadata."""

    name: str
    symbol: str
    decimals: int
    info_url: str | None = None


@dataclass(frozen=True)
class FeeSchedule:
    """Default fee rates in basis points."""

    referral_rate_bp: int
    beneficiary_rate_bp: int


@dataclass(frozen=True)
class LedgerProfile:
    """One deployable ledger configuration."""

    profile_id: str
    version: int
    metadata: TokenMetadata
    fees: FeeSchedule
    initial_units: int  # whole tokens, scaled by 10**decimals at genesis
    description: str = ""
    checksum: str = ""

    @property
    def initial_supply(self) -> int:
        """Initial supply in smallest units."""
        return self.initial_units * 10**self.metadata.decimals
