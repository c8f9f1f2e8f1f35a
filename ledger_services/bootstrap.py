"""
ledger_services.bootstrap -- deploy a ledger from a configuration profile.

Responsibility:
    Wires a validated ``LedgerProfile`` into the kernel's GenesisService.
    This is the initialization collaborator: it runs once per database,
    before any transfer.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from ledger_config import DEFAULT_PROFILE, LedgerProfile, get_active_config
from ledger_kernel.domain.clock import Clock
from ledger_kernel.domain.dtos import LedgerMetadata
from ledger_kernel.services.genesis_service import GenesisService


def deploy_ledger(
    session: Session,
    owner: str,
    profile: LedgerProfile | None = None,
    initial_holder: str | None = None,
    clock: Clock | None = None,
) -> LedgerMetadata:
    """
    Initialize the ledger from ``profile`` (default: the standard profile).

    ``owner`` becomes the governance actor and fee beneficiary.  The full
    supply is minted to ``initial_holder``, or to ``owner`` when omitted.
    """
    if profile is None:
        profile = get_active_config(DEFAULT_PROFILE)

    return GenesisService(session, clock).initialize(
        name=profile.metadata.name,
        symbol=profile.metadata.symbol,
        decimals=profile.metadata.decimals,
        total_supply=profile.initial_supply,
        owner=owner,
        referral_rate_bp=profile.fees.referral_rate_bp,
        beneficiary_rate_bp=profile.fees.beneficiary_rate_bp,
        initial_holder=initial_holder,
        profile_id=profile.profile_id,
        info_url=profile.metadata.info_url,
    )
