"""
GenesisService -- one-time ledger initialization and initial mint.

Responsibility:
    Writes the singleton settings row (metadata, owner, fee rates, total
    supply) and mints the entire supply to the initial holder.  This is
    the only place value enters the ledger.

Architecture position:
    Kernel > Services.  Called by ledger_services.bootstrap.deploy_ledger
    and by tests.

Invariants enforced:
    CONSERVATION -- after genesis, sum(balances) == total_supply.
    FEE_RATE_ORDERING -- initial rates are validated before any write.
    Genesis runs at most once per database.

Failure modes:
    - LedgerAlreadyInitializedError on a second call.
    - SupplyCapExceededError when supply > MAX_SUPPLY.
    - FeeRate* errors for invalid initial rates.
    - ZeroAddressError for a null owner or initial holder.
"""

from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from ledger_kernel.domain.clock import Clock
from ledger_kernel.domain.dtos import LedgerMetadata, TransferLegKind
from ledger_kernel.domain.fees import validate_fee_rates
from ledger_kernel.domain.values import MAX_SUPPLY, ZERO_ADDRESS, require_address
from ledger_kernel.exceptions import (
    InvalidAmountError,
    LedgerAlreadyInitializedError,
    SupplyCapExceededError,
)
from ledger_kernel.logging_config import get_logger
from ledger_kernel.models.ledger_settings import SINGLETON_KEY, LedgerSettings
from ledger_kernel.services.balance_ledger import BalanceLedger
from ledger_kernel.services.base import BaseService
from ledger_kernel.services.event_recorder import EventRecorder

logger = get_logger("services.genesis")


class GenesisService(BaseService):
    """Initialization collaborator: runs once, before any transfer."""

    def __init__(self, session: Session, clock: Clock | None = None):
        super().__init__(session)
        self._balances = BalanceLedger(session)
        self._events = EventRecorder(session, clock)

    def initialize(
        self,
        *,
        name: str,
        symbol: str,
        decimals: int,
        total_supply: int,
        owner: str,
        referral_rate_bp: int,
        beneficiary_rate_bp: int,
        initial_holder: str | None = None,
        profile_id: str | None = None,
        info_url: str | None = None,
    ) -> LedgerMetadata:
        """
        Create the ledger and mint ``total_supply`` to ``initial_holder``
        (the owner when omitted).

        Postconditions:
            - balance_of(initial_holder) == total_supply
            - one MINT event ZERO_ADDRESS -> initial_holder
        """
        owner = require_address(owner, "owner")
        holder = require_address(initial_holder or owner, "initial_holder")
        if isinstance(total_supply, bool) or not isinstance(total_supply, int) or total_supply < 0:
            raise InvalidAmountError("total_supply", total_supply, "must be a non-negative integer")
        if total_supply > MAX_SUPPLY:
            raise SupplyCapExceededError(total_supply, MAX_SUPPLY)
        if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
            raise InvalidAmountError("decimals", decimals, "must be a non-negative integer")
        validate_fee_rates(referral_rate_bp, beneficiary_rate_bp)

        with self.atomic():
            existing = self.session.execute(
                select(LedgerSettings).where(LedgerSettings.singleton_key == SINGLETON_KEY)
            ).scalar_one_or_none()
            if existing is not None:
                raise LedgerAlreadyInitializedError(existing.symbol)

            self.session.add(
                LedgerSettings(
                    singleton_key=SINGLETON_KEY,
                    name=name,
                    symbol=symbol,
                    decimals=decimals,
                    total_supply=total_supply,
                    owner=owner,
                    referral_rate_bp=referral_rate_bp,
                    beneficiary_rate_bp=beneficiary_rate_bp,
                    profile_id=profile_id,
                    info_url=info_url,
                )
            )
            self.session.flush()

            self._balances.credit(holder, total_supply)
            self._events.record_transfer(
                uuid4(), TransferLegKind.MINT, ZERO_ADDRESS, holder, total_supply
            )

        logger.info(
            "ledger_initialized",
            extra={
                "symbol": symbol,
                "decimals": decimals,
                "total_supply": total_supply,
                "owner": owner,
                "initial_holder": holder,
                "referral_rate_bp": referral_rate_bp,
                "beneficiary_rate_bp": beneficiary_rate_bp,
                "profile_id": profile_id,
            },
        )
        return LedgerMetadata(
            name=name,
            symbol=symbol,
            decimals=decimals,
            total_supply=total_supply,
            owner=owner,
            profile_id=profile_id,
            info_url=info_url,
        )
