"""
FeePolicyService -- fee-rate scalars and the beneficiary account.

Responsibility:
    Reads the fee rates and beneficiary the orchestrator needs, and applies
    rate or owner updates that a governance collaborator has already
    authorized.  This service performs no authorization itself.

Architecture position:
    Kernel > Services.  Writers: the boundary layer's governance calls
    (after OwnerAuthority.require_owner).  Readers: TransferOrchestrator,
    LedgerSelector.

Invariants enforced:
    FEE_RATE_ORDERING -- every update builds the full candidate pair and
        validates it before writing either scalar, so a rejected update
        leaves both rates unchanged.

Failure modes:
    - LedgerNotInitializedError before genesis.
    - FeeRateOutOfBoundsError / FeeRateOrderingViolationError on update.
    - ZeroAddressError when the new owner is the null account.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from ledger_kernel.domain.fees import BENEFICIARY_RATE, REFERRAL_RATE, FeeRates
from ledger_kernel.domain.values import require_address
from ledger_kernel.exceptions import LedgerNotInitializedError
from ledger_kernel.logging_config import get_logger
from ledger_kernel.models.ledger_settings import SINGLETON_KEY, LedgerSettings
from ledger_kernel.services.base import BaseService

logger = get_logger("services.fee_policy")


def load_settings(session: Session, for_update: bool = False) -> LedgerSettings:
    """
    Fetch the singleton settings row.

    Raises:
        LedgerNotInitializedError: If genesis has not run.
    """
    stmt = select(LedgerSettings).where(LedgerSettings.singleton_key == SINGLETON_KEY)
    if for_update:
        stmt = stmt.with_for_update()
    settings = session.execute(stmt).scalar_one_or_none()
    if settings is None:
        raise LedgerNotInitializedError()
    return settings


class FeePolicyService(BaseService):
    """Fee rates, beneficiary, and owner of the ledger."""

    def __init__(self, session: Session):
        super().__init__(session)

    def current_rates(self) -> FeeRates:
        settings = load_settings(self.session)
        return FeeRates(settings.referral_rate_bp, settings.beneficiary_rate_bp)

    def beneficiary(self) -> str:
        """Fallback fee recipient: the ledger owner."""
        return load_settings(self.session).owner

    def owner(self) -> str:
        return load_settings(self.session).owner

    def set_referral_rate(self, rate_bp: int) -> FeeRates:
        """Replace the referral rate, keeping the beneficiary rate."""
        return self._apply(REFERRAL_RATE, rate_bp)

    def set_beneficiary_rate(self, rate_bp: int) -> FeeRates:
        """Replace the beneficiary rate, keeping the referral rate."""
        return self._apply(BENEFICIARY_RATE, rate_bp)

    def set_owner(self, new_owner: str) -> str:
        """
        Hand governance (and with it the beneficiary role) to ``new_owner``.

        Returns the previous owner.
        """
        new_owner = require_address(new_owner, "new_owner")
        with self.atomic():
            settings = load_settings(self.session, for_update=True)
            previous = settings.owner
            settings.owner = new_owner
            self.session.flush()

        logger.info(
            "ownership_transferred",
            extra={"previous_owner": previous, "new_owner": new_owner},
        )
        return previous

    def _apply(self, rate_name: str, rate_bp: int) -> FeeRates:
        with self.atomic():
            settings = load_settings(self.session, for_update=True)
            current = FeeRates(settings.referral_rate_bp, settings.beneficiary_rate_bp)
            if rate_name == REFERRAL_RATE:
                candidate = current.with_referral_rate(rate_bp)
            else:
                candidate = current.with_beneficiary_rate(rate_bp)

            settings.referral_rate_bp = candidate.referral_rate_bp
            settings.beneficiary_rate_bp = candidate.beneficiary_rate_bp
            self.session.flush()

        logger.info(
            "fee_rate_updated",
            extra={
                "rate_name": rate_name,
                "previous_bp": getattr(current, rate_name),
                "new_bp": rate_bp,
            },
        )
        return candidate
