"""
ReferralRegistry -- write-once mapping from account to referrer.

Responsibility:
    The only writer of ``referral_assignments``.  An account names its
    referrer once; the assignment is permanent.

Architecture position:
    Kernel > Services.  ``referrer_of`` is consulted by
    TransferOrchestrator to choose the fee recipient.

Invariants enforced:
    REFERRAL_WRITE_ONCE -- checked in this order, each with its own error:
        1. referrer is not the null account   (ZeroAddressError)
        2. referrer != caller                 (SelfReferralError)
        3. caller has no referrer yet         (ReferrerAlreadySetError)
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from ledger_kernel.domain.clock import Clock, SystemClock
from ledger_kernel.domain.values import require_address
from ledger_kernel.exceptions import ReferrerAlreadySetError, SelfReferralError
from ledger_kernel.logging_config import get_logger
from ledger_kernel.models.referral import ReferralAssignment
from ledger_kernel.services.base import BaseService

logger = get_logger("services.referral_registry")


class ReferralRegistry(BaseService):
    """Permanent referral assignments."""

    def __init__(self, session: Session, clock: Clock | None = None):
        super().__init__(session)
        self._clock = clock or SystemClock()

    def referrer_of(self, account: str) -> str | None:
        """Referrer of ``account``, or None when it has none."""
        return self.session.execute(
            select(ReferralAssignment.referrer).where(
                ReferralAssignment.account == account
            )
        ).scalar_one_or_none()

    def referred_by(self, referrer: str) -> list[str]:
        """Accounts that named ``referrer``, in assignment order."""
        return list(
            self.session.execute(
                select(ReferralAssignment.account)
                .where(ReferralAssignment.referrer == referrer)
                .order_by(ReferralAssignment.assigned_at, ReferralAssignment.account)
            ).scalars()
        )

    def set_referral(self, caller: str, referrer: str) -> None:
        """
        Assign ``referrer`` as ``caller``'s referrer, permanently.

        Raises:
            ZeroAddressError: If referrer (or caller) is the null account.
            SelfReferralError: If referrer == caller.
            ReferrerAlreadySetError: If caller already has a referrer.
        """
        referrer = require_address(referrer, "referrer")
        caller = require_address(caller, "caller")
        if referrer == caller:
            raise SelfReferralError(caller)

        with self.atomic():
            existing = self.referrer_of(caller)
            if existing is not None:
                raise ReferrerAlreadySetError(caller, existing, referrer)

            self.session.add(
                ReferralAssignment(
                    account=caller,
                    referrer=referrer,
                    assigned_at=self._clock.now(),
                )
            )
            self.session.flush()

        logger.info(
            "referral_assigned",
            extra={"account": caller, "referrer": referrer},
        )
