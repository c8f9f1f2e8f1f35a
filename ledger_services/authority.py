"""
ledger_services.authority -- owner capability check at the boundary.

Responsibility:
    Decide whether a caller may perform a governance action (fee-rate
    changes, ownership transfer).  The only rule: the caller must be the
    current ledger owner.

Architecture position:
    Services layer.  Called by TokenLedger before it invokes a kernel
    governance operation.  The kernel itself stays authorization-agnostic.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from ledger_kernel.domain.values import is_null_address
from ledger_kernel.exceptions import NotOwnerError
from ledger_kernel.logging_config import get_logger
from ledger_kernel.services.fee_policy_service import FeePolicyService

logger = get_logger("services.authority")


class OwnerAuthority:
    """Owner-only gate for governance calls."""

    def __init__(self, session: Session):
        self._fee_policy = FeePolicyService(session)

    def owner(self) -> str:
        return self._fee_policy.owner()

    def is_owner(self, caller: object) -> bool:
        """True iff ``caller`` is the current owner."""
        if is_null_address(caller):
            return False
        return caller == self._fee_policy.owner()

    def require_owner(self, caller: object, action: str) -> None:
        """
        Raise unless ``caller`` is the owner.

        Raises:
            NotOwnerError: The caller is anyone else (including null).
        """
        if not self.is_owner(caller):
            owner = self._fee_policy.owner()
            logger.warning(
                "governance_denied",
                extra={"caller": str(caller), "owner": owner, "action": action},
            )
            raise NotOwnerError(str(caller), owner)
