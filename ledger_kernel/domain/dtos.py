"""
Data Transfer Objects for the ledger kernel.

Frozen value objects returned by services and selectors.  They never hold
ORM instances, so callers can keep them after the session closes.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class EventKind(str, Enum):
    """Kind of append-only ledger event."""

    TRANSFER = "transfer"
    APPROVAL = "approval"


class TransferLegKind(str, Enum):
    """Which part of a value movement a transfer event records."""

    FEE = "fee"
    NET = "net"
    MINT = "mint"


class FeeSource(str, Enum):
    """Who received the fee leg of a transfer."""

    REFERRER = "referrer"
    BENEFICIARY = "beneficiary"


@dataclass(frozen=True)
class LedgerEventRecord:
    """One row of the append-only event log."""

    seq: int
    tx_id: UUID
    kind: EventKind
    leg: TransferLegKind | None
    source: str
    target: str
    amount: int
    occurred_at: datetime


@dataclass(frozen=True)
class TransferQuote:
    """Fee split a transfer would produce, computed without mutating state."""

    sender: str
    amount: int
    fee_recipient: str
    fee_source: FeeSource
    fee_rate_bp: int
    fee: int
    net: int


@dataclass(frozen=True)
class TransferReceipt:
    """
    Outcome of a completed transfer.

    ``legs`` holds the two transfer events in emission order: fee leg
    first, net leg second.
    """

    tx_id: UUID
    sender: str
    recipient: str
    amount: int
    fee_recipient: str
    fee_source: FeeSource
    fee_rate_bp: int
    fee: int
    net: int
    legs: tuple[LedgerEventRecord, ...]
    spender: str | None = None

    @property
    def fee_leg(self) -> LedgerEventRecord:
        return self.legs[0]

    @property
    def net_leg(self) -> LedgerEventRecord:
        return self.legs[1]


@dataclass(frozen=True)
class ApprovalReceipt:
    """Outcome of an approval (or allowance adjustment)."""

    tx_id: UUID
    owner: str
    spender: str
    allowance: int
    event: LedgerEventRecord


@dataclass(frozen=True)
class LedgerMetadata:
    """Opaque, immutable token metadata plus the current total supply."""

    name: str
    symbol: str
    decimals: int
    total_supply: int
    owner: str
    profile_id: str | None = None
    info_url: str | None = None
