"""Pure domain layer: values, fee arithmetic, DTOs, clock."""

from ledger_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from ledger_kernel.domain.dtos import (
    ApprovalReceipt,
    EventKind,
    FeeSource,
    LedgerEventRecord,
    LedgerMetadata,
    TransferLegKind,
    TransferQuote,
    TransferReceipt,
)
from ledger_kernel.domain.fees import (
    BASIS_POINT_DENOMINATOR,
    MAX_FEE_RATE_BP,
    FeeRates,
    FeeSplit,
    compute_fee,
    split_amount,
    validate_fee_rates,
)
from ledger_kernel.domain.values import (
    MAX_SUPPLY,
    ZERO_ADDRESS,
    is_null_address,
    require_address,
    require_amount,
)

__all__ = [
    "ApprovalReceipt",
    "BASIS_POINT_DENOMINATOR",
    "Clock",
    "DeterministicClock",
    "EventKind",
    "FeeRates",
    "FeeSource",
    "FeeSplit",
    "LedgerEventRecord",
    "LedgerMetadata",
    "MAX_FEE_RATE_BP",
    "MAX_SUPPLY",
    "SystemClock",
    "TransferLegKind",
    "TransferQuote",
    "TransferReceipt",
    "ZERO_ADDRESS",
    "compute_fee",
    "is_null_address",
    "require_address",
    "require_amount",
    "split_amount",
    "validate_fee_rates",
]
