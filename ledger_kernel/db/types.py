"""
Module: ledger_kernel.db.types
Responsibility: PEP 593 column aliases so that every model declares addresses,
    amounts, rates, and sequences identically.
Architecture position: Kernel > DB.  May be imported by models/.  MUST NOT
    import from services/ or selectors/.

Usage:
    class AccountBalance(TrackedBase):
        address: Mapped[Address] = mapped_column(unique=True)
        amount: Mapped[TokenAmount]
"""

from typing import Annotated

from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import mapped_column

from ledger_kernel.domain.values import ADDRESS_MAX_LENGTH

# Opaque account identifier
Address = Annotated[str, mapped_column(String(ADDRESS_MAX_LENGTH), nullable=False)]

# Token amount in smallest units.  Signed 64-bit; see MAX_SUPPLY.
TokenAmount = Annotated[int, mapped_column(BigInteger, nullable=False, default=0)]

# Fee rate in basis points
RateBp = Annotated[int, mapped_column(Integer, nullable=False)]

# Monotonic sequence number for event ordering
Sequence = Annotated[int, mapped_column(BigInteger, nullable=False)]

# Short identifier strings
ShortCode = Annotated[str, mapped_column(String(50), nullable=False)]
