"""
Values -- account identifiers and integer token amounts.

Responsibility:
    Defines what the kernel accepts as an account and as an amount, and the
    single place where raw caller input is turned into those values.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - The null account (None, blank, or ZERO_ADDRESS) never reaches a
      service as a party to a transfer, approval, or referral.
    - Amounts are non-negative ``int`` values no larger than MAX_SUPPLY.
      ``bool`` is rejected even though it subclasses ``int``.

Failure modes:
    - ZeroAddressError for the null account.
    - InvalidAddressError for non-string or oversized identifiers.
    - InvalidAmountError for negative, non-integer, or unstorable amounts.
"""

from ledger_kernel.exceptions import (
    InvalidAddressError,
    InvalidAmountError,
    ZeroAddressError,
)

# Canonical null account.  Compared case-insensitively.
ZERO_ADDRESS = "0x" + "0" * 40

# Longest identifier the address columns can hold.
ADDRESS_MAX_LENGTH = 128

# Amounts are stored in signed 64-bit columns, which bounds total supply.
# Fee arithmetic itself runs on unbounded Python ints and cannot wrap.
MAX_SUPPLY = 2**63 - 1


def is_null_address(address: object) -> bool:
    """True for None, a blank string, or ZERO_ADDRESS in any letter case."""
    if address is None:
        return True
    if isinstance(address, str):
        stripped = address.strip()
        return stripped == "" or stripped.lower() == ZERO_ADDRESS
    return False


def require_address(address: object, role: str) -> str:
    """
    Validate a caller-supplied account identifier.

    Preconditions: none -- any object may be passed.
    Postconditions: Returns ``address`` unchanged as a non-null ``str``.

    Raises:
        ZeroAddressError: If ``address`` is the null account.
        InvalidAddressError: If ``address`` is not a string or is too long.
    """
    if is_null_address(address):
        raise ZeroAddressError(role)
    if not isinstance(address, str):
        raise InvalidAddressError(role, address, "must be a string")
    if len(address) > ADDRESS_MAX_LENGTH:
        raise InvalidAddressError(
            role, address, f"longer than {ADDRESS_MAX_LENGTH} characters"
        )
    return address


def require_amount(amount: object, field: str = "amount") -> int:
    """
    Validate a caller-supplied token amount.

    Zero is accepted here; transfers reject it separately with
    ZeroAmountError because approvals may legitimately set a zero quota.

    Raises:
        InvalidAmountError: If ``amount`` is not a non-negative int that
            fits under MAX_SUPPLY.
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmountError(field, amount, "must be an integer")
    if amount < 0:
        raise InvalidAmountError(field, amount, "must not be negative")
    if amount > MAX_SUPPLY:
        raise InvalidAmountError(field, amount, f"exceeds maximum {MAX_SUPPLY}")
    return amount
