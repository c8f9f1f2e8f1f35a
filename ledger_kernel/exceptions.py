"""
Typed Exception Hierarchy for the Ledger Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Every rejected ledger request must tell the caller WHICH invariant it would
have broken.  Collapsing failures into ValueError forces callers to parse
message strings.  Instead:

  1. Every error has a TYPED exception class (catch by type, not message)
  2. Every exception has a CODE attribute (machine-readable, API-safe)
  3. Exceptions carry structured DATA (not just a message string)

Example:
    try:
        ledger.transfer(caller, recipient, amount)
    except InsufficientBalanceError as e:
        log.warning("short by %s", e.requested - e.balance)
        api_response(code=e.code, balance=e.balance)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    LedgerKernelError (base)
    |
    +-- AddressError
    |   +-- ZeroAddressError
    |   +-- InvalidAddressError
    |
    +-- AmountError
    |   +-- ZeroAmountError
    |   +-- InvalidAmountError
    |
    +-- BalanceError
    |   +-- InsufficientBalanceError
    |
    +-- AllowanceError
    |   +-- AllowanceExceededError
    |
    +-- ReferralError
    |   +-- SelfReferralError
    |   +-- ReferrerAlreadySetError
    |
    +-- FeePolicyError
    |   +-- FeeRateOutOfBoundsError
    |   +-- FeeRateOrderingViolationError
    |
    +-- AuthorizationError
    |   +-- NotOwnerError
    |
    +-- LedgerStateError
        +-- LedgerNotInitializedError
        +-- LedgerAlreadyInitializedError
        +-- SupplyCapExceededError
        +-- ConservationViolationError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category     | Code                         | When Raised
-------------|------------------------------|--------------------------------------
Address      | ZERO_ADDRESS                 | Party is the null account
             | INVALID_ADDRESS              | Identifier is not a usable string
-------------|------------------------------|--------------------------------------
Amount       | ZERO_AMOUNT                  | Transfer of nothing
             | INVALID_AMOUNT               | Negative, non-integer, or unstorable
-------------|------------------------------|--------------------------------------
Balance      | INSUFFICIENT_BALANCE         | Sender holds less than requested
-------------|------------------------------|--------------------------------------
Allowance    | ALLOWANCE_EXCEEDED           | Spender quota below requested
-------------|------------------------------|--------------------------------------
Referral     | SELF_REFERRAL                | Account names itself as referrer
             | REFERRER_ALREADY_SET         | Referrer is write-once
-------------|------------------------------|--------------------------------------
Fee policy   | FEE_RATE_OUT_OF_BOUNDS       | Rate outside [0, 500] bp
             | FEE_RATE_ORDERING_VIOLATION  | referral rate > beneficiary rate
-------------|------------------------------|--------------------------------------
Authority    | NOT_OWNER                    | Governance call by non-owner
-------------|------------------------------|--------------------------------------
State        | LEDGER_NOT_INITIALIZED       | No genesis has been performed
             | LEDGER_ALREADY_INITIALIZED   | Second genesis attempted
             | SUPPLY_CAP_EXCEEDED          | Genesis supply above MAX_SUPPLY
             | CONSERVATION_VIOLATION       | Balance sum != total supply

===============================================================================
"""


class LedgerKernelError(Exception):
    """
    Base exception for all ledger kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "LEDGER_KERNEL_ERROR"


# Address-related exceptions


class AddressError(LedgerKernelError):
    """Base exception for account identifier errors."""

    code: str = "ADDRESS_ERROR"


class ZeroAddressError(AddressError):
    """A party to the operation is the null account."""

    code: str = "ZERO_ADDRESS"

    def __init__(self, role: str):
        self.role = role
        super().__init__(f"The {role} must not be the null account")


class InvalidAddressError(AddressError):
    """Account identifier is not a usable string."""

    code: str = "INVALID_ADDRESS"

    def __init__(self, role: str, address: object, reason: str):
        self.role = role
        self.address = repr(address)
        self.reason = reason
        super().__init__(f"Invalid {role} address {address!r}: {reason}")


# Amount-related exceptions


class AmountError(LedgerKernelError):
    """Base exception for amount errors."""

    code: str = "AMOUNT_ERROR"


class ZeroAmountError(AmountError):
    """Transfer amount is zero."""

    code: str = "ZERO_AMOUNT"

    def __init__(self, field: str = "amount"):
        self.field = field
        super().__init__(f"The {field} must be greater than zero")


class InvalidAmountError(AmountError):
    """Amount is negative, not an integer, or exceeds the storable maximum."""

    code: str = "INVALID_AMOUNT"

    def __init__(self, field: str, value: object, reason: str):
        self.field = field
        self.value = repr(value)
        self.reason = reason
        super().__init__(f"Invalid {field} {value!r}: {reason}")


# Balance-related exceptions


class BalanceError(LedgerKernelError):
    """Base exception for balance errors."""

    code: str = "BALANCE_ERROR"


class InsufficientBalanceError(BalanceError):
    """Account balance is below the requested debit."""

    code: str = "INSUFFICIENT_BALANCE"

    def __init__(self, account: str, balance: int, requested: int):
        self.account = account
        self.balance = balance
        self.requested = requested
        super().__init__(
            f"Insufficient balance for {account}: "
            f"holds {balance}, requested {requested}"
        )


# Allowance-related exceptions


class AllowanceError(LedgerKernelError):
    """Base exception for allowance errors."""

    code: str = "ALLOWANCE_ERROR"


class AllowanceExceededError(AllowanceError):
    """Spender quota is below the requested amount."""

    code: str = "ALLOWANCE_EXCEEDED"

    def __init__(self, owner: str, spender: str, allowance: int, requested: int):
        self.owner = owner
        self.spender = spender
        self.allowance = allowance
        self.requested = requested
        super().__init__(
            f"Allowance exceeded: {spender} may spend {allowance} "
            f"of {owner}'s balance, requested {requested}"
        )


# Referral-related exceptions


class ReferralError(LedgerKernelError):
    """Base exception for referral assignment errors."""

    code: str = "REFERRAL_ERROR"


class SelfReferralError(ReferralError):
    """Account attempted to name itself as its own referrer."""

    code: str = "SELF_REFERRAL"

    def __init__(self, account: str):
        self.account = account
        super().__init__(f"Account {account} cannot refer itself")


class ReferrerAlreadySetError(ReferralError):
    """Account already has a referrer; assignment is write-once."""

    code: str = "REFERRER_ALREADY_SET"

    def __init__(self, account: str, existing_referrer: str, referrer: str):
        self.account = account
        self.existing_referrer = existing_referrer
        self.referrer = referrer
        super().__init__(
            f"Account {account} already referred by {existing_referrer}; "
            f"cannot reassign to {referrer}"
        )


# Fee-policy exceptions


class FeePolicyError(LedgerKernelError):
    """Base exception for fee-rate governance errors."""

    code: str = "FEE_POLICY_ERROR"


class FeeRateOutOfBoundsError(FeePolicyError):
    """Fee rate lies outside the permitted basis-point range."""

    code: str = "FEE_RATE_OUT_OF_BOUNDS"

    def __init__(self, rate_name: str, rate_bp: object, minimum: int, maximum: int):
        self.rate_name = rate_name
        self.rate_bp = rate_bp
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            f"{rate_name} {rate_bp!r} outside permitted range "
            f"[{minimum}, {maximum}] bp"
        )


class FeeRateOrderingViolationError(FeePolicyError):
    """Referral rate would exceed the beneficiary rate."""

    code: str = "FEE_RATE_ORDERING_VIOLATION"

    def __init__(self, referral_rate_bp: int, beneficiary_rate_bp: int):
        self.referral_rate_bp = referral_rate_bp
        self.beneficiary_rate_bp = beneficiary_rate_bp
        super().__init__(
            f"Referral rate {referral_rate_bp} bp must not exceed "
            f"beneficiary rate {beneficiary_rate_bp} bp"
        )


# Authorization exceptions


class AuthorizationError(LedgerKernelError):
    """Base exception for governance authorization errors."""

    code: str = "AUTHORIZATION_ERROR"


class NotOwnerError(AuthorizationError):
    """Governance operation attempted by an account other than the owner."""

    code: str = "NOT_OWNER"

    def __init__(self, caller: str, owner: str):
        self.caller = caller
        self.owner = owner
        super().__init__(f"Caller {caller} is not the ledger owner")


# Ledger lifecycle / integrity exceptions


class LedgerStateError(LedgerKernelError):
    """Base exception for ledger lifecycle and integrity errors."""

    code: str = "LEDGER_STATE_ERROR"


class LedgerNotInitializedError(LedgerStateError):
    """Operation requires a ledger that has not been initialized."""

    code: str = "LEDGER_NOT_INITIALIZED"

    def __init__(self):
        super().__init__("Ledger has not been initialized")


class LedgerAlreadyInitializedError(LedgerStateError):
    """Genesis may run only once."""

    code: str = "LEDGER_ALREADY_INITIALIZED"

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"Ledger already initialized for {symbol}")


class SupplyCapExceededError(LedgerStateError):
    """Initial supply exceeds the storable maximum."""

    code: str = "SUPPLY_CAP_EXCEEDED"

    def __init__(self, requested: int, maximum: int):
        self.requested = requested
        self.maximum = maximum
        super().__init__(
            f"Initial supply {requested} exceeds maximum supply {maximum}"
        )


class ConservationViolationError(LedgerStateError):
    """Sum of balances no longer equals total supply."""

    code: str = "CONSERVATION_VIOLATION"

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Conservation violated: balances sum to {actual}, "
            f"total supply is {expected}"
        )
