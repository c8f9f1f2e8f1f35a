"""
Shared fixtures.

The database comes from ``DATABASE_URL`` (in-memory SQLite when unset).
Tables are created once per run; every test gets a Session joined to an
outer transaction that is rolled back afterwards, so tests may commit
freely without seeing each other's rows.

``deployed_ledger`` is the reference deployment used throughout: Alice
holds the whole 1,000,000 supply, Carol owns the ledger and receives
beneficiary fees, the referral rate is 50 bp, and the beneficiary rate
is 100 bp.
"""

import json
import logging
import os
from io import StringIO
from typing import Callable, Generator

import pytest
from sqlalchemy.orm import Session

from ledger_kernel.db.engine import (
    create_tables,
    drop_tables,
    init_engine_from_url,
    reset_engine,
)
from ledger_kernel.domain.clock import DeterministicClock
from ledger_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from ledger_kernel.selectors.ledger_selector import LedgerSelector
from ledger_kernel.services.genesis_service import GenesisService
from ledger_services.token_ledger import TokenLedger

INITIAL_SUPPLY = 1_000_000
REFERRAL_RATE_BP = 50
BENEFICIARY_RATE_BP = 100

ALICE = "0xa11ce00000000000000000000000000000000001"
BOB = "0xb0b0000000000000000000000000000000000002"
CAROL = "0xca70100000000000000000000000000000000003"
DAVE = "0xda7e000000000000000000000000000000000004"


def pytest_configure(config):
    config.addinivalue_line("markers", "postgres: needs a PostgreSQL DATABASE_URL")


# -- logging ------------------------------------------------------------------


@pytest.fixture(autouse=True, scope="session")
def _json_logging():
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _fresh_log_context():
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs() -> Generator[Callable[[], list[dict]], None, None]:
    """
    Collect ledger_kernel records emitted during the test.

    Returns a callable so assertions can read everything logged so far:

        ledger.transfer(ALICE, DAVE, 1_000)
        assert any(r["message"] == "transfer_completed" for r in captured_logs())
    """
    buffer = StringIO()
    handler = logging.StreamHandler(buffer)
    handler.setFormatter(StructuredFormatter())

    kernel_logger = logging.getLogger("ledger_kernel")
    saved_level = kernel_logger.level
    kernel_logger.setLevel(logging.DEBUG)
    kernel_logger.addHandler(handler)
    try:
        yield lambda: [json.loads(line) for line in buffer.getvalue().splitlines() if line]
    finally:
        kernel_logger.removeHandler(handler)
        kernel_logger.setLevel(saved_level)


# -- database -----------------------------------------------------------------


@pytest.fixture(scope="session")
def db_engine():
    engine = init_engine_from_url(os.environ.get("DATABASE_URL", "sqlite://"))
    yield engine
    reset_engine()


@pytest.fixture(scope="session")
def db_tables(db_engine):
    drop_tables()
    create_tables()
    yield
    drop_tables()


@pytest.fixture
def session(db_engine, db_tables) -> Generator[Session, None, None]:
    """A Session whose commits become savepoints inside a discarded transaction."""
    connection = db_engine.connect()
    outer = connection.begin()
    test_session = Session(
        bind=connection,
        join_transaction_mode="create_savepoint",
        expire_on_commit=False,
    )
    try:
        yield test_session
    finally:
        test_session.close()
        outer.rollback()
        connection.close()


# -- ledger -------------------------------------------------------------------


@pytest.fixture
def deterministic_clock() -> DeterministicClock:
    return DeterministicClock()


@pytest.fixture
def accounts() -> dict[str, str]:
    return {"alice": ALICE, "bob": BOB, "carol": CAROL, "dave": DAVE}


@pytest.fixture
def deployed_ledger(session, deterministic_clock):
    return GenesisService(session, deterministic_clock).initialize(
        name="Referral Token",
        symbol="RFT",
        decimals=9,
        total_supply=INITIAL_SUPPLY,
        owner=CAROL,
        referral_rate_bp=REFERRAL_RATE_BP,
        beneficiary_rate_bp=BENEFICIARY_RATE_BP,
        initial_holder=ALICE,
    )


@pytest.fixture
def ledger(session, deployed_ledger, deterministic_clock) -> TokenLedger:
    return TokenLedger(session, deterministic_clock)


@pytest.fixture
def selector(session) -> LedgerSelector:
    return LedgerSelector(session)
