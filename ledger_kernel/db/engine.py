"""
Module: ledger_kernel.db.engine
Responsibility: Owns the process-wide engine and session factory, and the
    commit-or-rollback unit of work used by callers outside the kernel.
Architecture position: Kernel > DB.  Imports db/base.py; models/ and the
    sequence counter are imported lazily by create_tables() so their
    tables are registered on Base.metadata.

Invariants enforced:
    - Nested transactions work on every supported backend.  Each ledger
      request runs inside ``Session.begin_nested()``, and pysqlite only
      honours SAVEPOINT once SQLAlchemy is emitting BEGIN itself.
    - session_scope() never leaves a half-applied unit of work committed.

Failure modes:
    - RuntimeError from get_engine()/get_session() before
      init_engine_from_url() has run.
"""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from ledger_kernel.logging_config import configure_logging, get_logger

logger = get_logger("db.engine")

_NOT_INITIALIZED = "Ledger database not initialized; call init_engine_from_url() first."

_engine: Engine | None = None
_SessionFactory: sessionmaker[Session] | None = None


def _sqlite_engine(url: URL, echo: bool) -> Engine:
    # One shared connection for :memory:, otherwise every connection
    # would see its own empty database.
    shared = url.database in (None, "", ":memory:")
    engine = create_engine(
        url,
        echo=echo,
        poolclass=StaticPool if shared else None,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine, "connect")
    def _autocommit_driver(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _explicit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine


def init_engine_from_url(
    database_url: str,
    echo: bool = False,
    pool_size: int = 20,
    max_overflow: int = 10,
    pool_pre_ping: bool = True,
    pool_timeout: int = 30,
    pool_recycle: int = 1800,
) -> Engine:
    """
    Build the engine for ``database_url`` and make it current.

    SQLite gets the SAVEPOINT hooks above.  Anything else (PostgreSQL in
    practice) gets a QueuePool at READ COMMITTED; the services take row
    locks on the balances and allowances they change, so a stronger
    isolation level is not needed.  The pool arguments apply only there.

    Calling again replaces the previous engine without disposing it.
    """
    global _engine, _SessionFactory

    url = make_url(database_url)
    backend = url.get_backend_name()

    if backend == "sqlite":
        engine = _sqlite_engine(url, echo)
    else:
        engine = create_engine(
            url,
            echo=echo,
            poolclass=QueuePool,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=pool_pre_ping,
            pool_timeout=pool_timeout,
            pool_recycle=pool_recycle,
            isolation_level="READ COMMITTED",
        )

    _engine = engine
    _SessionFactory = sessionmaker(bind=engine, expire_on_commit=False)

    configure_logging()
    logger.info("engine_initialized", extra={"dialect": backend, "echo": echo})
    return engine


def get_engine() -> Engine:
    if _engine is None:
        raise RuntimeError(_NOT_INITIALIZED)
    return _engine


def get_session() -> Session:
    """A fresh Session bound to the current engine; the caller closes it."""
    if _SessionFactory is None:
        raise RuntimeError(_NOT_INITIALIZED)
    return _SessionFactory()


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """
    One committed unit of work.

        with session_scope() as session:
            TokenLedger(session).transfer(caller, recipient, amount)

    Any exception rolls everything back and propagates unchanged.
    """
    session = get_session()
    logger.debug("transaction_started")
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        logger.warning("transaction_rolled_back", exc_info=True)
        raise
    else:
        logger.debug("transaction_committed")
    finally:
        session.close()


def create_tables() -> None:
    """Create every ledger table that does not exist yet."""
    from ledger_kernel.db.base import Base
    import ledger_kernel.models  # noqa: F401
    import ledger_kernel.services.sequence_service  # noqa: F401

    Base.metadata.create_all(get_engine())


def drop_tables() -> None:
    """Drop every ledger table.  Destroys all data; tests only."""
    from ledger_kernel.db.base import Base

    Base.metadata.drop_all(get_engine())


def reset_engine() -> None:
    """Dispose the engine and forget it. FOR TESTING ONLY."""
    global _engine, _SessionFactory

    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionFactory = None
