"""
BaseService -- abstract base for all kernel services.

Responsibility:
    Provides the common constructor and session-handling contract for
    every service in the kernel layer.  All concrete services receive a
    SQLAlchemy ``Session`` that they use via ``session.flush()`` -- never
    ``session.commit()``.

Architecture position:
    Kernel > Services -- imperative shell infrastructure.

Invariants enforced:
    ATOMICITY -- ``atomic()`` wraps a request in a SAVEPOINT.  Any
        exception raised inside rolls back every write made inside it,
        then propagates unchanged.  The caller still owns the outer
        commit/rollback.

Failure modes:
    - If a subclass calls ``session.commit()`` the caller loses control of
      the transaction boundary and a later failure can no longer undo
      earlier requests in the same unit of work.
"""

from abc import ABC
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session


class BaseService(ABC):
    """
    Abstract base class for all kernel services.

    Guarantees:
        - The service never calls ``session.commit()`` or
          ``session.rollback()`` on the outer transaction.

    Non-goals:
        - Does NOT provide query-only (read) methods for outer layers --
          those belong in ``ledger_kernel/selectors/``.
    """

    def __init__(self, session: Session):
        self.session = session

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """All-or-nothing scope for one ledger request."""
        with self.session.begin_nested():
            yield
