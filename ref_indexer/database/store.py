# ref_indexer/database/store.py

from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy.orm import Session

from ..core.errors import StoreError
from ..core.logging import LoggingMixin
from ..types import CryptoHash
from .connection import DatabaseManager
from .repositories import DeploymentRepository, ExchangeCallRepository


class UnitOfWork:
    """Database transaction scoped to one receipt"""

    def __init__(self, session: Session, receipt_id: CryptoHash):
        self.session = session
        self.receipt_id = receipt_id
        self.action_index = 0


class EntityStore(LoggingMixin):
    """
    Entity store shared by the built-in and protocol handlers.

    Writes happen only inside ``unit_of_work()``; the receipt pipeline opens one
    per receipt, so a failing receipt rolls back as a whole and leaves rows from
    earlier receipts untouched. Units of work do not nest.
    """

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager
        self.deployments = DeploymentRepository()
        self.exchange_calls = ExchangeCallRepository()
        self._current: Optional[UnitOfWork] = None

    @contextmanager
    def unit_of_work(self, receipt_id: CryptoHash) -> Generator[UnitOfWork, None, None]:
        if self._current is not None:
            raise StoreError(
                f"unit of work for receipt {self._current.receipt_id} is still open, "
                f"cannot start one for {receipt_id}"
            )

        with self.db_manager.get_transaction() as session:
            self._current = UnitOfWork(session, receipt_id)
            try:
                yield self._current
            finally:
                self._current = None

    @property
    def current(self) -> UnitOfWork:
        if self._current is None:
            raise StoreError("no unit of work is open; writes must happen while processing a receipt")
        return self._current

    @property
    def session(self) -> Session:
        return self.current.session

    @contextmanager
    def reader(self) -> Generator[Session, None, None]:
        """Read-only session outside of receipt processing"""
        with self.db_manager.get_session() as session:
            yield session
