# tests/conftest.py
"""
pytest fixtures for the Ref Finance indexer

Every test gets its own in-memory SQLite database wired through the same
container the CLI uses.
"""

from typing import Optional, Union

import msgspec
import pytest

from ref_indexer import create_indexer
from ref_indexer.core.config import DatabaseConfig, IndexerConfig, LoggingConfig
from ref_indexer.core.logging import IndexerLogger
from ref_indexer.database.connection import DatabaseManager
from ref_indexer.database.store import EntityStore
from ref_indexer.dispatch.builtin import BuiltinHandlers
from ref_indexer.dispatch.dispatcher import ActionDispatcher
from ref_indexer.dispatch.registry import MethodRegistry
from ref_indexer.exchange import ProtocolHandlers
from ref_indexer.pipeline.receipt_pipeline import ReceiptPipeline
from ref_indexer.types import (
    ActionReceipt,
    Block,
    BlockHeader,
    ExecutionOutcome,
    FunctionCallAction,
    ReceiptWithOutcome,
)


class RecordBuilder:
    """Builds receipt-with-outcome records with sensible defaults"""

    def function_call(self, method_name: str, args: Union[dict, bytes, None] = None,
                      deposit: str = "0", gas: int = 30_000_000_000_000) -> FunctionCallAction:
        if isinstance(args, dict):
            args = msgspec.json.encode(args)
        return FunctionCallAction(method_name=method_name, args=args or b"", gas=gas, deposit=deposit)

    def receipt(self, actions, receipt_id: str = "R1", receiver_id: str = "acct.near",
                predecessor_id: str = "alice.near", signer_id: Optional[str] = None) -> ActionReceipt:
        return ActionReceipt(
            id=receipt_id,
            predecessor_id=predecessor_id,
            receiver_id=receiver_id,
            signer_id=signer_id or predecessor_id,
            actions=list(actions),
        )

    def record(self, actions, receipt_id: str = "R1", receiver_id: str = "acct.near",
               predecessor_id: str = "alice.near", height: int = 100,
               timestamp: int = 5_000_000_000) -> ReceiptWithOutcome:
        receipt = self.receipt(actions, receipt_id=receipt_id, receiver_id=receiver_id,
                               predecessor_id=predecessor_id)
        outcome = ExecutionOutcome(block_hash="B1", id=receipt_id, executor_id=receiver_id)
        block = Block(header=BlockHeader(height=height, timestamp_nanosec=timestamp))
        return ReceiptWithOutcome(receipt=receipt, outcome=outcome, block=block)


@pytest.fixture(autouse=True)
def reset_logging():
    IndexerLogger.reset()
    yield
    IndexerLogger.reset()


@pytest.fixture
def indexer_config():
    return IndexerConfig(
        database=DatabaseConfig(url="sqlite://"),
        logging_settings=LoggingConfig(console_enabled=False),
    )


@pytest.fixture
def indexer_container(indexer_config):
    container = create_indexer(config=indexer_config)
    db_manager = container.get(DatabaseManager)
    db_manager.create_tables()
    yield container
    db_manager.shutdown()


@pytest.fixture
def db_manager(indexer_container):
    return indexer_container.get(DatabaseManager)


@pytest.fixture
def store(indexer_container):
    return indexer_container.get(EntityStore)


@pytest.fixture
def builtins(indexer_container):
    return indexer_container.get(BuiltinHandlers)


@pytest.fixture
def protocol_handlers(indexer_container):
    return indexer_container.get(ProtocolHandlers)


@pytest.fixture
def registry(indexer_container):
    return indexer_container.get(MethodRegistry)


@pytest.fixture
def dispatcher(indexer_container):
    return indexer_container.get(ActionDispatcher)


@pytest.fixture
def pipeline(indexer_container):
    return indexer_container.get(ReceiptPipeline)


@pytest.fixture
def records():
    return RecordBuilder()
