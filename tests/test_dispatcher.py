# tests/test_dispatcher.py

import logging

import pytest

from ref_indexer.dispatch import ActionDispatcher, BuiltinHandlers, MethodRegistry
from ref_indexer.pipeline import ReceiptPipeline
from ref_indexer.types import (
    ActionKind,
    AddKeyAction,
    CreateAccountAction,
    DeleteAccountAction,
    DeleteKeyAction,
    DeployContractAction,
    StakeAction,
    TransferAction,
    bytes_to_b58,
)


class RecordingRegistry:
    """Registry entries that remember each call and the action index it saw"""

    def __init__(self, store, names):
        self.store = store
        self.calls = []
        self.registry = MethodRegistry([(name, self._handler(name)) for name in names])

    def _handler(self, name):
        def handler(function_call, receipt, outcome, block):
            self.calls.append((name, receipt.id, self.store.current.action_index))
        return handler


class RecordingBuiltins(BuiltinHandlers):
    """Built-in handlers that remember which ones ran"""

    def __init__(self, store):
        super().__init__(store)
        self.calls = []

    def create_account(self, create_account, receipt, outcome, block):
        self.calls.append(("create_account", receipt.id))
        super().create_account(create_account, receipt, outcome, block)

    def transfer(self, transfer, receipt, outcome, block):
        self.calls.append(("transfer", receipt.id, transfer.deposit_amount))
        super().transfer(transfer, receipt, outcome, block)

    def missing_function_call(self, function_call, receipt, outcome, block):
        self.calls.append(("missing_function_call", receipt.id, function_call.method_name))
        super().missing_function_call(function_call, receipt, outcome, block)


@pytest.fixture
def recording(store):
    return RecordingRegistry(store, ["a", "b"])


@pytest.fixture
def recording_dispatcher(recording, builtins):
    return ActionDispatcher(recording.registry, builtins)


def test_function_calls_keep_receipt_order(recording, recording_dispatcher, store, records):
    pipeline = ReceiptPipeline(recording_dispatcher, store)
    record = records.record([
        records.function_call("a"),
        TransferAction(deposit="5"),
        records.function_call("b"),
        records.function_call("a"),
    ])

    summary = pipeline.process(record)

    assert recording.calls == [("a", "R1", 0), ("b", "R1", 2), ("a", "R1", 3)]
    assert summary.action_count == 4
    assert summary.kinds == {"FunctionCall": 3, "Transfer": 1}


def test_dispatch_returns_routed_kind(dispatcher, store, records):
    record = records.record([])

    with store.unit_of_work(record.receipt.id):
        for action, expected in [
            (CreateAccountAction(), ActionKind.CREATE_ACCOUNT),
            (TransferAction(deposit="1"), ActionKind.TRANSFER),
            (StakeAction(stake="1"), ActionKind.STAKE),
            (AddKeyAction(), ActionKind.ADD_KEY),
            (DeleteKeyAction(), ActionKind.DELETE_KEY),
            (DeleteAccountAction(beneficiary_id="bob.near"), ActionKind.DELETE_ACCOUNT),
            (b'{"kind": "Delegate"}', ActionKind.UNKNOWN),
        ]:
            assert dispatcher.dispatch(action, record.receipt, record.outcome, record.block) is expected


def test_deploy_contract_is_persisted(dispatcher, store, records):
    record = records.record([], receipt_id="R1", receiver_id="acct.near",
                            height=100, timestamp=5_000_000_000)
    action = DeployContractAction(code_hash=bytes_to_b58(b"\xab\xcd"))

    with store.unit_of_work(record.receipt.id):
        kind = dispatcher.dispatch(action, record.receipt, record.outcome, record.block)

    assert kind is ActionKind.DEPLOY_CONTRACT
    with store.reader() as session:
        deployment = store.deployments.get_by_id(session, "R1")
        assert deployment.account_id == "acct.near"
        assert deployment.receipt_id == "R1"
        assert deployment.code_hash == b"\xab\xcd"
        assert deployment.block_number == 100
        assert deployment.timestamp == 5_000_000_000


def test_unknown_method_logs_diagnostic_without_writes(dispatcher, store, records, caplog):
    record = records.record([])
    action = records.function_call("mystery_method", args={"x": 1}, deposit="7")

    with caplog.at_level(logging.WARNING, logger="ref_indexer"):
        with store.unit_of_work(record.receipt.id):
            kind = dispatcher.dispatch(action, record.receipt, record.outcome, record.block)

    assert kind is ActionKind.FUNCTION_CALL

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    warning = warnings[0]
    assert "mystery_method" in warning.getMessage()
    assert warning.receipt_id == "R1"
    assert warning.method_name == "mystery_method"
    assert warning.call_args == '{"x":1}'
    assert warning.deposit == 7

    with store.reader() as session:
        assert store.exchange_calls.count(session) == 0
        assert store.deployments.count(session) == 0


def test_ignored_kinds_log_nothing_at_info(dispatcher, store, records, caplog):
    record = records.record([])

    with caplog.at_level(logging.INFO, logger="ref_indexer"):
        with store.unit_of_work(record.receipt.id):
            for action in [StakeAction(), AddKeyAction(), DeleteKeyAction(),
                           DeleteAccountAction(), b'{"kind": "Delegate"}']:
                dispatcher.dispatch(action, record.receipt, record.outcome, record.block)

    assert [r for r in caplog.records if r.levelno >= logging.INFO] == []


def test_builtin_handlers_fire_once_each(registry, store, records):
    builtins = RecordingBuiltins(store)
    pipeline = ReceiptPipeline(ActionDispatcher(registry, builtins), store)

    pipeline.process(records.record([
        CreateAccountAction(),
        TransferAction(deposit="25"),
        StakeAction(stake="1"),
        records.function_call("unlisted_method"),
    ], receipt_id="R7"))

    assert builtins.calls == [
        ("create_account", "R7"),
        ("transfer", "R7", 25),
        ("missing_function_call", "R7", "unlisted_method"),
    ]


def test_builtin_handlers_log_at_debug(dispatcher, store, records, caplog):
    record = records.record([])

    with caplog.at_level(logging.DEBUG, logger="ref_indexer"):
        with store.unit_of_work(record.receipt.id):
            dispatcher.dispatch(CreateAccountAction(), record.receipt, record.outcome, record.block)
            dispatcher.dispatch(TransferAction(deposit="3"), record.receipt, record.outcome, record.block)

    messages = [r.getMessage() for r in caplog.records]
    assert messages.count("Handle create account") == 1
    assert messages.count("Handle transfer") == 1
