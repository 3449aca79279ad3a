# tests/test_exchange_handlers.py

import logging

import pytest

from ref_indexer.exchange.mft import pool_id_from_token_id
from ref_indexer.types import generate_content_id


EXCHANGE = "v2.ref-finance.near"


def process_call(pipeline, records, method_name, args, deposit="1", predecessor_id="alice.near",
                 receipt_id="R1"):
    record = records.record(
        [records.function_call(method_name, args=args, deposit=deposit)],
        receipt_id=receipt_id, receiver_id=EXCHANGE, predecessor_id=predecessor_id,
    )
    pipeline.process(record)
    return record


def test_swap_is_recorded(pipeline, store, records):
    args = {
        "actions": [{
            "pool_id": 79,
            "token_in": "wrap.near",
            "token_out": "token.v2.ref-finance.near",
            "amount_in": "1000000000000000000000000",
            "min_amount_out": "1",
        }],
        "referral_id": "ref.near",
    }

    process_call(pipeline, records, "swap", args)

    with store.reader() as session:
        calls = store.exchange_calls.get_by_receipt(session, "R1")
        assert len(calls) == 1
        call = calls[0]
        assert call.id == generate_content_id("R1", 0, "swap")
        assert call.method_name == "swap"
        assert call.category == "exchange"
        assert call.action_index == 0
        assert call.predecessor_id == "alice.near"
        assert call.receiver_id == EXCHANGE
        assert call.deposit == 1
        assert call.args["actions"][0]["pool_id"] == 79
        assert call.args["referral_id"] == "ref.near"
        assert call.block_number == 100


def test_ft_on_transfer_deposit(pipeline, store, records):
    process_call(pipeline, records, "ft_on_transfer",
                 {"sender_id": "bob.near", "amount": "500", "msg": ""},
                 deposit="0", predecessor_id="wrap.near")

    with store.reader() as session:
        call = store.exchange_calls.get_by_method(session, "ft_on_transfer")[0]
        assert call.category == "token_receiver"
        assert call.args == {"sender_id": "bob.near", "amount": "500", "msg": ""}
        assert call.deposit == 0


def test_ft_on_transfer_instant_swap(pipeline, store, records, caplog):
    msg = '{"actions": [{"pool_id": 3, "token_in": "wrap.near", "token_out": "usdt.near", "min_amount_out": "9"}]}'

    with caplog.at_level(logging.INFO, logger="ref_indexer"):
        process_call(pipeline, records, "ft_on_transfer",
                     {"sender_id": "bob.near", "amount": "500", "msg": msg},
                     deposit="0", predecessor_id="wrap.near")

    swaps = [r for r in caplog.records if r.getMessage() == "Instant swap"]
    assert len(swaps) == 1
    assert swaps[0].pool_ids == [3]


def test_undecodable_args_are_recorded_without_args(pipeline, store, records, caplog):
    with caplog.at_level(logging.WARNING, logger="ref_indexer"):
        process_call(pipeline, records, "add_liquidity", b"not json")

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert warnings[0].method_name == "add_liquidity"

    with store.reader() as session:
        call = store.exchange_calls.get_by_method(session, "add_liquidity")[0]
        assert call.args is None
        assert call.raw_args == b"not json"


def test_wrongly_shaped_args_are_recorded_without_args(pipeline, store, records):
    process_call(pipeline, records, "withdraw", {"token": "wrap.near"})

    with store.reader() as session:
        call = store.exchange_calls.get_by_method(session, "withdraw")[0]
        assert call.category == "account_deposit"
        assert call.args is None


def test_calls_in_one_receipt_get_distinct_ids(pipeline, store, records):
    record = records.record([
        records.function_call("mft_transfer", args={"token_id": ":4", "receiver_id": "bob.near", "amount": "10"}),
        records.function_call("mft_transfer", args={"token_id": ":4", "receiver_id": "bob.near", "amount": "10"}),
    ], receiver_id=EXCHANGE)

    pipeline.process(record)

    with store.reader() as session:
        calls = store.exchange_calls.get_by_receipt(session, "R1")
        assert [c.action_index for c in calls] == [0, 1]
        assert calls[0].id != calls[1].id


def test_owner_change_state(pipeline, store, records, caplog):
    with caplog.at_level(logging.WARNING, logger="ref_indexer"):
        process_call(pipeline, records, "change_state", {"state": "Frozen"}, predecessor_id="owner.near")

    assert any(r.getMessage() == "Unrecognised exchange state" for r in caplog.records)

    with store.reader() as session:
        call = store.exchange_calls.get_by_method(session, "change_state")[0]
        assert call.category == "owner"
        assert call.args == {"state": "Frozen"}


@pytest.mark.parametrize("token_id,expected", [
    (":12", 12),
    (":0", 0),
    ("wrap.near", None),
    (":abc", None),
])
def test_pool_id_from_token_id(token_id, expected):
    assert pool_id_from_token_id(token_id) == expected
