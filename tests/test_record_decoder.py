# tests/test_record_decoder.py

import msgspec
import pytest

from ref_indexer.decode import RecordDecoder
from ref_indexer.types import TransferAction


def test_iter_file_skips_blank_lines(tmp_path, records):
    decoder = RecordDecoder()
    path = tmp_path / "receipts.jsonl"
    path.write_bytes(
        decoder.encode(records.record([TransferAction(deposit="1")], receipt_id="R1"))
        + b"\n\n"
        + decoder.encode(records.record([], receipt_id="R2"))
        + b"\n"
    )

    decoded = list(decoder.iter_file(path))

    assert [(line, record.receipt.id) for line, record in decoded] == [(1, "R1"), (3, "R2")]
    assert len(decoded[0][1].receipt.actions) == 1


def test_encoded_record_uses_camel_case(records):
    data = msgspec.json.decode(RecordDecoder().encode(records.record([TransferAction(deposit="5")])))

    assert data["receipt"]["receiverId"] == "acct.near"
    assert data["receipt"]["actions"] == [{"kind": "Transfer", "deposit": "5"}]
    assert data["block"]["header"]["timestampNanosec"] == 5_000_000_000


def test_decode_rejects_missing_fields():
    with pytest.raises(msgspec.ValidationError):
        RecordDecoder().decode(b'{"receipt": {"id": "R1"}, "outcome": {}, "block": {}}')
