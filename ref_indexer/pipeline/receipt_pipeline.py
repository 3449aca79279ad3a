# ref_indexer/pipeline/receipt_pipeline.py

from collections import Counter
from typing import Dict, Optional, Union

from msgspec import Struct

from ..core.config import IndexerConfig
from ..core.errors import ReceiptProcessingError
from ..core.logging import LoggingMixin
from ..database.store import EntityStore
from ..decode.record_decoder import RecordDecoder
from ..dispatch.dispatcher import ActionDispatcher
from ..types import CryptoHash, ReceiptWithOutcome


class ReceiptSummary(Struct):
    receipt_id: CryptoHash
    block_height: int
    action_count: int
    kinds: Dict[str, int]


class ReceiptPipeline(LoggingMixin):
    """
    Entry point invoked once per delivered receipt.

    Actions are dispatched strictly in their listed order with the receipt's
    own receipt/outcome/block context, inside one store unit of work. A handler
    exception rolls the unit back and surfaces as ReceiptProcessingError;
    retrying the receipt is the caller's decision. Receipts must be delivered
    one at a time.
    """

    def __init__(self, dispatcher: ActionDispatcher, store: EntityStore,
                 config: Optional[IndexerConfig] = None):
        self.dispatcher = dispatcher
        self.store = store
        self.log_receipts = config.log_receipts if config else False
        self.record_decoder = RecordDecoder()

    def process(self, record: ReceiptWithOutcome) -> ReceiptSummary:
        receipt = record.receipt
        outcome = record.outcome
        block = record.block

        kinds = Counter()
        action_index = 0

        try:
            if self.log_receipts:
                self.debug_receipt(record)

            with self.store.unit_of_work(receipt.id) as unit_of_work:
                for action_index, action in enumerate(receipt.actions):
                    unit_of_work.action_index = action_index
                    kind = self.dispatcher.dispatch(action, receipt, outcome, block)
                    kinds[kind.value] += 1

        except Exception as e:
            self.log_error("Receipt processing failed",
                           **self.log_receipt_context(receipt.id,
                                                      block_height=block.header.height,
                                                      action_index=action_index,
                                                      error=str(e),
                                                      exception_type=type(e).__name__))
            raise ReceiptProcessingError(receipt.id, action_index, e) from e

        summary = ReceiptSummary(
            receipt_id=receipt.id,
            block_height=block.header.height,
            action_count=len(receipt.actions),
            kinds=dict(kinds),
        )

        self.log_debug("Receipt processed",
                       receipt_id=receipt.id,
                       block_height=block.header.height,
                       action_count=summary.action_count)

        return summary

    def process_raw(self, data: Union[bytes, str]) -> ReceiptSummary:
        return self.process(self.record_decoder.decode(data))

    def debug_receipt(self, record: ReceiptWithOutcome) -> None:
        receipt = record.receipt
        outcome = record.outcome
        block = record.block

        self.log_debug(f"Receipt {receipt.id} start",
                       receipt_id=receipt.id,
                       block_height=block.header.height,
                       predecessor_id=receipt.predecessor_id,
                       receiver_id=receipt.receiver_id,
                       signer_id=receipt.signer_id)

        for action_index, action in enumerate(receipt.actions):
            kind, view = self.dispatcher.decoder.classify(action)
            self.log_debug("Receipt action",
                           receipt_id=receipt.id,
                           action_index=action_index,
                           action_kind=kind.value,
                           data=repr(view))

        for data_id in receipt.input_data_ids:
            self.log_debug("Receipt input data id", receipt_id=receipt.id, data_id=data_id)

        for receiver in receipt.output_data_receivers:
            self.log_debug("Receipt output data receiver",
                           receipt_id=receipt.id,
                           data_id=receiver.data_id,
                           account_id=receiver.receiver_id)

        self.log_debug("Outcome",
                       receipt_id=receipt.id,
                       block_hash=outcome.block_hash,
                       outcome_id=outcome.id,
                       executor_id=outcome.executor_id)

        for line in outcome.logs:
            self.log_debug(f"Outcome log: {line}", receipt_id=receipt.id)

        for receipt_id in outcome.receipt_ids:
            self.log_debug("Outcome receipt id", receipt_id=receipt.id, produced_receipt_id=receipt_id)

        self.log_debug(f"Receipt {receipt.id} end", receipt_id=receipt.id)
