# ref_indexer/exchange/base.py

from typing import Optional, Type, TypeVar

import msgspec

from ..core.logging import LoggingMixin
from ..database.store import EntityStore
from ..database.tables import DBExchangeCall
from ..types import ActionReceipt, Block, FunctionCallAction, generate_content_id


A = TypeVar('A', bound=msgspec.Struct)


class ProtocolHandler(LoggingMixin):
    """Shared plumbing for one group of Ref Finance method handlers"""

    category = "exchange"

    def __init__(self, store: EntityStore):
        self.store = store

    def decode_args(self, function_call: FunctionCallAction, args_type: Type[A],
                    receipt: ActionReceipt) -> Optional[A]:
        """Decode call arguments; undecodable arguments are logged and yield None"""
        try:
            return msgspec.json.decode(function_call.args, type=args_type)
        except msgspec.DecodeError as e:
            self.log_warning("Could not decode function call args",
                             receipt_id=receipt.id,
                             method_name=function_call.method_name,
                             args_type=args_type.__name__,
                             error=str(e),
                             exception_type=type(e).__name__)
            return None

    def record_call(self, function_call: FunctionCallAction, receipt: ActionReceipt,
                    block: Block, args: Optional[msgspec.Struct]) -> DBExchangeCall:
        unit_of_work = self.store.current
        call_id = generate_content_id(receipt.id, unit_of_work.action_index, function_call.method_name)

        return self.store.exchange_calls.upsert(
            unit_of_work.session,
            id=call_id,
            receipt_id=receipt.id,
            action_index=unit_of_work.action_index,
            method_name=function_call.method_name,
            category=self.category,
            predecessor_id=receipt.predecessor_id,
            receiver_id=receipt.receiver_id,
            signer_id=receipt.signer_id,
            args=msgspec.to_builtins(args) if args is not None else None,
            raw_args=function_call.args,
            deposit=function_call.deposit_amount,
            gas=function_call.gas,
            block_number=block.header.height,
            timestamp=block.header.timestamp_nanosec,
        )
