# ref_indexer/exchange/token_receiver.py

from typing import Optional

import msgspec
from msgspec import Struct

from ..types import ActionReceipt, Block, ExecutionOutcome, FunctionCallAction
from .args import FtOnTransferArgs, SwapAction
from .base import ProtocolHandler


class ExecuteMessage(Struct):
    """Non-empty ft_on_transfer msg: swap the received tokens right away"""
    actions: list[SwapAction]
    referral_id: Optional[str] = None
    force: Optional[int] = None


class TokenReceiverHandlers(ProtocolHandler):
    """NEP-141 ft_on_transfer callback: deposits and instant swaps"""

    category = "token_receiver"

    def ft_on_transfer(self, function_call: FunctionCallAction, receipt: ActionReceipt,
                       outcome: ExecutionOutcome, block: Block) -> None:
        args = self.decode_args(function_call, FtOnTransferArgs, receipt)
        if args is not None:
            # predecessor is the token contract
            if not args.msg:
                self.log_info("Token deposit",
                              receipt_id=receipt.id,
                              account_id=args.sender_id,
                              token_id=receipt.predecessor_id,
                              amount=args.amount)
            else:
                message = self._decode_message(args.msg, receipt)
                self.log_info("Instant swap",
                              receipt_id=receipt.id,
                              account_id=args.sender_id,
                              token_id=receipt.predecessor_id,
                              amount=args.amount,
                              pool_ids=[a.pool_id for a in message.actions] if message else None)
        self.record_call(function_call, receipt, block, args)

    def _decode_message(self, msg: str, receipt: ActionReceipt) -> Optional[ExecuteMessage]:
        try:
            return msgspec.json.decode(msg, type=ExecuteMessage)
        except msgspec.DecodeError as e:
            self.log_warning("Could not decode ft_on_transfer msg",
                             receipt_id=receipt.id,
                             error=str(e),
                             exception_type=type(e).__name__)
            return None
