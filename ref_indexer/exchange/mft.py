# ref_indexer/exchange/mft.py

from typing import Optional

from ..types import ActionReceipt, Block, ExecutionOutcome, FunctionCallAction
from .args import MftTransferArgs, MftTransferCallArgs, MftResolveTransferArgs
from .base import ProtocolHandler


def pool_id_from_token_id(token_id: str) -> Optional[int]:
    """LP share tokens are addressed as ':<pool_id>'; other ids are plain token accounts"""
    if token_id.startswith(':') and token_id[1:].isdigit():
        return int(token_id[1:])
    return None


class MftHandlers(ProtocolHandler):
    """Multi-fungible-token (pool share) transfers"""

    category = "mft"

    def mft_transfer(self, function_call: FunctionCallAction, receipt: ActionReceipt,
                     outcome: ExecutionOutcome, block: Block) -> None:
        args = self.decode_args(function_call, MftTransferArgs, receipt)
        if args is not None:
            self.log_info("MFT transfer",
                          receipt_id=receipt.id,
                          account_id=receipt.predecessor_id,
                          token_id=args.token_id,
                          pool_id=pool_id_from_token_id(args.token_id),
                          receiver_id=args.receiver_id,
                          amount=args.amount)
        self.record_call(function_call, receipt, block, args)

    def mft_transfer_call(self, function_call: FunctionCallAction, receipt: ActionReceipt,
                          outcome: ExecutionOutcome, block: Block) -> None:
        args = self.decode_args(function_call, MftTransferCallArgs, receipt)
        if args is not None:
            self.log_info("MFT transfer call",
                          receipt_id=receipt.id,
                          account_id=receipt.predecessor_id,
                          token_id=args.token_id,
                          pool_id=pool_id_from_token_id(args.token_id),
                          receiver_id=args.receiver_id,
                          amount=args.amount)
        self.record_call(function_call, receipt, block, args)

    def mft_resolve_transfer(self, function_call: FunctionCallAction, receipt: ActionReceipt,
                             outcome: ExecutionOutcome, block: Block) -> None:
        args = self.decode_args(function_call, MftResolveTransferArgs, receipt)
        if args is not None:
            self.log_info("MFT resolve transfer",
                          receipt_id=receipt.id,
                          token_id=args.token_id,
                          sender_id=args.sender_id,
                          receiver_id=args.receiver_id,
                          amount=args.amount)
        self.record_call(function_call, receipt, block, args)
