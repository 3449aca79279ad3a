# ref_indexer/exchange/account_deposit.py

from ..types import ActionReceipt, Block, ExecutionOutcome, FunctionCallAction
from .args import WithdrawArgs, CallbackPostWithdrawArgs
from .base import ProtocolHandler


class AccountDepositHandlers(ProtocolHandler):
    """Withdrawals of deposited tokens and their completion callback"""

    category = "account_deposit"

    def withdraw(self, function_call: FunctionCallAction, receipt: ActionReceipt,
                 outcome: ExecutionOutcome, block: Block) -> None:
        args = self.decode_args(function_call, WithdrawArgs, receipt)
        if args is not None:
            self.log_info("Withdraw",
                          receipt_id=receipt.id,
                          account_id=receipt.predecessor_id,
                          token_id=args.token_id,
                          amount=args.amount,
                          unregister=args.unregister)
        self.record_call(function_call, receipt, block, args)

    def callback_post_withdraw(self, function_call: FunctionCallAction, receipt: ActionReceipt,
                               outcome: ExecutionOutcome, block: Block) -> None:
        args = self.decode_args(function_call, CallbackPostWithdrawArgs, receipt)
        if args is not None:
            self.log_info("Withdraw callback",
                          receipt_id=receipt.id,
                          account_id=args.sender_id,
                          token_id=args.token_id,
                          amount=args.amount,
                          log_count=len(outcome.logs))
        self.record_call(function_call, receipt, block, args)
