# ref_indexer/exchange/owner.py

from ..types import ActionReceipt, Block, ExecutionOutcome, FunctionCallAction
from .args import (
    SetOwnerArgs,
    ChangeStateArgs,
    ModifyAdminFeeArgs,
    RemoveLiquidityArgs,
    StableSwapRampAmpArgs,
    StableSwapStopRampAmpArgs,
)
from .base import ProtocolHandler


KNOWN_STATES = ("Running", "Paused")


class OwnerHandlers(ProtocolHandler):
    """Owner and admin methods"""

    category = "owner"

    def set_owner(self, function_call: FunctionCallAction, receipt: ActionReceipt,
                  outcome: ExecutionOutcome, block: Block) -> None:
        args = self.decode_args(function_call, SetOwnerArgs, receipt)
        if args is not None:
            self.log_info("Set owner",
                          receipt_id=receipt.id,
                          account_id=receipt.predecessor_id,
                          owner_id=args.owner_id)
        self.record_call(function_call, receipt, block, args)

    def change_state(self, function_call: FunctionCallAction, receipt: ActionReceipt,
                     outcome: ExecutionOutcome, block: Block) -> None:
        args = self.decode_args(function_call, ChangeStateArgs, receipt)
        if args is not None:
            if args.state not in KNOWN_STATES:
                self.log_warning("Unrecognised exchange state",
                                 receipt_id=receipt.id,
                                 state=args.state)
            self.log_info("Change state",
                          receipt_id=receipt.id,
                          account_id=receipt.predecessor_id,
                          state=args.state)
        self.record_call(function_call, receipt, block, args)

    def modify_admin_fee(self, function_call: FunctionCallAction, receipt: ActionReceipt,
                         outcome: ExecutionOutcome, block: Block) -> None:
        args = self.decode_args(function_call, ModifyAdminFeeArgs, receipt)
        if args is not None:
            self.log_info("Modify admin fee",
                          receipt_id=receipt.id,
                          account_id=receipt.predecessor_id,
                          exchange_fee=args.exchange_fee,
                          referral_fee=args.referral_fee,
                          admin_fee_bps=args.admin_fee_bps)
        self.record_call(function_call, receipt, block, args)

    def remove_exchange_fee_liquidity(self, function_call: FunctionCallAction, receipt: ActionReceipt,
                                      outcome: ExecutionOutcome, block: Block) -> None:
        args = self.decode_args(function_call, RemoveLiquidityArgs, receipt)
        if args is not None:
            self.log_info("Remove exchange fee liquidity",
                          receipt_id=receipt.id,
                          account_id=receipt.predecessor_id,
                          pool_id=args.pool_id,
                          shares=args.shares)
        self.record_call(function_call, receipt, block, args)

    def stable_swap_ramp_amp(self, function_call: FunctionCallAction, receipt: ActionReceipt,
                             outcome: ExecutionOutcome, block: Block) -> None:
        args = self.decode_args(function_call, StableSwapRampAmpArgs, receipt)
        if args is not None:
            self.log_info("Stable swap ramp amp",
                          receipt_id=receipt.id,
                          pool_id=args.pool_id,
                          future_amp_factor=args.future_amp_factor,
                          future_amp_time=args.future_amp_time)
        self.record_call(function_call, receipt, block, args)

    def stable_swap_stop_ramp_amp(self, function_call: FunctionCallAction, receipt: ActionReceipt,
                                  outcome: ExecutionOutcome, block: Block) -> None:
        args = self.decode_args(function_call, StableSwapStopRampAmpArgs, receipt)
        if args is not None:
            self.log_info("Stable swap stop ramp amp",
                          receipt_id=receipt.id,
                          pool_id=args.pool_id)
        self.record_call(function_call, receipt, block, args)
