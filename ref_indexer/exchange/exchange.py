# ref_indexer/exchange/exchange.py

from ..types import ActionReceipt, Block, ExecutionOutcome, FunctionCallAction
from .args import (
    NewArgs,
    AddSimplePoolArgs,
    AddStableSwapPoolArgs,
    SwapArgs,
    AddLiquidityArgs,
    AddStableLiquidityArgs,
    RemoveLiquidityArgs,
    RemoveLiquidityByTokensArgs,
)
from .base import ProtocolHandler


class ExchangeHandlers(ProtocolHandler):
    """Pool creation, liquidity and swap methods"""

    category = "exchange"

    def init_ref_v2(self, function_call: FunctionCallAction, receipt: ActionReceipt,
                    outcome: ExecutionOutcome, block: Block) -> None:
        args = self.decode_args(function_call, NewArgs, receipt)
        if args is not None:
            self.log_info("Exchange initialized",
                          receipt_id=receipt.id,
                          account_id=receipt.receiver_id,
                          owner_id=args.owner_id)
        self.record_call(function_call, receipt, block, args)

    def add_simple_pool(self, function_call: FunctionCallAction, receipt: ActionReceipt,
                        outcome: ExecutionOutcome, block: Block) -> None:
        args = self.decode_args(function_call, AddSimplePoolArgs, receipt)
        if args is not None:
            self.log_info("Simple pool added",
                          receipt_id=receipt.id,
                          account_id=receipt.predecessor_id,
                          tokens=args.tokens,
                          fee=args.fee)
        self.record_call(function_call, receipt, block, args)

    def add_stable_swap_pool(self, function_call: FunctionCallAction, receipt: ActionReceipt,
                             outcome: ExecutionOutcome, block: Block) -> None:
        args = self.decode_args(function_call, AddStableSwapPoolArgs, receipt)
        if args is not None:
            if len(args.tokens) != len(args.decimals):
                self.log_warning("Stable pool tokens and decimals differ in length",
                                 receipt_id=receipt.id,
                                 tokens=args.tokens,
                                 decimals=args.decimals)
            self.log_info("Stable swap pool added",
                          receipt_id=receipt.id,
                          account_id=receipt.predecessor_id,
                          tokens=args.tokens,
                          fee=args.fee,
                          amp_factor=args.amp_factor)
        self.record_call(function_call, receipt, block, args)

    def execute_actions(self, function_call: FunctionCallAction, receipt: ActionReceipt,
                        outcome: ExecutionOutcome, block: Block) -> None:
        args = self.decode_args(function_call, SwapArgs, receipt)
        if args is not None:
            self.log_info("Execute actions",
                          receipt_id=receipt.id,
                          account_id=receipt.predecessor_id,
                          pool_ids=[action.pool_id for action in args.actions])
        self.record_call(function_call, receipt, block, args)

    def swap(self, function_call: FunctionCallAction, receipt: ActionReceipt,
             outcome: ExecutionOutcome, block: Block) -> None:
        args = self.decode_args(function_call, SwapArgs, receipt)
        if args is not None:
            self.log_info("Swap",
                          receipt_id=receipt.id,
                          account_id=receipt.predecessor_id,
                          pool_ids=[action.pool_id for action in args.actions],
                          referral_id=args.referral_id)
        self.record_call(function_call, receipt, block, args)

    def add_liquidity(self, function_call: FunctionCallAction, receipt: ActionReceipt,
                      outcome: ExecutionOutcome, block: Block) -> None:
        args = self.decode_args(function_call, AddLiquidityArgs, receipt)
        if args is not None:
            self.log_info("Add liquidity",
                          receipt_id=receipt.id,
                          account_id=receipt.predecessor_id,
                          pool_id=args.pool_id,
                          amounts=args.amounts)
        self.record_call(function_call, receipt, block, args)

    def add_stable_liquidity(self, function_call: FunctionCallAction, receipt: ActionReceipt,
                             outcome: ExecutionOutcome, block: Block) -> None:
        args = self.decode_args(function_call, AddStableLiquidityArgs, receipt)
        if args is not None:
            self.log_info("Add stable liquidity",
                          receipt_id=receipt.id,
                          account_id=receipt.predecessor_id,
                          pool_id=args.pool_id,
                          amounts=args.amounts,
                          min_shares=args.min_shares)
        self.record_call(function_call, receipt, block, args)

    def remove_liquidity(self, function_call: FunctionCallAction, receipt: ActionReceipt,
                         outcome: ExecutionOutcome, block: Block) -> None:
        args = self.decode_args(function_call, RemoveLiquidityArgs, receipt)
        if args is not None:
            self.log_info("Remove liquidity",
                          receipt_id=receipt.id,
                          account_id=receipt.predecessor_id,
                          pool_id=args.pool_id,
                          shares=args.shares)
        self.record_call(function_call, receipt, block, args)

    def remove_liquidity_by_tokens(self, function_call: FunctionCallAction, receipt: ActionReceipt,
                                   outcome: ExecutionOutcome, block: Block) -> None:
        args = self.decode_args(function_call, RemoveLiquidityByTokensArgs, receipt)
        if args is not None:
            self.log_info("Remove liquidity by tokens",
                          receipt_id=receipt.id,
                          account_id=receipt.predecessor_id,
                          pool_id=args.pool_id,
                          amounts=args.amounts,
                          max_burn_shares=args.max_burn_shares)
        self.record_call(function_call, receipt, block, args)
