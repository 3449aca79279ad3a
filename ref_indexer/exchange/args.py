# ref_indexer/exchange/args.py
"""
JSON argument shapes of the Ref Finance exchange methods.

U128 amounts are decimal strings on the wire. Unknown fields are ignored so
newer contract versions that add arguments still decode.
"""

from typing import Optional, Union

from msgspec import Struct


U128 = str
U64 = Union[int, str]


class SwapAction(Struct):
    pool_id: int
    token_in: str
    token_out: str
    min_amount_out: U128
    amount_in: Optional[U128] = None


# === exchange ===

class NewArgs(Struct):
    owner_id: str
    exchange_fee: Optional[int] = None
    referral_fee: Optional[int] = None


class AddSimplePoolArgs(Struct):
    tokens: list[str]
    fee: int


class AddStableSwapPoolArgs(Struct):
    tokens: list[str]
    decimals: list[int]
    fee: int
    amp_factor: U64


class SwapArgs(Struct):
    actions: list[SwapAction]
    referral_id: Optional[str] = None


class AddLiquidityArgs(Struct):
    pool_id: int
    amounts: list[U128]
    min_amounts: Optional[list[U128]] = None


class AddStableLiquidityArgs(Struct):
    pool_id: int
    amounts: list[U128]
    min_shares: U128


class RemoveLiquidityArgs(Struct):
    pool_id: int
    shares: U128
    min_amounts: list[U128]


class RemoveLiquidityByTokensArgs(Struct):
    pool_id: int
    amounts: list[U128]
    max_burn_shares: U128


# === owner ===

class SetOwnerArgs(Struct):
    owner_id: str


class ChangeStateArgs(Struct):
    state: str  # "Running" | "Paused"


class ModifyAdminFeeArgs(Struct):
    exchange_fee: Optional[int] = None
    referral_fee: Optional[int] = None
    admin_fee_bps: Optional[int] = None


class StableSwapRampAmpArgs(Struct):
    pool_id: int
    future_amp_factor: U64
    future_amp_time: U64


class StableSwapStopRampAmpArgs(Struct):
    pool_id: int


# === multi fungible token ===

class MftTransferArgs(Struct):
    token_id: str
    receiver_id: str
    amount: U128
    memo: Optional[str] = None


class MftTransferCallArgs(Struct):
    token_id: str
    receiver_id: str
    amount: U128
    msg: str
    memo: Optional[str] = None


class MftResolveTransferArgs(Struct):
    token_id: str
    sender_id: str
    receiver_id: str
    amount: U128


# === token receiver ===

class FtOnTransferArgs(Struct):
    sender_id: str
    amount: U128
    msg: str = ""


# === account deposit ===

class WithdrawArgs(Struct):
    token_id: str
    amount: U128
    unregister: Optional[bool] = None


class CallbackPostWithdrawArgs(Struct):
    token_id: str
    sender_id: str
    amount: U128
