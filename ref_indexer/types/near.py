# ref_indexer/types/near.py

from enum import Enum
from typing import Optional, Union

import msgspec
from msgspec import Struct, field

from .primitives import CryptoHash, AccountId, b58_to_bytes


class ActionKind(Enum):
    CREATE_ACCOUNT = "CreateAccount"
    DEPLOY_CONTRACT = "DeployContract"
    FUNCTION_CALL = "FunctionCall"
    TRANSFER = "Transfer"
    STAKE = "Stake"
    ADD_KEY = "AddKey"
    DELETE_KEY = "DeleteKey"
    DELETE_ACCOUNT = "DeleteAccount"
    UNKNOWN = "Unknown"


# === Actions ===
# Tagged by the "kind" field, e.g. {"kind": "Transfer", "deposit": "1000"}.
# u128 amounts travel as decimal text and args as base64 text.

class CreateAccountAction(Struct, tag="CreateAccount", tag_field="kind", rename="camel"):
    pass


class DeployContractAction(Struct, tag="DeployContract", tag_field="kind", rename="camel"):
    code_hash: CryptoHash

    @property
    def code_hash_bytes(self) -> bytes:
        return b58_to_bytes(self.code_hash)


class FunctionCallAction(Struct, tag="FunctionCall", tag_field="kind", rename="camel"):
    method_name: str
    args: bytes = b""
    gas: int = 0
    deposit: str = "0"

    @property
    def deposit_amount(self) -> int:
        return int(self.deposit)


class TransferAction(Struct, tag="Transfer", tag_field="kind", rename="camel"):
    deposit: str = "0"

    @property
    def deposit_amount(self) -> int:
        return int(self.deposit)


class StakeAction(Struct, tag="Stake", tag_field="kind", rename="camel"):
    stake: str = "0"
    public_key: str = ""


class AddKeyAction(Struct, tag="AddKey", tag_field="kind", rename="camel"):
    public_key: str = ""
    access_key: Optional[dict] = None


class DeleteKeyAction(Struct, tag="DeleteKey", tag_field="kind", rename="camel"):
    public_key: str = ""


class DeleteAccountAction(Struct, tag="DeleteAccount", tag_field="kind", rename="camel"):
    beneficiary_id: Optional[AccountId] = None


Action = Union[
    CreateAccountAction,
    DeployContractAction,
    FunctionCallAction,
    TransferAction,
    StakeAction,
    AddKeyAction,
    DeleteKeyAction,
    DeleteAccountAction,
]


# === Receipt, outcome and block ===

class DataReceiver(Struct, rename="camel"):
    data_id: CryptoHash
    receiver_id: AccountId


class ActionReceipt(Struct, rename="camel"):
    id: CryptoHash
    predecessor_id: AccountId
    receiver_id: AccountId
    signer_id: AccountId
    # Kept raw so an action kind added to the protocol later does not fail the
    # whole receipt; ActionDecoder classifies each entry. Typed Action structs
    # are accepted here as well.
    actions: list[msgspec.Raw] = field(default_factory=list)
    signer_public_key: Optional[str] = None
    gas_price: Optional[str] = None
    input_data_ids: list[CryptoHash] = field(default_factory=list)
    output_data_receivers: list[DataReceiver] = field(default_factory=list)


class ExecutionOutcome(Struct, rename="camel"):
    block_hash: CryptoHash
    id: CryptoHash
    executor_id: AccountId
    logs: list[str] = field(default_factory=list)
    receipt_ids: list[CryptoHash] = field(default_factory=list)
    gas_burnt: int = 0
    tokens_burnt: str = "0"


class BlockHeader(Struct, rename="camel"):
    height: int
    timestamp_nanosec: int
    hash: Optional[CryptoHash] = None
    prev_hash: Optional[CryptoHash] = None


class Block(Struct):
    header: BlockHeader


class ReceiptWithOutcome(Struct):
    receipt: ActionReceipt
    outcome: ExecutionOutcome
    block: Block
