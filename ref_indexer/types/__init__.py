# ref_indexer/types/__init__.py

from .primitives import (
    CryptoHash,
    AccountId,
    ContentId,
    b58_to_bytes,
    bytes_to_b58,
    generate_content_id,
)

from .near import (
    ActionKind,
    Action,
    CreateAccountAction,
    DeployContractAction,
    FunctionCallAction,
    TransferAction,
    StakeAction,
    AddKeyAction,
    DeleteKeyAction,
    DeleteAccountAction,
    DataReceiver,
    ActionReceipt,
    ExecutionOutcome,
    BlockHeader,
    Block,
    ReceiptWithOutcome,
)
