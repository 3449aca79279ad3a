# ref_indexer/dispatch/builtin.py

from ..core.logging import LoggingMixin
from ..database.store import EntityStore
from ..types import (
    ActionReceipt,
    Block,
    CreateAccountAction,
    DeployContractAction,
    ExecutionOutcome,
    FunctionCallAction,
    TransferAction,
)


class BuiltinHandlers(LoggingMixin):
    """Handlers for the action kinds that do not go through the method registry"""

    def __init__(self, store: EntityStore):
        self.store = store

    def create_account(self, create_account: CreateAccountAction, receipt: ActionReceipt,
                       outcome: ExecutionOutcome, block: Block) -> None:
        # No account state is kept yet.
        self.log_debug("Handle create account",
                       receipt_id=receipt.id,
                       account_id=receipt.receiver_id)

    def deploy_contract(self, deploy_contract: DeployContractAction, receipt: ActionReceipt,
                        outcome: ExecutionOutcome, block: Block) -> None:
        self.log_info("Handle deploy contract",
                      receipt_id=receipt.id,
                      account_id=receipt.receiver_id,
                      block_height=block.header.height)

        self.store.deployments.upsert(
            self.store.session,
            id=receipt.id,
            account_id=receipt.receiver_id,
            receipt_id=receipt.id,
            code_hash=deploy_contract.code_hash_bytes,
            block_number=block.header.height,
            timestamp=block.header.timestamp_nanosec,
        )

    def transfer(self, transfer: TransferAction, receipt: ActionReceipt,
                 outcome: ExecutionOutcome, block: Block) -> None:
        # TODO: reconcile native NEAR balance deltas per account once balances are modelled
        self.log_debug("Handle transfer",
                       receipt_id=receipt.id,
                       account_id=receipt.receiver_id,
                       deposit=transfer.deposit_amount)

    def missing_function_call(self, function_call: FunctionCallAction, receipt: ActionReceipt,
                              outcome: ExecutionOutcome, block: Block) -> None:
        self.log_warning(f"No handler for function call {function_call.method_name}",
                         receipt_id=receipt.id,
                         method_name=function_call.method_name,
                         call_args=function_call.args.decode('utf-8', errors='replace'),
                         deposit=function_call.deposit_amount)
