# ref_indexer/dispatch/dispatcher.py

from typing import Any

from ..core.logging import LoggingMixin
from ..decode.action_decoder import ActionDecoder
from ..types import ActionKind, ActionReceipt, Block, ExecutionOutcome
from .builtin import BuiltinHandlers
from .registry import MethodRegistry


# Account management kinds outside the exchange's accounting scope.
IGNORED_KINDS = frozenset({
    ActionKind.STAKE,
    ActionKind.ADD_KEY,
    ActionKind.DELETE_KEY,
    ActionKind.DELETE_ACCOUNT,
})


class ActionDispatcher(LoggingMixin):
    """Routes each classified action to exactly one handler, or to none."""

    def __init__(self, registry: MethodRegistry, builtins: BuiltinHandlers):
        self.registry = registry
        self.builtins = builtins
        self.decoder = ActionDecoder()
        self._builtin_map = {
            ActionKind.CREATE_ACCOUNT: builtins.create_account,
            ActionKind.DEPLOY_CONTRACT: builtins.deploy_contract,
            ActionKind.TRANSFER: builtins.transfer,
        }

    def dispatch(self, action: Any, receipt: ActionReceipt,
                 outcome: ExecutionOutcome, block: Block) -> ActionKind:
        kind, view = self.decoder.classify(action)

        if kind is ActionKind.FUNCTION_CALL:
            handler = self.registry.get(view.method_name)
            if handler is None:
                handler = self.builtins.missing_function_call
            else:
                self.log_debug("Dispatching function call",
                               receipt_id=receipt.id,
                               method_name=view.method_name,
                               handler_name=getattr(handler, '__name__', repr(handler)))
            handler(view, receipt, outcome, block)

        elif kind in self._builtin_map:
            self._builtin_map[kind](view, receipt, outcome, block)

        elif kind in IGNORED_KINDS:
            pass

        else:
            self.log_debug("Skipping unrecognised action kind",
                           receipt_id=receipt.id,
                           action_kind=kind.value)

        return kind
