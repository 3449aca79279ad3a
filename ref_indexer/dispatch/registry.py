# ref_indexer/dispatch/registry.py

from types import MappingProxyType
from typing import Callable, Iterable, Iterator, Mapping, Optional, Tuple

from ..core.logging import LoggingMixin
from ..types import ActionReceipt, Block, ExecutionOutcome, FunctionCallAction


MethodHandler = Callable[[FunctionCallAction, ActionReceipt, ExecutionOutcome, Block], None]


class MethodRegistry(LoggingMixin):
    """
    Frozen table of function-call method name -> handler.

    Lookups are exact and case-sensitive. A missing name is not an error:
    ``get`` returns ``None`` and the dispatcher falls back to its diagnostic
    handler.
    """

    def __init__(self, entries: Iterable[Tuple[str, MethodHandler]]):
        handlers = {}
        for method_name, handler in entries:
            if method_name in handlers:
                raise ValueError(f"Duplicate handler registered for method '{method_name}'")
            handlers[method_name] = handler

        self._handlers: Mapping[str, MethodHandler] = MappingProxyType(handlers)

        self.log_debug("MethodRegistry built", method_count=len(self._handlers))

    def get(self, method_name: str) -> Optional[MethodHandler]:
        return self._handlers.get(method_name)

    def __contains__(self, method_name: object) -> bool:
        return method_name in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def __iter__(self) -> Iterator[str]:
        return iter(self._handlers)

    @property
    def methods(self) -> Mapping[str, MethodHandler]:
        return self._handlers


def build_ref_finance_registry(handlers) -> MethodRegistry:
    """Supported Ref Finance exchange methods, built once per handler set.

    ``handlers`` is a ``ref_indexer.exchange.ProtocolHandlers``; the registry
    is kept on it, so it lives exactly as long as the handlers it points to.
    """
    if handlers.method_registry is None:
        handlers.method_registry = _ref_finance_registry(handlers)
    return handlers.method_registry


def _ref_finance_registry(handlers) -> MethodRegistry:
    exchange = handlers.exchange
    owner = handlers.owner
    mft = handlers.mft
    token_receiver = handlers.token_receiver
    account_deposit = handlers.account_deposit

    return MethodRegistry([
        ("new", exchange.init_ref_v2),
        ("add_simple_pool", exchange.add_simple_pool),
        ("add_stable_swap_pool", exchange.add_stable_swap_pool),
        ("execute_actions", exchange.execute_actions),
        ("add_liquidity", exchange.add_liquidity),
        ("add_stable_liquidity", exchange.add_stable_liquidity),
        ("remove_liquidity", exchange.remove_liquidity),
        ("remove_liquidity_by_tokens", exchange.remove_liquidity_by_tokens),
        ("swap", exchange.swap),

        ("set_owner", owner.set_owner),
        ("change_state", owner.change_state),
        ("modify_admin_fee", owner.modify_admin_fee),
        ("remove_exchange_fee_liquidity", owner.remove_exchange_fee_liquidity),
        ("stable_swap_ramp_amp", owner.stable_swap_ramp_amp),
        ("stable_swap_stop_ramp_amp", owner.stable_swap_stop_ramp_amp),

        ("mft_transfer", mft.mft_transfer),
        ("mft_transfer_call", mft.mft_transfer_call),
        ("mft_resolve_transfer", mft.mft_resolve_transfer),

        ("ft_on_transfer", token_receiver.ft_on_transfer),

        ("withdraw", account_deposit.withdraw),
        ("exchange_callback_post_withdraw", account_deposit.callback_post_withdraw),
    ])
