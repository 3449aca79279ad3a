# tests/test_registry.py

import gc
import weakref

import pytest

from ref_indexer.dispatch.registry import MethodRegistry, build_ref_finance_registry
from ref_indexer.exchange import ProtocolHandlers


REF_FINANCE_METHODS = {
    "new",
    "add_simple_pool",
    "add_stable_swap_pool",
    "execute_actions",
    "add_liquidity",
    "add_stable_liquidity",
    "remove_liquidity",
    "remove_liquidity_by_tokens",
    "swap",
    "set_owner",
    "change_state",
    "modify_admin_fee",
    "remove_exchange_fee_liquidity",
    "stable_swap_ramp_amp",
    "stable_swap_stop_ramp_amp",
    "mft_transfer",
    "mft_transfer_call",
    "mft_resolve_transfer",
    "ft_on_transfer",
    "withdraw",
    "exchange_callback_post_withdraw",
}


def test_ref_finance_registry_holds_supported_methods(registry):
    assert len(registry) == 21
    assert set(registry) == REF_FINANCE_METHODS


def test_lookup_is_exact_and_case_sensitive(registry, protocol_handlers):
    assert registry.get("swap") == protocol_handlers.exchange.swap
    assert registry.get("Swap") is None
    assert registry.get("swap ") is None
    assert "Swap" not in registry
    assert registry.get("storage_deposit") is None


def test_named_handlers_are_wired(registry, protocol_handlers):
    assert registry.get("new") == protocol_handlers.exchange.init_ref_v2
    assert registry.get("ft_on_transfer") == protocol_handlers.token_receiver.ft_on_transfer
    assert registry.get("exchange_callback_post_withdraw") == protocol_handlers.account_deposit.callback_post_withdraw


def test_registry_is_immutable(registry):
    with pytest.raises(TypeError):
        registry.methods["swap"] = lambda *args: None


def test_registry_is_built_once_per_handler_set(registry, protocol_handlers):
    assert build_ref_finance_registry(protocol_handlers) is registry
    assert protocol_handlers.method_registry is registry


def test_handler_sets_get_their_own_registry():
    first = ProtocolHandlers(store=None)
    second = ProtocolHandlers(store=None)

    assert build_ref_finance_registry(first) is not build_ref_finance_registry(second)
    assert build_ref_finance_registry(first).get("swap") == first.exchange.swap


def test_registry_does_not_outlive_its_handlers():
    handlers = ProtocolHandlers(store=None)
    build_ref_finance_registry(handlers)
    handlers_ref = weakref.ref(handlers)

    del handlers
    gc.collect()

    assert handlers_ref() is None


def test_duplicate_method_name_is_rejected():
    def handler(function_call, receipt, outcome, block):
        pass

    with pytest.raises(ValueError, match="swap"):
        MethodRegistry([("swap", handler), ("swap", handler)])


def test_empty_registry():
    registry = MethodRegistry([])

    assert len(registry) == 0
    assert registry.get("swap") is None
