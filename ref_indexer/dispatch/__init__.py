from .builtin import BuiltinHandlers
from .dispatcher import ActionDispatcher, IGNORED_KINDS
from .registry import MethodRegistry, MethodHandler, build_ref_finance_registry
