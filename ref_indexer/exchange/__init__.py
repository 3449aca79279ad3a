# ref_indexer/exchange/__init__.py

from ..database.store import EntityStore
from .account_deposit import AccountDepositHandlers
from .base import ProtocolHandler
from .exchange import ExchangeHandlers
from .mft import MftHandlers
from .owner import OwnerHandlers
from .token_receiver import TokenReceiverHandlers


class ProtocolHandlers:
    """All Ref Finance method handler groups sharing one entity store"""

    def __init__(self, store: EntityStore):
        self.store = store
        self.method_registry = None
        self.exchange = ExchangeHandlers(store)
        self.owner = OwnerHandlers(store)
        self.mft = MftHandlers(store)
        self.token_receiver = TokenReceiverHandlers(store)
        self.account_deposit = AccountDepositHandlers(store)
