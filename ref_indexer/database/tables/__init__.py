from .deployment import DBDeployment
from .exchange_call import DBExchangeCall
