from .base import ModelBase, DBBaseModel
from .connection import DatabaseManager
from .repositories import DeploymentRepository, ExchangeCallRepository
from .store import EntityStore, UnitOfWork
from .tables import DBDeployment, DBExchangeCall
