# ref_indexer/database/repositories.py

from typing import List

from sqlalchemy.orm import Session

from ..types import AccountId, CryptoHash
from .base_repository import BlockchainBaseRepository
from .tables import DBDeployment, DBExchangeCall


class DeploymentRepository(BlockchainBaseRepository[DBDeployment]):
    def __init__(self):
        super().__init__(DBDeployment)

    def get_by_account(self, session: Session, account_id: AccountId) -> List[DBDeployment]:
        return session.query(DBDeployment).filter(
            DBDeployment.account_id == account_id
        ).order_by(DBDeployment.block_number).all()


class ExchangeCallRepository(BlockchainBaseRepository[DBExchangeCall]):
    def __init__(self):
        super().__init__(DBExchangeCall)

    def get_by_receipt(self, session: Session, receipt_id: CryptoHash) -> List[DBExchangeCall]:
        return session.query(DBExchangeCall).filter(
            DBExchangeCall.receipt_id == receipt_id
        ).order_by(DBExchangeCall.action_index).all()

    def get_by_method(self, session: Session, method_name: str, limit: int = 100) -> List[DBExchangeCall]:
        return session.query(DBExchangeCall).filter(
            DBExchangeCall.method_name == method_name
        ).order_by(DBExchangeCall.block_number).limit(limit).all()
