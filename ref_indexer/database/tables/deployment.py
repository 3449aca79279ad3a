# ref_indexer/database/tables/deployment.py

from sqlalchemy import Column, LargeBinary

from ..base import DBBaseModel, BlockchainTimestampMixin
from ..types import CryptoHashType, AccountIdType


class DBDeployment(DBBaseModel, BlockchainTimestampMixin):
    """Append-only log of contract deployments, one row per DeployContract receipt"""
    __tablename__ = 'deployments'

    id = Column(CryptoHashType(), primary_key=True)  # receipt id
    account_id = Column(AccountIdType(), nullable=False, index=True)
    receipt_id = Column(CryptoHashType(), nullable=False)
    code_hash = Column(LargeBinary, nullable=False)

    def __repr__(self) -> str:
        return f"<Deployment(id={self.id}, account_id={self.account_id})>"
