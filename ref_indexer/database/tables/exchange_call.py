# ref_indexer/database/tables/exchange_call.py

from sqlalchemy import Column, String, Integer, BigInteger, LargeBinary, JSON, Index

from ..base import DBBaseModel, BlockchainTimestampMixin
from ..types import CryptoHashType, AccountIdType, U128Type


class DBExchangeCall(DBBaseModel, BlockchainTimestampMixin):
    """One row per recognised Ref Finance method call"""
    __tablename__ = 'exchange_calls'

    id = Column(String(12), primary_key=True)  # content id
    receipt_id = Column(CryptoHashType(), nullable=False, index=True)
    action_index = Column(Integer, nullable=False)
    method_name = Column(String(64), nullable=False, index=True)
    category = Column(String(32), nullable=False)
    predecessor_id = Column(AccountIdType(), nullable=False)
    receiver_id = Column(AccountIdType(), nullable=False)
    signer_id = Column(AccountIdType(), nullable=False)
    args = Column(JSON, nullable=True)
    raw_args = Column(LargeBinary, nullable=False)
    deposit = Column(U128Type(), nullable=False, default=0)
    gas = Column(BigInteger, nullable=False, default=0)

    __table_args__ = (
        Index('idx_exchange_calls_receipt_action', 'receipt_id', 'action_index'),
    )

    def __repr__(self) -> str:
        return f"<ExchangeCall(id={self.id}, method={self.method_name})>"
