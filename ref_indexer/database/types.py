# ref_indexer/database/types.py

from typing import Optional

from sqlalchemy import String
from sqlalchemy.types import TypeDecorator

from ..types import CryptoHash, AccountId


class CryptoHashType(TypeDecorator):
    impl = String(64)
    cache_ok = True

    def process_bind_param(self, value: Optional[CryptoHash], dialect) -> Optional[str]:
        return str(value) if value is not None else None

    def process_result_value(self, value: Optional[str], dialect) -> Optional[CryptoHash]:
        return CryptoHash(value) if value is not None else None


class AccountIdType(TypeDecorator):
    impl = String(64)
    cache_ok = True

    def process_bind_param(self, value: Optional[AccountId], dialect) -> Optional[str]:
        return str(value) if value is not None else None

    def process_result_value(self, value: Optional[str], dialect) -> Optional[AccountId]:
        return AccountId(value) if value is not None else None


class U128Type(TypeDecorator):
    """Unsigned 128-bit amounts, stored as decimal text"""
    impl = String(40)
    cache_ok = True

    def process_bind_param(self, value: Optional[int], dialect) -> Optional[str]:
        if value is None:
            return None
        value = int(value)
        if value < 0 or value >= 2 ** 128:
            raise ValueError(f"Value out of u128 range: {value}")
        return str(value)

    def process_result_value(self, value: Optional[str], dialect) -> Optional[int]:
        return int(value) if value is not None else None
