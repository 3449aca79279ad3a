# ref_indexer/database/base.py

from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import Column, DateTime, BigInteger, text
from sqlalchemy.orm import declarative_base, declarative_mixin

from ..types import bytes_to_b58


ModelBase = declarative_base()


@declarative_mixin
class TimestampMixin:
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text('CURRENT_TIMESTAMP')
    )

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text('CURRENT_TIMESTAMP'),
        onupdate=lambda: datetime.now(timezone.utc)
    )


@declarative_mixin
class BlockchainTimestampMixin:
    block_number = Column(BigInteger, nullable=False, index=True)
    timestamp = Column(BigInteger, nullable=False, index=True)  # nanoseconds

    @property
    def blockchain_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp / 1_000_000_000, tz=timezone.utc)


class DBBaseModel(ModelBase, TimestampMixin):
    __abstract__ = True

    def to_dict(self) -> Dict[str, Any]:
        result = {}
        for column in self.__table__.columns:
            value = getattr(self, column.name)

            if isinstance(value, bytes):
                result[column.name] = bytes_to_b58(value)
            elif isinstance(value, datetime):
                result[column.name] = value.isoformat()
            else:
                result[column.name] = value

        return result

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"
