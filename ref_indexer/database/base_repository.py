# ref_indexer/database/base_repository.py

from typing import TypeVar, Generic, Type, List, Optional, Any

from sqlalchemy.orm import Session
from sqlalchemy import desc

from ..core.logging import IndexerLogger


T = TypeVar('T')


class BaseRepository(Generic[T]):
    def __init__(self, model_class: Type[T]):
        self.model_class = model_class
        self.logger = IndexerLogger.get_logger(f'database.repository.{model_class.__name__.lower()}')

    def get_by_id(self, session: Session, id: Any) -> Optional[T]:
        try:
            return session.get(self.model_class, id)
        except Exception as e:
            self.logger.error(f"Error getting {self.model_class.__name__} by ID {id}: {e}")
            raise

    def get_all(self, session: Session, limit: int = 100) -> List[T]:
        try:
            return session.query(self.model_class).order_by(desc(self.model_class.created_at)).limit(limit).all()
        except Exception as e:
            self.logger.error(f"Error getting all {self.model_class.__name__}: {e}")
            raise

    def upsert(self, session: Session, **kwargs) -> T:
        """Insert or overwrite the row with this primary key"""
        try:
            instance = session.merge(self.model_class(**kwargs))
            session.flush()

            self.logger.debug(f"Upserted {self.model_class.__name__} with ID: {getattr(instance, 'id', 'N/A')}")
            return instance

        except Exception as e:
            self.logger.error(f"Error upserting {self.model_class.__name__}: {e}")
            raise

    def count(self, session: Session) -> int:
        try:
            return session.query(self.model_class).count()
        except Exception as e:
            self.logger.error(f"Error counting {self.model_class.__name__}: {e}")
            raise


class BlockchainBaseRepository(BaseRepository[T]):
    def get_by_block_range(self, session: Session, start_block: int, end_block: int) -> List[T]:
        try:
            return session.query(self.model_class).filter(
                self.model_class.block_number >= start_block,
                self.model_class.block_number <= end_block
            ).order_by(self.model_class.block_number, self.model_class.timestamp).all()
        except Exception as e:
            self.logger.error(f"Error getting {self.model_class.__name__} by block range {start_block}-{end_block}: {e}")
            raise

    def get_recent(self, session: Session, limit: int = 100) -> List[T]:
        try:
            return session.query(self.model_class).order_by(
                desc(self.model_class.block_number)
            ).limit(limit).all()
        except Exception as e:
            self.logger.error(f"Error getting recent {self.model_class.__name__}: {e}")
            raise
