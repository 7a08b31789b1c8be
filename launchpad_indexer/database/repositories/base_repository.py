# launchpad_indexer/database/repositories/base_repository.py

from typing import TypeVar, Generic, Type, Optional
import uuid

import msgspec

from sqlalchemy.orm import Session

from ...core.logging import IndexerLogger

T = TypeVar('T')


class BaseRepository(Generic[T]):
    def __init__(self, db_manager, model_class: Type[T]):
        self.db_manager = db_manager
        self.model_class = model_class
        self.logger = IndexerLogger.get_logger(f'database.repository.{model_class.__name__.lower()}')

    def get_by_id(self, session: Session, id: uuid.UUID) -> Optional[T]:
        try:
            return session.get(self.model_class, id)
        except Exception as e:
            self.logger.error(f"Error getting {self.model_class.__name__} by ID {id}: {e}")
            raise

    def create(self, session: Session, **kwargs) -> T:
        try:
            instance = self.model_class(**kwargs)
            session.add(instance)
            session.flush()

            self.logger.debug(f"Created {self.model_class.__name__} with ID: {getattr(instance, 'id', 'N/A')}")
            return instance

        except Exception as e:
            self.logger.error(f"Error creating {self.model_class.__name__}: {e}")
            raise

    def create_from_struct(self, session: Session, struct: msgspec.Struct, **overrides) -> T:
        """Insert a row from a msgspec record, ignoring fields that are not columns"""
        try:
            instance = self.model_class.from_msgspec(struct, **overrides)
            session.add(instance)
            session.flush()
            return instance
        except Exception as e:
            self.logger.error(f"Error creating {self.model_class.__name__} from {type(struct).__name__}: {e}")
            raise

    def count(self, session: Session) -> int:
        try:
            return session.query(self.model_class).count()
        except Exception as e:
            self.logger.error(f"Error counting {self.model_class.__name__}: {e}")
            raise
