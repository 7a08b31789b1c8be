# launchpad_indexer/database/repository_manager.py

from contextlib import contextmanager

from sqlalchemy.orm import Session

from .connection import DatabaseManager
from .repositories import (
    IndexerStateRepository,
    UserRepository,
    TokenRepository,
    TradeRepository,
)
from ..core.logging import IndexerLogger


class RepositoryManager:
    """
    Central access point for the indexer repositories.

    Sessions and transactions come from the wrapped DatabaseManager; the
    repositories themselves are stateless and take the session per call.
    """

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager
        self.logger = IndexerLogger.get_logger('database.repository_manager')

        self.state = IndexerStateRepository(db_manager)
        self.users = UserRepository(db_manager)
        self.tokens = TokenRepository(db_manager)
        self.trades = TradeRepository(db_manager)

    @contextmanager
    def get_session(self) -> Session:
        with self.db_manager.get_session() as session:
            yield session

    @contextmanager
    def get_transaction(self) -> Session:
        with self.db_manager.get_transaction() as session:
            yield session
