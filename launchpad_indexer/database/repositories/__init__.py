# launchpad_indexer/database/repositories/__init__.py

from .base_repository import BaseRepository
from .state_repository import IndexerStateRepository
from .user_repository import UserRepository
from .token_repository import TokenRepository
from .trade_repository import TradeRepository

__all__ = [
    'BaseRepository',
    'IndexerStateRepository',
    'UserRepository',
    'TokenRepository',
    'TradeRepository',
]
