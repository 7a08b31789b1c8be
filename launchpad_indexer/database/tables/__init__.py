# launchpad_indexer/database/tables/__init__.py

from .state import IndexerState
from .user import DBUserAccount
from .token import DBToken
from .trade import DBTrade

__all__ = ['IndexerState', 'DBUserAccount', 'DBToken', 'DBTrade']
