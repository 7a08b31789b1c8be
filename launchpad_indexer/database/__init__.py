# launchpad_indexer/database/__init__.py

from .base import Base
from .connection import DatabaseManager
from .repository_manager import RepositoryManager
from .tables import IndexerState, DBUserAccount, DBToken, DBTrade
