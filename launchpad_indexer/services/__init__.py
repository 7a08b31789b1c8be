# launchpad_indexer/services/__init__.py

from .daily_winner import DailyWinnerService, TokenVolume, window_for, rank_volumes
from .scheduler import DailyWinnerScheduler
