# launchpad_indexer/services/daily_winner.py

from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional, Tuple
import time
import uuid

from msgspec import Struct
from sqlalchemy.orm import Session
from tenacity import (
    Retrying,
    RetryCallState,
    RetryError,
    stop_after_attempt,
    wait_exponential,
    before_sleep_log,
)

from ..core.logging import IndexerLogger, log_with_context, INFO, WARNING, ERROR
from ..database.repository_manager import RepositoryManager
from ..database.tables import DBToken
from ..types import DailyWinner, WinnerConfig, EvmAddress


class TokenVolume(Struct):
    token_id: uuid.UUID
    token_address: EvmAddress
    block_number: int
    volume: int = 0
    trade_count: int = 0


def window_for(now: datetime) -> Tuple[datetime, datetime]:
    """Previous UTC calendar day as a half-open [start, end) interval."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now = now.astimezone(timezone.utc)
    today = datetime(now.year, now.month, now.day, tzinfo=timezone.utc)
    return today - timedelta(days=1), today


def rank_volumes(volumes: List[TokenVolume]) -> List[TokenVolume]:
    """
    Tokens with at least one trade, highest volume first.

    Ties go to the token launched first (lower block number), then to the
    lower address.
    """
    traded = [v for v in volumes if v.trade_count > 0]
    return sorted(traded, key=lambda v: (-v.volume, v.block_number, v.token_address))


class DailyWinnerService:
    """
    Finds the token with the largest summed amountOut over the previous UTC day.

    Tokens are paged through exhaustively; amounts are summed as Python ints.
    A scheduled run retries with exponential backoff before giving up.
    """

    def __init__(self, repository_manager: RepositoryManager, config: WinnerConfig,
                 sleep: Callable[[float], None] = time.sleep):
        self.repository_manager = repository_manager
        self.config = config
        self._sleep = sleep
        self.logger = IndexerLogger.get_logger('services.daily_winner')

    def collect_volumes(self, session: Session, start: datetime, end: datetime) -> List[TokenVolume]:
        volumes: List[TokenVolume] = []
        offset = 0
        while True:
            tokens: List[DBToken] = self.repository_manager.tokens.get_page(
                session, offset=offset, limit=self.config.page_size)
            if not tokens:
                break

            page: Dict[uuid.UUID, TokenVolume] = {
                token.id: TokenVolume(token_id=token.id,
                                      token_address=token.address,
                                      block_number=token.block_number)
                for token in tokens
            }
            for token_id, amount_out in self.repository_manager.trades.get_amounts_out_in_window(
                    session, page.keys(), start, end):
                entry = page[token_id]
                entry.volume += int(amount_out)
                entry.trade_count += 1

            volumes.extend(page.values())
            if len(tokens) < self.config.page_size:
                break
            offset += len(tokens)

        return volumes

    def get_daily_winner(self, now: Optional[datetime] = None) -> Optional[DailyWinner]:
        start, end = window_for(now or datetime.now(timezone.utc))

        with self.repository_manager.get_session() as session:
            volumes = self.collect_volumes(session, start, end)

        ranked = rank_volumes(volumes)
        if not ranked:
            log_with_context(self.logger, INFO, "No daily winner, no trades in window",
                             window_start=start.isoformat(), tokens=len(volumes))
            return None

        top = ranked[0]
        return DailyWinner(
            token_id=top.token_id,
            token_address=top.token_address,
            volume=top.volume,
            trade_count=top.trade_count,
        )

    def run(self, now: Optional[datetime] = None) -> Optional[DailyWinner]:
        """Scheduled entry point: bounded retries, failures are logged and never raised."""
        try:
            winner = self._retrying()(self.get_daily_winner, now)
        except RetryError as e:
            log_with_context(self.logger, ERROR, "Giving up on daily winner for this run",
                             attempts=self.config.attempts,
                             error=str(e.last_attempt.exception()))
            return None

        if winner:
            log_with_context(self.logger, INFO, f"Daily winner tokenId: {winner.token_id}",
                             token_address=winner.token_address,
                             volume=str(winner.volume),
                             trade_count=winner.trade_count)
        else:
            log_with_context(self.logger, INFO, "Daily winner tokenId: None")
        return winner

    def _retrying(self) -> Retrying:
        return Retrying(
            stop=stop_after_attempt(self.config.attempts),
            wait=wait_exponential(multiplier=1,
                                  min=self.config.retry_min_wait,
                                  max=self.config.retry_max_wait),
            after=self._log_failed_attempt,
            before_sleep=before_sleep_log(self.logger, WARNING),
            sleep=self._sleep,
        )

    def _log_failed_attempt(self, retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception()
        log_with_context(self.logger, ERROR,
                         f"Failed to get daily winner, attempt: {retry_state.attempt_number}/{self.config.attempts}",
                         error=str(error),
                         exception_type=type(error).__name__)
