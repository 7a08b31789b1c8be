# launchpad_indexer/database/repositories/trade_repository.py

from datetime import datetime
from typing import Iterable, List, Optional, Tuple
import uuid

from sqlalchemy import desc
from sqlalchemy.orm import Session

from .base_repository import BaseRepository
from ..tables import DBTrade
from ...types import TradeRecord


class TradeRepository(BaseRepository[DBTrade]):
    def __init__(self, db_manager):
        super().__init__(db_manager, DBTrade)

    def exists(self, session: Session, txn_hash: str, log_index: int) -> bool:
        return session.query(
            session.query(DBTrade).filter(
                DBTrade.txn_hash == txn_hash.lower(),
                DBTrade.log_index == log_index,
            ).exists()
        ).scalar()

    def create_from_record(self, session: Session, record: TradeRecord) -> Tuple[Optional[DBTrade], bool]:
        """Insert the trade unless (txn_hash, log_index) is already stored."""
        if self.exists(session, record.txn_hash, record.log_index):
            self.logger.debug(f"Trade {record.txn_hash}:{record.log_index} already exists, skipping")
            return None, False
        return self.create_from_struct(session, record), True

    def get_by_token(self, session: Session, token_id: uuid.UUID, limit: int = 100) -> List[DBTrade]:
        return session.query(DBTrade).filter(
            DBTrade.token_id == token_id
        ).order_by(desc(DBTrade.created_at)).limit(limit).all()

    def get_amounts_out_in_window(self, session: Session, token_ids: Iterable[uuid.UUID],
                                  start: datetime, end: datetime) -> List[Tuple[uuid.UUID, int]]:
        """(token_id, amount_out) for trades persisted in [start, end)."""
        token_ids = list(token_ids)
        if not token_ids:
            return []
        return session.query(DBTrade.token_id, DBTrade.amount_out).filter(
            DBTrade.token_id.in_(token_ids),
            DBTrade.created_at >= start,
            DBTrade.created_at < end,
        ).all()
