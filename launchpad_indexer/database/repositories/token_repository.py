# launchpad_indexer/database/repositories/token_repository.py

from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from .base_repository import BaseRepository
from ..tables import DBToken
from ...types import TokenRecord


class TokenRepository(BaseRepository[DBToken]):
    def __init__(self, db_manager):
        super().__init__(db_manager, DBToken)

    def get_by_address(self, session: Session, address: str) -> Optional[DBToken]:
        return session.query(DBToken).filter(DBToken.address == address.lower()).first()

    def create_from_record(self, session: Session, record: TokenRecord) -> Tuple[DBToken, bool]:
        """Insert the token unless its address is already stored."""
        existing = self.get_by_address(session, record.address)
        if existing:
            self.logger.debug(f"Token {record.address} already exists, skipping")
            return existing, False
        return self.create_from_struct(session, record), True

    def get_page(self, session: Session, offset: int = 0, limit: int = 1000) -> List[DBToken]:
        """Tokens in launch order, for exhaustive pagination."""
        return session.query(DBToken).order_by(
            DBToken.block_number, DBToken.address
        ).offset(offset).limit(limit).all()
