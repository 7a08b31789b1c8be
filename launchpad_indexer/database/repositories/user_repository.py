# launchpad_indexer/database/repositories/user_repository.py

from typing import Optional, Tuple

from sqlalchemy.orm import Session

from .base_repository import BaseRepository
from ..tables import DBUserAccount


class UserRepository(BaseRepository[DBUserAccount]):
    def __init__(self, db_manager):
        super().__init__(db_manager, DBUserAccount)

    def get_by_address(self, session: Session, address: str) -> Optional[DBUserAccount]:
        return session.query(DBUserAccount).filter(
            DBUserAccount.address == address.lower()
        ).first()

    def get_or_create(self, session: Session, address: str) -> Tuple[DBUserAccount, bool]:
        user = self.get_by_address(session, address)
        if user:
            return user, False
        return self.create(session, address=address.lower()), True
