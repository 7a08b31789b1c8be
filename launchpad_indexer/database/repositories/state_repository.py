# launchpad_indexer/database/repositories/state_repository.py

from typing import Optional

from sqlalchemy.orm import Session

from .base_repository import BaseRepository
from ..tables import IndexerState


class IndexerStateRepository(BaseRepository[IndexerState]):
    def __init__(self, db_manager):
        super().__init__(db_manager, IndexerState)

    def get_state(self, session: Session, for_update: bool = False) -> Optional[IndexerState]:
        query = session.query(IndexerState).order_by(IndexerState.id)
        if for_update and session.bind.dialect.name == 'postgresql':
            query = query.with_for_update()
        return query.first()

    def set_block_number(self, session: Session, state: IndexerState, block_number: int) -> IndexerState:
        state.block_number = block_number
        session.flush()
        return state
