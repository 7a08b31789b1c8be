# launchpad_indexer/database/tables/state.py

from sqlalchemy import Column, Integer, BigInteger, CheckConstraint

from ..base import Base, TimestampMixin


class IndexerState(Base, TimestampMixin):
    """Singleton row holding the last fully indexed block number."""
    __tablename__ = 'indexer_state'

    id = Column(Integer, primary_key=True, autoincrement=True)
    block_number = Column(BigInteger, nullable=False)

    __table_args__ = (
        CheckConstraint('block_number >= 0', name='ck_indexer_state_block_number'),
    )

    def __repr__(self) -> str:
        return f"<IndexerState(block_number={self.block_number})>"
