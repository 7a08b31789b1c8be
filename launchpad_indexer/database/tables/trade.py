# launchpad_indexer/database/tables/trade.py

from sqlalchemy import Column, Integer, BigInteger, Enum, ForeignKey, Index, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from ..base import DBBaseModel
from ..types import EvmHashType, UInt256Type
from ...types import TradeType


class DBTrade(DBBaseModel):
    __tablename__ = 'trades'

    type = Column(Enum(TradeType, native_enum=False, values_callable=lambda e: [m.value for m in e]),
                  nullable=False, index=True)
    txn_hash = Column(EvmHashType(), nullable=False, index=True)
    log_index = Column(Integer, nullable=False)
    block_number = Column(BigInteger, nullable=False, index=True)
    token_id = Column(Uuid(as_uuid=True), ForeignKey('tokens.id'), nullable=False)
    amount_in = Column(UInt256Type(), nullable=False)
    amount_out = Column(UInt256Type(), nullable=False)
    fee = Column(UInt256Type(), nullable=False)
    timestamp = Column(BigInteger, nullable=False, index=True)

    token = relationship('DBToken', back_populates='trades')

    __table_args__ = (
        UniqueConstraint('txn_hash', 'log_index', name='uq_trades_txn_hash_log_index'),
        Index('idx_trades_token_created_at', 'token_id', 'created_at'),
    )

    def __repr__(self) -> str:
        return f"<Trade({self.type.value} token_id={self.token_id} amount_out={self.amount_out})>"
