# launchpad_indexer/database/tables/token.py

from sqlalchemy import Column, String, BigInteger, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from ..base import DBBaseModel
from ..types import EvmAddressType, EvmHashType


class DBToken(DBBaseModel):
    __tablename__ = 'tokens'

    address = Column(EvmAddressType(), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)
    symbol = Column(String(64), nullable=False)
    txn_hash = Column(EvmHashType(), nullable=False, index=True)
    block_number = Column(BigInteger, nullable=False, index=True)
    timestamp = Column(BigInteger, nullable=False, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey('user_accounts.id'), nullable=True, index=True)

    user = relationship('DBUserAccount', back_populates='tokens')
    trades = relationship('DBTrade', back_populates='token')

    def __repr__(self) -> str:
        return f"<Token(address={self.address}, symbol={self.symbol})>"
