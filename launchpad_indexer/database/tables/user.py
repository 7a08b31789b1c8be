# launchpad_indexer/database/tables/user.py

from sqlalchemy import Column
from sqlalchemy.orm import relationship

from ..base import DBBaseModel
from ..types import EvmAddressType


class DBUserAccount(DBBaseModel):
    __tablename__ = 'user_accounts'

    address = Column(EvmAddressType(), nullable=False, unique=True, index=True)

    tokens = relationship('DBToken', back_populates='user')

    def __repr__(self) -> str:
        return f"<UserAccount(address={self.address})>"
