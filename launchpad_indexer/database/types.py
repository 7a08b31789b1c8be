# launchpad_indexer/database/types.py

from decimal import Decimal
from typing import Optional

from sqlalchemy import String
from sqlalchemy.dialects.postgresql import NUMERIC
from sqlalchemy.types import TypeDecorator

from ..types.new import EvmAddress, EvmHash

UINT256_MAX = 2 ** 256 - 1


class EvmAddressType(TypeDecorator):
    impl = String(42)
    cache_ok = True

    def process_bind_param(self, value: Optional[str], dialect) -> Optional[str]:
        return str(value).lower() if value else None

    def process_result_value(self, value: Optional[str], dialect) -> Optional[EvmAddress]:
        return EvmAddress(value) if value else None


class EvmHashType(TypeDecorator):
    impl = String(66)
    cache_ok = True

    def process_bind_param(self, value: Optional[str], dialect) -> Optional[str]:
        return str(value).lower() if value else None

    def process_result_value(self, value: Optional[str], dialect) -> Optional[EvmHash]:
        return EvmHash(value) if value else None


class UInt256Type(TypeDecorator):
    """
    Unsigned 256 bit integer.

    Stored as NUMERIC(78, 0) on PostgreSQL and as decimal text elsewhere, so
    no backend ever sees a float. Always loads back as a Python int.
    """
    impl = NUMERIC(precision=78, scale=0)
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            return dialect.type_descriptor(NUMERIC(precision=78, scale=0))
        return dialect.type_descriptor(String(78))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        value = int(value)
        if value < 0 or value > UINT256_MAX:
            raise ValueError(f"Value out of uint256 range: {value}")
        if dialect.name == 'postgresql':
            return Decimal(value)
        return str(value)

    def process_result_value(self, value, dialect) -> Optional[int]:
        if value is None:
            return None
        return int(value)
