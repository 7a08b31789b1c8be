# launchpad_indexer/types/records.py

import enum
from typing import Optional
import uuid

from msgspec import Struct

from .new import EvmAddress, EvmHash


class TradeType(enum.Enum):
    BUY = "buy"
    SELL = "sell"


class TokenRecord(Struct):
    address: EvmAddress
    name: str
    symbol: str
    txn_hash: EvmHash
    block_number: int
    timestamp: int
    creator_address: EvmAddress
    user_id: Optional[uuid.UUID] = None


class TradeRecord(Struct):
    type: TradeType
    txn_hash: EvmHash
    log_index: int
    block_number: int
    token_id: uuid.UUID
    token_address: EvmAddress
    amount_in: int
    amount_out: int
    fee: int
    timestamp: int


class DailyWinner(Struct):
    token_id: uuid.UUID
    token_address: EvmAddress
    volume: int
    trade_count: int
