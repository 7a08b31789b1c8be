# launchpad_indexer/contracts/events.py

import enum

from web3 import Web3

from ..types import TradeType


class FactoryEvent(enum.Enum):
    """Token factory events, in the order a batch must process them."""

    TOKEN_CREATED = ("TokenCreated", "TokenCreated(address,uint256)")
    TOKEN_BUY = ("TokenBuy", "TokenBuy(address,uint256,uint256,uint256,uint256)")
    TOKEN_SELL = ("TokenSell", "TokenSell(address,uint256,uint256,uint256,uint256)")

    def __init__(self, event_name: str, signature: str):
        self.event_name = event_name
        self.signature = signature

    @property
    def topic(self) -> str:
        return Web3.to_hex(Web3.keccak(text=self.signature))

    @property
    def trade_type(self) -> TradeType:
        if self is FactoryEvent.TOKEN_BUY:
            return TradeType.BUY
        if self is FactoryEvent.TOKEN_SELL:
            return TradeType.SELL
        raise ValueError(f"{self.event_name} is not a trade event")
