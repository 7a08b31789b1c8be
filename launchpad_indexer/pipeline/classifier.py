# launchpad_indexer/pipeline/classifier.py

from typing import Union

from sqlalchemy.orm import Session

from ..clients.interfaces import LedgerSourceInterface
from ..contracts.events import FactoryEvent
from ..core.logging import LoggingMixin
from ..database.repository_manager import RepositoryManager
from ..types import (
    EvmLog,
    TokenRecord,
    TradeRecord,
    TradeType,
    ClassificationError,
    UnknownTokenError,
)


class EventClassifier(LoggingMixin):
    """
    Maps factory event logs to Token and Trade records.

    Enrichment lookups go to the ledger (creator, name, symbol) and to the
    store (creator account, traded token). Tokens created earlier in the same
    batch are visible as long as they were flushed into the same session.
    """

    def __init__(self, ledger: LedgerSourceInterface, repository_manager: RepositoryManager):
        self.ledger = ledger
        self.repository_manager = repository_manager

    def classify(self, session: Session, log: EvmLog, event: FactoryEvent) -> Union[TokenRecord, TradeRecord]:
        if event is FactoryEvent.TOKEN_CREATED:
            return self.classify_token_created(session, log)
        return self.classify_trade(session, log, event.trade_type)

    def classify_token_created(self, session: Session, log: EvmLog) -> TokenRecord:
        try:
            token_address = log.arg_address('token')
            timestamp = log.arg_int('timestamp')
        except (KeyError, TypeError, ValueError) as e:
            raise ClassificationError("Malformed TokenCreated log",
                                      tx_hash=log.tx_hash, log_index=log.log_index, error=str(e)) from e

        creator_address = self.ledger.get_transaction_sender(log.tx_hash)
        user = self.repository_manager.users.get_by_address(session, creator_address)
        if user is None:
            self.log_warning("Token creator has no user account, storing token without creator",
                             token_address=token_address,
                             creator=creator_address,
                             tx_hash=log.tx_hash)

        name = self.ledger.call_contract(token_address, 'name')
        symbol = self.ledger.call_contract(token_address, 'symbol')

        return TokenRecord(
            address=token_address,
            name=str(name),
            symbol=str(symbol),
            txn_hash=log.tx_hash,
            block_number=log.block_number,
            timestamp=timestamp,
            creator_address=creator_address,
            user_id=user.id if user else None,
        )

    def classify_trade(self, session: Session, log: EvmLog, trade_type: TradeType) -> TradeRecord:
        try:
            token_address = log.arg_address('token')
            amount_in = log.arg_int('amount0In')
            amount_out = log.arg_int('amount0Out')
            fee = log.arg_int('fee')
            timestamp = log.arg_int('timestamp')
        except (KeyError, TypeError, ValueError) as e:
            raise ClassificationError(f"Malformed {log.event} log",
                                      tx_hash=log.tx_hash, log_index=log.log_index, error=str(e)) from e

        token = self.repository_manager.tokens.get_by_address(session, token_address)
        if token is None:
            raise UnknownTokenError(token_address, log.tx_hash)

        return TradeRecord(
            type=trade_type,
            txn_hash=log.tx_hash,
            log_index=log.log_index,
            block_number=log.block_number,
            token_id=token.id,
            token_address=token_address,
            amount_in=amount_in,
            amount_out=amount_out,
            fee=fee,
            timestamp=timestamp,
        )
