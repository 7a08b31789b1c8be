# launchpad_indexer/pipeline/indexing_pipeline.py

import enum
from typing import Dict, List, Optional

from msgspec import Struct
from sqlalchemy.orm import Session

from ..clients.interfaces import LedgerSourceInterface
from ..contracts.events import FactoryEvent
from ..core.logging import IndexerLogger, log_with_context, INFO, WARNING, ERROR
from ..database.repository_manager import RepositoryManager
from ..types import (
    BlockRange,
    EvmLog,
    IndexingConfig,
    IndexerError,
    CheckpointAdvanceError,
)
from .checkpoint import CheckpointStore
from .classifier import EventClassifier


class IterationOutcome(enum.Enum):
    SUCCESS = "success"
    STALL = "stall"
    ERROR = "error"


class IterationResult(Struct):
    outcome: IterationOutcome
    checkpoint_before: Optional[int] = None
    checkpoint_after: Optional[int] = None
    chain_tip: Optional[int] = None
    block_range: Optional[BlockRange] = None
    delay: float = 0.0
    tokens_created: int = 0
    buys: int = 0
    sells: int = 0
    error: Optional[str] = None

    @property
    def trades(self) -> int:
        return self.buys + self.sells


def plan_range(checkpoint: int, chain_tip: int, range_size: int) -> Optional[BlockRange]:
    """
    Next block range to scan, clamped to the chain tip.

    Returns None when fewer than two new blocks are available.
    """
    from_block = checkpoint + 1
    to_block = min(from_block + range_size - 1, chain_tip)
    if to_block - from_block < 1:
        return None
    return BlockRange(from_block=from_block, to_block=to_block)


def next_delay(outcome: IterationOutcome, config: IndexingConfig) -> float:
    if outcome is IterationOutcome.STALL:
        return config.stall_delay
    if outcome is IterationOutcome.ERROR:
        return config.error_delay
    return 0.0


class IndexingPipeline:
    """
    One pass of the indexer: read checkpoint, pick a range, fetch the three
    factory event kinds, classify and persist them, then advance the
    checkpoint in the same transaction.

    Transient failures roll the batch back and report an ERROR outcome so the
    same range is retried. Fatal errors (unknown token, failed bootstrap,
    failed checkpoint advance) are raised to the caller.
    """

    def __init__(
        self,
        repository_manager: RepositoryManager,
        ledger: LedgerSourceInterface,
        classifier: EventClassifier,
        checkpoint_store: CheckpointStore,
        config: IndexingConfig,
    ):
        self.repository_manager = repository_manager
        self.ledger = ledger
        self.classifier = classifier
        self.checkpoint_store = checkpoint_store
        self.config = config

        self.logger = IndexerLogger.get_logger('pipeline.indexing_pipeline')

    def run_iteration(self) -> IterationResult:
        with self.repository_manager.get_session() as session:
            checkpoint = None
            block_range = None
            try:
                checkpoint = self.checkpoint_store.get_height(session)
                chain_tip = self.ledger.get_latest_block_number()

                block_range = plan_range(checkpoint, chain_tip, self.config.range_size)
                if block_range is None:
                    session.commit()
                    log_with_context(self.logger, INFO, "Waiting for new blocks",
                                     block_number=checkpoint, chain_tip=chain_tip)
                    return IterationResult(
                        outcome=IterationOutcome.STALL,
                        checkpoint_before=checkpoint,
                        checkpoint_after=checkpoint,
                        chain_tip=chain_tip,
                        delay=next_delay(IterationOutcome.STALL, self.config),
                    )

                counts = self._index_range(session, block_range)

            except IndexerError as e:
                session.rollback()
                if e.fatal:
                    log_with_context(self.logger, ERROR, "Fatal error while indexing blocks range",
                                     from_block=block_range.from_block if block_range else None,
                                     to_block=block_range.to_block if block_range else None,
                                     error=str(e),
                                     exception_type=type(e).__name__)
                    raise
                return self._error_result(checkpoint, block_range, e)

            except Exception as e:
                session.rollback()
                return self._error_result(checkpoint, block_range, e, exc_info=True)

            self._advance_checkpoint(session, block_range)

        log_with_context(
            self.logger, INFO,
            f"{block_range} ({block_range.size} blocks), new tokens={counts['tokens']}, "
            f"trade={counts['buys'] + counts['sells']} (buy={counts['buys']}, sell={counts['sells']})",
            from_block=block_range.from_block,
            to_block=block_range.to_block,
        )

        return IterationResult(
            outcome=IterationOutcome.SUCCESS,
            checkpoint_before=checkpoint,
            checkpoint_after=block_range.to_block,
            chain_tip=chain_tip,
            block_range=block_range,
            delay=next_delay(IterationOutcome.SUCCESS, self.config),
            tokens_created=counts['tokens'],
            buys=counts['buys'],
            sells=counts['sells'],
        )

    def _index_range(self, session: Session, block_range: BlockRange) -> Dict[str, int]:
        logs: Dict[FactoryEvent, List[EvmLog]] = {
            event: self.ledger.get_logs(block_range.from_block, block_range.to_block, event)
            for event in FactoryEvent
        }

        # Creations first: trades in the same batch resolve their token from this session
        tokens_created = 0
        for log in logs[FactoryEvent.TOKEN_CREATED]:
            record = self.classifier.classify_token_created(session, log)
            token, created = self.repository_manager.tokens.create_from_record(session, record)
            if created:
                tokens_created += 1
                log_with_context(
                    self.logger, INFO,
                    f"New token: address={record.address}, name={record.name}, symbol={record.symbol}, "
                    f"user={record.creator_address}",
                    tx_hash=record.txn_hash,
                    block_number=record.block_number,
                )

        counts = {'tokens': tokens_created, 'buys': 0, 'sells': 0}
        for event, key in ((FactoryEvent.TOKEN_BUY, 'buys'), (FactoryEvent.TOKEN_SELL, 'sells')):
            for log in logs[event]:
                record = self.classifier.classify_trade(session, log, event.trade_type)
                trade, created = self.repository_manager.trades.create_from_record(session, record)
                if created:
                    counts[key] += 1
                    log_with_context(
                        self.logger, INFO,
                        f"Trade [{record.type.value}]: token={record.token_address}, amountIn={record.amount_in}, "
                        f"amountOut={record.amount_out}, fee={record.fee}",
                        tx_hash=record.txn_hash,
                        block_number=record.block_number,
                    )

        return counts

    def _advance_checkpoint(self, session: Session, block_range: BlockRange) -> None:
        try:
            self.checkpoint_store.advance(session, block_range.to_block)
            session.commit()
        except CheckpointAdvanceError as e:
            session.rollback()
            log_with_context(self.logger, ERROR, "Failed to update last block number",
                             block_number=block_range.to_block, error=str(e))
            raise
        except Exception as e:
            session.rollback()
            log_with_context(self.logger, ERROR, "Failed to commit batch and checkpoint",
                             block_number=block_range.to_block, error=str(e),
                             exception_type=type(e).__name__)
            raise CheckpointAdvanceError("Failed to commit checkpoint",
                                         block_number=block_range.to_block,
                                         error=str(e)) from e

    def _error_result(self, checkpoint: Optional[int], block_range: Optional[BlockRange],
                      error: Exception, exc_info: bool = False) -> IterationResult:
        log_with_context(
            self.logger, WARNING if not exc_info else ERROR,
            f"{block_range or '[-]'} Failed to index blocks range",
            exc_info=exc_info,
            block_number=checkpoint,
            error=str(error),
            exception_type=type(error).__name__,
        )
        return IterationResult(
            outcome=IterationOutcome.ERROR,
            checkpoint_before=checkpoint,
            checkpoint_after=checkpoint,
            block_range=block_range,
            delay=next_delay(IterationOutcome.ERROR, self.config),
            error=str(error),
        )
