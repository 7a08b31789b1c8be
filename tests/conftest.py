# tests/conftest.py
"""
pytest configuration and fixtures for the launchpad indexer

Every test gets a fresh in-memory SQLite store and a scripted FakeLedger,
so nothing here talks to a node or a real database.
"""

from typing import Dict, List, Optional

import pytest

from launchpad_indexer.clients.interfaces import LedgerSourceInterface
from launchpad_indexer.contracts.events import FactoryEvent
from launchpad_indexer.core.logging import IndexerLogger
from launchpad_indexer.database.connection import DatabaseManager
from launchpad_indexer.database.repository_manager import RepositoryManager
from launchpad_indexer.pipeline.checkpoint import CheckpointStore
from launchpad_indexer.pipeline.classifier import EventClassifier
from launchpad_indexer.pipeline.indexing_pipeline import IndexingPipeline
from launchpad_indexer.types import (
    DatabaseConfig,
    IndexingConfig,
    WinnerConfig,
    EvmAddress,
    EvmHash,
    EvmLog,
)

CONTRACT = "0x" + "fa" * 20
DEFAULT_CREATOR = "0x" + "c0" * 20
INITIAL_BLOCK = 100


def address(n: int) -> str:
    return "0x%040x" % n


def tx_hash(n: int) -> str:
    return "0x%064x" % n


class FakeLedger(LedgerSourceInterface):
    """Scripted ledger: tests push logs, senders and token metadata into it."""

    def __init__(self, tip: int = INITIAL_BLOCK):
        self.tip = tip
        self.logs: Dict[FactoryEvent, List[EvmLog]] = {event: [] for event in FactoryEvent}
        self.senders: Dict[str, str] = {}
        self.metadata: Dict[str, Dict[str, str]] = {}
        self.fail_with: Optional[Exception] = None
        self.log_calls = []
        self._next_tx = 1

    def get_latest_block_number(self) -> int:
        return self.tip

    def get_transaction_sender(self, tx_hash: str) -> EvmAddress:
        return EvmAddress(self.senders.get(tx_hash, DEFAULT_CREATOR))

    def get_logs(self, from_block, to_block, event):
        self.log_calls.append((from_block, to_block, event))
        if self.fail_with is not None:
            raise self.fail_with
        return [log for log in self.logs[event] if from_block <= log.block_number <= to_block]

    def call_contract(self, address, method):
        meta = self.metadata.get(address.lower(), {})
        return meta.get(method, f"{method}-{address[-4:]}")

    def _tx(self) -> str:
        value = tx_hash(self._next_tx)
        self._next_tx += 1
        return value

    def add_token_created(self, token: str, block: int, creator: Optional[str] = None,
                          name: str = "Token", symbol: str = "TKN", timestamp: int = 1700000000,
                          log_index: int = 0) -> EvmLog:
        txn = self._tx()
        if creator:
            self.senders[txn] = creator
        self.metadata[token.lower()] = {'name': name, 'symbol': symbol}
        log = EvmLog(
            address=EvmAddress(CONTRACT),
            event=FactoryEvent.TOKEN_CREATED.event_name,
            block_number=block,
            tx_hash=EvmHash(txn),
            log_index=log_index,
            args={'token': token, 'timestamp': timestamp},
        )
        self.logs[FactoryEvent.TOKEN_CREATED].append(log)
        return log

    def add_trade(self, event: FactoryEvent, token: str, block: int, amount_in: int = 10,
                  amount_out: int = 20, fee: int = 1, timestamp: int = 1700000100,
                  log_index: int = 0) -> EvmLog:
        log = EvmLog(
            address=EvmAddress(CONTRACT),
            event=event.event_name,
            block_number=block,
            tx_hash=EvmHash(self._tx()),
            log_index=log_index,
            args={
                'token': token,
                'amount0In': amount_in,
                'amount0Out': amount_out,
                'fee': fee,
                'timestamp': timestamp,
            },
        )
        self.logs[event].append(log)
        return log


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    IndexerLogger.reset()
    IndexerLogger.configure(log_level="DEBUG", console_enabled=True, file_enabled=False)
    yield
    IndexerLogger.reset()


@pytest.fixture
def db_manager():
    """Fresh in-memory database with all tables created"""
    manager = DatabaseManager(DatabaseConfig(url="sqlite://"))
    manager.initialize()
    manager.create_all()
    yield manager
    manager.shutdown()


@pytest.fixture
def repository_manager(db_manager):
    return RepositoryManager(db_manager)


@pytest.fixture
def ledger():
    return FakeLedger()


@pytest.fixture
def indexing_config():
    return IndexingConfig(
        contract_address=CONTRACT,
        initial_block_number=INITIAL_BLOCK,
        range_size=1000,
        stall_delay=5.0,
        error_delay=30.0,
    )


@pytest.fixture
def winner_config():
    return WinnerConfig(attempts=3, page_size=1000, retry_min_wait=0.0, retry_max_wait=0.0)


@pytest.fixture
def checkpoint_store(repository_manager, indexing_config):
    return CheckpointStore(repository_manager, indexing_config.initial_block_number)


@pytest.fixture
def classifier(ledger, repository_manager):
    return EventClassifier(ledger, repository_manager)


@pytest.fixture
def pipeline(repository_manager, ledger, classifier, checkpoint_store, indexing_config):
    return IndexingPipeline(
        repository_manager=repository_manager,
        ledger=ledger,
        classifier=classifier,
        checkpoint_store=checkpoint_store,
        config=indexing_config,
    )


@pytest.fixture
def stored_checkpoint(repository_manager):
    """Reads the committed checkpoint from a fresh session"""
    def read() -> Optional[int]:
        with repository_manager.get_session() as session:
            state = repository_manager.state.get_state(session)
            return state.block_number if state else None
    return read
