# launchpad_indexer/__init__.py

from typing import Mapping, Optional

from .core.config import IndexerConfig
from .core.container import IndexerContainer
from .core.logging import IndexerLogger, log_with_context, INFO
from .clients.interfaces import LedgerSourceInterface
from .clients.web3_ledger import Web3LedgerClient
from .contracts.abi_loader import ABILoader
from .database.connection import DatabaseManager
from .database.repository_manager import RepositoryManager
from .pipeline.bootstrap import IndexerBootstrap
from .pipeline.checkpoint import CheckpointStore
from .pipeline.classifier import EventClassifier
from .pipeline.indexing_pipeline import IndexingPipeline
from .pipeline.runner import IndexingRunner
from .services.daily_winner import DailyWinnerService
from .services.scheduler import DailyWinnerScheduler

__version__ = "0.1.0"


def create_indexer(env_vars: Optional[Mapping[str, str]] = None,
                   config: Optional[IndexerConfig] = None,
                   ledger: Optional[LedgerSourceInterface] = None) -> IndexerContainer:
    """
    Build the service container.

    ``config`` and ``ledger`` may be passed in directly (tests, scripts);
    otherwise they come from the LAUNCHPAD_* environment and a web3 client.
    """
    if config is None:
        config = IndexerConfig.from_env(env_vars)
    _configure_logging(config)

    logger = IndexerLogger.get_logger('core.init')
    container = IndexerContainer(config)
    _register_services(container, ledger)

    log_with_context(logger, INFO, "Indexer created successfully",
                     contract_address=config.indexing.contract_address)
    return container


def _configure_logging(config: IndexerConfig) -> None:
    IndexerLogger.configure(
        log_dir=config.logging.log_dir,
        log_level=config.logging.level,
        console_enabled=True,
        file_enabled=config.logging.file_enabled,
        structured_format=config.logging.structured,
    )


def _register_services(container: IndexerContainer, ledger: Optional[LedgerSourceInterface]) -> None:
    config = container.config

    def create_db_manager(c: IndexerContainer) -> DatabaseManager:
        db_manager = DatabaseManager(config.database)
        db_manager.initialize()
        return db_manager

    container.register_factory(DatabaseManager, create_db_manager)
    container.register_singleton(RepositoryManager, RepositoryManager)
    container.register_singleton(ABILoader, ABILoader)

    if ledger is not None:
        container.register_instance(LedgerSourceInterface, ledger)
    else:
        container.register_factory(LedgerSourceInterface, lambda c: Web3LedgerClient(
            rpc_config=config.rpc,
            contract_address=config.indexing.contract_address,
            abi_loader=c.get(ABILoader),
        ))

    container.register_factory(CheckpointStore, lambda c: CheckpointStore(
        c.get(RepositoryManager), config.indexing.initial_block_number))
    container.register_singleton(EventClassifier, EventClassifier)
    container.register_factory(IndexingPipeline, lambda c: IndexingPipeline(
        repository_manager=c.get(RepositoryManager),
        ledger=c.get(LedgerSourceInterface),
        classifier=c.get(EventClassifier),
        checkpoint_store=c.get(CheckpointStore),
        config=config.indexing,
    ))
    container.register_singleton(IndexingRunner, IndexingRunner)
    container.register_factory(IndexerBootstrap, lambda c: IndexerBootstrap(
        c.get(RepositoryManager), c.get(CheckpointStore), config.indexing.bootstrap_users))
    container.register_factory(DailyWinnerService, lambda c: DailyWinnerService(
        c.get(RepositoryManager), config.winner))
    container.register_factory(DailyWinnerScheduler, lambda c: DailyWinnerScheduler(
        c.get(DailyWinnerService), config.winner))
