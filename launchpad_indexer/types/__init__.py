# launchpad_indexer/types/__init__.py

from .new import EvmAddress, EvmHash

from .evm import EvmLog, BlockRange

from .config import (
    DatabaseConfig,
    RpcConfig,
    IndexingConfig,
    WinnerConfig,
    LoggingConfig,
)

from .records import (
    TradeType,
    TokenRecord,
    TradeRecord,
    DailyWinner,
)

from .errors import (
    IndexerError,
    ConfigurationError,
    BootstrapError,
    LedgerError,
    ClassificationError,
    UnknownTokenError,
    CheckpointAdvanceError,
)
