# launchpad_indexer/types/config.py

from pathlib import Path
from typing import Optional, List

from msgspec import Struct, field


class DatabaseConfig(Struct):
    url: str
    pool_size: int = 5
    max_overflow: int = 10
    echo: bool = False


class RpcConfig(Struct):
    endpoint_url: str
    timeout: int = 30


class IndexingConfig(Struct):
    contract_address: str
    initial_block_number: int
    range_size: int = 1000
    stall_delay: float = 5.0
    error_delay: float = 30.0
    bootstrap_users: List[str] = field(default_factory=list)


class WinnerConfig(Struct):
    attempts: int = 3
    retry_min_wait: float = 2.0
    retry_max_wait: float = 30.0
    page_size: int = 1000
    hour: int = 0
    minute: int = 0


class LoggingConfig(Struct):
    level: str = "INFO"
    log_dir: Optional[Path] = None
    file_enabled: bool = False
    structured: bool = False
