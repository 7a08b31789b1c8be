# launchpad_indexer/core/config.py

import os
from pathlib import Path
from typing import Optional, List, Mapping

from msgspec import Struct

from ..types import (
    DatabaseConfig,
    RpcConfig,
    IndexingConfig,
    WinnerConfig,
    LoggingConfig,
    ConfigurationError,
)
from .logging import IndexerLogger, log_with_context, INFO

ENV_PREFIX = "LAUNCHPAD_"
DEFAULT_DATABASE_URL = "sqlite:///launchpad.db"


class IndexerConfig(Struct):
    database: DatabaseConfig
    rpc: RpcConfig
    indexing: IndexingConfig
    winner: WinnerConfig
    logging: LoggingConfig

    @classmethod
    def from_env(cls, env_vars: Optional[Mapping[str, str]] = None, load_env_file: bool = True) -> 'IndexerConfig':
        """
        Build the configuration from LAUNCHPAD_* environment variables.

        The RPC URL, factory contract address and initial block number are
        mandatory; a missing or malformed value raises ConfigurationError
        before anything touches the ledger or the store.
        """
        if env_vars is None:
            if load_env_file:
                from dotenv import load_dotenv
                load_dotenv()
            env_vars = os.environ
        env = env_vars

        rpc_url = _required(env, "RPC_URL")
        contract_address = _required(env, "CONTRACT_ADDRESS")
        initial_block = _int(env, "INITIAL_BLOCK_NUMBER", required=True, minimum=0)

        config = cls(
            database=DatabaseConfig(
                url=env.get(f"{ENV_PREFIX}DATABASE_URL") or DEFAULT_DATABASE_URL,
                pool_size=_int(env, "DB_POOL_SIZE", default=5, minimum=1),
                max_overflow=_int(env, "DB_MAX_OVERFLOW", default=10, minimum=0),
            ),
            rpc=RpcConfig(
                endpoint_url=rpc_url,
                timeout=_int(env, "RPC_TIMEOUT", default=30, minimum=1),
            ),
            indexing=IndexingConfig(
                contract_address=contract_address,
                initial_block_number=initial_block,
                range_size=_int(env, "RANGE_SIZE", default=1000, minimum=2),
                stall_delay=_float(env, "STALL_DELAY", default=5.0),
                error_delay=_float(env, "ERROR_DELAY", default=30.0),
                bootstrap_users=_list(env, "BOOTSTRAP_USERS"),
            ),
            winner=WinnerConfig(
                attempts=_int(env, "WINNER_ATTEMPTS", default=3, minimum=1),
                retry_min_wait=_float(env, "WINNER_RETRY_MIN_WAIT", default=2.0),
                retry_max_wait=_float(env, "WINNER_RETRY_MAX_WAIT", default=30.0),
                page_size=_int(env, "WINNER_PAGE_SIZE", default=1000, minimum=1),
                hour=_int(env, "WINNER_HOUR", default=0, minimum=0, maximum=23),
                minute=_int(env, "WINNER_MINUTE", default=0, minimum=0, maximum=59),
            ),
            logging=_create_logging_config(env),
        )

        logger = IndexerLogger.get_logger('core.config')
        log_with_context(logger, INFO, "Starting indexer configuration",
                         rpc_url=rpc_url,
                         contract_address=contract_address,
                         initial_block_number=initial_block,
                         range_size=config.indexing.range_size)
        return config


def _create_logging_config(env: Mapping[str, str]) -> LoggingConfig:
    log_dir = env.get(f"{ENV_PREFIX}LOG_DIR")
    return LoggingConfig(
        level=env.get(f"{ENV_PREFIX}LOG_LEVEL", "INFO"),
        log_dir=Path(log_dir) if log_dir else Path.cwd() / "logs",
        file_enabled=_bool(env, "LOG_FILE", default=False),
        structured=_bool(env, "LOG_STRUCTURED", default=False),
    )


def _required(env: Mapping[str, str], name: str) -> str:
    value = (env.get(f"{ENV_PREFIX}{name}") or "").strip()
    if not value:
        raise ConfigurationError(f"[{ENV_PREFIX}{name}] is missing but required")
    return value


def _int(env: Mapping[str, str], name: str, default: Optional[int] = None,
         required: bool = False, minimum: Optional[int] = None,
         maximum: Optional[int] = None) -> int:
    raw = (env.get(f"{ENV_PREFIX}{name}") or "").strip()
    if not raw:
        if required or default is None:
            raise ConfigurationError(f"[{ENV_PREFIX}{name}] is missing but required")
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"[{ENV_PREFIX}{name}] must be an integer", value=raw)
    if minimum is not None and value < minimum:
        raise ConfigurationError(f"[{ENV_PREFIX}{name}] must be >= {minimum}", value=value)
    if maximum is not None and value > maximum:
        raise ConfigurationError(f"[{ENV_PREFIX}{name}] must be <= {maximum}", value=value)
    return value


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = (env.get(f"{ENV_PREFIX}{name}") or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"[{ENV_PREFIX}{name}] must be a number", value=raw)
    if value < 0:
        raise ConfigurationError(f"[{ENV_PREFIX}{name}] must not be negative", value=value)
    return value


def _bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(f"{ENV_PREFIX}{name}")
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _list(env: Mapping[str, str], name: str) -> List[str]:
    raw = env.get(f"{ENV_PREFIX}{name}") or ""
    return [item.strip() for item in raw.split(",") if item.strip()]
