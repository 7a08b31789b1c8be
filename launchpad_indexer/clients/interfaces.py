"""
Interfaces for ledger access.

The indexing pipeline only depends on LedgerSourceInterface, so tests and
alternative node providers can plug in without touching the pipeline.
"""
from abc import ABC, abstractmethod
from typing import Any, List

from ..contracts.events import FactoryEvent
from ..types import EvmAddress, EvmLog


class LedgerSourceInterface(ABC):
    """Read-only gateway to the chain. Every method may raise LedgerError."""

    @abstractmethod
    def get_latest_block_number(self) -> int:
        """
        Get the current chain tip.

        Returns:
            Latest block number
        """
        pass

    @abstractmethod
    def get_transaction_sender(self, tx_hash: str) -> EvmAddress:
        """
        Get the sender of a transaction.

        Args:
            tx_hash: Transaction hash

        Returns:
            Lower-cased sender address
        """
        pass

    @abstractmethod
    def get_logs(self, from_block: int, to_block: int, event: FactoryEvent) -> List[EvmLog]:
        """
        Get decoded factory logs of one event kind.

        Args:
            from_block: First block of the range (inclusive)
            to_block: Last block of the range (inclusive)
            event: Factory event whose topic to match

        Returns:
            Logs ordered by (block_number, log_index)
        """
        pass

    @abstractmethod
    def call_contract(self, address: str, method: str) -> Any:
        """
        Call a read-only token contract method without arguments.

        Args:
            address: Token contract address
            method: Method name, e.g. "name" or "symbol"

        Returns:
            The decoded scalar result
        """
        pass
