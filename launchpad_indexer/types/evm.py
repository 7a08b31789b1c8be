# launchpad_indexer/types/evm.py

from typing import Any, Dict

from msgspec import Struct

from .new import EvmAddress, EvmHash


class EvmLog(Struct, frozen=True):
    """A decoded contract event log."""
    address: EvmAddress
    event: str
    block_number: int
    tx_hash: EvmHash
    log_index: int
    args: Dict[str, Any]

    def arg_int(self, name: str) -> int:
        return int(self.args[name])

    def arg_address(self, name: str) -> EvmAddress:
        return EvmAddress(self.args[name])


class BlockRange(Struct, frozen=True):
    from_block: int
    to_block: int

    @property
    def size(self) -> int:
        return self.to_block - self.from_block + 1

    def __str__(self) -> str:
        return f"[{self.from_block}-{self.to_block}]"
