# launchpad_indexer/clients/web3_ledger.py

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from web3 import Web3
from web3.contract import Contract

from .interfaces import LedgerSourceInterface
from ..contracts.abi_loader import ABILoader
from ..contracts.events import FactoryEvent
from ..core.logging import LoggingMixin
from ..types import EvmAddress, EvmHash, EvmLog, LedgerError, RpcConfig


class Web3LedgerClient(LedgerSourceInterface, LoggingMixin):
    """
    Ledger source backed by a JSON-RPC node through web3.py.
    """

    FACTORY_ABI = "TokenFactory.json"
    TOKEN_ABI = "Token.json"

    def __init__(self, rpc_config: RpcConfig, contract_address: str, abi_loader: Optional[ABILoader] = None):
        self.endpoint_url = rpc_config.endpoint_url
        self.abi_loader = abi_loader or ABILoader()
        self.w3 = Web3(Web3.HTTPProvider(
            rpc_config.endpoint_url,
            request_kwargs={'timeout': rpc_config.timeout},
        ))
        self.factory: Contract = self.w3.eth.contract(
            address=Web3.to_checksum_address(contract_address),
            abi=self.abi_loader.load_abi(self.FACTORY_ABI),
        )
        self._token_contracts: Dict[str, Contract] = {}

        self.log_info("Ledger client initialized",
                      contract_address=self.factory.address)

    @contextmanager
    def _ledger_call(self, operation: str, **context):
        try:
            yield
        except LedgerError:
            raise
        except Exception as e:
            raise LedgerError(f"Ledger call {operation} failed: {e}",
                              exception_type=type(e).__name__, **context) from e

    def get_latest_block_number(self) -> int:
        with self._ledger_call('eth_blockNumber'):
            return int(self.w3.eth.block_number)

    def get_transaction_sender(self, tx_hash: str) -> EvmAddress:
        with self._ledger_call('eth_getTransactionByHash', tx_hash=tx_hash):
            tx = self.w3.eth.get_transaction(tx_hash)
            return EvmAddress(tx['from'])

    def get_logs(self, from_block: int, to_block: int, event: FactoryEvent) -> List[EvmLog]:
        with self._ledger_call('eth_getLogs', event=event.event_name,
                               from_block=from_block, to_block=to_block):
            raw_logs = self.w3.eth.get_logs({
                'fromBlock': from_block,
                'toBlock': to_block,
                'address': self.factory.address,
                'topics': [event.topic],
            })
            event_abi = getattr(self.factory.events, event.event_name)()
            logs = [self._to_evm_log(event_abi.process_log(raw)) for raw in raw_logs]

        logs.sort(key=lambda log: (log.block_number, log.log_index))
        self.log_debug("Fetched logs",
                       event=event.event_name,
                       from_block=from_block,
                       to_block=to_block,
                       log_count=len(logs))
        return logs

    def call_contract(self, address: str, method: str) -> Any:
        with self._ledger_call('eth_call', contract_address=address, method=method):
            contract = self._get_token_contract(address)
            return getattr(contract.functions, method)().call()

    def _get_token_contract(self, address: str) -> Contract:
        key = address.lower()
        if key not in self._token_contracts:
            self._token_contracts[key] = self.w3.eth.contract(
                address=Web3.to_checksum_address(address),
                abi=self.abi_loader.load_abi(self.TOKEN_ABI),
            )
        return self._token_contracts[key]

    @staticmethod
    def _to_evm_log(decoded) -> EvmLog:
        return EvmLog(
            address=EvmAddress(decoded['address']),
            event=decoded['event'],
            block_number=int(decoded['blockNumber']),
            tx_hash=EvmHash(decoded['transactionHash']),
            log_index=int(decoded['logIndex']),
            args=dict(decoded['args']),
        )
