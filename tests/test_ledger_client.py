# tests/test_ledger_client.py

import pytest
from hexbytes import HexBytes

from launchpad_indexer.clients.web3_ledger import Web3LedgerClient
from launchpad_indexer.contracts.abi_loader import ABILoader
from launchpad_indexer.types import LedgerError, RpcConfig

from conftest import CONTRACT


@pytest.fixture
def client():
    # Nothing listens on port 1, so every call fails fast
    return Web3LedgerClient(RpcConfig(endpoint_url="http://127.0.0.1:1", timeout=1), CONTRACT)


def test_packaged_abis_load():
    loader = ABILoader()

    factory = loader.load_abi(Web3LedgerClient.FACTORY_ABI)
    events = {item['name'] for item in factory if item.get('type') == 'event'}
    assert events == {"TokenCreated", "TokenBuy", "TokenSell"}
    assert loader.load_abi(Web3LedgerClient.FACTORY_ABI) is factory

    with pytest.raises(FileNotFoundError):
        loader.load_abi("Missing.json")


def test_node_failures_become_ledger_errors(client):
    with pytest.raises(LedgerError) as exc_info:
        client.get_latest_block_number()

    assert not exc_info.value.fatal
    assert "eth_blockNumber" in str(exc_info.value)


def test_decoded_log_conversion():
    decoded = {
        'address': "0x" + "FA" * 20,
        'event': "TokenBuy",
        'blockNumber': 123,
        'transactionHash': HexBytes("0x" + "ab" * 32),
        'logIndex': 4,
        'args': {'token': "0x" + "Cd" * 20, 'amount0In': 1, 'amount0Out': 2, 'fee': 0, 'timestamp': 5},
    }

    log = Web3LedgerClient._to_evm_log(decoded)

    assert log.address == CONTRACT
    assert log.tx_hash == "0x" + "ab" * 32
    assert log.block_number == 123
    assert log.log_index == 4
    assert log.arg_address('token') == "0x" + "cd" * 20
    assert log.arg_int('amount0Out') == 2
