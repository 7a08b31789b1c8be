# launchpad_indexer/clients/__init__.py

from .interfaces import LedgerSourceInterface
from .web3_ledger import Web3LedgerClient
