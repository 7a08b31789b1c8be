# launchpad_indexer/contracts/__init__.py

from .abi_loader import ABILoader
from .events import FactoryEvent
