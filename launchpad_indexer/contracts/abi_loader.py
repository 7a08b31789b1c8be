# launchpad_indexer/contracts/abi_loader.py

import json
from pathlib import Path
from typing import Optional, List, Dict, Any

from ..core.logging import LoggingMixin

DEFAULT_ABI_DIR = Path(__file__).parent / "abis"


class ABILoader(LoggingMixin):
    """Loads contract ABIs from the filesystem with caching"""

    def __init__(self, abi_base_path: Optional[Path] = None):
        self.abi_base_path = abi_base_path or DEFAULT_ABI_DIR
        self._abi_cache: Dict[str, List[Dict[str, Any]]] = {}

        self.log_debug("ABI loader initialized", abi_base_path=str(self.abi_base_path))

    def load_abi(self, abi_file: str) -> List[Dict[str, Any]]:
        if abi_file in self._abi_cache:
            return self._abi_cache[abi_file]

        abi_path = self.abi_base_path / abi_file
        if not abi_path.exists():
            raise FileNotFoundError(f"ABI file not found: {abi_path}")

        with open(abi_path, 'r') as f:
            abi_data = json.load(f)

        # Hardhat/Foundry artifacts wrap the ABI in an object
        if isinstance(abi_data, dict) and 'abi' in abi_data:
            abi_data = abi_data['abi']

        if not isinstance(abi_data, list):
            raise ValueError(f"Unexpected ABI file format in {abi_path}: {type(abi_data).__name__}")

        self._abi_cache[abi_file] = abi_data
        self.log_debug("ABI loaded",
                       abi_path=str(abi_path),
                       abi_functions=len([item for item in abi_data if item.get('type') == 'function']),
                       abi_events=len([item for item in abi_data if item.get('type') == 'event']))
        return abi_data
