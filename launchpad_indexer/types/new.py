# launchpad_indexer/types/new.py

class EvmAddress(str):
    """Lower-cased 0x-prefixed 20 byte address."""

    def __new__(cls, value: str) -> 'EvmAddress':
        if not isinstance(value, str):
            raise TypeError(f"EvmAddress expects str, got {type(value).__name__}")
        value = value.strip().lower()
        if not value.startswith('0x') or len(value) != 42:
            raise ValueError(f"Invalid EVM address: {value!r}")
        return super().__new__(cls, value)


class EvmHash(str):
    """Lower-cased 0x-prefixed 32 byte hash."""

    def __new__(cls, value) -> 'EvmHash':
        if isinstance(value, (bytes, bytearray)):
            value = '0x' + bytes(value).hex()
        if not isinstance(value, str):
            raise TypeError(f"EvmHash expects str or bytes, got {type(value).__name__}")
        value = value.strip().lower()
        if not value.startswith('0x'):
            value = '0x' + value
        if len(value) != 66:
            raise ValueError(f"Invalid EVM hash: {value!r}")
        return super().__new__(cls, value)
