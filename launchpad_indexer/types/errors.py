# launchpad_indexer/types/errors.py

from typing import Optional


class IndexerError(Exception):
    """Base class for all indexer errors.

    ``fatal`` tells the supervising run loop whether the error leaves the
    indexer unable to make safe forward progress.
    """

    fatal = False

    def __init__(self, message: str, **context):
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ', '.join(f"{k}={v}" for k, v in self.context.items())
        return f"{self.message} ({details})"


class ConfigurationError(IndexerError):
    fatal = True


class BootstrapError(IndexerError):
    fatal = True


class LedgerError(IndexerError):
    """Transient failure talking to the ledger; the batch is retried."""


class ClassificationError(IndexerError):
    pass


class UnknownTokenError(ClassificationError):
    """A trade references a token that is not in the store."""

    fatal = True

    def __init__(self, token_address: str, tx_hash: Optional[str] = None):
        super().__init__("Trade references unknown token",
                         token_address=token_address, tx_hash=tx_hash)
        self.token_address = token_address
        self.tx_hash = tx_hash


class CheckpointAdvanceError(IndexerError):
    fatal = True
