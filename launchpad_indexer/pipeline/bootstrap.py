# launchpad_indexer/pipeline/bootstrap.py

from typing import Iterable

from ..core.logging import LoggingMixin
from ..database.repository_manager import RepositoryManager
from ..types import BootstrapError, EvmAddress
from .checkpoint import CheckpointStore


class IndexerBootstrap(LoggingMixin):
    """Creates the checkpoint row and the seed user accounts before indexing starts."""

    def __init__(self, repository_manager: RepositoryManager, checkpoint_store: CheckpointStore,
                 bootstrap_users: Iterable[str] = ()):
        self.repository_manager = repository_manager
        self.checkpoint_store = checkpoint_store
        self.bootstrap_users = list(bootstrap_users)

    def run(self) -> int:
        try:
            with self.repository_manager.get_transaction() as session:
                state = self.checkpoint_store.bootstrap(session)

                for address in self.bootstrap_users:
                    _, created = self.repository_manager.users.get_or_create(session, EvmAddress(address))
                    if created:
                        self.log_info("Seeded user account", user=address.lower())

                return state.block_number

        except BootstrapError:
            raise
        except Exception as e:
            raise BootstrapError("Failed to bootstrap", error=str(e)) from e
