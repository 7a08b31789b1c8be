# launchpad_indexer/pipeline/checkpoint.py

from typing import Optional

from sqlalchemy.orm import Session

from ..core.logging import LoggingMixin
from ..database.repository_manager import RepositoryManager
from ..database.tables import IndexerState
from ..types import BootstrapError, CheckpointAdvanceError


class CheckpointStore(LoggingMixin):
    """
    Durable single-row cursor holding the last fully indexed block.

    All methods take the caller's session so the checkpoint moves in the
    same transaction as the records it covers.
    """

    def __init__(self, repository_manager: RepositoryManager, initial_block_number: Optional[int]):
        self.repository_manager = repository_manager
        self.initial_block_number = initial_block_number

    def get_height(self, session: Session) -> int:
        state = self.repository_manager.state.get_state(session)
        if state is None:
            state = self.bootstrap(session)
        return state.block_number

    def bootstrap(self, session: Session) -> IndexerState:
        """Insert the checkpoint row seeded from the configured initial block."""
        existing = self.repository_manager.state.get_state(session)
        if existing is not None:
            return existing

        if self.initial_block_number is None:
            raise BootstrapError("No checkpoint stored and no initial block number configured")

        try:
            state = self.repository_manager.state.create(session, block_number=self.initial_block_number)
        except Exception as e:
            raise BootstrapError("Failed to insert initial checkpoint",
                                 block_number=self.initial_block_number,
                                 error=str(e)) from e

        self.log_info("Set initial checkpoint", block_number=self.initial_block_number)
        return state

    def advance(self, session: Session, new_height: int) -> int:
        try:
            state = self.repository_manager.state.get_state(session, for_update=True)
            if state is None:
                raise CheckpointAdvanceError("Checkpoint row is missing", block_number=new_height)
            if new_height < state.block_number:
                raise CheckpointAdvanceError("Checkpoint cannot move backwards",
                                             current=state.block_number,
                                             requested=new_height)
            self.repository_manager.state.set_block_number(session, state, new_height)
        except CheckpointAdvanceError:
            raise
        except Exception as e:
            raise CheckpointAdvanceError("Failed to update checkpoint",
                                         block_number=new_height,
                                         error=str(e)) from e

        self.log_debug("Checkpoint advanced", block_number=new_height)
        return new_height
