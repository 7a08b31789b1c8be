# launchpad_indexer/cli/context.py

from typing import Optional

import click

from ..core.container import IndexerContainer
from ..database.connection import DatabaseManager
from ..types import ConfigurationError


class CLIContext:
    """Lazily builds the service container shared by all CLI commands."""

    def __init__(self):
        self._container: Optional[IndexerContainer] = None

    @property
    def container(self) -> IndexerContainer:
        if self._container is None:
            from .. import create_indexer
            try:
                self._container = create_indexer()
            except ConfigurationError as e:
                raise click.ClickException(f"Configuration error: {e}")
        return self._container

    def get(self, service_type):
        return self.container.get(service_type)

    def shutdown(self) -> None:
        if self._container is not None and self._container.is_built(DatabaseManager):
            self._container.get(DatabaseManager).shutdown()
        self._container = None
