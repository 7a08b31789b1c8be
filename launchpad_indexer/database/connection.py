# launchpad_indexer/database/connection.py

from typing import Generator
from contextlib import contextmanager

from sqlalchemy import create_engine, Engine, text
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from ..core.logging import IndexerLogger, log_with_context, INFO, DEBUG, ERROR
from ..types import DatabaseConfig
from .base import Base


class DatabaseManager:
    def __init__(self, config: DatabaseConfig):
        if not config:
            raise ValueError("DatabaseConfig is required")

        self.config = config
        self.logger = IndexerLogger.get_logger(f'database.{self.__class__.__name__.lower()}')
        self._engine = None
        self._session_factory = None

        log_with_context(self.logger, INFO, "DatabaseManager initialized",
                         db_url_host=self._extract_host_from_url(config.url))

    def _extract_host_from_url(self, url: str) -> str:
        if '@' in url and '/' in url:
            return url.split('@')[1].split('/')[0]
        return url.split('://')[0] if '://' in url else "unknown"

    @property
    def is_sqlite(self) -> bool:
        return self.config.url.startswith('sqlite')

    def initialize(self) -> None:
        if self._engine is not None:
            self.logger.warning("Database already initialized")
            return

        try:
            self.logger.info("Initializing database engine")

            if self.is_sqlite:
                engine_kwargs = {'connect_args': {'check_same_thread': False}}
                if ':memory:' in self.config.url or self.config.url.rstrip('/') == 'sqlite:':
                    engine_kwargs['poolclass'] = StaticPool
            else:
                engine_kwargs = {
                    'pool_size': self.config.pool_size,
                    'max_overflow': self.config.max_overflow,
                    'pool_timeout': 30,
                    'pool_recycle': 3600,
                    'pool_pre_ping': True,
                }

            self._engine = create_engine(self.config.url, echo=self.config.echo, **engine_kwargs)
            self._session_factory = sessionmaker(
                bind=self._engine,
                expire_on_commit=False,
            )

            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))

            self.logger.info("Database initialized successfully")

        except Exception as e:
            log_with_context(self.logger, ERROR, "Failed to initialize database",
                             error=str(e),
                             exception_type=type(e).__name__)
            raise

    def create_all(self) -> None:
        """Create missing tables. Alembic migrations are the production path."""
        Base.metadata.create_all(self.engine)

    def shutdown(self) -> None:
        self.logger.info("Shutting down database connections")

        if self._engine:
            self._engine.dispose()
            self._engine = None
        self._session_factory = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Database not initialized. Call initialize() first.")
        return self._engine

    @property
    def session_factory(self) -> sessionmaker:
        if self._session_factory is None:
            raise RuntimeError("Database not initialized. Call initialize() first.")
        return self._session_factory

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        session = self.session_factory()
        try:
            yield session
        except Exception as e:
            log_with_context(self.logger, DEBUG, "Database session error, rolling back",
                             error=str(e),
                             exception_type=type(e).__name__)
            session.rollback()
            raise
        finally:
            session.close()

    @contextmanager
    def get_transaction(self) -> Generator[Session, None, None]:
        with self.get_session() as session:
            yield session
            session.commit()

    def health_check(self) -> bool:
        try:
            with self.get_session() as session:
                session.execute(text("SELECT 1"))
            return True
        except Exception as e:
            log_with_context(self.logger, ERROR, "Database health check failed",
                             error=str(e),
                             exception_type=type(e).__name__)
            return False
