# launchpad_indexer/database/migrations/env.py

from logging.config import fileConfig
import os

from alembic import context
from sqlalchemy import engine_from_config, pool

from launchpad_indexer.core.config import DEFAULT_DATABASE_URL
from launchpad_indexer.database.base import Base
from launchpad_indexer.database import types as column_types
import launchpad_indexer.database.tables  # noqa: F401  registers the models

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def get_database_url() -> str:
    from dotenv import load_dotenv
    load_dotenv()
    return os.getenv('LAUNCHPAD_DATABASE_URL') or DEFAULT_DATABASE_URL


def render_item(type_, obj, autogen_context):
    """Custom rendering for our column types during autogenerate"""
    for name in ('EvmAddressType', 'EvmHashType', 'UInt256Type'):
        if type_ == 'type' and isinstance(obj, getattr(column_types, name)):
            autogen_context.imports.add(f"from launchpad_indexer.database.types import {name}")
            return f"{name}()"
    return False


def run_migrations_offline() -> None:
    context.configure(
        url=get_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        render_item=render_item,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        {"sqlalchemy.url": get_database_url()},
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_item=render_item,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
