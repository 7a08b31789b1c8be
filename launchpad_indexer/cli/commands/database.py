# launchpad_indexer/cli/commands/database.py

import click

from ...database.connection import DatabaseManager
from ...pipeline.bootstrap import IndexerBootstrap
from ...types import IndexerError


@click.command('init-db')
@click.option('--create-tables/--no-create-tables', default=True,
              help='Create missing tables directly instead of running alembic migrations')
@click.pass_context
def init_db(ctx, create_tables):
    """Create tables, the checkpoint row and the seed user accounts"""
    cli_context = ctx.obj['cli_context']
    try:
        if create_tables:
            cli_context.get(DatabaseManager).create_all()
        block_number = cli_context.get(IndexerBootstrap).run()
    except IndexerError as e:
        raise click.ClickException(str(e))

    click.echo(f"Database ready, checkpoint at block {block_number}")
