# launchpad_indexer/cli/__main__.py

"""
Launchpad indexer CLI

Usage: python -m launchpad_indexer.cli [command] [options]
"""

import atexit

import click

from .context import CLIContext

cli_context = CLIContext()


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx, verbose):
    """Launchpad indexer - token factory event indexer and daily winner job"""
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose
    ctx.obj['cli_context'] = cli_context

    if verbose:
        import os
        os.environ['LAUNCHPAD_LOG_LEVEL'] = 'DEBUG'


from .commands.database import init_db
from .commands.indexer import run, index_once, status
from .commands.winner import daily_winner

cli.add_command(init_db)
cli.add_command(run)
cli.add_command(index_once)
cli.add_command(status)
cli.add_command(daily_winner)


atexit.register(cli_context.shutdown)


if __name__ == '__main__':
    cli()
