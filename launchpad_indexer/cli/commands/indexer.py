# launchpad_indexer/cli/commands/indexer.py

import signal

import click

from ...clients.interfaces import LedgerSourceInterface
from ...database.repository_manager import RepositoryManager
from ...pipeline.bootstrap import IndexerBootstrap
from ...pipeline.runner import IndexingRunner
from ...services.scheduler import DailyWinnerScheduler
from ...types import IndexerError


@click.command('run')
@click.option('--max-iterations', type=int, help='Stop after this many iterations')
@click.option('--no-scheduler', is_flag=True, help='Do not start the daily winner scheduler')
@click.pass_context
def run(ctx, max_iterations, no_scheduler):
    """Run the indexing loop (and the daily winner schedule) until stopped"""
    cli_context = ctx.obj['cli_context']

    try:
        cli_context.get(IndexerBootstrap).run()
        runner = cli_context.get(IndexingRunner)
    except IndexerError as e:
        raise click.ClickException(str(e))

    scheduler = None if no_scheduler else cli_context.get(DailyWinnerScheduler)

    def handle_signal(signum, frame):
        runner.stop()

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    if scheduler:
        scheduler.start()
    try:
        runner.start(max_iterations=max_iterations)
    except IndexerError as e:
        raise click.ClickException(f"Indexer halted: {e}")
    finally:
        if scheduler:
            scheduler.shutdown()


@click.command('index-once')
@click.pass_context
def index_once(ctx):
    """Run a single indexing iteration and print its outcome"""
    cli_context = ctx.obj['cli_context']
    try:
        cli_context.get(IndexerBootstrap).run()
        result = cli_context.get(IndexingRunner).run_once()
    except IndexerError as e:
        raise click.ClickException(str(e))

    click.echo(f"Outcome: {result.outcome.value}")
    if result.block_range:
        click.echo(f"Range: {result.block_range} ({result.block_range.size} blocks)")
    click.echo(f"Checkpoint: {result.checkpoint_before} -> {result.checkpoint_after}")
    click.echo(f"Tokens: {result.tokens_created}, buys: {result.buys}, sells: {result.sells}")
    if result.error:
        click.echo(f"Error: {result.error}")


@click.command('status')
@click.pass_context
def status(ctx):
    """Show the checkpoint, the chain tip and the stored row counts"""
    cli_context = ctx.obj['cli_context']
    repository_manager = cli_context.get(RepositoryManager)

    with repository_manager.get_session() as session:
        state = repository_manager.state.get_state(session)
        tokens = repository_manager.tokens.count(session)
        trades = repository_manager.trades.count(session)
        users = repository_manager.users.count(session)

    checkpoint = state.block_number if state else None
    click.echo(f"Checkpoint: {checkpoint if checkpoint is not None else 'not initialized'}")

    try:
        tip = cli_context.get(LedgerSourceInterface).get_latest_block_number()
        click.echo(f"Chain tip: {tip}")
        if checkpoint is not None:
            click.echo(f"Lag: {max(tip - checkpoint, 0)} blocks")
    except IndexerError as e:
        click.echo(f"Chain tip: unavailable ({e})")

    click.echo(f"Tokens: {tokens}, trades: {trades}, users: {users}")
