# launchpad_indexer/cli/commands/winner.py

from datetime import datetime, timedelta, timezone

import click

from ...services.daily_winner import DailyWinnerService, window_for


@click.command('daily-winner')
@click.option('--date', 'day', type=click.DateTime(formats=['%Y-%m-%d']),
              help='UTC day to rank (default: yesterday)')
@click.pass_context
def daily_winner(ctx, day):
    """Compute the daily volume winner once"""
    service = ctx.obj['cli_context'].get(DailyWinnerService)

    # The service ranks the day before "now"
    now = None
    if day:
        now = day.replace(tzinfo=timezone.utc) + timedelta(days=1)

    start, end = window_for(now or datetime.now(timezone.utc))
    click.echo(f"Window: {start.isoformat()} -> {end.isoformat()}")

    winner = service.run(now)
    if winner is None:
        click.echo("No winner")
        return

    click.echo(f"Winner: {winner.token_address} (id={winner.token_id})")
    click.echo(f"Volume: {winner.volume} over {winner.trade_count} trades")
