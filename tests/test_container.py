# tests/test_container.py

import pytest
from click.testing import CliRunner

from launchpad_indexer import create_indexer
from launchpad_indexer.cli.__main__ import cli, cli_context
from launchpad_indexer.clients.interfaces import LedgerSourceInterface
from launchpad_indexer.core.config import IndexerConfig
from launchpad_indexer.core.container import IndexerContainer
from launchpad_indexer.database.connection import DatabaseManager
from launchpad_indexer.pipeline.bootstrap import IndexerBootstrap
from launchpad_indexer.pipeline.runner import IndexingRunner
from launchpad_indexer.services.daily_winner import DailyWinnerService
from launchpad_indexer.services.scheduler import DailyWinnerScheduler
from launchpad_indexer.pipeline.indexing_pipeline import IterationOutcome

from conftest import CONTRACT, FakeLedger

CLI_ENV = {
    "LAUNCHPAD_RPC_URL": "http://localhost:8545",
    "LAUNCHPAD_CONTRACT_ADDRESS": CONTRACT,
    "LAUNCHPAD_INITIAL_BLOCK_NUMBER": "100",
    "LAUNCHPAD_DATABASE_URL": "sqlite://",
    "LAUNCHPAD_BOOTSTRAP_USERS": "0x" + "11" * 20,
}


@pytest.fixture
def container():
    config = IndexerConfig.from_env(CLI_ENV)
    ledger = FakeLedger(tip=150)
    container = create_indexer(config=config, ledger=ledger)
    container.get(DatabaseManager).create_all()
    yield container
    container.get(DatabaseManager).shutdown()


def test_container_wires_the_indexer(container):
    runner = container.get(IndexingRunner)

    assert runner is container.get(IndexingRunner)
    assert isinstance(runner.pipeline.ledger, FakeLedger)
    assert runner.pipeline.ledger is container.get(LedgerSourceInterface)
    assert runner.pipeline.config.initial_block_number == 100

    assert container.get(IndexerBootstrap).run() == 100
    assert runner.run_once().outcome is IterationOutcome.SUCCESS


def test_scheduler_registers_daily_job(container):
    scheduler = container.get(DailyWinnerScheduler)
    assert scheduler.service is container.get(DailyWinnerService)

    scheduler.start()
    try:
        next_run = scheduler.next_run_time
        assert next_run is not None
        assert (next_run.hour, next_run.minute) == (0, 0)
    finally:
        scheduler.shutdown()


@pytest.fixture
def fresh_cli_context():
    cli_context.shutdown()
    yield
    cli_context.shutdown()


def test_cli_init_db_and_daily_winner(fresh_cli_context):
    runner = CliRunner()

    result = runner.invoke(cli, ["init-db"], env=CLI_ENV)
    assert result.exit_code == 0, result.output
    assert "checkpoint at block 100" in result.output

    result = runner.invoke(cli, ["daily-winner", "--date", "2026-10-15"], env=CLI_ENV)
    assert result.exit_code == 0, result.output
    assert "2026-10-15T00:00:00+00:00" in result.output
    assert "No winner" in result.output


def test_cli_reports_missing_configuration(fresh_cli_context):
    env = dict(CLI_ENV, LAUNCHPAD_RPC_URL=None)

    result = CliRunner().invoke(cli, ["init-db"], env=env)

    assert result.exit_code == 1
    assert "LAUNCHPAD_RPC_URL" in result.output


class Ping:
    def __init__(self, pong: 'Pong'):
        self.pong = pong


class Pong:
    def __init__(self, ping: Ping):
        self.ping = ping


class Greeter:
    def __init__(self, ping: Ping, config):
        self.ping = ping
        self.config = config


def test_container_injects_registered_params_and_config():
    container = IndexerContainer(config="settings")
    ping = Ping(pong=None)
    container.register_instance(Ping, ping)
    container.register_singleton(Greeter, Greeter)

    greeter = container.get(Greeter)

    assert greeter.ping is ping
    assert greeter.config == "settings"
    assert container.get(Greeter) is greeter
    assert container.is_built(Greeter)


def test_container_rejects_unknown_and_circular_services():
    container = IndexerContainer(config=None)
    container.register_factory(Ping, lambda c: Ping(c.get(Pong)))
    container.register_factory(Pong, lambda c: Pong(c.get(Ping)))

    with pytest.raises(ValueError, match="Circular dependency"):
        container.get(Ping)
    assert not container.is_built(Ping)

    with pytest.raises(ValueError, match="not registered"):
        container.get(Greeter)
