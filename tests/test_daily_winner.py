# tests/test_daily_winner.py

from datetime import datetime, timedelta, timezone
import uuid

import pytest

from launchpad_indexer.services.daily_winner import (
    DailyWinnerService,
    TokenVolume,
    rank_volumes,
    window_for,
)
from launchpad_indexer.types import EvmAddress, TradeType, WinnerConfig

from conftest import address, tx_hash

NOW = datetime(2026, 10, 16, 0, 0, 5, tzinfo=timezone.utc)
DAY_START = datetime(2026, 10, 15, tzinfo=timezone.utc)
DAY_END = datetime(2026, 10, 16, tzinfo=timezone.utc)


class Seeder:
    def __init__(self, repository_manager):
        self.repository_manager = repository_manager
        self._tx = 0

    def token(self, n: int, block_number: int = None):
        with self.repository_manager.get_transaction() as session:
            token = self.repository_manager.tokens.create(
                session,
                address=address(n),
                name=f"Token {n}",
                symbol=f"T{n}",
                txn_hash=self._next_hash(),
                block_number=block_number if block_number is not None else n,
                timestamp=1700000000,
            )
            return token.id

    def trade(self, token_id, amount_out: int, created_at: datetime = DAY_START + timedelta(hours=12)):
        with self.repository_manager.get_transaction() as session:
            self.repository_manager.trades.create(
                session,
                type=TradeType.BUY,
                txn_hash=self._next_hash(),
                log_index=0,
                block_number=1,
                token_id=token_id,
                amount_in=1,
                amount_out=amount_out,
                fee=0,
                timestamp=1700000000,
                created_at=created_at,
            )

    def _next_hash(self) -> str:
        self._tx += 1
        return tx_hash(self._tx)


@pytest.fixture
def seed(repository_manager):
    return Seeder(repository_manager)


@pytest.fixture
def service(repository_manager, winner_config):
    return DailyWinnerService(repository_manager, winner_config)


class TestWindow:
    def test_window_is_previous_utc_day(self):
        assert window_for(NOW) == (DAY_START, DAY_END)

    def test_late_evening_still_ranks_previous_day(self):
        start, end = window_for(datetime(2026, 10, 16, 23, 59, tzinfo=timezone.utc))
        assert start == DAY_START
        assert end == DAY_END

    def test_naive_datetime_is_treated_as_utc(self):
        assert window_for(datetime(2026, 10, 16, 0, 0, 5)) == (DAY_START, DAY_END)

    def test_other_timezones_are_converted(self):
        tz = timezone(timedelta(hours=-5))
        # 2026-10-15 21:00 at -05:00 is 2026-10-16 02:00 UTC
        assert window_for(datetime(2026, 10, 15, 21, 0, tzinfo=tz)) == (DAY_START, DAY_END)


class TestRankVolumes:
    def _volume(self, n, volume, trade_count=1, block_number=None):
        return TokenVolume(token_id=uuid.uuid4(), token_address=EvmAddress(address(n)),
                           block_number=block_number if block_number is not None else n,
                           volume=volume, trade_count=trade_count)

    def test_highest_volume_first(self):
        ranked = rank_volumes([self._volume(1, 5), self._volume(2, 9), self._volume(3, 7)])
        assert [v.volume for v in ranked] == [9, 7, 5]

    def test_ties_go_to_earlier_token(self):
        ranked = rank_volumes([self._volume(3, 5, block_number=30),
                               self._volume(1, 5, block_number=10)])
        assert ranked[0].token_address == address(1)

    def test_ties_on_block_go_to_lower_address(self):
        ranked = rank_volumes([self._volume(2, 5, block_number=10),
                               self._volume(1, 5, block_number=10)])
        assert ranked[0].token_address == address(1)

    def test_tokens_without_trades_are_not_candidates(self):
        assert rank_volumes([self._volume(1, 0, trade_count=0)]) == []

    def test_zero_volume_trades_are_candidates(self):
        assert len(rank_volumes([self._volume(1, 0, trade_count=2)])) == 1


def test_winner_has_largest_summed_amount_out(service, seed):
    first = seed.token(1)
    second = seed.token(2)
    seed.trade(first, 100)
    seed.trade(first, 100)
    seed.trade(second, 150)

    winner = service.get_daily_winner(NOW)

    assert winner.token_id == first
    assert winner.token_address == address(1)
    assert winner.volume == 200
    assert winner.trade_count == 2


def test_window_is_half_open(service, seed):
    inside = seed.token(1)
    outside = seed.token(2)
    seed.trade(inside, 10, created_at=DAY_START)
    seed.trade(outside, 1000, created_at=DAY_END)
    seed.trade(outside, 1000, created_at=DAY_START - timedelta(microseconds=1))

    winner = service.get_daily_winner(NOW)

    assert winner.token_id == inside
    assert winner.volume == 10


def test_no_trades_means_no_winner(service, seed):
    seed.token(1)
    assert service.get_daily_winner(NOW) is None


def test_empty_store_means_no_winner(service):
    assert service.get_daily_winner(NOW) is None


def test_tie_is_deterministic(service, seed):
    later = seed.token(2, block_number=50)
    earlier = seed.token(1, block_number=10)
    seed.trade(later, 100)
    seed.trade(earlier, 100)

    assert service.get_daily_winner(NOW).token_id == earlier
    assert service.get_daily_winner(NOW).token_id == earlier


def test_volume_beyond_64_bits_is_summed_exactly(service, seed):
    whale = seed.token(1)
    seed.trade(whale, 2 ** 255)
    seed.trade(whale, 2 ** 255 - 1)

    winner = service.get_daily_winner(NOW)

    assert winner.volume == 2 ** 256 - 1


def test_all_token_pages_are_considered(repository_manager, seed):
    service = DailyWinnerService(repository_manager, WinnerConfig(page_size=2))
    token_ids = [seed.token(n) for n in range(1, 6)]
    for n, token_id in enumerate(token_ids, start=1):
        seed.trade(token_id, n * 10)

    with repository_manager.get_session() as session:
        volumes = service.collect_volumes(session, DAY_START, DAY_END)
    assert len(volumes) == 5

    winner = service.get_daily_winner(NOW)
    assert winner.token_id == token_ids[-1]
    assert winner.volume == 50


class TestRun:
    def test_retries_then_succeeds(self, service, seed, monkeypatch):
        token_id = seed.token(1)
        seed.trade(token_id, 10)

        real = service.get_daily_winner
        calls = []

        def flaky(now=None):
            calls.append(now)
            if len(calls) < 3:
                raise RuntimeError("database unavailable")
            return real(now)

        monkeypatch.setattr(service, "get_daily_winner", flaky)

        winner = service.run(NOW)

        assert len(calls) == 3
        assert winner.token_id == token_id

    def test_gives_up_without_raising(self, service, monkeypatch):
        calls = []

        def broken(now=None):
            calls.append(now)
            raise RuntimeError("database unavailable")

        monkeypatch.setattr(service, "get_daily_winner", broken)

        assert service.run(NOW) is None
        assert len(calls) == 3

    def test_waits_between_attempts(self, repository_manager, monkeypatch):
        sleeps = []
        config = WinnerConfig(attempts=3, retry_min_wait=2.0, retry_max_wait=10.0)
        service = DailyWinnerService(repository_manager, config, sleep=sleeps.append)

        def broken(now=None):
            raise RuntimeError("database unavailable")

        monkeypatch.setattr(service, "get_daily_winner", broken)

        assert service.run(NOW) is None
        assert len(sleeps) == 2
        assert all(2.0 <= delay <= 10.0 for delay in sleeps)

    def test_no_winner_is_not_retried(self, service, monkeypatch):
        calls = []

        def empty(now=None):
            calls.append(now)
            return None

        monkeypatch.setattr(service, "get_daily_winner", empty)

        assert service.run(NOW) is None
        assert len(calls) == 1
