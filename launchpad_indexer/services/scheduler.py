# launchpad_indexer/services/scheduler.py

from datetime import timezone

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from ..core.logging import LoggingMixin
from ..types import WinnerConfig
from .daily_winner import DailyWinnerService


class DailyWinnerScheduler(LoggingMixin):
    """Runs DailyWinnerService once a day on a UTC wall-clock time."""

    JOB_ID = "daily_winner"

    def __init__(self, service: DailyWinnerService, config: WinnerConfig):
        self.service = service
        self.config = config
        self.scheduler = BackgroundScheduler(timezone=timezone.utc)

    def start(self) -> None:
        self.scheduler.add_job(
            self.service.run,
            trigger=CronTrigger(hour=self.config.hour, minute=self.config.minute, timezone=timezone.utc),
            id=self.JOB_ID,
            name="Daily winner",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        self.scheduler.start()
        self.log_info("Daily winner scheduler started",
                      hour=self.config.hour, minute=self.config.minute)

    def shutdown(self) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            self.log_info("Daily winner scheduler stopped")

    @property
    def next_run_time(self):
        job = self.scheduler.get_job(self.JOB_ID)
        return job.next_run_time if job else None
