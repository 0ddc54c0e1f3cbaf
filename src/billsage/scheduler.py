"""Background re-check of bill reminders."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from apscheduler.schedulers.background import BackgroundScheduler as APScheduler
from apscheduler.triggers.interval import IntervalTrigger

if TYPE_CHECKING:
    from .context import AppContext, UserSession

logger = logging.getLogger("billsage.scheduler")

REMINDER_JOB_ID = "bill_reminders"


class ReminderScheduler:
    """Runs the bill reminder check on a fixed interval for one session."""

    def __init__(self, ctx: AppContext, session: UserSession):
        """Initialize the scheduler.

        Args:
            ctx: Application context with the reminder service and config
            session: User whose bills are checked
        """
        self.ctx = ctx
        self.session = session
        self.scheduler: APScheduler | None = None

    @property
    def interval_minutes(self) -> int:
        return int(self.ctx.config.REMINDER_INTERVAL_MINUTES)

    def start(self) -> None:
        """Start the background scheduler unless the interval is 0."""
        if self.scheduler is not None:
            logger.warning("Scheduler already running")
            return
        if self.interval_minutes <= 0:
            logger.info("Periodic bill reminders disabled")
            return

        self.scheduler = APScheduler()
        self.scheduler.add_job(
            func=self.run_reminders,
            trigger=IntervalTrigger(minutes=self.interval_minutes),
            id=REMINDER_JOB_ID,
            name="Bill reminder check",
            replace_existing=True,
        )
        self.scheduler.start()
        logger.info(f"Scheduled bill reminder check every {self.interval_minutes} minutes")

    def stop(self) -> None:
        """Stop the background scheduler gracefully."""
        if self.scheduler is not None:
            self.scheduler.shutdown(wait=True)
            self.scheduler = None
            logger.info("Background scheduler stopped")

    def run_reminders(self) -> None:
        """Job body; a failed run is logged and retried on the next tick."""
        try:
            self.ctx.reminders.run(self.session)
        except Exception as exc:
            logger.error(f"Bill reminder check failed: {exc}", exc_info=True)


def create_scheduler(
    ctx: AppContext, session: UserSession, *, auto_start: bool = False
) -> ReminderScheduler:
    """Create and optionally start a reminder scheduler."""
    scheduler = ReminderScheduler(ctx, session)
    if auto_start:
        scheduler.start()
    return scheduler
