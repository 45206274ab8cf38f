"""In-process reminder scheduler using APScheduler.

Runs the coach reminder pass every hour at ``settings.reminder_minute``,
as an alternative to calling ``coach-reminder-cron`` from an external cron.
"""

import logging
from datetime import datetime
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from ..config import Settings
from .reminders import ReminderService

logger = logging.getLogger(__name__)

JOB_ID = "hourly_coach_reminders"


class ReminderScheduler:
    """Manages the hourly reminder job.

    Usage:
        scheduler = ReminderScheduler(settings, reminder_service)
        scheduler.start()
        # ... app runs ...
        scheduler.stop()
    """

    def __init__(self, settings: Settings, reminders: ReminderService):
        self.settings = settings
        self.reminders = reminders
        self.scheduler: Optional[AsyncIOScheduler] = None
        self._is_running = False
        self._last_result: Optional[dict] = None

    @property
    def is_running(self) -> bool:
        return self._is_running and self.scheduler is not None

    @property
    def last_result(self) -> Optional[dict]:
        return self._last_result

    def start(self) -> None:
        """Start the scheduler unless disabled in configuration."""
        if self._is_running:
            logger.warning("Reminder scheduler is already running")
            return

        if not self.settings.reminder_scheduler_enabled:
            logger.info("Reminder scheduler is disabled in configuration")
            return

        self.scheduler = AsyncIOScheduler(timezone="UTC")
        self.scheduler.add_job(
            self._run_reminders,
            CronTrigger(minute=self.settings.reminder_minute, timezone="UTC"),
            id=JOB_ID,
            name="Hourly Coach Reminders",
            replace_existing=True,
            max_instances=1,
        )

        self.scheduler.start()
        self._is_running = True
        logger.info(f"Reminder scheduler started (hourly at :{self.settings.reminder_minute:02d} UTC)")

    def stop(self) -> None:
        if not self._is_running or self.scheduler is None:
            return

        logger.info("Shutting down reminder scheduler...")
        self.scheduler.shutdown(wait=True)
        self._is_running = False
        self.scheduler = None
        logger.info("Reminder scheduler stopped")

    async def _run_reminders(self) -> None:
        try:
            self._last_result = await self.reminders.run()
        except Exception as e:
            logger.error(f"Unexpected error during scheduled reminder run: {e}")

    def get_next_run_time(self) -> Optional[datetime]:
        if not self.is_running or self.scheduler is None:
            return None
        job = self.scheduler.get_job(JOB_ID)
        if job and job.next_run_time:
            return job.next_run_time
        return None

    def get_status(self) -> dict:
        next_time = self.get_next_run_time()
        return {
            "is_running": self.is_running,
            "enabled": self.settings.reminder_scheduler_enabled,
            "minute": self.settings.reminder_minute,
            "next_run_time": next_time.isoformat() if next_time else None,
            "last_result": self._last_result,
        }
