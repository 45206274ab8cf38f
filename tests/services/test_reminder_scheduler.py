"""Tests for the in-process reminder scheduler."""

from unittest.mock import AsyncMock, MagicMock

from coach_ai.services.reminder_scheduler import ReminderScheduler


def make_scheduler(settings, enabled=True, minute=5):
    settings.reminder_scheduler_enabled = enabled
    settings.reminder_minute = minute
    reminders = MagicMock()
    reminders.run = AsyncMock(return_value={"success": True, "notificationsSent": 2})
    return ReminderScheduler(settings, reminders)


class TestReminderScheduler:

    def test_disabled_does_not_start(self, settings):
        scheduler = make_scheduler(settings, enabled=False)
        scheduler.start()
        assert scheduler.is_running is False
        assert scheduler.get_status()["next_run_time"] is None

    async def test_start_and_stop(self, settings):
        scheduler = make_scheduler(settings, minute=5)
        scheduler.start()
        try:
            assert scheduler.is_running is True
            next_run = scheduler.get_next_run_time()
            assert next_run is not None
            assert next_run.minute == 5
            assert scheduler.get_status()["minute"] == 5
        finally:
            scheduler.stop()
        assert scheduler.is_running is False

    async def test_run_records_last_result(self, settings):
        scheduler = make_scheduler(settings)
        await scheduler._run_reminders()
        assert scheduler.last_result == {"success": True, "notificationsSent": 2}

    async def test_run_errors_are_logged(self, settings):
        scheduler = make_scheduler(settings)
        scheduler.reminders.run.side_effect = RuntimeError("database down")
        await scheduler._run_reminders()
        assert scheduler.last_result is None
