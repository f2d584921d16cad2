"""Trip reminders, one hour before a timed trip."""

import logging
from datetime import date, datetime, timedelta
from typing import Callable, Optional, Protocol

from vozruta.domain.entities import Section
from vozruta.utils.date_parser import DateLike, to_date

logger = logging.getLogger(__name__)

REMINDER_LEAD = timedelta(hours=1)
REMINDER_TITLE = "Recordatorio de viaje"


class Notifier(Protocol):
    """Delivers a reminder at a local time."""

    def schedule(self, at: datetime, title: str, body: str) -> None:
        ...


class LogNotifier:
    """Notifier that records reminders through logging."""

    def __init__(self):
        self.scheduled: list[tuple[datetime, str, str]] = []

    def schedule(self, at: datetime, title: str, body: str) -> None:
        self.scheduled.append((at, title, body))
        logger.info("Reminder scheduled", extra={"at": at.isoformat(), "title": title, "body": body})


def reminder_time(
    trip_date: DateLike, time: str, now: Optional[datetime] = None
) -> Optional[datetime]:
    """Return the local time one hour before the trip.

    Returns None when the date or time cannot be read or when the
    reminder time is not in the future.
    """
    try:
        day = to_date(trip_date)
        trip_at = datetime.combine(day, datetime.strptime(time, "%H:%M").time())
    except (TypeError, ValueError):
        return None

    notify_at = trip_at - REMINDER_LEAD
    if notify_at <= (now or datetime.now()):
        return None
    return notify_at


class ReminderScheduler:
    """Schedules "one hour before" reminders for timed trips."""

    def __init__(self, notifier: Notifier, clock: Callable[[], datetime] = datetime.now):
        self.notifier = notifier
        self.clock = clock

    def schedule_one_hour_before(
        self, trip_date: date, time: str, description: str, section: Section
    ) -> Optional[datetime]:
        """Schedule a reminder for a trip.

        Args:
            trip_date: Trip date
            time: Trip time as "HH:MM"
            description: Trip description shown in the reminder
            section: Trip section shown in the reminder

        Returns:
            When the reminder fires, or None if it was not scheduled
        """
        notify_at = reminder_time(trip_date, time, now=self.clock())
        if notify_at is None:
            logger.debug("Reminder skipped", extra={"date": str(trip_date), "time": time})
            return None

        body = f"{Section.parse(section).value.upper()}: {description} (en 1 hora)"
        self.notifier.schedule(notify_at, REMINDER_TITLE, body)
        return notify_at
