"""Civil time helpers for a fixed IANA timezone.

All timetable comparisons are done in minutes since local midnight. Dates are
shifted from a midday UTC anchor so a DST change can never move the result
onto the wrong calendar day.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from zoneinfo import ZoneInfo

MINUTES_PER_DAY = 24 * 60
HALF_DAY_MINUTES = MINUTES_PER_DAY // 2

_SHIFT_ANCHOR = time(12, 0, tzinfo=UTC)


@dataclass(frozen=True)
class LocalNow:
    """The current civil date and time of day."""

    date: date
    hhmm: str
    minutes: int


def to_minutes(hhmm: str) -> int:
    """Convert "HHMM" or "HH:MM" into minutes since local midnight.

    Raises:
        ValueError: If the value is not a valid 24h time.
    """
    if not isinstance(hhmm, str):
        raise ValueError(f"Bad HHMM value: {hhmm!r}")
    value = hhmm.strip().replace(":", "")
    if len(value) != 4 or not value.isdigit():
        raise ValueError(f"Bad HHMM value: {hhmm!r}")
    hours, minutes = int(value[:2]), int(value[2:])
    if hours > 23 or minutes > 59:
        raise ValueError(f"Bad HHMM value: {hhmm!r}")
    return hours * 60 + minutes


def from_minutes(minutes: int) -> str:
    """Format minutes since midnight as "HHMM", wrapping past midnight."""
    minutes %= MINUTES_PER_DAY
    return f"{minutes // 60:02d}{minutes % 60:02d}"


def minutes_between(start: str, end: str) -> int:
    """Signed minutes from start to end.

    A result more than twelve hours negative is taken to have crossed midnight
    and is rolled forward by one day.
    """
    diff = to_minutes(end) - to_minutes(start)
    if diff < -HALF_DAY_MINUTES:
        diff += MINUTES_PER_DAY
    elif diff > HALF_DAY_MINUTES:
        diff -= MINUTES_PER_DAY
    return diff


def shift_date(day: date, days: int) -> date:
    """Shift a calendar date by a number of days."""
    anchored = datetime.combine(day, _SHIFT_ANCHOR)
    return (anchored + timedelta(days=days)).date()


class CivilClock:
    """Resolves "now" in a fixed civil timezone."""

    def __init__(
        self, timezone: str, now_provider: Callable[[], datetime] | None = None
    ) -> None:
        """Initialize the clock.

        Args:
            timezone: IANA timezone name, e.g. "Europe/London".
            now_provider: Returns the current aware datetime. Defaults to the system clock.
        """
        self._zone = ZoneInfo(timezone)
        self._now_provider = now_provider or (lambda: datetime.now(UTC))

    @property
    def timezone(self) -> str:
        return self._zone.key

    def utc_now(self) -> datetime:
        """Current instant in UTC."""
        return self._now_provider().astimezone(UTC)

    def now(self) -> LocalNow:
        """Current civil date and time of day in the configured timezone."""
        local = self._now_provider().astimezone(self._zone)
        minutes = local.hour * 60 + local.minute
        return LocalNow(date=local.date(), hhmm=from_minutes(minutes), minutes=minutes)
