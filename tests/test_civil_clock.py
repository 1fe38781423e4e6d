"""Tests for civil time helpers."""

from datetime import UTC, date, datetime

import pytest

from rtt_commute.domain.civil_clock import (
    CivilClock,
    from_minutes,
    minutes_between,
    shift_date,
    to_minutes,
)


class TestTimeConversion:
    """Tests for HHMM <-> minutes conversion."""

    def test_to_minutes_accepts_both_formats(self) -> None:
        """Given HHMM and HH:MM, when converting, then both give minutes since midnight."""
        assert to_minutes("0744") == 7 * 60 + 44
        assert to_minutes("07:44") == 7 * 60 + 44
        assert to_minutes("0000") == 0
        assert to_minutes("2359") == 1439

    @pytest.mark.parametrize("value", ["", "744", "07444", "2400", "0760", "ab12", "7:44"])
    def test_to_minutes_rejects_malformed_values(self, value: str) -> None:
        """Given a malformed time, when converting, then ValueError is raised."""
        with pytest.raises(ValueError, match="Bad HHMM"):
            to_minutes(value)

    def test_from_minutes_wraps_past_midnight(self) -> None:
        """Given minutes beyond one day, when formatting, then the result wraps."""
        assert from_minutes(0) == "0000"
        assert from_minutes(491) == "0811"
        assert from_minutes(1440 + 5) == "0005"


class TestMinutesBetween:
    """Tests for signed minute differences."""

    def test_positive_and_negative_differences(self) -> None:
        """Given two times on the same day, when diffing, then the sign follows the order."""
        assert minutes_between("0820", "0825") == 5
        assert minutes_between("0825", "0820") == -5
        assert minutes_between("0810", "0810") == 0

    def test_crossing_midnight_forward(self) -> None:
        """Given an end just after midnight, when diffing, then it counts as the next day."""
        assert minutes_between("2355", "0005") == 10

    def test_crossing_midnight_backward(self) -> None:
        """Given a start just after midnight and an end before it, then it is early."""
        assert minutes_between("0005", "2355") == -10


class TestShiftDate:
    """Tests for calendar date shifting."""

    def test_shift_across_month_and_year(self) -> None:
        """Given boundary dates, when shifting by one day, then the calendar rolls over."""
        assert shift_date(date(2024, 1, 31), 1) == date(2024, 2, 1)
        assert shift_date(date(2024, 12, 31), 1) == date(2025, 1, 1)
        assert shift_date(date(2024, 3, 1), -1) == date(2024, 2, 29)

    def test_shift_across_dst_changes(self) -> None:
        """Given the UK DST change dates, when shifting, then exactly one day moves."""
        assert shift_date(date(2024, 3, 30), 1) == date(2024, 3, 31)
        assert shift_date(date(2024, 3, 31), 1) == date(2024, 4, 1)
        assert shift_date(date(2024, 10, 27), -1) == date(2024, 10, 26)


class TestCivilClock:
    """Tests for CivilClock."""

    def test_now_uses_configured_timezone_in_summer(self) -> None:
        """Given a UTC instant in BST, when resolving now, then local time is UTC+1."""
        clock = CivilClock("Europe/London", lambda: datetime(2024, 7, 1, 6, 30, tzinfo=UTC))

        now = clock.now()

        assert now.date == date(2024, 7, 1)
        assert now.hhmm == "0730"
        assert now.minutes == 7 * 60 + 30

    def test_now_uses_configured_timezone_in_winter(self) -> None:
        """Given a UTC instant in GMT, when resolving now, then local equals UTC."""
        clock = CivilClock("Europe/London", lambda: datetime(2024, 1, 15, 6, 30, tzinfo=UTC))

        assert clock.now().hhmm == "0630"

    def test_local_date_differs_from_utc_date(self) -> None:
        """Given late UTC evening in a zone ahead of UTC, then the local date is tomorrow."""
        clock = CivilClock("Europe/Berlin", lambda: datetime(2024, 7, 1, 23, 30, tzinfo=UTC))

        now = clock.now()

        assert now.date == date(2024, 7, 2)
        assert now.hhmm == "0130"

    def test_utc_now_is_utc(self) -> None:
        """Given any provider, when asking for utc_now, then the result is in UTC."""
        instant = datetime(2024, 7, 1, 6, 30, tzinfo=UTC)
        clock = CivilClock("Europe/London", lambda: instant)

        assert clock.utc_now() == instant
        assert clock.utc_now().tzinfo == UTC
        assert clock.timezone == "Europe/London"
