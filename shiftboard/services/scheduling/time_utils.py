"""
Time and date helpers for schedule generation.

Times of day are civil (wall-clock) times in the business's local timezone.
Week arithmetic works on plain dates so it is unaffected by DST changes.
"""

import logging
import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Union
from zoneinfo import ZoneInfo

from .types import DAYS_OF_WEEK, DayOfWeek


logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "America/Los_Angeles"

TimeLike = Union[str, time]

_TIME_PATTERN = re.compile(r"([0-9]{1,2}):([0-9]{1,2})(?::([0-9]{1,2}))?")


class InvalidTimeFormat(ValueError):
    pass


class InvalidWeekArgument(ValueError):
    pass


def _split_time(value: str) -> tuple[int, int]:
    match = _TIME_PATTERN.fullmatch(value.strip())
    if match is None:
        raise InvalidTimeFormat(f"Invalid time format: {value}. Expected HH:mm or HH:mm:ss")

    hours, minutes = int(match.group(1)), int(match.group(2))
    seconds = int(match.group(3) or 0)
    if not (0 <= hours <= 23 and 0 <= minutes <= 59 and 0 <= seconds <= 59):
        raise InvalidTimeFormat(f"Invalid time values: {value}")
    # seconds are validated, then dropped
    return hours, minutes


def to_time(value: TimeLike) -> time:
    """Normalise "HH:mm", "HH:mm:ss" or a time object to a naive HH:mm time."""
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0, tzinfo=None)
    if not isinstance(value, str):
        raise InvalidTimeFormat(f"Invalid time value: {value!r}")
    hours, minutes = _split_time(value)
    return time(hours, minutes)


def parse_civil_time(
    value: Union[TimeLike, datetime],
    tz_name: str = DEFAULT_TIMEZONE,
    on: Optional[date] = None,
) -> datetime:
    """
    Interpret a time of day as an instant in the business timezone.

    The date part is today (in that timezone) unless `on` is given. A datetime
    is converted into the timezone rather than re-parsed.
    """
    tz = ZoneInfo(tz_name)
    if isinstance(value, datetime):
        return value.astimezone(tz)

    t = to_time(value)
    day = on or datetime.now(tz).date()
    return datetime.combine(day, t, tzinfo=tz)


def format_civil_time(value: Union[time, datetime], tz_name: str = DEFAULT_TIMEZONE) -> str:
    """Format a time of day, or an instant in the business timezone, as HH:mm."""
    if isinstance(value, datetime) and value.tzinfo is not None:
        value = value.astimezone(ZoneInfo(tz_name))
    return value.strftime("%H:%M")


def shift_duration_hours(start: TimeLike, end: TimeLike, tz_name: str = DEFAULT_TIMEZONE) -> float:
    """
    Hours between two times of day on the same date.

    An end before the start is logged and counted as zero hours; overnight
    shifts are not wrapped past midnight.
    """
    reference_day = datetime.now(ZoneInfo(tz_name)).date()
    start_dt = parse_civil_time(start, tz_name, on=reference_day)
    end_dt = parse_civil_time(end, tz_name, on=reference_day)

    if end_dt < start_dt:
        logger.warning(f"End time {end} is before start time {start}. Assuming 0 duration.")
        return 0.0

    return (end_dt - start_dt).total_seconds() / 3600


def _as_date(value: Union[date, datetime]) -> date:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def week_range(date_in_week: Union[date, datetime]) -> list[date]:
    """Monday..Sunday of the ISO week containing the given date."""
    day = _as_date(date_in_week)
    monday = day - timedelta(days=day.weekday())
    return [monday + timedelta(days=i) for i in range(7)]


def weekday_of(day: Union[date, datetime]) -> DayOfWeek:
    return DAYS_OF_WEEK[_as_date(day).weekday()]


def date_for_weekday(day: Union[DayOfWeek, str], week_dates: list[date]) -> date:
    """
    Map a weekday token to its date within a Monday-first 7-day week.

    Raises:
        InvalidWeekArgument: week_dates is not 7 long, or day is not a weekday token
    """
    if len(week_dates) != 7:
        raise InvalidWeekArgument("week_dates must contain exactly 7 dates.")

    try:
        day_of_week = DayOfWeek(day)
    except ValueError:
        raise InvalidWeekArgument(f"Invalid day of week: {day}") from None

    return week_dates[day_of_week.weekday_index]
