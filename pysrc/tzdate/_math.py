"""Calendar and epoch arithmetic helpers."""

from datetime import datetime as _datetime

MILLIS_PER_MINUTE = 60_000
MILLIS_PER_HOUR = 3_600_000
MILLIS_PER_DAY = 86_400_000


def add_months(d: _datetime, months: int) -> _datetime:
    year_delta, month0_new = divmod(d.month - 1 + months, 12)
    year_new = d.year + year_delta
    month_new = month0_new + 1
    try:
        return d.replace(year=year_new, month=month_new)
    except ValueError:
        if not 1 <= year_new <= 9999:
            raise ValueError("Instant out of range")
        # only happens when we move to a month with fewer days
        return d.replace(
            year=year_new,
            month=month_new,
            day=days_in_month(year_new, month_new),
        )


def is_leap(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


# 1-indexed days per month
_MONTHDAYS = [0, 31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]


def days_in_month(year: int, month: int) -> int:
    return _MONTHDAYS[month] + (month == 2 and is_leap(year))


def truncate_to_minute(millis: int) -> int:
    return millis - millis % MILLIS_PER_MINUTE


def replace_millisecond(millis: int, ms: int) -> int:
    """Set the sub-second part of an epoch timestamp, carrying any overflow
    into the seconds (like the host timestamp type does)."""
    return millis - millis % 1_000 + ms
