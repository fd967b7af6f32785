"""Finding the instants at which a timezone's UTC offset changes."""

from __future__ import annotations

import logging
from datetime import datetime as _datetime
from typing import Iterable, Iterator, NamedTuple, Optional

from .._common import (
    EpochMillis,
    Instant,
    from_millis_utc,
    naive_from_millis,
    naive_to_millis,
    to_millis,
)
from .._math import (
    MILLIS_PER_DAY,
    MILLIS_PER_HOUR,
    add_months,
    truncate_to_minute,
)
from .offset import tz_offset

__all__ = ["Interval", "Transition", "tz_scan"]

_logger = logging.getLogger(__name__)


class Interval(NamedTuple):
    """A half-open range of time ``[start, end)``.
    Bounds are epoch milliseconds or aware datetimes."""

    start: Instant
    end: Instant


class Transition(NamedTuple):
    """A change in UTC offset, as found by :func:`tz_scan`"""

    instant: EpochMillis
    """The first hour mark at which the new offset applies"""
    delta: int
    """The new offset minus the old one, in minutes"""
    offset: int
    """The new offset, in minutes"""

    def py_datetime(self) -> _datetime:
        """The instant as an aware UTC datetime"""
        return from_millis_utc(self.instant)


def tz_scan(tz: Optional[str], interval: Interval, /) -> list[Transition]:
    """Find all UTC offset changes of the timezone within the interval.

    The search narrows down from months to days to hours, so its cost
    grows with the number of months in the interval, plus a bit extra for
    each month that actually contains a change.

    Example
    -------
    >>> tz_scan(
    ...     "America/New_York",
    ...     Interval(
    ...         datetime(2024, 3, 1, tzinfo=UTC),
    ...         datetime(2024, 4, 1, tzinfo=UTC),
    ...     ),
    ... )
    [Transition(instant=1710054000000, delta=60, offset=-240)]

    Attention
    ---------
    Changes are located to the hour mark (counted from the interval start)
    that first observes the new offset. Changes at sub-hour boundaries
    are therefore reported at the next hour mark, and an offset change
    that is undone within the same month goes unnoticed.

    A start that isn't on a whole hour shifts every mark. Then even
    changes on whole hours are reported late, at an instant where the
    offset one millisecond earlier is already the new one. With an
    hour-aligned start, changes on whole hours are reported exactly.
    """
    start = truncate_to_minute(to_millis(interval.start))
    end = truncate_to_minute(to_millis(interval.end))

    changes: list[Transition] = []
    months = _walk(tz, start, tz_offset(tz, start), _month_marks(start, end))
    for month_start, month_end, month_offset, _ in months:
        _logger.debug(
            "Offset of %r changes between %d and %d",
            tz,
            month_start,
            month_end,
        )
        days = _walk(
            tz,
            month_start,
            month_offset,
            _fixed_marks(month_start, month_end, MILLIS_PER_DAY),
        )
        for day_start, day_end, day_offset, _ in days:
            hours = _walk(
                tz,
                day_start,
                day_offset,
                _fixed_marks(day_start, day_end, MILLIS_PER_HOUR),
            )
            for _, hour, before, after in hours:
                if hour < end:
                    changes.append(Transition(hour, after - before, after))
    return changes


def _walk(
    tz: Optional[str],
    first: EpochMillis,
    first_offset: int,
    marks: Iterable[EpochMillis],
) -> Iterator[tuple[EpochMillis, EpochMillis, int, int]]:
    """Step through the marks, yielding
    ``(prev_mark, mark, prev_offset, offset)`` wherever the offset differs
    from the one at the previous mark."""
    prev_mark, prev_offset = first, first_offset
    for mark in marks:
        offset = tz_offset(tz, mark)
        if offset != prev_offset:
            yield prev_mark, mark, prev_offset, offset
        prev_mark, prev_offset = mark, offset


def _month_marks(
    start: EpochMillis, end: EpochMillis
) -> Iterator[EpochMillis]:
    # Months are always counted from the start to prevent the day
    # drifting after clamping (e.g. Jan 31 -> Feb 29 -> Mar 29).
    start_fields = naive_from_millis(start)
    months = 0
    mark = start
    while mark < end:
        months += 1
        mark = min(naive_to_millis(add_months(start_fields, months)), end)
        yield mark


def _fixed_marks(
    start: EpochMillis, end: EpochMillis, step: int
) -> Iterator[EpochMillis]:
    return (min(m, end) for m in range(start + step, end + step, step))
