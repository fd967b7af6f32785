# The MIT License (MIT)
#
# Copyright (c) The tzdate authors
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

# Maintainer's notes:
#
# - A TZDate is mutable, like the host timestamp types it mimics.
#   The "shadow" datetime holds the local calendar fields and is only ever
#   written by `_sync()`. Every method that changes the instant or the zone
#   must end with a call to it.
# - Getters read the shadow, they never resolve offsets themselves.
from __future__ import annotations

from datetime import datetime as _datetime, tzinfo as _tzinfo
from email.utils import format_datetime as _format_rfc2822
from time import time_ns
from typing import Optional, Union

from babel.core import Locale
from babel.dates import format_date, format_datetime, format_time

from ._common import (
    EpochMillis,
    from_millis_utc,
    naive_from_millis,
    to_millis,
)
from ._math import MILLIS_PER_MINUTE, replace_millisecond
from ._tz.names import display_zone, resolve_locale, tz_name
from ._tz.offset import tz_offset
from ._tz.store import get_formatter

__all__ = ["TZDate"]

_LocaleArg = Union[Locale, str, None]
# A babel format: one of "full", "long", "medium", "short" or a CLDR pattern
_Format = str


class TZDate:
    """An exact point in time, which reports its calendar fields
    as observed in a given timezone.

    The timezone is an IANA timezone ID, or ``None`` for the system timezone.
    Unlike ``datetime``, instances are mutable: changing the instant
    (e.g. with :meth:`set_milliseconds`) updates all fields.

    Example
    -------
    >>> d = TZDate("Asia/Singapore", 1_723_507_200_000)
    >>> d.hour
    8
    >>> d.format_iso()
    '2024-08-13T08:00:00.000+08:00'
    >>> d.with_time_zone("America/New_York").format_iso()
    '2024-08-12T20:00:00.000-04:00'

    Attention
    ---------
    An unknown timezone ID raises :class:`UnrecognizedTimeZone` as soon
    as the offset is first resolved, which already happens during
    construction.
    """

    __slots__ = ("_millis", "_tz", "_shadow", "_offset")

    _millis: EpochMillis
    _tz: Optional[str]
    # Instant + offset, read as UTC fields. Always naive.
    _shadow: _datetime
    # The offset (in minutes, east-positive) the shadow was derived with
    _offset: int

    def __init__(
        self, time_zone: Optional[str] = None, millis: Optional[int] = None
    ) -> None:
        if time_zone is not None and not isinstance(time_zone, str):
            raise TypeError(
                f"time_zone must be a str or None, got {time_zone!r}"
            )
        if millis is None:
            millis = time_ns() // 1_000_000
        elif not isinstance(millis, int) or isinstance(millis, bool):
            raise TypeError("millis must be an integer")
        self._tz = time_zone
        self._sync(millis)

    @classmethod
    def now(cls, time_zone: Optional[str] = None, /) -> TZDate:
        """Create an instance from the current time in the given timezone."""
        return cls(time_zone)

    @classmethod
    def from_py_datetime(
        cls, d: _datetime, /, time_zone: Optional[str] = None
    ) -> TZDate:
        """Create an instance from an aware standard library ``datetime``.

        If ``time_zone`` isn't given, the key of a ``ZoneInfo`` tzinfo
        is used. Other tzinfo types fall back to the system timezone.

        The inverse of the ``to_py_datetime()`` method.
        """
        if d.tzinfo is None or d.utcoffset() is None:
            raise ValueError(
                "Can only create TZDate from an aware datetime, "
                f"got datetime with tzinfo={d.tzinfo!r}"
            )
        if time_zone is None:
            time_zone = getattr(d.tzinfo, "key", None)
        return cls(time_zone, to_millis(d))

    # ------------------------------------------------------------------
    # fields
    # ------------------------------------------------------------------

    @property
    def time_zone(self) -> Optional[str]:
        """The timezone ID, or ``None`` for the system timezone"""
        return self._tz

    @property
    def year(self) -> int:
        return self._shadow.year

    @property
    def month(self) -> int:
        """The month, from 1 (January) to 12 (December)"""
        return self._shadow.month

    @property
    def day(self) -> int:
        return self._shadow.day

    @property
    def hour(self) -> int:
        return self._shadow.hour

    @property
    def minute(self) -> int:
        return self._shadow.minute

    @property
    def second(self) -> int:
        return self._shadow.second

    @property
    def millisecond(self) -> int:
        return self._shadow.microsecond // 1_000

    def timestamp_millis(self) -> EpochMillis:
        """The UNIX timestamp in milliseconds. This is the exact instant,
        independent of the timezone."""
        return self._millis

    def timestamp(self) -> int:
        """The UNIX timestamp in whole seconds, rounded down"""
        return self._millis // 1_000

    # ------------------------------------------------------------------
    # mutation
    # ------------------------------------------------------------------

    def set_time(self, millis: int, /) -> int:
        """Move to a different instant, given in epoch milliseconds.
        Returns the new timestamp."""
        if not isinstance(millis, int) or isinstance(millis, bool):
            raise TypeError("millis must be an integer")
        self._sync(millis)
        return self._millis

    def set_milliseconds(self, ms: int, /) -> int:
        """Replace the millisecond part of the instant.

        Values outside 0-999 carry over into the seconds, so ``1500``
        moves to half a second into the next second.
        Returns the resulting millisecond field.

        Note
        ----
        No zone has an offset with sub-second precision, so setting the
        milliseconds in UTC or in local time is the same thing.
        """
        if not isinstance(ms, int) or isinstance(ms, bool):
            raise TypeError("ms must be an integer")
        self._sync(replace_millisecond(self._millis, ms))
        return self.millisecond

    set_utc_milliseconds = set_milliseconds

    # ------------------------------------------------------------------
    # timezones
    # ------------------------------------------------------------------

    def with_time_zone(self, time_zone: Optional[str], /) -> TZDate:
        """A new instance at the same instant, in a different timezone.
        This instance is left unchanged."""
        return TZDate(time_zone, self._millis)

    def timezone_offset(self) -> int:
        """The difference in minutes between UTC and the local time.

        Note the sign: it's *positive* for zones behind (west of) UTC,
        like ``Date.getTimezoneOffset()`` in JavaScript.

        >>> TZDate("America/New_York", 1_723_507_200_000).timezone_offset()
        240
        """
        return -self._offset

    def to_py_datetime(self) -> _datetime:
        """Convert to an aware standard library ``datetime``.

        For a named timezone, the tzinfo is a ``ZoneInfo``.
        For the system timezone, it's a fixed offset.
        """
        return get_formatter(self._tz).localize(self._millis)

    # ------------------------------------------------------------------
    # formatting
    # ------------------------------------------------------------------

    def format_iso(self) -> str:
        """Format as ``YYYY-MM-DDTHH:MM:SS.sss±HH:MM``.

        The offset is always numeric: UTC is written as ``+00:00``,
        never ``Z``.
        """
        sign, hours, minutes = self._offset_parts()
        return (
            self._shadow.isoformat(timespec="milliseconds")
            + f"{sign}{hours}:{minutes}"
        )

    def to_string(self) -> str:
        """Format like the host timestamp type does, e.g.
        ``Tue Aug 13 2024 08:00:00 GMT+0800 (Singapore Standard Time)``"""
        return f"{self.date_string()} {self.time_string()}"

    __str__ = to_string

    def date_string(self) -> str:
        """Format the date part like ``Tue Aug 13 2024``.
        Names are always English."""
        # RFC 2822 ("Tue, 13 Aug 2024 08:00:00 -0000") has locale-independent
        # names, so we use it as a basis.
        weekday, day, month, year, *_ = _format_rfc2822(self._shadow).split()
        return f"{weekday[:-1]} {month} {day} {year}"

    def time_string(self) -> str:
        """Format the time part,
        like ``08:00:00 GMT+0800 (Singapore Standard Time)``.
        Zone names are always English."""
        sign, hours, minutes = self._offset_parts()
        return (
            f"{self._shadow:%H:%M:%S} GMT{sign}{hours}{minutes} "
            f"({tz_name(self._tz, self._millis)})"
        )

    def format_locale(
        self,
        locale: _LocaleArg = None,
        format: _Format = "medium",
        *,
        tzinfo: Union[_tzinfo, str, None] = None,
    ) -> str:
        """Format the date and time according to the locale, using babel.

        The instance's timezone is used unless ``tzinfo`` is given.
        The locale defaults to the one set in the environment (``LC_TIME``).

        >>> d = TZDate("Europe/Paris", 1_723_507_200_000)
        >>> d.format_locale("fr_FR", "short")
        '13/08/2024 02:00'
        """
        return format_datetime(
            self._py_utc(),
            format,
            tzinfo=self._display_zone(tzinfo),
            locale=resolve_locale(locale),
        )

    def format_locale_date(
        self,
        locale: _LocaleArg = None,
        format: _Format = "medium",
        *,
        tzinfo: Union[_tzinfo, str, None] = None,
    ) -> str:
        """Format the date according to the locale, using babel.

        See :meth:`format_locale` for the arguments.
        """
        return format_date(
            # babel doesn't convert dates to a timezone, so we do it here
            self._py_utc().astimezone(self._display_zone(tzinfo)),
            format,
            locale=resolve_locale(locale),
        )

    def format_locale_time(
        self,
        locale: _LocaleArg = None,
        format: _Format = "medium",
        *,
        tzinfo: Union[_tzinfo, str, None] = None,
    ) -> str:
        """Format the time according to the locale, using babel.

        See :meth:`format_locale` for the arguments.
        """
        return format_time(
            self._py_utc(),
            format,
            tzinfo=self._display_zone(tzinfo),
            locale=resolve_locale(locale),
        )

    def __repr__(self) -> str:
        return f"TZDate({self.format_iso()}[{self._tz or '<local>'}])"

    # ------------------------------------------------------------------
    # comparison
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        """Compare the instants, regardless of timezone.
        Use :meth:`exact_eq` to also compare the timezone."""
        if not isinstance(other, TZDate):
            return NotImplemented
        return self._millis == other._millis

    # Instances are mutable
    __hash__ = None  # type: ignore[assignment]

    def __lt__(self, other: TZDate) -> bool:
        if not isinstance(other, TZDate):
            return NotImplemented
        return self._millis < other._millis

    def __le__(self, other: TZDate) -> bool:
        if not isinstance(other, TZDate):
            return NotImplemented
        return self._millis <= other._millis

    def __gt__(self, other: TZDate) -> bool:
        if not isinstance(other, TZDate):
            return NotImplemented
        return self._millis > other._millis

    def __ge__(self, other: TZDate) -> bool:
        if not isinstance(other, TZDate):
            return NotImplemented
        return self._millis >= other._millis

    def exact_eq(self, other: TZDate, /) -> bool:
        """Whether both the instant and the timezone are equal.
        Comparing with other types raises ``TypeError``."""
        if not isinstance(other, TZDate):
            raise TypeError("Cannot compare different types")
        return self._millis == other._millis and self._tz == other._tz

    def __reduce__(self) -> tuple[object, ...]:
        return (TZDate, (self._tz, self._millis))

    # ------------------------------------------------------------------
    # private
    # ------------------------------------------------------------------

    def _sync(self, millis: EpochMillis) -> None:
        # Nothing is assigned until resolution succeeded, so a failure
        # leaves the instance as it was.
        offset = tz_offset(self._tz, millis)
        shadow = naive_from_millis(millis + offset * MILLIS_PER_MINUTE)
        self._millis, self._offset, self._shadow = millis, offset, shadow

    def _offset_parts(self) -> tuple[str, str, str]:
        offset = self.timezone_offset()
        sign = "-" if offset > 0 else "+"
        hours, minutes = divmod(abs(offset), 60)
        return sign, f"{hours:02d}", f"{minutes:02d}"

    def _py_utc(self) -> _datetime:
        return from_millis_utc(self._millis)

    def _display_zone(self, tzinfo: Union[_tzinfo, str, None]) -> _tzinfo:
        if tzinfo is None:
            return display_zone(self._tz, self._millis)
        elif isinstance(tzinfo, str):
            return display_zone(tzinfo, self._millis)
        return tzinfo
