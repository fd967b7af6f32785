"""UTC offset resolution: from a formatted offset string to signed minutes."""

from __future__ import annotations

import re
from typing import Optional

from .._common import Instant, to_millis
from .store import cached_minutes, get_formatter, store_minutes

__all__ = ["tz_offset", "parse_offset", "OffsetFormatMismatch"]

# Historical local mean time offsets come with a seconds component,
# e.g. "+00:19:32" for Amsterdam before 1937.
_match_offset = re.compile(
    r"([+-])(\d{2}):(\d{2})(?::\d{2}(?:\.\d{1,6})?)?", re.ASCII
).fullmatch


def tz_offset(tz: Optional[str], t: Instant, /) -> int:
    """The UTC offset of the timezone at the given instant, in minutes.

    Positive offsets are east of UTC: they're *added* to the UTC time
    to get the local wall-clock time. A ``tz`` of ``None`` means the
    system timezone.

    Example
    -------
    >>> tz_offset("Asia/Singapore", datetime(2024, 8, 13, tzinfo=UTC))
    480
    >>> tz_offset("America/New_York", 1_710_054_000_000)
    -240

    Raises
    ------
    UnrecognizedTimeZone
        If the timezone ID is not known.
    OffsetFormatMismatch
        If the formatted offset isn't of the form ``±HH:MM``.
    """
    offset_str = get_formatter(tz).format(to_millis(t))
    minutes = cached_minutes(offset_str)
    if minutes is None:
        minutes = store_minutes(offset_str, parse_offset(offset_str))
    return minutes


def parse_offset(s: str, /) -> int:
    """Parse a ``±HH:MM`` offset into signed minutes.
    A seconds component is truncated toward zero."""
    if (match := _match_offset(s)) is None:
        raise OffsetFormatMismatch.for_str(s)
    sign, hrs, mins = match.groups()
    minutes = int(hrs) * 60 + int(mins)
    return -minutes if sign == "-" else minutes


class OffsetFormatMismatch(ValueError):
    """A formatted UTC offset didn't have the expected ``±HH:MM`` form"""

    @classmethod
    def for_str(cls, s: str) -> OffsetFormatMismatch:
        return cls(f"Expected an offset of the form ±HH:MM, got: {s!r}")
