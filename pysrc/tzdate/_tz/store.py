"""Offset formatter lookup and caching."""

from __future__ import annotations

import logging
from datetime import datetime as _datetime, tzinfo as _tzinfo
from typing import NewType, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .._common import EpochMillis, from_millis_utc

__all__ = [
    "UnrecognizedTimeZone",
    "OffsetFormatter",
    "get_formatter",
    "cached_minutes",
    "store_minutes",
    "validate_tzid",
    "_clear_tz_cache",
    "_clear_tz_cache_by_keys",
]

_logger = logging.getLogger(__name__)

# Both caches grow with the number of distinct zones and offset strings
# seen. Real-world data keeps these in the low hundreds, so they're never
# evicted, only cleared on request.
#
# Concurrency note: we accept the possibility of multiple threads
# filling the same entry at the same time, since entries are pure functions
# of their keys. Whichever entry lands first is kept.
_formatter_cache: dict[Optional[str], OffsetFormatter] = {}
_minutes_cache: dict[str, int] = {}


def _clear_tz_cache() -> None:
    _formatter_cache.clear()
    _minutes_cache.clear()


def _clear_tz_cache_by_keys(keys: tuple[str, ...]) -> None:
    for k in keys:
        _formatter_cache.pop(k, None)


class OffsetFormatter:
    """Renders the UTC offset of a zone at a given instant as ``±HH:MM``.

    A ``key`` of ``None`` stands for the host's local zone, whose rules are
    applied through ``datetime.astimezone()``.
    """

    __slots__ = ("key", "_zone")

    key: Optional[str]
    _zone: Optional[_tzinfo]

    def __init__(self, key: Optional[str], zone: Optional[_tzinfo]):
        self.key = key
        self._zone = zone

    def localize(self, millis: EpochMillis) -> _datetime:
        """The aware datetime of the instant, as observed in the zone"""
        try:
            return from_millis_utc(millis).astimezone(self._zone)
        except (OverflowError, OSError):
            # astimezone() can overflow at the edges of the datetime range,
            # and the host's localtime() may reject far-away instants.
            raise ValueError("Instant out of range")

    def format(self, millis: EpochMillis) -> str:
        # Characters 0-15 are "YYYY-MM-DDTHH:MM", the rest is the offset.
        return self.localize(millis).isoformat(timespec="minutes")[16:]

    def __repr__(self) -> str:
        return f"OffsetFormatter({self.key!r})"


def get_formatter(key: Optional[str]) -> OffsetFormatter:
    try:
        return _formatter_cache[key]
    except KeyError:
        pass
    if key is None:
        formatter = OffsetFormatter(None, None)
    else:
        formatter = OffsetFormatter(key, _load_zone(validate_tzid(key)))
    _logger.debug("Created offset formatter for %r", key)
    return _formatter_cache.setdefault(key, formatter)


def cached_minutes(offset_str: str) -> Optional[int]:
    return _minutes_cache.get(offset_str)


def store_minutes(offset_str: str, minutes: int) -> int:
    return _minutes_cache.setdefault(offset_str, minutes)


def validate_tzid(key: str) -> SafeTzId:
    """Checks for invalid characters and path traversal in the key."""
    if not isinstance(key, str):
        raise TypeError(f"time zone must be a str or None, got {key!r}")
    if (
        key.isascii()
        # There's no standard limit on IANA tz IDs, but we have to draw
        # the line somewhere to prevent abuse.
        and 0 < len(key) < 100
        and all(b.isalnum() or b in "-_+/." for b in key)
        # specific sequences not allowed
        and ".." not in key
        and "//" not in key
        and "/./" not in key
        # specific restrictions on the first and list characters
        and key[0] not in ".-+/"
        and key[-1] != "/"
    ):
        return SafeTzId(key)
    else:
        raise UnrecognizedTimeZone.for_key(key)


# Alias for a TZ key that has been confirmed not to be a path traversal
# or contain other "bad" characters.
SafeTzId = NewType("SafeTzId", str)


def _load_zone(key: SafeTzId) -> ZoneInfo:
    try:
        return ZoneInfo(key)
    # Several exceptions amount to "can't find the key"
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise UnrecognizedTimeZone.for_key(key) from e


class UnrecognizedTimeZone(ValueError):
    """A timezone with the given ID is not known to the timezone database"""

    @classmethod
    def for_key(cls, key: str) -> UnrecognizedTimeZone:
        return cls(f"No time zone found for key: {key!r}")
