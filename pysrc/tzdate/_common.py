from __future__ import annotations

from datetime import (
    datetime as _datetime,
    timedelta as _timedelta,
    timezone as _timezone,
)
from typing import Union

UTC = _timezone.utc
EPOCH = _datetime(1970, 1, 1, tzinfo=UTC)
EPOCH_NAIVE = EPOCH.replace(tzinfo=None)
EpochMillis = int

# Anything the module-level functions accept as a point in time
Instant = Union[EpochMillis, _datetime]

_ONE_MILLI = _timedelta(milliseconds=1)


def to_millis(t: Instant, /) -> EpochMillis:
    if isinstance(t, int) and not isinstance(t, bool):
        return t
    elif isinstance(t, _datetime):
        if t.tzinfo is None or t.utcoffset() is None:
            raise ValueError(f"Expected an aware datetime, got {t!r}")
        return (t - EPOCH) // _ONE_MILLI
    raise TypeError(
        f"Expected epoch milliseconds or an aware datetime, got {t!r}"
    )


def from_millis_utc(millis: EpochMillis, /) -> _datetime:
    """The aware UTC datetime for the given epoch milliseconds"""
    try:
        return EPOCH + _timedelta(milliseconds=millis)
    except OverflowError:
        raise ValueError("Instant out of range")


def naive_from_millis(millis: EpochMillis, /) -> _datetime:
    """Read epoch milliseconds as naive UTC calendar fields"""
    try:
        return EPOCH_NAIVE + _timedelta(milliseconds=millis)
    except OverflowError:
        raise ValueError("Instant out of range")


def naive_to_millis(d: _datetime, /) -> EpochMillis:
    return (d - EPOCH_NAIVE) // _ONE_MILLI
