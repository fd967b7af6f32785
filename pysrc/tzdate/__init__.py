from __future__ import annotations

import logging as _logging
from typing import Iterable as _Iterable

from ._tz import (
    Interval,
    OffsetFormatMismatch,
    Transition,
    UnrecognizedTimeZone,
    tz_name,
    tz_offset,
    tz_scan,
)
from ._tz.store import _clear_tz_cache, _clear_tz_cache_by_keys
from ._tzdate import TZDate

__version__ = "0.1.0"

__all__ = [
    "TZDate",
    "tz_offset",
    "tz_name",
    "tz_scan",
    "Interval",
    "Transition",
    "clear_tzcache",
    # Exceptions
    "UnrecognizedTimeZone",
    "OffsetFormatMismatch",
]

_logging.getLogger(__name__).addHandler(_logging.NullHandler())


def clear_tzcache(*, only_keys: _Iterable[str] | None = None) -> None:
    """Clear the caches of offset formatters and parsed offsets.
    If ``only_keys`` is provided, only the formatters for those
    keys will be cleared.

    Results never change after clearing, only the cost of the next lookups.
    Note that the standard library's ``zoneinfo`` keeps its own cache,
    which isn't affected.
    """
    if only_keys is None:
        _clear_tz_cache()
    else:
        _clear_tz_cache_by_keys(tuple(only_keys))
