"""Timezone display names and locale-aware zone lookup, backed by babel."""

from __future__ import annotations

from datetime import datetime as _datetime, tzinfo as _tzinfo
from typing import Optional

from babel.core import Locale, default_locale
from babel.dates import get_timezone, get_timezone_name

from .._common import (
    EpochMillis,
    Instant,
    from_millis_utc,
    naive_to_millis,
    to_millis,
)
from . import system
from .offset import tz_offset
from .store import UnrecognizedTimeZone, get_formatter, validate_tzid

__all__ = [
    "tz_name",
    "display_zone",
    "system_zone",
    "resolve_locale",
    "NAME_LOCALE",
]

# Zone names in the host-style string representations are always English,
# independent of the user's locale.
NAME_LOCALE = "en"
_FALLBACK_LOCALE = "en_US"


def tz_name(
    tz: Optional[str], t: Instant, /, locale: Locale | str | None = None
) -> str:
    """The long display name of the timezone as observed at the given instant.
    Zones with DST have distinct names for standard and daylight time.

    Example
    -------
    >>> tz_name("America/New_York", datetime(2024, 7, 1, tzinfo=UTC))
    'Eastern Daylight Time'
    >>> tz_name("Europe/Berlin", datetime(2024, 1, 1, tzinfo=UTC), "de")
    'Mitteleuropäische Normalzeit'
    """
    millis = to_millis(t)
    zone = system_zone() if tz is None else display_zone(tz, millis)
    if zone is None:
        # Without a known key there's no entry in the name database.
        # The host's abbreviation is the best we can do.
        return get_formatter(None).localize(millis).tzname() or ""
    return get_timezone_name(
        from_millis_utc(millis).astimezone(zone),
        width="long",
        locale=locale or NAME_LOCALE,
        zone_variant=_zone_variant(tz, millis),
    )


def display_zone(tz: Optional[str], millis: EpochMillis) -> _tzinfo:
    """The timezone to render the instant in.
    For ``None``, the system timezone is looked up by its key if possible.
    Otherwise, the host's local offset at the instant is used."""
    if tz is None:
        if (zone := system_zone()) is not None:
            return zone
        local = get_formatter(None).localize(millis).tzinfo
        assert local is not None
        return local
    try:
        return get_timezone(validate_tzid(tz))
    except LookupError as e:
        raise UnrecognizedTimeZone.for_key(tz) from e


def system_zone() -> Optional[_tzinfo]:
    """The babel timezone for the system timezone's key,
    or ``None`` if there's no key the name database knows."""
    if (key := system.get_tz_key()) is None:
        return None
    try:
        return get_timezone(key)
    except (LookupError, ValueError):
        # e.g. a POSIX TZ string instead of a key
        return None


def _zone_variant(tz: Optional[str], millis: EpochMillis) -> str:
    # DST flags can't be trusted to pick the name: some zones
    # (e.g. Europe/Dublin) model winter as negative DST.
    # The smaller of the mid-January and mid-July offsets is standard time.
    year = from_millis_utc(millis).year
    standard = min(
        tz_offset(tz, naive_to_millis(_datetime(year, month, 15)))
        for month in (1, 7)
    )
    return "daylight" if tz_offset(tz, millis) > standard else "standard"


def resolve_locale(locale: Locale | str | None) -> Locale | str:
    return locale or default_locale("LC_TIME") or _FALLBACK_LOCALE
