import os
import time
from contextlib import contextmanager
from datetime import datetime as py_datetime, timezone as py_timezone
from unittest.mock import patch

import pytest

UTC = py_timezone.utc

needs_tzset = pytest.mark.skipif(
    not hasattr(time, "tzset"),
    reason="changing the system timezone requires time.tzset()",
)

# A sample of zones with whole-minute offsets since 1970, covering
# negative, half-hour, 45-minute, and southern hemisphere DST rules.
ZONE_SAMPLE = [
    "UTC",
    "America/New_York",
    "America/St_Johns",
    "America/Sao_Paulo",
    "Europe/Amsterdam",
    "Europe/London",
    "Asia/Kolkata",
    "Asia/Singapore",
    "Asia/Tokyo",
    "Australia/Lord_Howe",
    "Pacific/Chatham",
    "Asia/Kathmandu",
]


def utc_millis(*args: int) -> int:
    """Epoch milliseconds for the given UTC date and time fields"""
    return int(py_datetime(*args, tzinfo=UTC).timestamp()) * 1_000


class AlwaysEqual:
    def __eq__(self, _):
        return True


class NeverEqual:
    def __eq__(self, _):
        return False


@contextmanager
def system_tz(name):
    try:
        with patch.dict(os.environ, {"TZ": name}):
            time.tzset()
            yield
    finally:
        time.tzset()  # don't forget to reset the timezone after the patch!


@contextmanager
def system_tz_ams():
    with system_tz("Europe/Amsterdam"):
        yield


@contextmanager
def system_tz_nyc():
    with system_tz("America/New_York"):
        yield
