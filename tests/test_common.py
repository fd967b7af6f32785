from datetime import datetime as py_datetime, timedelta as py_timedelta
from zoneinfo import ZoneInfo

import pytest

from tzdate._common import (
    from_millis_utc,
    naive_from_millis,
    naive_to_millis,
    to_millis,
)
from tzdate._math import (
    add_months,
    days_in_month,
    replace_millisecond,
    truncate_to_minute,
)

from .common import UTC


class TestToMillis:
    def test_int(self):
        assert to_millis(0) == 0
        assert to_millis(-1_234) == -1_234

    @pytest.mark.parametrize(
        "d, expected",
        [
            (py_datetime(1970, 1, 1, tzinfo=UTC), 0),
            (py_datetime(2024, 8, 13, tzinfo=UTC), 1_723_507_200_000),
            (
                py_datetime(2024, 8, 13, 8, tzinfo=ZoneInfo("Asia/Singapore")),
                1_723_507_200_000,
            ),
            # sub-millisecond precision is floored
            (py_datetime(1970, 1, 1, 0, 0, 0, 1_999, tzinfo=UTC), 1),
            (py_datetime(1969, 12, 31, 23, 59, 59, 999_500, tzinfo=UTC), -1),
        ],
    )
    def test_aware_datetime(self, d, expected):
        assert to_millis(d) == expected

    def test_naive_datetime(self):
        with pytest.raises(ValueError, match="aware"):
            to_millis(py_datetime(2024, 8, 13))

    @pytest.mark.parametrize("t", [True, 1.0, "0", None, object()])
    def test_invalid(self, t):
        with pytest.raises(TypeError, match="epoch milliseconds"):
            to_millis(t)


def test_from_millis_utc():
    assert from_millis_utc(0) == py_datetime(1970, 1, 1, tzinfo=UTC)
    assert from_millis_utc(-1) == py_datetime(
        1969, 12, 31, 23, 59, 59, 999_000, tzinfo=UTC
    )
    with pytest.raises(ValueError, match="range"):
        from_millis_utc(10**18)


def test_naive_millis():
    d = naive_from_millis(1_723_507_200_123)
    assert d == py_datetime(2024, 8, 13, 0, 0, 0, 123_000)
    assert d.tzinfo is None
    assert naive_to_millis(d) == 1_723_507_200_123
    assert naive_to_millis(d + py_timedelta(microseconds=999)) == (
        1_723_507_200_123
    )
    with pytest.raises(ValueError, match="range"):
        naive_from_millis(-(10**18))


class TestAddMonths:
    @pytest.mark.parametrize(
        "d, months, expected",
        [
            (py_datetime(2024, 1, 15), 1, py_datetime(2024, 2, 15)),
            (py_datetime(2024, 1, 31), 1, py_datetime(2024, 2, 29)),
            (py_datetime(2023, 1, 31), 1, py_datetime(2023, 2, 28)),
            (py_datetime(2024, 1, 31), 2, py_datetime(2024, 3, 31)),
            (py_datetime(2024, 1, 31), 13, py_datetime(2025, 2, 28)),
            (py_datetime(2024, 3, 31), -1, py_datetime(2024, 2, 29)),
            (
                py_datetime(2024, 12, 1, 4, 30),
                1,
                py_datetime(2025, 1, 1, 4, 30),
            ),
            (py_datetime(2024, 1, 1), -1, py_datetime(2023, 12, 1)),
            (py_datetime(2024, 5, 31), 0, py_datetime(2024, 5, 31)),
        ],
    )
    def test_examples(self, d, months, expected):
        assert add_months(d, months) == expected

    @pytest.mark.parametrize(
        "d, months",
        [(py_datetime(9999, 12, 1), 1), (py_datetime(1, 1, 31), -1)],
    )
    def test_out_of_range(self, d, months):
        with pytest.raises(ValueError, match="range"):
            add_months(d, months)


@pytest.mark.parametrize(
    "year, month, expected",
    [
        (2024, 2, 29),
        (2023, 2, 28),
        (1900, 2, 28),
        (2000, 2, 29),
        (2024, 4, 30),
        (2024, 12, 31),
    ],
)
def test_days_in_month(year, month, expected):
    assert days_in_month(year, month) == expected


@pytest.mark.parametrize(
    "millis, expected",
    [
        (0, 0),
        (59_999, 0),
        (60_000, 60_000),
        (-1, -60_000),
        (-60_000, -60_000),
    ],
)
def test_truncate_to_minute(millis, expected):
    assert truncate_to_minute(millis) == expected


@pytest.mark.parametrize(
    "millis, ms, expected",
    [
        (1_999, 5, 1_005),
        (1_000, 999, 1_999),
        (1_000, 1_000, 2_000),
        (1_000, 1_500, 2_500),
        (1_000, -1, 999),
        (-1, 0, -1_000),
        (0, -86_400_000, -86_400_000),
    ],
)
def test_replace_millisecond(millis, ms, expected):
    assert replace_millisecond(millis, ms) == expected
