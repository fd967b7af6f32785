import logging
import pickle

import pytest

import tzdate
from tzdate import (
    OffsetFormatMismatch,
    TZDate,
    UnrecognizedTimeZone,
    clear_tzcache,
    tz_offset,
    tz_scan,
)


def test_exceptions():
    assert issubclass(UnrecognizedTimeZone, ValueError)
    assert issubclass(OffsetFormatMismatch, ValueError)


def test_exception_messages():
    assert str(UnrecognizedTimeZone.for_key("Foo/Bar")) == (
        "No time zone found for key: 'Foo/Bar'"
    )
    assert str(OffsetFormatMismatch.for_str("GMT")) == (
        "Expected an offset of the form ±HH:MM, got: 'GMT'"
    )


def test_exceptions_pickle():
    exc = pickle.loads(pickle.dumps(UnrecognizedTimeZone.for_key("Foo/Bar")))
    assert isinstance(exc, UnrecognizedTimeZone)
    assert "Foo/Bar" in str(exc)


def test_exports():
    for name in tzdate.__all__:
        assert hasattr(tzdate, name)
    assert TZDate.__module__.startswith("tzdate")


def test_version():
    assert isinstance(tzdate.__version__, str)


def test_library_logger_is_silent_by_default():
    handlers = logging.getLogger("tzdate").handlers
    assert any(isinstance(h, logging.NullHandler) for h in handlers)


class TestLogging:
    def test_formatter_creation(self, caplog):
        clear_tzcache()
        with caplog.at_level(logging.DEBUG, logger="tzdate"):
            tz_offset("Asia/Tokyo", 0)
            tz_offset("Asia/Tokyo", 1)
        messages = [r.getMessage() for r in caplog.records]
        assert messages == ["Created offset formatter for 'Asia/Tokyo'"]
        assert caplog.records[0].name == "tzdate._tz.store"

    def test_scan_narrowing(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="tzdate._tz.scan"):
            tz_scan(
                "Europe/Amsterdam",
                tzdate.Interval(1_704_067_200_000, 1_735_689_600_000),
            )
        assert len(caplog.records) == 2
        assert all(
            "Europe/Amsterdam" in r.getMessage() for r in caplog.records
        )

    def test_nothing_above_debug(self, caplog):
        clear_tzcache()
        with caplog.at_level(logging.DEBUG, logger="tzdate"):
            TZDate("Europe/Amsterdam", 0).format_iso()
            with pytest.raises(UnrecognizedTimeZone):
                TZDate("Nowhere/Special", 0)
        assert all(r.levelno == logging.DEBUG for r in caplog.records)
