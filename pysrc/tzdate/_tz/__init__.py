from .names import tz_name
from .offset import OffsetFormatMismatch, tz_offset
from .scan import Interval, Transition, tz_scan
from .store import UnrecognizedTimeZone

__all__ = [
    "tz_offset",
    "tz_name",
    "tz_scan",
    "Interval",
    "Transition",
    "UnrecognizedTimeZone",
    "OffsetFormatMismatch",
]
