"""
Stress tests for thread-safety of the offset caches.

Note this isn't a unit test, because it relies on a clean cache
"""

import sys
import time
from os import environ
from threading import Thread

from tzdate import TZDate, clear_tzcache, tz_offset

if not hasattr(sys, "_is_gil_enabled") or sys._is_gil_enabled():
    # Running with GIL enabled can still be useful to compare performance,
    # but be sure to warn that threading hasn't been stress tested.
    print("WARNING: Running with GIL enabled. Threading not stress tested.")


INSTANT = 1_718_452_800_000  # 2024-06-15 12:00 UTC
NUM_THREADS = 16
NUM_ITERATIONS = 500
TIMEZONE_SAMPLE = [
    "UTC",
    "America/Guyana",
    "Etc/GMT-11",
    "Europe/Vienna",
    "America/Rainy_River",
    "Asia/Ulaanbaatar",
    "US/Alaska",
    "America/Rankin_Inlet",
    "Arctic/Longyearbyen",
    "Pacific/Bougainville",
    "Africa/Monrovia",
    "Europe/Copenhagen",
    "America/Hermosillo",
    "Africa/Brazzaville",
    "Asia/Tashkent",
    "Pacific/Saipan",
    "Europe/Tallinn",
    "Asia/Kathmandu",
    "Africa/Nairobi",
    "America/Argentina/Ushuaia",
    "Brazil/Acre",
]
assert (
    len(TIMEZONE_SAMPLE) % NUM_THREADS
), "Timezone sample should not be evenly divisible by number of threads"
TZS = TIMEZONE_SAMPLE * (NUM_THREADS * NUM_ITERATIONS)
EXPECTED = {tz: tz_offset(tz, INSTANT) for tz in TIMEZONE_SAMPLE}


def touch_timezones(tzs):
    """Resolve offsets while other threads fill and clear the caches"""
    for n, tz in enumerate(tzs):
        if n % 1_000 == 0:
            clear_tzcache()
        d = TZDate(tz, INSTANT)
        assert -d.timezone_offset() == EXPECTED[tz], tz


def set_system_tz(tzs):
    """Resolve the system timezone while other threads change it"""
    for tz in tzs:
        environ["TZ"] = tz
        if hasattr(time, "tzset"):
            time.tzset()
        d = TZDate(None, INSTANT)
        del d


def main(func):
    print(f"Starting test: {func.__name__}")
    threads = []

    start_time = time.time()

    for n in range(NUM_THREADS):
        thread = Thread(target=func, args=(TZS[n::NUM_THREADS],))
        threads.append(thread)
        thread.start()

    for thread in threads:
        thread.join()

    end_time = time.time()
    print(f"Execution time: {end_time - start_time:.2f} seconds")


if __name__ == "__main__":
    main(touch_timezones)
    main(set_system_tz)
