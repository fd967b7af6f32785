import os
import os.path
import platform
from typing import Optional

SYSTEM = platform.system()
LOCALTIME = "/etc/localtime"

# Getting the system timezone key depends on the platform.
# On unix-like systems it's relatively straightforward.
# On other platforms, we use the tzlocal package.
# This keeps dependencies minimal for linux.
if SYSTEM in ("Linux", "Darwin"):  # pragma: no cover

    def _key_from_host() -> Optional[str]:
        tzif_path = os.path.realpath(LOCALTIME)
        if tzif_path == LOCALTIME:
            # If the file is not a symlink, we can't determine the tzid
            return None  # pragma: no cover
        return _tzid_from_path(tzif_path)

else:  # pragma: no cover
    import tzlocal

    def _key_from_host() -> Optional[str]:
        return tzlocal.get_localzone_name()


def _tzid_from_path(path: str) -> Optional[str]:
    """Find the IANA timezone ID from a path to a zoneinfo file.
    Returns None if the path is not in a zoneinfo directory.
    """
    # Find the path segment containing 'zoneinfo',
    # e.g. `zoneinfo/` or `zoneinfo.default/`
    if (index := path.find("/", path.rfind("zoneinfo"))) == -1:
        return None
    return path[index + 1 :] or None


def get_tz_key() -> Optional[str]:
    """Get the IANA key of the system timezone, or ``None`` if it can't be
    determined (e.g. ``TZ`` points to a file outside a zoneinfo directory).

    The ``TZ`` environment variable is read on every call, so changes to it
    take effect immediately.

    Note
    ----
    If ``TZ`` holds a POSIX TZ string instead of a key, it's returned as-is.
    Looking it up in the timezone database is left to the caller.
    """
    try:
        tz_env = os.environ["TZ"]
    except KeyError:  # pragma: no cover
        return _key_from_host()
    else:
        if tz_env.startswith(":"):
            tz_env = tz_env[1:]  # strip leading colon

        if os.path.isabs(tz_env):
            return _tzid_from_path(os.path.realpath(tz_env))
        # An empty TZ means UTC
        return tz_env or "UTC"
