"""Runtime configuration for the conshus text helpers.

Values are read once from environment variables so a deployment can change
them without code changes. The heuristics only ever read these constants.
"""
import os


def _trueish(v: str | None) -> bool:
    if not v:
        return False
    return v.lower() in ('1', 'true', 'yes', 'on')


# IANA zone used to decide what "today" is when a caller does not pass a
# reference date. Year-less mentions like 'September 2nd' resolve against it.
DEFAULT_TIMEZONE = os.getenv('DEFAULT_TIMEZONE', 'America/Toronto')

# When false, analyze_entry skips the dateparser scan for date+time
# mentions and returns no appointments. Set ENABLE_APPOINTMENT_SEARCH=0 to
# disable (the scan is the slowest part of analysing an entry).
ENABLE_APPOINTMENT_SEARCH = _trueish(os.getenv('ENABLE_APPOINTMENT_SEARCH', '1'))

# Level applied to the console handler installed by the command line tool.
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()


# Optional local overrides: define variables in conshus/local_config.py to
# override the defaults above. Keep that file out of version control.
try:
    from .local_config import *  # type: ignore  # noqa: F401,F403
except ImportError:
    # No local overrides present; proceed with defaults.
    pass
