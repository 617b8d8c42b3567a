from datetime import date, datetime
import logging
import re
import zoneinfo

from . import config

logger = logging.getLogger(__name__)

# English month names, lowercase, index + 1 == month number
MONTHS_EN = [
    'january', 'february', 'march', 'april', 'may', 'june',
    'july', 'august', 'september', 'october', 'november', 'december',
]


def today_local(tz_name: str | None = None) -> date:
    """Return today's calendar date in the named zone (default
    config.DEFAULT_TIMEZONE). Falls back to the server's local date when the
    zone is unknown."""
    name = tz_name or config.DEFAULT_TIMEZONE
    try:
        tz = zoneinfo.ZoneInfo(name)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError):
        logger.exception("failed to find timezone %s", name)
        return date.today()
    return datetime.now(tz).date()


def coerce_reference_date(value) -> date:
    """Normalize a caller supplied reference day to a plain date.

    - None -> today in the configured timezone
    - datetime -> its calendar date (time of day dropped)
    - date -> unchanged
    - 'YYYY-MM-DD...' string -> parsed date
    Anything else falls back to today.
    """
    if value is None:
        return today_local()
    # datetime is a subclass of date; check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            logger.warning("ignoring unparseable reference date %r", value)
    return today_local()


def ymd(year: int, month: int, day: int) -> str:
    """Format a date-only YYYY-MM-DD string without building a date object,
    so out-of-calendar days like Feb 30 pass through unchanged."""
    return f"{int(year):04d}-{int(month):02d}-{int(day):02d}"


def collapse_whitespace(text: str | None) -> str:
    if not text:
        return ''
    return re.sub(r"\s+", " ", text).strip()


def strip_html(html: str | None) -> str:
    """Drop tags and normalize whitespace; good enough for rich-text note bodies."""
    if not html:
        return ''
    return collapse_whitespace(re.sub(r"<[^>]*>", " ", html))


_TIME_TOKEN_RE = re.compile(
    r"\b\d{1,2}:\d{2}\b"
    r"|\b\d{1,2}\s*(?:am|pm|a\.m\.|p\.m\.)(?![a-z])"
    r"|\b(?:noon|midnight)\b",
    re.IGNORECASE,
)


def contains_time_token(s: str | None) -> bool:
    """Return True if s names a time of day (e.g. '9am', '3 pm', '17:30', 'noon')."""
    if not s:
        return False
    return bool(_TIME_TOKEN_RE.search(s))
