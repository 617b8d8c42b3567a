"""Pull "important events" out of short directive sentences.

Handles text like:
  "Colton starts school on September 2nd"
  "Trip on Mar 3rd, 2027"
  "Dentist on 2025-09-02"

This is a heuristic, not a grammar. Arbitrary prose will often not match and
that is fine; callers store whatever comes back as ImportantEvent rows.
"""
from datetime import date, timedelta
import logging
import re

from .models import ExtractedEvent
from .utils import MONTHS_EN, coerce_reference_date, collapse_whitespace, ymd

logger = logging.getLogger(__name__)

MONTH_ABBR = {
    'jan': 'january', 'feb': 'february', 'mar': 'march', 'apr': 'april',
    'may': 'may', 'jun': 'june', 'jul': 'july', 'aug': 'august',
    'sep': 'september', 'sept': 'september', 'oct': 'october',
    'nov': 'november', 'dec': 'december',
}

# ASCII digits only; full-width or other script digits are not dates here
ISO_EVENT_RE = re.compile(r"(.*?)\s+on\s+([0-9]{4})-([0-9]{2})-([0-9]{2})\b", re.IGNORECASE)
NATURAL_EVENT_RE = re.compile(
    r"(.*?)\s+on\s+([A-Za-z]+)\s+([0-9]{1,2})(?:st|nd|rd|th)?(?:,\s*([0-9]{4}))?\b",
    re.IGNORECASE,
)


def month_to_index(name: str | None) -> int:
    """Map 'September', 'sep' or 'SEPT' to 9. Returns 0 for unknown names."""
    if not name:
        return 0
    s = name.strip().lower()
    full = MONTH_ABBR.get(s, s)
    try:
        return MONTHS_EN.index(full) + 1
    except ValueError:
        return 0


def choose_year_for(month: int, day: int, base_date=None) -> int:
    """Pick the year for a year-less month/day.

    Stay in the reference year when the day is today or later, otherwise roll
    forward one year: 'September 2nd' written in November means next year.
    The candidate is built by counting days from the first of the month, so
    February 30 lands on March 2 (or 1) for the comparison.
    """
    today = coerce_reference_date(base_date)
    try:
        candidate = date(today.year, month, 1) + timedelta(days=day - 1)
    except (ValueError, OverflowError):
        logger.debug("cannot place month=%r day=%r, keeping %s", month, day, today.year)
        return today.year
    if candidate >= today:
        return today.year
    return today.year + 1


def match_iso_event(text: str) -> ExtractedEvent | None:
    """'<title> on YYYY-MM-DD'. Out-of-range month/day suppresses the match."""
    m = ISO_EVENT_RE.search(text)
    if not m:
        return None
    title = collapse_whitespace(m.group(1))
    y, mo, d = int(m.group(2)), int(m.group(3)), int(m.group(4))
    if not title:
        return None
    if not (1 <= mo <= 12 and 1 <= d <= 31):
        logger.debug("ignoring out of range ISO date %s in %r", m.group(0), text)
        return None
    return ExtractedEvent(title=title, date=ymd(y, mo, d))


def match_natural_event(text: str, base_date=None) -> ExtractedEvent | None:
    """'<title> on <Month> <day>[st|nd|rd|th][, <year>]'."""
    m = NATURAL_EVENT_RE.search(text)
    if not m:
        return None
    title = collapse_whitespace(m.group(1))
    month = month_to_index(m.group(2))
    day = int(m.group(3))
    if not title or not month or not (1 <= day <= 31):
        return None
    if m.group(4):
        year = int(m.group(4))
    else:
        year = choose_year_for(month, day, base_date)
    return ExtractedEvent(title=title, date=ymd(year, month, day))


def extract_important_events(text: str | None, base_date: date | None = None) -> list[ExtractedEvent]:
    """Return the events found in text, ISO pattern first, then the natural one.

    Each pattern contributes at most one event. Results are de-duplicated on
    (lowercased title, date); the first one wins. No match returns [].
    """
    if not text or not isinstance(text, str):
        return []
    found = [match_iso_event(text), match_natural_event(text, base_date)]
    seen: set[tuple[str, str]] = set()
    out: list[ExtractedEvent] = []
    for ev in found:
        if ev is None:
            continue
        key = (ev.title.lower(), ev.date)
        if key in seen:
            continue
        seen.add(key)
        out.append(ev)
    return out
