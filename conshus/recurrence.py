"""Recurrence phrases -> RRULE strings, and RRULE expansion over a date window.

parse_repeat() understands the phrasing people type into task titles
('every other week', 'every mon & thu', 'every last friday of the month',
'june 5 every year'). Occurrence math is delegated to dateutil.rrule.
All dates here are date-only; no timezones.
"""
from datetime import date, datetime
import logging
import re

from dateutil import rrule as _rrule

from .models import RepeatRule
from .utils import MONTHS_EN, coerce_reference_date

logger = logging.getLogger(__name__)

FREQ_BY_UNIT = {'day': 'DAILY', 'week': 'WEEKLY', 'month': 'MONTHLY', 'year': 'YEARLY'}
FREQ_MAP = {'DAILY': _rrule.DAILY, 'WEEKLY': _rrule.WEEKLY, 'MONTHLY': _rrule.MONTHLY, 'YEARLY': _rrule.YEARLY}
WEEKDAY_MAP = {
    'MO': _rrule.MO, 'TU': _rrule.TU, 'WE': _rrule.WE, 'TH': _rrule.TH,
    'FR': _rrule.FR, 'SA': _rrule.SA, 'SU': _rrule.SU,
}
# three-letter prefix -> RRULE code
WEEKDAY_PREFIX = {'sun': 'SU', 'mon': 'MO', 'tue': 'TU', 'wed': 'WE', 'thu': 'TH', 'fri': 'FR', 'sat': 'SA'}
ORDINALS = {'first': 1, 'second': 2, 'third': 3, 'fourth': 4, 'last': -1}

_WD = r"(?:mon|tue|wed|thu|thur|fri|sat|sun|monday|tuesday|wednesday|thursday|friday|saturday|sunday)"
_MONTHS = '|'.join(MONTHS_EN)

EVERY_WEEKDAYS_RE = re.compile(r"\bevery\s+(" + _WD + r"(?:[^a-z]+" + _WD + r")*)\b")
ORDINAL_WEEKDAY_RE = re.compile(r"\bevery\s+(first|second|third|fourth|last)\s+(" + _WD + r")(?:\s+of\s+the\s+month)?\b")
MONTHDAY_RE = re.compile(r"\bevery\s+month\s+(?:on\s+)?the\s+(\d{1,2})(?:st|nd|rd|th)?\b")
DATE_THEN_EVERY_YEAR_RE = re.compile(r"\b(" + _MONTHS + r")\s+(\d{1,2})(?:st|nd|rd|th)?\b.*\bevery\s+year\b")
EVERY_YEAR_ON_RE = re.compile(r"\bevery\s+year\s+on\s+(" + _MONTHS + r")\s+(\d{1,2})(?:st|nd|rd|th)?\b")


def _weekday_code(token: str) -> str | None:
    return WEEKDAY_PREFIX.get(token.strip()[:3].lower())


def _collect_weekdays(list_str: str) -> list[str]:
    # 'monday, wednesday and friday' -> ['MO', 'WE', 'FR']
    out: list[str] = []
    for part in re.split(r"[,/&]|and", list_str, flags=re.IGNORECASE):
        code = _weekday_code(part) if part.strip() else None
        if code and code not in out:
            out.append(code)
    return out


def build_rrule_string(freq: str, interval: int = 1, byweekday=None, bymonthday=None,
                       bysetpos=None, bymonth=None) -> str:
    byweekday = list(byweekday or [])
    parts = [f'FREQ={freq}']
    if interval and interval != 1:
        parts.append(f'INTERVAL={interval}')
    if byweekday:
        parts.append('BYDAY=' + ','.join(byweekday))
    if bymonthday is not None:
        parts.append(f'BYMONTHDAY={bymonthday}')
    if bysetpos is not None and len(byweekday) == 1:
        parts.append(f'BYSETPOS={bysetpos}')
    if bymonth is not None:
        parts.append(f'BYMONTH={bymonth}')
    return ';'.join(parts)


def next_occurrence(freq: str, ref: date, interval: int = 1, byweekday=None, bymonthday=None,
                    bysetpos=None, bymonth=None) -> date | None:
    """First occurrence strictly after ref for a series anchored at ref."""
    start = datetime(ref.year, ref.month, ref.day)
    params: dict = {'freq': FREQ_MAP[freq], 'interval': max(1, int(interval or 1)), 'dtstart': start}
    if byweekday:
        params['byweekday'] = tuple(WEEKDAY_MAP[c] for c in byweekday if c in WEEKDAY_MAP)
    if bymonthday is not None:
        params['bymonthday'] = bymonthday
    if bysetpos is not None and byweekday and len(byweekday) == 1:
        params['bysetpos'] = bysetpos
    if bymonth is not None:
        params['bymonth'] = bymonth
    try:
        nxt = _rrule.rrule(**params).after(start, inc=False)
    except Exception:
        logger.exception('failed to compute next occurrence for %s', params)
        return None
    return nxt.date() if nxt else None


def parse_repeat(text: str | None, ref_date=None) -> RepeatRule | None:
    """Parse a recurrence phrase. Returns None when no frequency is found.

    Later patterns override earlier ones, so 'every mon & thu' (weekly on
    two days) wins over a bare 'weekly' in the same text.
    """
    if not text or not isinstance(text, str):
        return None
    t = text.lower()

    freq = None
    interval = 1
    byweekday: list[str] = []
    bymonthday = None
    bysetpos = None
    bymonth = None

    if re.search(r"\b(daily|every day)\b", t):
        freq = 'DAILY'
    if re.search(r"\b(weekly|every week)\b", t):
        freq = 'WEEKLY'
    if re.search(r"\b(monthly|every month)\b", t):
        freq = 'MONTHLY'
    if re.search(r"\b(annually|yearly|every year)\b", t):
        freq = 'YEARLY'
    if re.search(r"\bquarterly\b", t):
        freq, interval = 'MONTHLY', 3

    m = re.search(r"\bevery\s+other\s+(day|week|month|year)s?\b", t)
    if m:
        freq, interval = FREQ_BY_UNIT[m.group(1)], 2
    m = re.search(r"\bevery\s+(\d+)\s+(day|week|month|year)s?\b", t)
    if m:
        freq, interval = FREQ_BY_UNIT[m.group(2)], max(1, int(m.group(1)))

    if re.search(r"\bweekdays?\b", t):
        freq, byweekday = 'WEEKLY', ['MO', 'TU', 'WE', 'TH', 'FR']
    if re.search(r"\bweekends?\b", t):
        freq, byweekday = 'WEEKLY', ['SA', 'SU']

    m = EVERY_WEEKDAYS_RE.search(t)
    if m:
        freq, byweekday = 'WEEKLY', _collect_weekdays(m.group(1))

    m = ORDINAL_WEEKDAY_RE.search(t)
    if m:
        freq = 'MONTHLY'
        bysetpos = ORDINALS[m.group(1)]
        byweekday = [_weekday_code(m.group(2))]

    m = MONTHDAY_RE.search(t)
    if m:
        freq = 'MONTHLY'
        bymonthday = max(1, min(31, int(m.group(1))))

    m = DATE_THEN_EVERY_YEAR_RE.search(t) or EVERY_YEAR_ON_RE.search(t)
    if m:
        freq = 'YEARLY'
        bymonth = MONTHS_EN.index(m.group(1)) + 1
        bymonthday = int(m.group(2))

    if not freq:
        return None

    ref = coerce_reference_date(ref_date)
    nxt = next_occurrence(freq, ref, interval, byweekday, bymonthday, bysetpos, bymonth)
    return RepeatRule(
        freq=freq,
        interval=interval,
        byweekday=byweekday,
        bymonthday=bymonthday,
        bysetpos=bysetpos if len(byweekday) == 1 else None,
        bymonth=bymonth,
        rrule=build_rrule_string(freq, interval, byweekday, bymonthday, bysetpos, bymonth),
        next_iso=nxt.isoformat() if nxt else None,
    )


def parse_rrule(rule: str | None) -> dict[str, str]:
    """'freq=weekly;byday=mo' -> {'FREQ': 'WEEKLY', 'BYDAY': 'MO'}"""
    out: dict[str, str] = {}
    if not rule:
        return out
    for part in str(rule).split(';'):
        key, _, value = part.partition('=')
        if not key.strip():
            continue
        out[key.strip().upper()] = value.strip().upper()
    return out


def expand_dates_in_range(rule: str | None, start_iso: str, from_iso: str, to_iso: str) -> list[str]:
    """Dates (YYYY-MM-DD) of the series starting at start_iso that fall in
    [from_iso, to_iso]. Bad rules or dates yield []."""
    parts = parse_rrule(rule)
    if not parts.get('FREQ'):
        return []
    try:
        start = datetime.combine(date.fromisoformat(start_iso), datetime.min.time())
        lo = datetime.combine(date.fromisoformat(from_iso), datetime.min.time())
        hi = datetime.combine(date.fromisoformat(to_iso), datetime.min.time())
    except (TypeError, ValueError):
        logger.warning('bad date range for %r: %r %r %r', rule, start_iso, from_iso, to_iso)
        return []
    if start > hi:
        return []
    body = ';'.join(f'{k}={v}' for k, v in parts.items() if v)
    try:
        series = _rrule.rrulestr(body, dtstart=start)
        hits = series.between(lo, hi, inc=True)
    except Exception:
        logger.exception('failed to expand rrule %r', rule)
        return []
    return [d.date().isoformat() for d in hits]
