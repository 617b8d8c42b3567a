"""One-stop analysis for new or edited journal entries.

Combines the cheap heuristics (quick tags, weighted metadata, clusters,
important events, actionable ripples) with a dateparser scan for date+time
mentions, which become appointment candidates.
"""
from datetime import datetime
import logging
from types import MappingProxyType
import re

from dateparser.search import search_dates

from . import config
from .clusters import extract_assigned_clusters
from .events import extract_important_events
from .metadata import suggest_metadata
from .models import Appointment, EntryAnalysis
from .ripples import analyze_time_sensitivity, extract_ripples
from .sieve import sieve_ripples
from .utils import coerce_reference_date, collapse_whitespace, contains_time_token, strip_html

logger = logging.getLogger(__name__)

QUICK_TAG_PATTERNS = (
    ('school', re.compile(r"\bschool\b", re.IGNORECASE)),
    ('appointment', re.compile(r"\b(?:doctor|dentist|clinic|appointment)\b", re.IGNORECASE)),
    ('birthday', re.compile(r"\bbirthday\b", re.IGNORECASE)),
)

_TRAILING_PREP_RE = re.compile(r"(?:\s+|^)(?:on|at|by)\s*$", re.IGNORECASE)


def quick_tags(text: str | None) -> list[str]:
    if not text:
        return []
    return sorted({tag for tag, rx in QUICK_TAG_PATTERNS if rx.search(text)})


def _title_before(text: str, idx: int) -> str:
    """Text of the current sentence up to idx, minus a dangling on/at/by."""
    head = text[:idx]
    head = re.split(r"[.!?\n]", head)[-1]
    head = _TRAILING_PREP_RE.sub('', head.rstrip())
    return collapse_whitespace(head)


def extract_appointments(text: str | None, base_date=None) -> list[Appointment]:
    """Date mentions that carry a time of day ('dentist tomorrow at 3pm')."""
    if not text or not isinstance(text, str):
        return []
    ref = coerce_reference_date(base_date)
    settings = {
        'RELATIVE_BASE': datetime(ref.year, ref.month, ref.day),
        'PREFER_DATES_FROM': 'future',
    }
    try:
        found = search_dates(text, languages=['en'], settings=settings)
    except Exception:
        logger.exception('dateparser search failed')
        return []

    out: list[Appointment] = []
    seen: set[tuple[str, str, str]] = set()
    pos = 0
    for match_text, dt in found or []:
        idx = text.find(match_text, pos)
        if idx < 0:
            idx = text.find(match_text)
        if idx >= 0:
            pos = idx + len(match_text)
        if not contains_time_token(match_text):
            continue
        title = _title_before(text, idx) if idx >= 0 else ''
        if not title:
            logger.debug('dropping untitled appointment %r', match_text)
            continue
        appt = Appointment(title=title, date=dt.date().isoformat(), time_start=dt.strftime('%H:%M'))
        key = (appt.title.lower(), appt.date, appt.time_start)
        if key in seen:
            continue
        seen.add(key)
        out.append(appt)
    return out


# ripple timing -> coarse bucket stored on the entry
TIME_SENSITIVITY_BUCKETS = MappingProxyType({
    'immediate': 'immediate',
    'this_week': 'short_term',
    'this_month': 'short_term',
    'someday': 'long_term',
})

MAX_TAGS = 12


def analyze_entry(text: str = '', html: str = '', base_date=None) -> EntryAnalysis:
    content = (text or '').strip() or strip_html(html)
    if not content:
        return EntryAnalysis()
    md = suggest_metadata(content)
    tags = sorted({t.name for t in md.tags} | set(quick_tags(content)))[:MAX_TAGS]
    appointments = extract_appointments(content, base_date) if config.ENABLE_APPOINTMENT_SEARCH else []
    return EntryAnalysis(
        tags=tags,
        moods=[m.name for m in md.moods],
        clusters=sorted(extract_assigned_clusters(content)),
        context=md.context,
        time_sensitivity=TIME_SENSITIVITY_BUCKETS.get(analyze_time_sensitivity(content), 'unspecified'),
        confidence=md.overall_confidence,
        important_events=extract_important_events(content, base_date),
        appointments=appointments,
        ripples=sieve_ripples(extract_ripples(content)),
    )
