"""Human readable labels for repeat settings.

Two inputs exist and are kept separate:
  - the structured repeat descriptor stored on tasks ({unit, interval, byDay})
  - RRULE-style strings ('FREQ=WEEKLY;BYDAY=MO,WE') written by the quick picks
Neither function raises; unknown input degrades to a neutral label.
"""
from collections.abc import Mapping
from types import MappingProxyType
import re

from .models import RepeatDescriptor

WEEKDAY_NAMES = MappingProxyType({
    'SU': 'Sun', 'MO': 'Mon', 'TU': 'Tue', 'WE': 'Wed', 'TH': 'Thu', 'FR': 'Fri', 'SA': 'Sat',
})

ORDINAL_WORDS = MappingProxyType({1: 'first', 2: 'second', 3: 'third', 4: 'fourth', -1: 'last'})

# quick-picks -> RRULE
RRULE_PRESETS = MappingProxyType({
    'daily': 'FREQ=DAILY',
    'everyOtherDay': 'FREQ=DAILY;INTERVAL=2',
    'weekdays': 'FREQ=WEEKLY;BYDAY=MO,TU,WE,TH,FR',
    'weekends': 'FREQ=WEEKLY;BYDAY=SA,SU',
    'wednesday': 'FREQ=WEEKLY;BYDAY=WE',
})


def preset_rrule(name: str | None) -> str:
    if not name:
        return ''
    return RRULE_PRESETS.get(name, '')


def _interval_of(value) -> int | float:
    if isinstance(value, bool) or value is None:
        return 1
    try:
        n = float(value)
    except (TypeError, ValueError):
        return 1
    if n != n or n == 0:  # NaN or zero
        return 1
    return int(n) if n.is_integer() else n


def describe_repeat(repeat) -> str:
    """'Every 2 weeks on Mon, Wed' for a repeat descriptor.

    Plain strings are legacy labels ('daily') and are returned as-is.
    """
    if not repeat:
        return ''
    if isinstance(repeat, str):
        return repeat
    if isinstance(repeat, RepeatDescriptor):
        unit, interval, by_day = repeat.unit, repeat.interval, repeat.by_day
    elif isinstance(repeat, Mapping):
        unit = repeat.get('unit')
        interval = repeat.get('interval', 1)
        by_day = repeat.get('byDay', repeat.get('by_day'))
    else:
        return 'Repeats'

    n = _interval_of(interval)
    every = 'Every' if n == 1 else f'Every {n}'
    plural = 's' if n > 1 else ''

    if unit == 'day':
        return f'{every} day{plural}'
    if unit == 'week':
        if isinstance(by_day, (list, tuple)) and by_day:
            days = ', '.join(WEEKDAY_NAMES.get(d, str(d)) for d in by_day)
            return f'{every} week{plural} on {days}'
        return f'{every} week{plural}'
    if unit == 'month':
        return f'{every} month{plural}'
    return 'Repeats'


def _rule_pairs(rule: str) -> dict[str, str]:
    # last duplicate key wins
    out: dict[str, str] = {}
    for part in rule.split(';'):
        key, _, value = part.partition('=')
        out[key] = value
    return out


def _lenient_int(value: str | None) -> int | None:
    if not value:
        return None
    m = re.match(r"\s*([+-]?\d+)", value)
    return int(m.group(1)) if m else None


def humanize_rrule(rule: str | None) -> str:
    """Short English label for an RRULE body, e.g. 'Every last FR'.

    Unknown or missing FREQ returns the rule unchanged.
    """
    if not rule:
        return ''
    m = _rule_pairs(rule)
    freq = m.get('FREQ')
    i = _lenient_int(m.get('INTERVAL'))
    if i is None:
        i = 1
    byday = m['BYDAY'].split(',') if m.get('BYDAY') else []
    bymd = _lenient_int(m.get('BYMONTHDAY'))
    bset = _lenient_int(m.get('BYSETPOS'))
    bmon = _lenient_int(m.get('BYMONTH'))

    if freq == 'DAILY':
        return 'Every day' if i == 1 else f'Every {i} days'
    if freq == 'WEEKLY':
        if byday:
            days = ', '.join(byday)
            return f'Every {days}' if i == 1 else f'Every {i} weeks on {days}'
        return 'Every week' if i == 1 else f'Every {i} weeks'
    if freq == 'MONTHLY':
        if bymd:
            return f'Every month on the {bymd}' if i == 1 else f'Every {i} months on the {bymd}'
        if bset and len(byday) == 1:
            ordinal = ORDINAL_WORDS.get(bset, f'#{bset}')
            if i == 1:
                return f'Every {ordinal} {byday[0]}'
            return f'Every {i} months on the {ordinal} {byday[0]}'
        return 'Every month' if i == 1 else f'Every {i} months'
    if freq == 'YEARLY':
        if bmon and bymd:
            return f'Every year on {bmon}/{bymd}'
        return 'Every year' if i == 1 else f'Every {i} years'
    return rule
