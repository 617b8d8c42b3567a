"""Command line access to the text helpers, mostly for poking at heuristics.

Usage:
  python -m conshus.cli events "Colton starts school on September 2nd" --today 2025-11-01
  python -m conshus.cli clusters "clean the kitchen, take out trash"
  python -m conshus.cli humanize "FREQ=MONTHLY;BYSETPOS=-1;BYDAY=FR"
  python -m conshus.cli describe '{"unit": "week", "interval": 2, "byDay": ["MO", "WE"]}'
  echo "dentist tomorrow at 3pm" | python -m conshus.cli analyze -
  python -m conshus.cli ripples "I need to call the dentist asap" --all

Every command prints JSON on stdout.
"""
from __future__ import annotations

import argparse
from datetime import date
import json
import logging
import sys

from . import config
from .analyze import analyze_entry
from .clusters import extract_assigned_clusters
from .events import extract_important_events
from .metadata import suggest_metadata
from .recurrence import expand_dates_in_range, parse_repeat
from .repeat import describe_repeat, humanize_rrule, preset_rrule
from .ripples import extract_ripples
from .sieve import sieve_ripples, why_reject

logger = logging.getLogger(__name__)


def _setup_logging() -> None:
    root = logging.getLogger('conshus')
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter('%(asctime)s %(levelname)s:%(name)s: %(message)s')
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(getattr(logging, config.LOG_LEVEL, logging.INFO))


def _read_text(value: str) -> str:
    if value == '-':
        return sys.stdin.read()
    return value


def _today(value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f'--today must be YYYY-MM-DD, got {value!r}')


def _emit(obj) -> None:
    print(json.dumps(obj, indent=2, ensure_ascii=False))


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog='conshus', description='Journal text heuristics')
    sub = p.add_subparsers(dest='command', required=True)

    sp = sub.add_parser('events', help='Extract "<title> on <date>" events')
    sp.add_argument('text')
    sp.add_argument('--today', default=None, help='Reference date (YYYY-MM-DD)')

    sp = sub.add_parser('clusters', help='Guess clusters for text')
    sp.add_argument('text')
    sp.add_argument('--known', default=None, help='Comma separated cluster vocabulary')

    sp = sub.add_parser('humanize', help='Describe an RRULE string')
    sp.add_argument('rule')

    sp = sub.add_parser('describe', help='Describe a repeat descriptor (JSON) or legacy label')
    sp.add_argument('repeat')

    sp = sub.add_parser('preset', help='Print the RRULE for a quick-pick preset')
    sp.add_argument('name')

    sp = sub.add_parser('repeat', help='Parse a recurrence phrase')
    sp.add_argument('text')
    sp.add_argument('--today', default=None)

    sp = sub.add_parser('expand', help='Expand an RRULE within a date window')
    sp.add_argument('rule')
    sp.add_argument('start')
    sp.add_argument('date_from')
    sp.add_argument('date_to')

    sp = sub.add_parser('sieve', help='Check whether text is an actionable task')
    sp.add_argument('text')

    sp = sub.add_parser('ripples', help='Extract suggested tasks and moods')
    sp.add_argument('text')
    sp.add_argument('--all', action='store_true', help='Skip the action sieve')

    sp = sub.add_parser('metadata', help='Suggest weighted tags, moods and clusters')
    sp.add_argument('text')

    sp = sub.add_parser('analyze', help='Run the full entry analysis')
    sp.add_argument('text')
    sp.add_argument('--today', default=None)
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    _setup_logging()
    try:
        today = _today(getattr(args, 'today', None))
    except argparse.ArgumentTypeError as e:
        print('Error:', e, file=sys.stderr)
        return 2

    cmd = args.command
    logger.debug('running %s', cmd)
    if cmd == 'events':
        _emit([ev.model_dump() for ev in extract_important_events(_read_text(args.text), today)])
    elif cmd == 'clusters':
        known = [k.strip().lower() for k in args.known.split(',') if k.strip()] if args.known else None
        _emit(sorted(extract_assigned_clusters(_read_text(args.text), known)))
    elif cmd == 'humanize':
        _emit(humanize_rrule(args.rule))
    elif cmd == 'describe':
        raw = args.repeat
        if raw.lstrip().startswith('{'):
            try:
                raw = json.loads(raw)
            except json.JSONDecodeError as e:
                print('Error: invalid descriptor JSON:', e, file=sys.stderr)
                return 2
        _emit(describe_repeat(raw))
    elif cmd == 'preset':
        _emit(preset_rrule(args.name))
    elif cmd == 'repeat':
        rule = parse_repeat(_read_text(args.text), today)
        _emit(rule.model_dump() if rule else None)
    elif cmd == 'expand':
        _emit(expand_dates_in_range(args.rule, args.start, args.date_from, args.date_to))
    elif cmd == 'sieve':
        _emit(why_reject(_read_text(args.text)))
    elif cmd == 'ripples':
        ripples = extract_ripples(_read_text(args.text))
        if not args.all:
            ripples = sieve_ripples(ripples)
        _emit([r.model_dump() for r in ripples])
    elif cmd == 'metadata':
        _emit(suggest_metadata(_read_text(args.text)).model_dump())
    elif cmd == 'analyze':
        _emit(analyze_entry(text=_read_text(args.text), base_date=today).model_dump())
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
