import pytest
from datetime import date

from conshus.recurrence import (
    build_rrule_string,
    expand_dates_in_range,
    next_occurrence,
    parse_repeat,
    parse_rrule,
)
from conshus.repeat import humanize_rrule


@pytest.mark.parametrize('text,rrule,next_iso', [
    ('water plants every day', 'FREQ=DAILY', '2024-06-11'),
    ('gym every other day', 'FREQ=DAILY;INTERVAL=2', '2024-06-12'),
    ('sync every other week', 'FREQ=WEEKLY;INTERVAL=2', '2024-06-24'),
    ('standup every weekday', 'FREQ=WEEKLY;BYDAY=MO,TU,WE,TH,FR', '2024-06-11'),
    ('long run on weekends', 'FREQ=WEEKLY;BYDAY=SA,SU', '2024-06-15'),
    ('lift every mon & wed & fri', 'FREQ=WEEKLY;BYDAY=MO,WE,FR', '2024-06-12'),
    ('backup every last friday of the month', 'FREQ=MONTHLY;BYDAY=FR;BYSETPOS=-1', '2024-06-28'),
    ('pay rent every month on the 1st', 'FREQ=MONTHLY;BYMONTHDAY=1', '2024-07-01'),
    ('quarterly review', 'FREQ=MONTHLY;INTERVAL=3', '2024-09-10'),
    ('filter change every 90 days', 'FREQ=DAILY;INTERVAL=90', '2024-09-08'),
    ('anniversary june 5 every year', 'FREQ=YEARLY;BYMONTHDAY=5;BYMONTH=6', '2025-06-05'),
    ('taxes every year on april 30', 'FREQ=YEARLY;BYMONTHDAY=30;BYMONTH=4', '2025-04-30'),
])
def test_parse_repeat(text, rrule, next_iso, entry_date):
    res = parse_repeat(text, entry_date)
    assert res is not None
    assert res.rrule == rrule
    assert res.next_iso == next_iso


def test_parse_repeat_fields(entry_date):
    res = parse_repeat('every first monday of the month', entry_date)
    assert res.freq == 'MONTHLY'
    assert res.bysetpos == 1
    assert res.byweekday == ['MO']
    assert res.next_iso == '2024-07-01'
    assert humanize_rrule(res.rrule) == 'Every first MO'


@pytest.mark.parametrize('text', ['', None, 'buy milk', 'every so often'])
def test_parse_repeat_without_frequency(text, entry_date):
    assert parse_repeat(text, entry_date) is None


def test_monthday_is_clamped(entry_date):
    res = parse_repeat('every month on the 45th', entry_date)
    assert res.bymonthday == 31


def test_build_rrule_string_drops_bysetpos_with_many_days():
    assert build_rrule_string('MONTHLY', 1, ['MO', 'TU'], bysetpos=2) == 'FREQ=MONTHLY;BYDAY=MO,TU'


def test_next_occurrence_is_strictly_after_reference():
    assert next_occurrence('WEEKLY', date(2024, 6, 10), byweekday=['MO']) == date(2024, 6, 17)


def test_parse_rrule_uppercases():
    assert parse_rrule('freq=weekly;byday=mo,we') == {'FREQ': 'WEEKLY', 'BYDAY': 'MO,WE'}
    assert parse_rrule('') == {}


def test_expand_weekly_by_day():
    res = expand_dates_in_range('FREQ=WEEKLY;BYDAY=MO,WE', '2024-06-10', '2024-06-10', '2024-06-20')
    assert res == ['2024-06-10', '2024-06-12', '2024-06-17', '2024-06-19']


def test_expand_daily_interval_window():
    res = expand_dates_in_range('FREQ=DAILY;INTERVAL=2', '2024-06-01', '2024-06-04', '2024-06-09')
    assert res == ['2024-06-05', '2024-06-07', '2024-06-09']


def test_expand_until_iso():
    res = expand_dates_in_range('FREQ=DAILY;UNTIL=2024-06-05', '2024-06-01', '2024-06-01', '2024-06-30')
    assert res == ['2024-06-01', '2024-06-02', '2024-06-03', '2024-06-04', '2024-06-05']


def test_expand_monthly_same_day():
    res = expand_dates_in_range('FREQ=MONTHLY', '2024-01-15', '2024-01-01', '2024-04-30')
    assert res == ['2024-01-15', '2024-02-15', '2024-03-15', '2024-04-15']


def test_expand_start_after_window():
    assert expand_dates_in_range('FREQ=DAILY', '2024-07-01', '2024-06-01', '2024-06-30') == []


@pytest.mark.parametrize('rule,start', [
    ('', '2024-06-01'),
    ('BYDAY=MO', '2024-06-01'),
    ('FREQ=FORTNIGHTLY', '2024-06-01'),
    ('FREQ=DAILY', 'not-a-date'),
])
def test_expand_bad_input_is_empty(rule, start):
    assert expand_dates_in_range(rule, start, '2024-06-01', '2024-06-30') == []
