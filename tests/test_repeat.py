import pytest

from conshus.models import RepeatDescriptor
from conshus.repeat import RRULE_PRESETS, describe_repeat, humanize_rrule, preset_rrule


@pytest.mark.parametrize('rule,expected', [
    ('FREQ=DAILY', 'Every day'),
    ('FREQ=DAILY;INTERVAL=3', 'Every 3 days'),
    ('FREQ=WEEKLY;BYDAY=MO,WE,FR', 'Every MO, WE, FR'),
    ('FREQ=WEEKLY;INTERVAL=2;BYDAY=TU', 'Every 2 weeks on TU'),
    ('FREQ=WEEKLY', 'Every week'),
    ('FREQ=WEEKLY;INTERVAL=2', 'Every 2 weeks'),
    ('FREQ=MONTHLY;BYMONTHDAY=15', 'Every month on the 15'),
    ('FREQ=MONTHLY;INTERVAL=2;BYMONTHDAY=1', 'Every 2 months on the 1'),
    ('FREQ=MONTHLY;BYSETPOS=-1;BYDAY=FR', 'Every last FR'),
    ('FREQ=MONTHLY;BYSETPOS=2;BYDAY=SU', 'Every second SU'),
    ('FREQ=MONTHLY;INTERVAL=3;BYSETPOS=1;BYDAY=MO', 'Every 3 months on the first MO'),
    ('FREQ=MONTHLY;BYSETPOS=5;BYDAY=TH', 'Every #5 TH'),
    ('FREQ=MONTHLY;BYSETPOS=1;BYDAY=MO,TU', 'Every month'),
    ('FREQ=MONTHLY;INTERVAL=6', 'Every 6 months'),
    ('FREQ=YEARLY;BYMONTH=6;BYMONTHDAY=5', 'Every year on 6/5'),
    ('FREQ=YEARLY', 'Every year'),
    ('FREQ=YEARLY;INTERVAL=2', 'Every 2 years'),
])
def test_humanize_rrule(rule, expected):
    assert humanize_rrule(rule) == expected


def test_humanize_last_duplicate_key_wins():
    assert humanize_rrule('FREQ=DAILY;INTERVAL=2;INTERVAL=4') == 'Every 4 days'


@pytest.mark.parametrize('rule', ['FREQ=HOURLY', 'BYDAY=MO', 'garbage', 'freq=daily'])
def test_humanize_unknown_freq_returns_input(rule):
    assert humanize_rrule(rule) == rule


@pytest.mark.parametrize('rule', ['', None])
def test_humanize_empty(rule):
    assert humanize_rrule(rule) == ''


def test_humanize_bad_interval_does_not_raise():
    assert humanize_rrule('FREQ=DAILY;INTERVAL=abc') == 'Every day'


@pytest.mark.parametrize('rule,expected', [
    ('FREQ=DAILY;INTERVAL=0', 'Every 0 days'),
    ('FREQ=MONTHLY;INTERVAL=0', 'Every 0 months'),
    ('FREQ=DAILY;INTERVAL=', 'Every day'),
])
def test_humanize_explicit_interval_is_kept(rule, expected):
    assert humanize_rrule(rule) == expected


def test_describe_weekly_with_days():
    assert describe_repeat({'unit': 'week', 'interval': 2, 'byDay': ['MO', 'WE']}) == 'Every 2 weeks on Mon, Wed'


def test_describe_keeps_day_order_and_unknown_codes():
    assert describe_repeat({'unit': 'week', 'byDay': ['FR', 'XX', 'SU']}) == 'Every week on Fri, XX, Sun'


@pytest.mark.parametrize('repeat,expected', [
    ({'unit': 'day'}, 'Every day'),
    ({'unit': 'day', 'interval': 3}, 'Every 3 days'),
    ({'unit': 'day', 'interval': 'x'}, 'Every day'),
    ({'unit': 'day', 'interval': 0}, 'Every day'),
    ({'unit': 'day', 'interval': '2'}, 'Every 2 days'),
    ({'unit': 'week'}, 'Every week'),
    ({'unit': 'week', 'byDay': []}, 'Every week'),
    ({'unit': 'month', 'interval': 2}, 'Every 2 months'),
    ({'unit': 'month'}, 'Every month'),
    ({'unit': 'fortnight'}, 'Repeats'),
    ({}, ''),
])
def test_describe_repeat_descriptor(repeat, expected):
    assert describe_repeat(repeat) == expected


def test_describe_legacy_string_passthrough():
    assert describe_repeat('daily') == 'daily'


@pytest.mark.parametrize('repeat', [None, '', 0, False])
def test_describe_falsy(repeat):
    assert describe_repeat(repeat) == ''


def test_describe_model():
    desc = RepeatDescriptor(unit='week', interval=1, byDay=['SA', 'SU'])
    assert describe_repeat(desc) == 'Every week on Sat, Sun'


def test_presets_feed_back_into_humanizer():
    assert preset_rrule('weekdays') == 'FREQ=WEEKLY;BYDAY=MO,TU,WE,TH,FR'
    assert humanize_rrule(RRULE_PRESETS['everyOtherDay']) == 'Every 2 days'
    assert humanize_rrule(RRULE_PRESETS['wednesday']) == 'Every WE'
    assert preset_rrule('fortnightly') == ''
    assert set(RRULE_PRESETS) == {'daily', 'everyOtherDay', 'weekdays', 'weekends', 'wednesday'}


def test_presets_are_read_only():
    with pytest.raises(TypeError):
        RRULE_PRESETS['daily'] = 'FREQ=HOURLY'
