import pytest
from datetime import date, datetime

import conshus.analyze as analyze_mod
from conshus import config
from conshus.analyze import analyze_entry, extract_appointments, quick_tags
from conshus.models import Appointment, ExtractedEvent


@pytest.fixture
def no_appointment_search(monkeypatch):
    monkeypatch.setattr(config, 'ENABLE_APPOINTMENT_SEARCH', False)


def test_quick_tags():
    assert quick_tags('Colton has a dentist visit after school') == ['appointment', 'school']
    assert quick_tags("Mom's birthday") == ['birthday']
    assert quick_tags('') == []


def test_analyze_entry_combines_heuristics(no_appointment_search):
    text = 'Colton starts school on September 2nd. Need to clean the kitchen and take out the trash #home'
    res = analyze_entry(text=text, base_date=date(2025, 11, 1))
    assert res.tags == ['colton', 'school']
    assert res.clusters == ['colton', 'home']
    assert res.important_events == [ExtractedEvent(title='Colton starts school', date='2026-09-02')]
    assert res.appointments == []
    assert [r.extracted_text for r in res.ripples] == ['clean the kitchen and take out the trash #home']
    assert res.time_sensitivity == 'unspecified'


def test_analyze_entry_falls_back_to_html(no_appointment_search):
    res = analyze_entry(html='<p>Budget <b>review</b>: pay rent and the water bill</p>')
    assert res.clusters == ['finance']


def test_analyze_entry_empty():
    res = analyze_entry()
    assert res.tags == [] and res.clusters == [] and res.important_events == [] and res.appointments == []
    assert res.moods == [] and res.ripples == [] and res.context is None
    assert res.time_sensitivity == 'unspecified' and res.confidence == 0


def test_extract_appointments_uses_time_mentions(monkeypatch):
    def fake_search(text, languages=None, settings=None):
        assert settings['RELATIVE_BASE'] == datetime(2024, 6, 10)
        return [
            ('tomorrow', datetime(2024, 6, 11, 0, 0)),
            ('Friday at 3pm', datetime(2024, 6, 14, 15, 0)),
        ]

    monkeypatch.setattr(analyze_mod, 'search_dates', fake_search)
    text = 'Groceries tomorrow. Dentist with Colton on Friday at 3pm'
    res = extract_appointments(text, date(2024, 6, 10))
    assert res == [Appointment(title='Dentist with Colton', date='2024-06-14', time_start='15:00')]


def test_extract_appointments_drops_untitled_and_duplicates(monkeypatch):
    def fake_search(text, languages=None, settings=None):
        return [
            ('at 9am', datetime(2024, 6, 10, 9, 0)),
            ('at 9am', datetime(2024, 6, 10, 9, 0)),
        ]

    monkeypatch.setattr(analyze_mod, 'search_dates', fake_search)
    assert extract_appointments('at 9am', date(2024, 6, 10)) == []
    res = extract_appointments('Standup at 9am. Standup at 9am', date(2024, 6, 10))
    assert res == [Appointment(title='Standup', date='2024-06-10', time_start='09:00')]


def test_extract_appointments_survives_parser_errors(monkeypatch):
    def broken(*args, **kwargs):
        raise RuntimeError('boom')

    monkeypatch.setattr(analyze_mod, 'search_dates', broken)
    assert extract_appointments('Dentist tomorrow at 3pm', date(2024, 6, 10)) == []


def test_extract_appointments_with_dateparser():
    res = extract_appointments('Call the plumber tomorrow at 3pm', date(2024, 6, 10))
    assert any(a.time_start == '15:00' for a in res)
    assert all(a.title for a in res)


def test_extract_appointments_no_text():
    assert extract_appointments('', date(2024, 6, 10)) == []


def test_analyze_entry_moods_timing_and_ripples(no_appointment_search):
    res = analyze_entry(text='So tired and stressed out today. Need to pay the rent.')
    assert res.moods == ['anxious']
    assert res.time_sensitivity == 'immediate'
    assert res.context.emotional_intensity == 'medium'
    assert res.confidence == pytest.approx(0.56)
    assert [r.extracted_text for r in res.ripples] == ['pay the rent']
    assert res.tags == []
