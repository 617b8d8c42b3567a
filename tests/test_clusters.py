import pytest

from conshus.clusters import (
    KNOWN_CLUSTERS,
    bracket_clusters,
    cue_clusters,
    emoji_clusters,
    extract_assigned_clusters,
    hashtag_clusters,
    keyword_clusters,
)


def test_hashtags_are_case_folded_and_deduplicated():
    assert extract_assigned_clusters('buy milk #home #Home') == {'home'}


def test_hashtag_accepts_any_name():
    assert hashtag_clusters('#side-project and #x_y') == {'side-project', 'x_y'}


def test_hashtag_needs_two_chars_and_leading_space():
    assert hashtag_clusters('#a') == set()
    assert hashtag_clusters('issue#42') == set()


def test_bracket_payload_is_slugged():
    assert bracket_clusters('[Board Games] and {Yard Work}') == {'board-games', 'yard-work'}


def test_single_keyword_is_not_enough():
    assert 'home' not in extract_assigned_clusters('clean the house')


def test_two_keywords_tag_the_cluster():
    assert 'home' in extract_assigned_clusters('clean the kitchen, take out trash')


def test_preposition_cue():
    assert 'colton' in extract_assigned_clusters('schedule dentist for colton')


@pytest.mark.parametrize('text', [
    'errands in Home', 're: finance stuff', 're -> work followup', 'thinking about spiritual things',
])
def test_cue_variants(text):
    assert cue_clusters(text) & set(KNOWN_CLUSTERS)


def test_cue_uses_caller_vocabulary():
    assert cue_clusters('notes about garden', ['garden']) == {'garden'}
    assert extract_assigned_clusters('notes about garden', ['garden']) == {'garden'}
    assert 'garden' not in extract_assigned_clusters('notes about garden')


def test_cue_is_word_bounded():
    assert cue_clusters('fork homework') == set()


def test_emoji_cues():
    assert emoji_clusters('\U0001F9F9 sweep') == {'home'}
    assert emoji_clusters('\U0001F4BC standup') == {'work'}
    assert emoji_clusters('ride with Colton') == {'colton'}


def test_keyword_counts_distinct_words_only():
    assert keyword_clusters('trash trash trash') == set()
    assert keyword_clusters('pay rent and the phone bill') == {'finance'}


def test_multiple_rules_union():
    res = extract_assigned_clusters('#errands for work: invoice the client, budget review, pay rent bill')
    assert {'errands', 'work', 'finance'} <= res


@pytest.mark.parametrize('text', ['', None, 'nothing in particular'])
def test_no_clusters(text):
    assert extract_assigned_clusters(text) == set()
