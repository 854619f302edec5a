import pytest

from App.Planner.Guides import get_guide, search_guides


@pytest.mark.parametrize('city', ['Paris', ' paris ', 'PARIS'])
def test_known_city(city):
    guide = get_guide(city)
    assert guide['name'] == 'Paris'
    assert guide['country'] == 'France'
    assert guide['is_default'] is False


def test_multi_word_city():
    assert get_guide('New York')['currency'] == 'US Dollar ($)'


def test_unknown_city_gets_generic_guide():
    guide = get_guide('Atlantis')
    assert guide['is_default'] is True
    assert guide['name'] == 'Your Destination'


def test_guides_are_copies():
    get_guide('Tokyo')['tips'].append('Changed')
    assert 'Changed' not in get_guide('Tokyo')['tips']


def test_search_by_country_and_description():
    assert [g['name'] for g in search_guides('japan')] == ['Tokyo']
    assert [g['name'] for g in search_guides('city of light')] == ['Paris']


def test_search_never_returns_generic_guide():
    names = [g['name'] for g in search_guides('')]
    assert names == ['Paris', 'London', 'Tokyo', 'New York']
    assert search_guides('atlantis') == []
