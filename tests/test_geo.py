import pytest

from App.Utils.Geo import (CITY_CENTERS, build_map_markers, calculate_distance, city_center,
                           marker_bounds, marker_color)
from conftest import make_destination


def test_city_center_lookup():
    assert city_center('  Paris ') == CITY_CENTERS['paris']
    assert city_center('Atlantis') == CITY_CENTERS['new york']
    assert city_center(None) == CITY_CENTERS['new york']


def test_city_center_returns_copy():
    city_center('paris')['lat'] = 0
    assert CITY_CENTERS['paris']['lat'] == 48.8566


def test_distance_paris_london():
    paris, london = CITY_CENTERS['paris'], CITY_CENTERS['london']
    distance = calculate_distance(paris['lat'], paris['lng'], london['lat'], london['lng'])
    assert distance == pytest.approx(343.5, abs=1.0)


def test_distance_to_self_is_zero():
    assert calculate_distance(10, 20, 10, 20) == 0


def test_marker_colors():
    assert marker_color('Museum') == 'yellow'
    assert marker_color('hotel') == 'red'
    assert marker_color('unknown') == 'blue'
    assert marker_color(None) == 'blue'


def test_markers_skip_records_without_coordinates():
    records = [
        make_destination(1, category='park', coordinates={'lat': 1.0, 'lng': 2.0}),
        make_destination(2, coordinates=None),
    ]
    markers = build_map_markers(records)
    assert markers == [{'id': 1, 'name': 'Place 1', 'category': 'park', 'lat': 1.0, 'lng': 2.0, 'color': 'green'}]


def test_bounds():
    markers = [{'lat': 1.0, 'lng': 5.0}, {'lat': -2.0, 'lng': 7.5}]
    assert marker_bounds(markers) == {'north': 1.0, 'south': -2.0, 'east': 7.5, 'west': 5.0}
    assert marker_bounds([]) is None
