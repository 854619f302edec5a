import pytest

from App.Utils.Destinations import filter_by_budget, filter_destinations, sort_destinations
from conftest import make_destination


def ids(records):
    return [r['id'] for r in records]


class TestFilter:
    def test_all_keeps_everything(self, sample_records):
        assert ids(filter_destinations(sample_records, 'all')) == [1, 2, 3, 4]

    def test_category_is_case_insensitive(self, sample_records):
        assert ids(filter_destinations(sample_records, 'MUSEUM')) == [1]

    def test_category_keeps_original_order(self):
        records = [
            make_destination(1, category='museum'),
            make_destination(2, category='park'),
            make_destination(3, category='museum'),
            make_destination(4, category='museum'),
        ]
        assert ids(filter_destinations(records, 'museum')) == [1, 3, 4]

    def test_min_rating(self, sample_records):
        assert ids(filter_destinations(sample_records, min_rating=4.5)) == [1, 3]

    def test_location_matches_name_or_location(self, sample_records):
        assert ids(filter_destinations(sample_records, location='lyon')) == [4]
        assert ids(filter_destinations(sample_records, location='louv')) == [1]

    def test_price_level(self, sample_records):
        assert ids(filter_destinations(sample_records, price_level='$')) == [2, 4]

    def test_criteria_combine(self, sample_records):
        assert ids(filter_destinations(sample_records, 'park', min_rating=4.5)) == []

    def test_input_is_not_modified(self, sample_records):
        before = list(sample_records)
        filter_destinations(sample_records, 'hotel')
        assert sample_records == before


class TestSort:
    def test_rating_descending(self, sample_records):
        assert ids(sort_destinations(sample_records, 'rating', 'desc')) == [1, 3, 2, 4]

    def test_reviews_ascending(self, sample_records):
        assert ids(sort_destinations(sample_records, 'reviews', 'asc')) == [3, 2, 4, 1]

    def test_name_ignores_case(self, sample_records):
        assert ids(sort_destinations(sample_records, 'name', 'asc')) == [4, 3, 1, 2]

    def test_ascending_is_reverse_of_descending(self, sample_records):
        ascending = sort_destinations(sample_records, 'rating', 'asc')
        assert ids(reversed(ascending)) == ids(sort_destinations(sample_records, 'rating', 'desc'))

    def test_missing_values_go_last(self):
        records = [make_destination(1, distance=None), make_destination(2, distance=2.0), make_destination(3, distance=0.5)]
        assert ids(sort_destinations(records, 'distance', 'asc')) == [3, 2, 1]
        assert ids(sort_destinations(records, 'distance', 'desc')) == [2, 3, 1]

    def test_ties_keep_original_order(self):
        records = [make_destination(i, rating=4.0) for i in (5, 6, 7)]
        assert ids(sort_destinations(records, 'rating', 'desc')) == [5, 6, 7]

    def test_bad_order(self, sample_records):
        with pytest.raises(ValueError):
            sort_destinations(sample_records, 'rating', 'sideways')


def test_budget_keeps_affordable_price_levels(sample_records):
    assert ids(filter_by_budget(sample_records, 50)) == [2, 4]
    assert ids(filter_by_budget(sample_records, 100)) == [1, 2, 4]
    assert ids(filter_by_budget(sample_records, 150)) == [1, 2, 3, 4]


def test_budget_counts_unknown_price_as_free():
    assert ids(filter_by_budget([make_destination(1, price_level=None)], 1)) == [1]
