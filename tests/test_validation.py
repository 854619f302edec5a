from datetime import date

import pytest

from App.Utils.Validation import (parse_destination_records, validate_budget, validate_date,
                                  validate_destination_input, validate_destination_record,
                                  validate_rating)
from conftest import make_destination


@pytest.mark.parametrize('text', ['Paris', 'New York', "Saint-Jean d'Angely", 'Rio de Janeiro'])
def test_destination_input_accepts_names(text):
    assert validate_destination_input(text).is_valid


@pytest.mark.parametrize('text, error', [
    ('', 'Please enter a destination name'),
    ('   ', 'Please enter a destination name'),
    (None, 'Please enter a destination name'),
    ('P', 'Destination must be at least 2 characters'),
    ('Paris 75', 'Destination can only contain letters, spaces, hyphens, and apostrophes'),
    ('<script>', 'Destination can only contain letters, spaces, hyphens, and apostrophes'),
])
def test_destination_input_rejects(text, error):
    result = validate_destination_input(text)
    assert not result.is_valid
    assert result.error == error


def test_budget_parses_numbers():
    result = validate_budget('150.5')
    assert result.is_valid
    assert result.data == 150.5
    assert validate_budget(1000000).is_valid


@pytest.mark.parametrize('value', [0, -10, 'abc', None, True, 'nan'])
def test_budget_rejects_invalid_amounts(value):
    result = validate_budget(value)
    assert not result.is_valid
    assert result.error == 'Please enter a valid budget amount'


def test_budget_rejects_too_high():
    result = validate_budget(1000001)
    assert not result.is_valid
    assert result.error == 'Budget amount is too high'


class TestValidateDate:
    today = date(2026, 5, 1)

    def test_today_is_allowed(self):
        result = validate_date('2026-05-01', today=self.today)
        assert result.is_valid
        assert result.data == self.today

    def test_past_date(self):
        result = validate_date('2026-04-30', today=self.today)
        assert result.error == 'Travel date cannot be in the past'

    def test_missing_date(self):
        assert validate_date('', today=self.today).error == 'Please select a date'
        assert validate_date(None, today=self.today).error == 'Please select a date'

    def test_unparseable(self):
        assert validate_date('next tuesday', today=self.today).error == 'Please enter a valid date'

    def test_timestamp_and_date_objects(self):
        assert validate_date('2026-06-01T09:30:00', today=self.today).data == date(2026, 6, 1)
        assert validate_date(date(2026, 7, 4), today=self.today).is_valid


def test_rating_bounds():
    assert validate_rating(0)
    assert validate_rating(5)
    assert validate_rating(3.7)
    assert not validate_rating(5.1)
    assert not validate_rating(-1)
    assert not validate_rating('4')
    assert not validate_rating(True)


class TestDestinationRecord:
    def test_valid_record_keeps_extra_fields(self):
        result = validate_destination_record(make_destination(1, website='https://example.com'))
        assert result.is_valid
        assert result.data['website'] == 'https://example.com'

    def test_missing_field(self):
        record = make_destination(1)
        del record['address']
        result = validate_destination_record(record)
        assert not result.is_valid
        assert 'address' in result.data

    def test_string_id_allowed(self):
        assert validate_destination_record(make_destination('louvre')).is_valid

    @pytest.mark.parametrize('overrides', [
        {'id': True},
        {'id': ''},
        {'rating': 7},
        {'reviews': '12'},
        {'reviews': -1},
    ])
    def test_bad_values(self, overrides):
        assert not validate_destination_record(make_destination(1, **overrides)).is_valid

    def test_not_a_dict(self):
        assert not validate_destination_record(['id', 1]).is_valid


def test_parse_records_drops_malformed():
    good = make_destination(1)
    bad = make_destination(2, rating='excellent')
    records = parse_destination_records([good, bad, 'junk'])
    assert [r['id'] for r in records] == [1]


def test_parse_records_requires_list():
    assert parse_destination_records({'id': 1}) == []
