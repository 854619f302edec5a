import locale

import pytest

from conftest import make_app, make_destination


def search(client, query='Paris', **params):
    return client.get('/destinations/search', query_string={'query': query, **params})


class TestDestinations:
    def test_results_before_search(self, client):
        response = client.get('/destinations')
        assert response.status_code == 200
        assert response.json['data']['state'] == 'idle'

    def test_search(self, client):
        response = search(client)
        body = response.json
        assert response.status_code == 200
        assert body['success'] is True
        assert body['data']['state'] == 'results_shown'
        assert body['data']['count'] == 12
        assert body['data']['location'] == 'Paris'

    def test_search_with_category(self, client):
        response = search(client, category='museum')
        assert {r['category'] for r in response.json['data']['results']} == {'museum'}

    @pytest.mark.parametrize('params', [
        {'query': 'P4ris'},
        {'query': 'Paris', 'category': 'casino'},
        {},
    ])
    def test_search_rejects_bad_input(self, client, params):
        response = client.get('/destinations/search', query_string=params)
        assert response.status_code == 400
        assert response.json['status'] == 'error'

    def test_filter_and_sort(self, client):
        search(client)
        response = client.get('/destinations', query_string={'category': 'museum', 'sort_by': 'rating', 'order': 'asc'})
        results = response.json['data']['results']
        assert [r['category'] for r in results] == ['museum', 'museum']
        assert results[0]['rating'] <= results[1]['rating']
        assert response.json['data']['total'] == 12

    def test_budget(self, client):
        search(client)
        response = client.get('/destinations', query_string={'budget': '50'})
        assert {r['price_level'] for r in response.json['data']['results']} == {'$'}

    def test_invalid_budget(self, client):
        search(client)
        response = client.get('/destinations', query_string={'budget': 'lots'})
        assert response.status_code == 400
        assert response.json['message'] == 'Please enter a valid budget amount'

    def test_invalid_sort_field(self, client):
        search(client)
        response = client.get('/destinations', query_string={'sort_by': 'color'})
        assert response.status_code == 400

    def test_markers(self, client):
        search(client, 'Tokyo')
        data = client.get('/destinations/markers').json['data']
        assert data['count'] == 12
        assert data['bounds']['north'] >= data['bounds']['south']
        assert {m['color'] for m in data['markers']} <= {'yellow', 'red', 'orange', 'green', 'blue'}

    def test_suggestions(self, client):
        search(client, 'Paris')
        search(client, 'Rome')
        response = client.get('/destinations/suggestions', query_string={'q': 'par'})
        assert response.json['data']['suggestions'] == ['Paris']

    def test_toggle_favorite(self, client):
        search(client)
        first = client.post('/destinations/1/favorite').json['data']
        assert first == {'id': 1, 'favorited': True}
        assert client.get('/favorites').json['data']['count'] == 1

        second = client.post('/destinations/1/favorite').json['data']
        assert second['favorited'] is False

    def test_toggle_unknown_destination(self, client):
        search(client)
        assert client.post('/destinations/404/favorite').status_code == 404


class TestFavorites:
    def test_add_list_update_remove(self, client):
        response = client.post('/favorites', json=make_destination('louvre', website='https://louvre.fr'))
        assert response.status_code == 201
        assert response.json['data']['added_date']
        assert response.json['data']['website'] == 'https://louvre.fr'

        response = client.patch('/favorites/louvre', json={'notes': 'Book ahead', 'visit_date': '2026-06-01'})
        assert response.status_code == 200
        assert response.json['data']['notes'] == 'Book ahead'
        assert response.json['data']['visit_date'] == '2026-06-01'

        assert client.delete('/favorites/louvre').status_code == 200
        assert client.get('/favorites').json['data']['favorites'] == []

    def test_duplicate(self, client):
        client.post('/favorites', json=make_destination(7))
        response = client.post('/favorites', json=make_destination(7))
        assert response.status_code == 400
        assert response.json['message'] == 'Place already in favorites'

    def test_integer_id_in_path(self, client):
        client.post('/favorites', json=make_destination(7))
        assert client.delete('/favorites/7').status_code == 200

    def test_invalid_record(self, client):
        record = make_destination(1)
        del record['name']
        response = client.post('/favorites', json=record)
        assert response.status_code == 400
        assert 'name' in response.json['error']

    def test_missing(self, client):
        assert client.patch('/favorites/nope', json={'notes': 'x'}).status_code == 404
        assert client.delete('/favorites/nope').status_code == 404

    def test_too_many_tags(self, client):
        client.post('/favorites', json=make_destination(1))
        response = client.patch('/favorites/1', json={'tags': [str(i) for i in range(21)]})
        assert response.status_code == 400

    def test_clear(self, client):
        client.post('/favorites', json=make_destination(1))
        client.post('/favorites', json=make_destination(2))
        assert client.delete('/favorites').status_code == 200
        assert client.get('/favorites').json['data']['count'] == 0

    def test_clients_are_isolated(self, app, client):
        client.post('/favorites', json=make_destination(1))
        other = app.test_client()
        assert other.get('/favorites').json['data']['count'] == 0


class TestHistory:
    def test_search_records_history(self, client):
        search(client, 'Paris')
        search(client, 'Rome')
        history = client.get('/history').json['data']['history']
        assert [h['query'] for h in history] == ['Rome', 'Paris']
        assert history[0]['result_count'] == 12
        assert client.get('/history').json['data']['last_query'] == 'Rome'

    def test_limit(self, client):
        search(client, 'Paris')
        search(client, 'Rome')
        assert client.get('/history?limit=1').json['data']['count'] == 1
        assert client.get('/history?limit=50').status_code == 400

    def test_clear(self, client):
        search(client)
        assert client.delete('/history').status_code == 200
        assert client.get('/history').json['data']['history'] == []


class TestPreferences:
    def test_defaults(self, client):
        data = client.get('/preferences').json['data']
        assert data['theme'] == 'light'
        assert data['distance_unit'] == 'km'

    def test_update(self, client):
        response = client.put('/preferences', json={'theme': 'dark', 'results_per_page': 24})
        assert response.status_code == 200
        assert response.json['data']['theme'] == 'dark'
        assert response.json['data']['results_per_page'] == 24
        assert response.json['data']['currency'] == 'USD'

    @pytest.mark.parametrize('body', [
        {'theme': 'purple'},
        {'currency': 'EURO'},
        {'results_per_page': 0},
        {'default_filters': {'categories': ['casino']}},
    ])
    def test_update_rejects_invalid(self, client, body):
        assert client.put('/preferences', json=body).status_code == 400

    def test_single_preference(self, client):
        response = client.put('/preferences/currency', json={'value': 'EUR'})
        assert response.status_code == 200
        assert client.get('/preferences/currency').json['data'] == {'key': 'currency', 'value': 'EUR'}

    def test_single_preference_validated(self, client):
        assert client.put('/preferences/theme', json={'value': 'neon'}).status_code == 400
        assert client.put('/preferences/theme', json={}).status_code == 400

    def test_reset(self, client):
        client.put('/preferences', json={'theme': 'dark'})
        response = client.delete('/preferences')
        assert response.json['data']['theme'] == 'light'


class TestItinerary:
    def test_build_and_save(self, client):
        search(client)
        assert client.post('/itinerary/items', json={'id': 1}).status_code == 201
        assert client.post('/itinerary/items', json={'id': 2}).status_code == 201
        assert client.get('/itinerary/items').json['data']['count'] == 2

        response = client.post('/itinerary')
        assert response.status_code == 201
        itinerary = response.json['data']
        assert itinerary['location'] == 'Paris'
        assert itinerary['estimated_days'] == 2
        assert client.get('/itinerary/items').json['data']['count'] == 0

        listed = client.get('/itineraries').json['data']
        assert listed['count'] == 1
        assert client.get(f"/itineraries/{itinerary['id']}").json['data']['id'] == itinerary['id']

        assert client.delete(f"/itineraries/{itinerary['id']}").status_code == 200
        assert client.get(f"/itineraries/{itinerary['id']}").status_code == 404

    def test_duplicate_item(self, client):
        search(client)
        client.post('/itinerary/items', json={'id': 1})
        response = client.post('/itinerary/items', json={'id': 1})
        assert response.status_code == 400
        assert 'already in your itinerary' in response.json['message']

    def test_unknown_item(self, client):
        search(client)
        assert client.post('/itinerary/items', json={'id': 99}).status_code == 400
        assert client.post('/itinerary/items', json={}).status_code == 400

    def test_clear_items(self, client):
        search(client)
        client.post('/itinerary/items', json={'id': 1})
        assert client.delete('/itinerary/items').status_code == 200
        assert client.get('/itinerary/items').json['data']['count'] == 0

    def test_remove_item(self, client):
        search(client)
        client.post('/itinerary/items', json={'id': 1})
        assert client.delete('/itinerary/items/0').status_code == 200
        assert client.delete('/itinerary/items/0').status_code == 404

    def test_empty_itinerary(self, client):
        response = client.post('/itinerary')
        assert response.status_code == 400
        assert response.json['message'] == 'Please add at least one place to your itinerary!'


class TestStorage:
    def test_export_import(self, app, client):
        client.post('/favorites', json=make_destination(1))
        client.put('/preferences', json={'theme': 'dark'})
        exported = client.get('/storage/export').json['data']
        assert exported['export_date']

        other = app.test_client()
        response = other.post('/storage/import', json=exported)
        assert response.status_code == 200
        assert response.json['data']['favorites'] == 1
        assert other.get('/preferences/theme').json['data']['value'] == 'dark'

    def test_import_rejects_non_object(self, client):
        assert client.post('/storage/import', json=[1, 2, 3]).status_code == 400

    def test_import_rejects_ill_typed_sections(self, client):
        response = client.post('/storage/import', json={'favorites': 'none'})
        assert response.status_code == 400
        assert 'favorites' in response.json['error']

    def test_stats_and_clear(self, client):
        search(client)
        client.post('/favorites', json=make_destination('x'))
        stats = client.get('/storage/stats').json['data']
        assert stats['favorites'] == 1
        assert stats['search_history'] == 1

        assert client.delete('/storage').status_code == 200
        stats = client.get('/storage/stats').json['data']
        assert stats['favorites'] == 0
        assert stats['search_history'] == 0
        assert client.get('/destinations').json['data']['state'] == 'idle'

    def test_clear_removes_itineraries(self, client):
        search(client)
        client.post('/itinerary/items', json={'id': 1})
        client.post('/itinerary')
        client.delete('/storage')
        assert client.get('/itineraries').json['data']['count'] == 0


class TestStaticFiles:
    def test_index(self, client):
        response = client.get('/')
        assert response.status_code == 200
        assert b'Travel Planner' in response.data

    def test_missing_file(self, client):
        response = client.get('/nothing-here.js')
        assert response.status_code == 404
        assert response.json['message'] == 'File not found'


class TestDestinationDetails:
    def test_details(self, client):
        search(client, 'Rome')
        response = client.get('/destinations/1')
        assert response.status_code == 200
        data = response.json['data']
        assert data['id'] == 1
        assert data['name'] == 'Rome National Museum'
        assert data['amenities']

    def test_unknown_destination(self, client):
        assert client.get('/destinations/1').status_code == 404
        search(client, 'Rome')
        assert client.get('/destinations/99').status_code == 404

    def test_reviews(self, client):
        search(client, 'Rome')
        response = client.get('/destinations/2/reviews', query_string={'limit': 3})
        assert response.status_code == 200
        assert response.json['data']['count'] == 3
        assert {r['rating'] for r in response.json['data']['reviews']} <= {4, 5}

    @pytest.mark.parametrize('limit', ['0', '51', 'many'])
    def test_reviews_limit_validated(self, client, limit):
        search(client, 'Rome')
        assert client.get('/destinations/2/reviews', query_string={'limit': limit}).status_code == 400

    def test_reviews_unknown_destination(self, client):
        assert client.get('/destinations/2/reviews').status_code == 404


class TestExplore:
    def test_top_rated(self, client):
        data = client.get('/destinations/top-rated', query_string={'limit': 2}).json['data']
        assert data['count'] == 2
        assert [d['name'] for d in data['destinations']] == ['Dubai', 'Paris']

    def test_trending(self, client):
        data = client.get('/destinations/trending').json['data']
        assert data['count'] == 6
        assert data['destinations'][0]['name'] == 'Istanbul'

    def test_limit_validated(self, client):
        assert client.get('/destinations/trending', query_string={'limit': '0'}).status_code == 400


class TestWeather:
    def test_current(self, client):
        response = client.get('/weather', query_string={'location': 'Paris'})
        assert response.status_code == 200
        assert response.json['data']['location'] == 'Paris'
        assert response.json['data']['units'] == 'metric'

    def test_forecast(self, client):
        response = client.get('/weather/forecast', query_string={'location': 'Paris', 'units': 'imperial', 'days': 3})
        assert response.status_code == 200
        assert len(response.json['data']['forecast']) == 3
        assert response.json['data']['units'] == 'imperial'

    @pytest.mark.parametrize('path, params', [
        ('/weather', {}),
        ('/weather', {'location': 'Paris', 'units': 'kelvin'}),
        ('/weather/forecast', {'location': 'Paris', 'days': 8}),
    ])
    def test_rejects_bad_parameters(self, client, path, params):
        assert client.get(path, query_string=params).status_code == 400

    def test_blank_location(self, client):
        response = client.get('/weather', query_string={'location': '   '})
        assert response.status_code == 400
        assert response.json['message'] == 'Location cannot be empty'


class TestGuides:
    def test_city_guide(self, client):
        data = client.get('/guides/tokyo').json['data']
        assert data['name'] == 'Tokyo'
        assert data['is_default'] is False

    def test_city_with_space(self, client):
        assert client.get('/guides/new%20york').json['data']['name'] == 'New York'

    def test_unknown_city(self, client):
        response = client.get('/guides/atlantis')
        assert response.status_code == 200
        assert response.json['data']['is_default'] is True

    def test_search(self, client):
        data = client.get('/guides', query_string={'q': 'kingdom'}).json['data']
        assert [g['name'] for g in data['guides']] == ['London']
        assert client.get('/guides').json['data']['count'] == 4


class TestClientControllers:
    def test_controllers_are_bounded(self, tmp_path):
        app = make_app(tmp_path, MAX_CLIENTS=3)
        for _ in range(25):
            response = app.test_client(use_cookies=False).get('/destinations/suggestions', query_string={'q': 'pa'})
            assert response.status_code == 200
        assert len(app.extensions['travel_planner']['controllers']) == 3

    def test_evicted_client_keeps_its_data(self, tmp_path):
        app = make_app(tmp_path, MAX_CLIENTS=1)
        client = app.test_client()
        client.post('/favorites', json=make_destination(1))
        search(client, 'Paris')
        search(app.test_client(), 'Rome')

        assert client.get('/destinations').json['data']['state'] == 'idle'
        assert client.get('/favorites').json['data']['count'] == 1
        assert client.get('/history').json['data']['history'][0]['query'] == 'Paris'


class TestLocale:
    def test_app_starts_without_collation_locale(self, tmp_path, monkeypatch):
        calls = []

        def unavailable(category, value=None):
            calls.append(category)
            raise locale.Error('unsupported locale setting')

        monkeypatch.setattr(locale, 'setlocale', unavailable)
        client = make_app(tmp_path).test_client()
        assert calls == [locale.LC_COLLATE]

        search(client, 'Paris')
        view = client.get('/destinations', query_string={'sort_by': 'name', 'order': 'asc'}).json['data']
        names = [r['name'] for r in view['results']]
        assert names == sorted(names, key=str.lower)
