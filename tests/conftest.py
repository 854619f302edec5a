from datetime import date, datetime, timezone

import pytest

from App.Planner.Controller import SearchController
from App.Planner.DataSource import MockDestinationSource
from App.Storage.Backends import MemoryStorage
from App.Storage.Itineraries import ItineraryRepository
from App.Storage.StorageManager import LocalStorageManager
from App.Utils.Events import EventBus
from server import create_app


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def make_destination(destination_id=1, **overrides):
    record = {
        'id': destination_id,
        'name': f'Place {destination_id}',
        'category': 'museum',
        'location': 'Paris',
        'rating': 4.5,
        'reviews': 120,
        'description': 'A place worth visiting.',
        'address': f'{destination_id} Rue de Rivoli, Paris',
        'price_level': '$$',
        'coordinates': {'lat': 48.86, 'lng': 2.35},
    }
    record.update(overrides)
    return record


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def events():
    return EventBus()


@pytest.fixture
def memory_storage():
    return MemoryStorage()


@pytest.fixture
def store(memory_storage, events):
    fixed = datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)
    return LocalStorageManager(memory_storage, events=events, now=lambda: fixed)


@pytest.fixture
def itineraries(memory_storage, events):
    return ItineraryRepository(memory_storage, events=events)


@pytest.fixture
def source(clock):
    return MockDestinationSource(cache_timeout=60, clock=clock)


@pytest.fixture
def controller(source, store, itineraries, clock):
    return SearchController(source, store, itineraries, clock=clock, today=lambda: date(2026, 5, 1))


@pytest.fixture
def sample_records():
    return [
        make_destination(1, name='Louvre', category='museum', rating=4.8, reviews=5000, price_level='$$'),
        make_destination(2, name='Tuileries', category='park', rating=4.2, reviews=800, price_level='$'),
        make_destination(3, name='Le Meurice', category='hotel', rating=4.6, reviews=300, price_level='$$$'),
        make_destination(4, name='bistro Paul', category='restaurant', rating=3.9, reviews=1500, price_level='$',
                         location='Lyon'),
    ]


def make_app(tmp_path, **overrides):
    public = tmp_path / 'public'
    public.mkdir(exist_ok=True)
    (public / 'index.html').write_text('<h1>Travel Planner</h1>', encoding='utf-8')

    return create_app({
        'TESTING': True,
        'SECRET_KEY': 'test-secret',
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'USERS_FILE': str(tmp_path / 'users.json'),
        'STATIC_FOLDER': str(public),
        **overrides,
    })


@pytest.fixture
def app(tmp_path):
    yield make_app(tmp_path)


@pytest.fixture
def client(app):
    return app.test_client()
