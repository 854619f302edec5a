import logging
import uuid

from flask import current_app, session

from ..Planner.Controller import SearchController
from ..Planner.DataSource import MockDestinationSource
from ..Planner.Registry import ControllerRegistry
from ..Storage.Backends import DatabaseStorage
from ..Storage.Itineraries import ItineraryRepository
from ..Storage.StorageManager import LocalStorageManager
from ..Utils.Events import EventBus, StorageEvent

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'travel_planner'


def log_storage_event(event, payload):
    logger.debug(f"Storage event {event.value}: {payload}")


def init_planner(app, source=None):
    """Wire the shared planner services onto the app.

    Every client gets its own storage namespace and controller; the event bus
    and the destination source are shared.
    """
    events = EventBus()
    for event in StorageEvent:
        events.subscribe(event, log_storage_event)

    source = source or MockDestinationSource(cache_timeout=app.config['CACHE_TIMEOUT'])

    def build_controller(client_id):
        return SearchController(
            source,
            LocalStorageManager(DatabaseStorage(client_id), events=events),
            ItineraryRepository(DatabaseStorage(client_id), events=events),
        )

    app.extensions[EXTENSION_KEY] = {
        'events': events,
        'source': source,
        'controllers': ControllerRegistry(build_controller, max_size=app.config['MAX_CLIENTS']),
    }


def _services():
    return current_app.extensions[EXTENSION_KEY]


def get_source():
    return _services()['source']


def get_client_id():
    if 'client_id' not in session:
        session['client_id'] = uuid.uuid4().hex
    return session['client_id']


def get_storage():
    return LocalStorageManager(DatabaseStorage(get_client_id()), events=_services()['events'])


def get_itineraries():
    return ItineraryRepository(DatabaseStorage(get_client_id()), events=_services()['events'])


def get_controller():
    return _services()['controllers'].get(get_client_id())


def discard_controller():
    return _services()['controllers'].discard(get_client_id())


def candidate_ids(raw_id):
    """Ids arrive as path strings; stored ids may be integers."""
    if raw_id.lstrip('-').isdigit():
        return [int(raw_id), raw_id]
    return [raw_id]
