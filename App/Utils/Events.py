import logging
import threading
from collections import defaultdict
from enum import Enum

logger = logging.getLogger(__name__)


class StorageEvent(str, Enum):
    FAVORITE_ADDED = 'favoriteAdded'
    FAVORITE_REMOVED = 'favoriteRemoved'
    FAVORITE_UPDATED = 'favoriteUpdated'
    FAVORITES_CLEARED = 'favoritesClearedAll'
    SEARCH_HISTORY_ADDED = 'searchHistoryAdded'
    SEARCH_HISTORY_CLEARED = 'searchHistoryCleared'
    PREFERENCES_UPDATED = 'preferencesUpdated'
    PREFERENCE_UPDATED = 'preferenceUpdated'
    PREFERENCES_RESET = 'preferencesReset'
    DATA_IMPORTED = 'dataImported'
    ALL_DATA_CLEARED = 'allDataCleared'
    ITINERARY_CREATED = 'itineraryCreated'
    ITINERARY_DELETED = 'itineraryDeleted'


class EventBus:
    """Synchronous publish/subscribe for storage notifications.

    Handlers are called in subscription order with ``(event, payload)``.
    A failing handler is logged and does not stop the others.
    """

    def __init__(self):
        self._handlers = defaultdict(list)
        self._lock = threading.Lock()

    def subscribe(self, event, handler):
        event = StorageEvent(event)
        with self._lock:
            self._handlers[event].append(handler)
        return lambda: self.unsubscribe(event, handler)

    def unsubscribe(self, event, handler):
        with self._lock:
            handlers = self._handlers.get(StorageEvent(event), [])
            if handler in handlers:
                handlers.remove(handler)
                return True
        return False

    def subscribers(self, event):
        with self._lock:
            return list(self._handlers.get(StorageEvent(event), []))

    def publish(self, event, payload=None):
        event = StorageEvent(event)
        for handler in self.subscribers(event):
            try:
                handler(event, payload)
            except Exception as e:
                logger.error(f"Handler {handler!r} failed for {event.value}: {str(e)}")
