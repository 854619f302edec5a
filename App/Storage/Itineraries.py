import json
import logging
import uuid

from ..Utils.Events import EventBus, StorageEvent
from .Backends import StorageError

logger = logging.getLogger(__name__)


class ItineraryRepository:
    """Saved itineraries, kept as one JSON list next to the other documents."""

    ITINERARIES_KEY = 'travel_planner_itineraries'

    def __init__(self, storage, events=None):
        self.storage = storage
        self.events = events or EventBus()

    def get_itineraries(self):
        try:
            raw = self.storage.get_item(self.ITINERARIES_KEY)
            itineraries = json.loads(raw) if raw else []
        except (StorageError, ValueError) as e:
            logger.error(f"Error retrieving itineraries: {str(e)}")
            return []
        return itineraries if isinstance(itineraries, list) else []

    def get_itinerary(self, itinerary_id):
        return next((it for it in self.get_itineraries() if it.get('id') == itinerary_id), None)

    def save_itinerary(self, itinerary):
        record = dict(itinerary)
        record.setdefault('id', uuid.uuid4().hex)
        try:
            itineraries = self.get_itineraries()
            itineraries.append(record)
            self.storage.set_item(self.ITINERARIES_KEY, json.dumps(itineraries))
        except (StorageError, TypeError, ValueError) as e:
            logger.error(f"Error saving itinerary: {str(e)}")
            return None

        self.events.publish(StorageEvent.ITINERARY_CREATED, dict(record))
        return record

    def delete_itinerary(self, itinerary_id):
        itineraries = self.get_itineraries()
        remaining = [it for it in itineraries if it.get('id') != itinerary_id]
        if len(remaining) == len(itineraries):
            return False
        try:
            self.storage.set_item(self.ITINERARIES_KEY, json.dumps(remaining))
        except StorageError as e:
            logger.error(f"Error deleting itinerary: {str(e)}")
            return False

        self.events.publish(StorageEvent.ITINERARY_DELETED, {'id': itinerary_id})
        return True

    def clear_itineraries(self):
        try:
            self.storage.remove_item(self.ITINERARIES_KEY)
        except StorageError as e:
            logger.error(f"Error clearing itineraries: {str(e)}")
            return False
        return True
