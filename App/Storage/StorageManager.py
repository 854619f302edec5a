import copy
import json
import logging
from datetime import datetime, timezone

from ..Utils.Events import EventBus, StorageEvent
from ..Utils.Validation import validate_destination_record
from .Backends import StorageError

logger = logging.getLogger(__name__)


def utc_now():
    return datetime.now(timezone.utc)


class LocalStorageManager:
    """Favorites, search history and user preferences kept as three JSON documents.

    Every mutation is written through to ``storage`` immediately and announced
    on ``events``. Storage and serialization failures are logged and reported
    as a ``False``/``None`` return; they never reach the caller as exceptions.
    """

    FAVORITES_KEY = 'travel_planner_favorites'
    SEARCH_HISTORY_KEY = 'travel_planner_search_history'
    USER_PREFS_KEY = 'travel_planner_preferences'
    MAX_HISTORY = 10

    def __init__(self, storage, events=None, now=utc_now):
        self.storage = storage
        self.events = events or EventBus()
        self._now = now

    # ==================== INTERNALS ====================

    def _timestamp(self):
        return self._now().isoformat()

    def _read(self, key, expected_type, default):
        try:
            raw = self.storage.get_item(key)
        except StorageError as e:
            logger.error(f"Error reading {key}: {str(e)}")
            return default
        if raw is None:
            return default
        try:
            value = json.loads(raw)
        except ValueError:
            logger.warning(f"Ignoring corrupt JSON stored under {key}")
            return default
        if not isinstance(value, expected_type):
            logger.warning(f"Ignoring {type(value).__name__} stored under {key}, expected {expected_type.__name__}")
            return default
        return value

    def _write(self, key, value):
        try:
            raw = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Could not serialize {key}: {str(e)}") from e
        self.storage.set_item(key, raw)

    def _restore(self, previous):
        for key, raw in previous.items():
            try:
                if raw is None:
                    self.storage.remove_item(key)
                else:
                    self.storage.set_item(key, raw)
            except StorageError as e:
                logger.error(f"Could not restore {key} after a failed write: {str(e)}")

    def _emit(self, event, payload=None):
        self.events.publish(event, copy.deepcopy(payload))

    # ==================== FAVORITES ====================

    def get_favorites(self):
        return self._read(self.FAVORITES_KEY, list, [])

    def add_favorite(self, destination):
        result = validate_destination_record(destination)
        if not result.is_valid:
            logger.error(f"Destination missing required fields: {result.data or result.error}")
            return False

        try:
            favorites = self.get_favorites()
            entry = result.data
            if any(fav.get('id') == entry['id'] for fav in favorites):
                logger.warning(f"Destination {entry['id']} already in favorites")
                return False

            entry['added_date'] = self._timestamp()
            favorites.append(entry)
            self._write(self.FAVORITES_KEY, favorites)
        except StorageError as e:
            logger.error(f"Error adding favorite: {str(e)}")
            return False

        self._emit(StorageEvent.FAVORITE_ADDED, entry)
        return True

    def remove_favorite(self, destination_id):
        try:
            favorites = self.get_favorites()
            removed = next((fav for fav in favorites if fav.get('id') == destination_id), None)
            if removed is None:
                return False
            self._write(self.FAVORITES_KEY, [fav for fav in favorites if fav.get('id') != destination_id])
        except StorageError as e:
            logger.error(f"Error removing favorite: {str(e)}")
            return False

        self._emit(StorageEvent.FAVORITE_REMOVED, removed)
        return True

    def is_favorited(self, destination_id):
        return any(fav.get('id') == destination_id for fav in self.get_favorites())

    def get_favorite(self, destination_id):
        return next((fav for fav in self.get_favorites() if fav.get('id') == destination_id), None)

    def update_favorite(self, destination_id, updates):
        try:
            favorites = self.get_favorites()
            index = next((i for i, fav in enumerate(favorites) if fav.get('id') == destination_id), None)
            if index is None:
                return False
            favorites[index] = {
                **favorites[index],
                **updates,
                'id': favorites[index]['id'],
                'updated_date': self._timestamp(),
            }
            self._write(self.FAVORITES_KEY, favorites)
        except StorageError as e:
            logger.error(f"Error updating favorite: {str(e)}")
            return False

        self._emit(StorageEvent.FAVORITE_UPDATED, favorites[index])
        return True

    def clear_favorites(self):
        try:
            self.storage.remove_item(self.FAVORITES_KEY)
        except StorageError as e:
            logger.error(f"Error clearing favorites: {str(e)}")
            return False

        self._emit(StorageEvent.FAVORITES_CLEARED)
        return True

    # ==================== SEARCH HISTORY ====================

    def get_search_history(self, limit=MAX_HISTORY):
        history = self._read(self.SEARCH_HISTORY_KEY, list, [])
        return history[:max(limit, 0)]

    def add_search_query(self, query):
        if not isinstance(query, str) or not query.strip():
            return False

        clean_query = query.strip()
        item = {'query': clean_query, 'timestamp': self._timestamp(), 'result_count': 0}
        try:
            history = [h for h in self.get_search_history(self.MAX_HISTORY) if h.get('query') != clean_query]
            history.insert(0, item)
            self._write(self.SEARCH_HISTORY_KEY, history[:self.MAX_HISTORY])
        except StorageError as e:
            logger.error(f"Error adding search query: {str(e)}")
            return False

        self._emit(StorageEvent.SEARCH_HISTORY_ADDED, item)
        return True

    def update_search_result_count(self, query, result_count):
        if not isinstance(query, str):
            return False
        try:
            history = self.get_search_history(self.MAX_HISTORY)
            entry = next((h for h in history if h.get('query') == query.strip()), None)
            if entry is None:
                return False
            entry['result_count'] = result_count
            entry['timestamp'] = self._timestamp()
            self._write(self.SEARCH_HISTORY_KEY, history)
        except StorageError as e:
            logger.error(f"Error updating search result count: {str(e)}")
            return False
        return True

    def clear_search_history(self):
        try:
            self.storage.remove_item(self.SEARCH_HISTORY_KEY)
        except StorageError as e:
            logger.error(f"Error clearing search history: {str(e)}")
            return False

        self._emit(StorageEvent.SEARCH_HISTORY_CLEARED)
        return True

    def get_last_search_query(self):
        history = self.get_search_history(1)
        return history[0].get('query') if history else None

    # ==================== USER PREFERENCES ====================

    @staticmethod
    def get_default_preferences():
        return {
            'theme': 'light',
            'currency': 'USD',
            'language': 'en',
            'distance_unit': 'km',
            'default_filters': {
                'min_rating': 0,
                'max_price': None,
                'categories': [],
            },
            'notifications': True,
            'auto_save_trips': True,
            'results_per_page': 12,
        }

    def get_user_preferences(self):
        stored = self._read(self.USER_PREFS_KEY, dict, {})
        return {**self.get_default_preferences(), **stored}

    def update_preferences(self, updates):
        if not isinstance(updates, dict):
            return False
        try:
            updated = {**self.get_user_preferences(), **updates}
            self._write(self.USER_PREFS_KEY, updated)
        except StorageError as e:
            logger.error(f"Error updating preferences: {str(e)}")
            return False

        self._emit(StorageEvent.PREFERENCES_UPDATED, updated)
        return True

    def set_preference(self, key, value):
        try:
            prefs = self.get_user_preferences()
            prefs[key] = value
            self._write(self.USER_PREFS_KEY, prefs)
        except StorageError as e:
            logger.error(f"Error setting preference: {str(e)}")
            return False

        self._emit(StorageEvent.PREFERENCE_UPDATED, {'key': key, 'value': value})
        return True

    def get_preference(self, key, default=None):
        return self.get_user_preferences().get(key, default)

    def reset_preferences(self):
        try:
            self._write(self.USER_PREFS_KEY, self.get_default_preferences())
        except StorageError as e:
            logger.error(f"Error resetting preferences: {str(e)}")
            return False

        self._emit(StorageEvent.PREFERENCES_RESET)
        return True

    # ==================== UTILITY METHODS ====================

    def get_storage_stats(self):
        return {
            'favorites': len(self.get_favorites()),
            'search_history': len(self.get_search_history()),
            'preferences': len(self.get_user_preferences()),
            'estimated_size': self.get_estimated_size(),
        }

    def get_estimated_size(self):
        total = 0
        for key in (self.FAVORITES_KEY, self.SEARCH_HISTORY_KEY, self.USER_PREFS_KEY):
            try:
                total += len(self.storage.get_item(key) or '')
            except StorageError as e:
                logger.error(f"Error reading {key}: {str(e)}")
        return f"{total / 1024:.2f} KB"

    def export_data(self):
        return {
            'favorites': self.get_favorites(),
            'search_history': self.get_search_history(self.MAX_HISTORY),
            'preferences': self.get_user_preferences(),
            'export_date': self._timestamp(),
        }

    def import_data(self, data):
        if not isinstance(data, dict):
            logger.error('Import data must be an object')
            return False
        sections = (
            (self.FAVORITES_KEY, 'favorites', list),
            (self.SEARCH_HISTORY_KEY, 'search_history', list),
            (self.USER_PREFS_KEY, 'preferences', dict),
        )
        try:
            pending = {
                key: json.dumps(data[name])
                for key, name, expected_type in sections
                if isinstance(data.get(name), expected_type)
            }
        except (TypeError, ValueError) as e:
            logger.error(f"Error serializing import data: {str(e)}")
            return False

        # Either every section is replaced or none is.
        written = {}
        try:
            for key, raw in pending.items():
                previous = self.storage.get_item(key)
                self.storage.set_item(key, raw)
                written[key] = previous
        except StorageError as e:
            logger.error(f"Error importing data: {str(e)}")
            self._restore(written)
            return False

        self._emit(StorageEvent.DATA_IMPORTED, data)
        return True

    def clear_all_data(self):
        try:
            for key in (self.FAVORITES_KEY, self.SEARCH_HISTORY_KEY, self.USER_PREFS_KEY):
                self.storage.remove_item(key)
        except StorageError as e:
            logger.error(f"Error clearing all data: {str(e)}")
            return False

        self._emit(StorageEvent.ALL_DATA_CLEARED)
        return True
