import logging
import threading
import time
from datetime import date
from enum import Enum

from ..Utils.Destinations import filter_by_budget, filter_destinations, sort_destinations
from ..Utils.Geo import build_map_markers, marker_bounds
from ..Utils.Validation import parse_destination_records, validate_budget, validate_destination_input

logger = logging.getLogger(__name__)


class SearchState(str, Enum):
    IDLE = 'idle'
    SEARCHING = 'searching'
    RESULTS_SHOWN = 'results_shown'
    ERROR_SHOWN = 'error_shown'


class InvalidStateError(Exception):
    """Raised when a results action is requested while no results are shown."""


class SearchController:
    """Drives one client's search session and in-progress itinerary.

    Searches move the controller idle -> searching -> results_shown or
    error_shown. Filtering, sorting and budget narrowing only work on the
    last successful result set and never refetch.

    When two searches overlap, the one issued last wins: a search that
    completes after a newer one was issued is discarded.
    """

    MESSAGE_TIMEOUT = 5.0  # seconds
    MAX_SUGGESTIONS = 5

    def __init__(self, source, storage, itineraries, clock=time.monotonic, today=date.today):
        self.source = source
        self.storage = storage
        self.itineraries = itineraries
        self._clock = clock
        self._today = today

        self.state = SearchState.IDLE
        self.results = []
        self.visible_results = []
        self.current_filter = 'all'
        self.current_location = None
        self.selected_items = []

        self._message = None
        self._message_level = None
        self._message_set_at = None
        self._search_seq = 0
        self._lock = threading.RLock()

    # ==================== NOTIFICATIONS ====================

    def notify(self, text, level='info'):
        self._message = text
        self._message_level = level
        self._message_set_at = self._clock()

    @property
    def message(self):
        if self._message is None:
            return None
        if self._clock() - self._message_set_at >= self.MESSAGE_TIMEOUT:
            self._message = None
            self._message_level = None
            return None
        return self._message

    @property
    def message_level(self):
        return self._message_level if self.message else None

    # ==================== SEARCH ====================

    def search(self, query, category='all'):
        validation = validate_destination_input(query)
        if not validation.is_valid:
            self.notify(validation.error, 'error')
            return False

        query = query.strip()
        category = category or 'all'
        with self._lock:
            self._search_seq += 1
            seq = self._search_seq
            self.state = SearchState.SEARCHING

        self.storage.add_search_query(query)
        try:
            records = parse_destination_records(self.source.search(query, category))
        except Exception as e:
            logger.error(f"Search error for '{query}': {str(e)}")
            with self._lock:
                if seq != self._search_seq:
                    logger.info(f"Discarding failure of superseded search '{query}'")
                    return False
                self.state = SearchState.ERROR_SHOWN
                self.notify(f'Error searching destinations: {str(e)}', 'error')
            return False

        with self._lock:
            if seq != self._search_seq:
                logger.info(f"Discarding results of superseded search '{query}'")
                return False
            self.results = records
            self.visible_results = list(records)
            self.current_filter = category
            self.current_location = query
            self.state = SearchState.RESULTS_SHOWN

        self.storage.update_search_result_count(query, len(records))
        if not records:
            self.notify('No destinations found')
        return True

    def suggest(self, text, limit=MAX_SUGGESTIONS):
        if not text or len(text.strip()) < 2:
            return []
        needle = text.strip().lower()
        history = self.storage.get_search_history()
        return [h['query'] for h in history if needle in h.get('query', '').lower()][:limit]

    def find_result(self, destination_id):
        return next((r for r in self.results if r['id'] == destination_id), None)

    # ==================== RESULT VIEW ====================

    def _require_results(self):
        if self.state != SearchState.RESULTS_SHOWN:
            raise InvalidStateError(f'No results to work with (state is {self.state.value})')

    def apply_filter(self, category='all', min_rating=None, location=None, price_level=None):
        self._require_results()
        self.visible_results = filter_destinations(
            self.results,
            category,
            min_rating=min_rating,
            location=location,
            price_level=price_level,
        )
        self.current_filter = category or 'all'
        return self.visible_results

    def apply_sort(self, sort_by='rating', order='desc'):
        self._require_results()
        try:
            self.visible_results = sort_destinations(self.visible_results, sort_by, order)
        except (ValueError, TypeError) as e:
            logger.warning(f"Cannot sort by {sort_by!r} ({order}): {str(e)}")
            self.notify('Invalid sort option', 'error')
            return None
        return self.visible_results

    def apply_budget(self, budget):
        self._require_results()
        validation = validate_budget(budget)
        if not validation.is_valid:
            self.notify(validation.error, 'error')
            return None
        self.visible_results = filter_by_budget(self.results, validation.data)
        return self.visible_results

    def map_markers(self):
        markers = build_map_markers(self.visible_results)
        return {'markers': markers, 'bounds': marker_bounds(markers)}

    # ==================== FAVORITES ====================

    def toggle_favorite(self, destination_id):
        """Add or remove a result from the favorites.

        Returns whether the destination is favorited afterwards, or None when
        it is not part of the current results.
        """
        if self.storage.is_favorited(destination_id):
            if self.storage.remove_favorite(destination_id):
                self.notify('Removed from favorites')
            return self.storage.is_favorited(destination_id)

        record = self.find_result(destination_id)
        if record is None:
            return None
        if self.storage.add_favorite(record):
            self.notify('Added to favorites')
        else:
            self.notify('Could not add to favorites', 'error')
        return self.storage.is_favorited(destination_id)

    # ==================== ITINERARY ====================

    def add_to_itinerary(self, destination_id):
        record = self.find_result(destination_id)
        if record is None:
            self.notify('Destination not found in current results', 'error')
            return False

        if any(item['id'] == destination_id for item in self.selected_items):
            self.notify(f'"{record["name"]}" is already in your itinerary!', 'warning')
            return False

        self.selected_items.append({
            'id': record['id'],
            'name': record['name'],
            'category': record['category'],
            'price_level': record.get('price_level'),
        })
        self.notify(f'Added "{record["name"]}" to your itinerary!')
        return True

    def remove_from_itinerary(self, index):
        if not 0 <= index < len(self.selected_items):
            return False
        self.selected_items.pop(index)
        return True

    def clear_selection(self):
        self.selected_items = []

    def create_itinerary(self):
        if not self.selected_items:
            self.notify('Please add at least one place to your itinerary!', 'warning')
            return None

        itinerary = self.itineraries.save_itinerary({
            'location': self.current_location,
            'items': list(self.selected_items),
            'created_date': self._today().isoformat(),
            'estimated_days': len(self.selected_items),
        })
        if itinerary is None:
            self.notify('Could not save itinerary', 'error')
            return None

        self.notify(f'Itinerary created for {itinerary["location"]} ({itinerary["estimated_days"]} days)!')
        self.selected_items = []
        return itinerary

    # ==================== SNAPSHOT ====================

    def snapshot(self):
        return {
            'state': self.state.value,
            'location': self.current_location,
            'filter': self.current_filter,
            'results': self.visible_results,
            'count': len(self.visible_results),
            'total': len(self.results),
            'message': self.message,
            'message_level': self.message_level,
        }
