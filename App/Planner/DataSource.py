import copy
import logging
import random
import time
from datetime import datetime, timedelta, timezone

from ..Utils.Geo import calculate_distance, city_center

logger = logging.getLogger(__name__)

# (name suffix, category, price level, description, opening hours)
PLACE_TEMPLATES = [
    ('National Museum', 'museum', '$', 'Explore the rich history and culture of the region with interactive exhibits.', '9:00 AM - 6:00 PM'),
    ('Central Park', 'park', '$', 'Beautiful urban park perfect for walking, picnicking, and outdoor activities.', '6:00 AM - 10:00 PM'),
    ('Historic District', 'attraction', '$', 'Charming old town area with cobblestone streets and historic buildings.', None),
    ('Grand Hotel', 'hotel', '$$$', 'Elegant rooms in the heart of the city with a rooftop terrace.', '24 hours'),
    ('Riverside Bistro', 'restaurant', '$$', 'Seasonal local dishes served on a terrace overlooking the river.', '11:00 AM - 11:00 PM'),
    ('Art Gallery', 'museum', '$$', 'Contemporary and classical collections from regional artists.', '10:00 AM - 7:00 PM'),
    ('Botanical Gardens', 'park', '$', 'Glasshouses and themed gardens with thousands of plant species.', '8:00 AM - 6:00 PM'),
    ('Observation Tower', 'attraction', '$$', 'Panoramic views of the skyline from the highest deck in town.', '9:00 AM - 11:00 PM'),
    ('Boutique Inn', 'hotel', '$$', 'Small family-run inn with individually designed rooms.', '24 hours'),
    ('Street Food Market', 'restaurant', '$', 'Dozens of stalls serving quick bites from around the world.', '5:00 PM - 1:00 AM'),
    ('Old Harbour', 'attraction', '$', 'Waterfront promenade lined with cafes, boats, and street performers.', None),
    ('Fine Dining Room', 'restaurant', '$$$', 'Tasting menus built around local produce and wine pairings.', '6:00 PM - 11:00 PM'),
]

# category -> (amenities, typical visit length)
VISIT_DETAILS = {
    'museum': (['WiFi', 'Gift Shop', 'Guided Tours', 'Cafe'], '2-3 hours'),
    'park': (['Parking', 'Restrooms', 'Picnic Areas'], '1-2 hours'),
    'attraction': (['Guided Tours', 'Gift Shop', 'Restaurant'], '1-3 hours'),
    'hotel': (['WiFi', 'Parking', 'Restaurant', 'Room Service'], 'Overnight'),
    'restaurant': (['WiFi', 'Reservations', 'Outdoor Seating'], '1-2 hours'),
}

ACCESSIBILITY = ['Wheelchair Accessible', 'Elevator', 'Accessible Restrooms']

REVIEW_TITLES = ['Amazing experience!', 'Worth visiting', 'Beautiful location', 'Great service', 'Exceeded expectations']

WEATHER_CONDITIONS = ['Clear', 'Cloudy', 'Rainy', 'Partly Cloudy']
FORECAST_CONDITIONS = ['Clear', 'Cloudy', 'Rainy']
WEATHER_UNITS = ('metric', 'imperial')

TOP_RATED = [
    {'name': 'Dubai', 'rating': 4.9, 'reviews': 1245},
    {'name': 'Paris', 'rating': 4.8, 'reviews': 2341},
    {'name': 'Rome', 'rating': 4.8, 'reviews': 1876},
    {'name': 'Tokyo', 'rating': 4.7, 'reviews': 1654},
    {'name': 'Barcelona', 'rating': 4.7, 'reviews': 1423},
    {'name': 'Amsterdam', 'rating': 4.6, 'reviews': 1089},
    {'name': 'London', 'rating': 4.6, 'reviews': 1934},
    {'name': 'Sydney', 'rating': 4.6, 'reviews': 987},
]

# growth is the percentage rise in searches
TRENDING = [
    {'name': 'Istanbul', 'growth': 45, 'rating': 4.5},
    {'name': 'Bangkok', 'growth': 38, 'rating': 4.4},
    {'name': 'Singapore', 'growth': 32, 'rating': 4.7},
    {'name': 'Amsterdam', 'growth': 28, 'rating': 4.6},
    {'name': 'Bali', 'growth': 25, 'rating': 4.5},
    {'name': 'Prague', 'growth': 22, 'rating': 4.5},
]


def utc_now():
    return datetime.now(timezone.utc)


def to_fahrenheit(celsius):
    return round(celsius * 9 / 5 + 32)


class MockDestinationSource:
    """Destination search over generated demo data.

    The same query always yields the same records. Results are cached per
    (query, category) for ``cache_timeout`` seconds; details, reviews and
    weather share the same cache. ``clock`` drives expiry, ``now`` stamps
    review dates and weather readings.
    """

    def __init__(self, cache_timeout=3600, clock=time.monotonic, now=utc_now):
        self.cache_timeout = cache_timeout
        self._clock = clock
        self._now = now
        self._cache = {}

    # ==================== CACHE MANAGEMENT ====================

    def _get_from_cache(self, key):
        cached = self._cache.get(key)
        if cached is None:
            return None
        stored_at, data = cached
        if self._clock() - stored_at > self.cache_timeout:
            del self._cache[key]
            return None
        return copy.deepcopy(data)

    def _set_cache(self, key, data):
        self._cache[key] = (self._clock(), copy.deepcopy(data))

    def clear_cache(self):
        self._cache.clear()

    @property
    def cache_size(self):
        return len(self._cache)

    # ==================== SEARCH ====================

    def search(self, query, category='all'):
        if not query or not query.strip():
            raise ValueError('Search query cannot be empty')

        query = query.strip()
        category = (category or 'all').lower()
        cache_key = ('search', query.lower(), category)
        cached = self._get_from_cache(cache_key)
        if cached is not None:
            return cached

        records = self._generate(query)
        if category != 'all':
            records = [r for r in records if r['category'] == category]

        logger.info(f"Generated {len(records)} destinations for '{query}' ({category})")
        self._set_cache(cache_key, records)
        return copy.deepcopy(records)

    def get_destination(self, destination_id):
        for key, (_, records) in self._cache.items():
            if key[0] != 'search':
                continue
            for record in records:
                if record['id'] == destination_id:
                    return copy.deepcopy(record)
        return None

    def _generate(self, query):
        rng = random.Random(query.lower())
        center = city_center(query)
        slug = query.lower().replace(' ', '-')

        records = []
        for i, (suffix, category, price_level, description, hours) in enumerate(PLACE_TEMPLATES, start=1):
            lat = round(center['lat'] + rng.uniform(-0.03, 0.03), 6)
            lng = round(center['lng'] + rng.uniform(-0.03, 0.03), 6)
            records.append({
                'id': i,
                'name': f'{query} {suffix}',
                'category': category,
                'location': query,
                'rating': round(rng.uniform(3.0, 5.0), 1),
                'reviews': rng.randint(100, 5000),
                'description': description,
                'address': f'{i} Main Street, {query}',
                'price_level': price_level,
                'opening_hours': hours,
                'coordinates': {'lat': lat, 'lng': lng},
                'distance': round(calculate_distance(center['lat'], center['lng'], lat, lng), 1),
                'website': f'https://example.com/{slug}/{category}{i}',
                'phone': f'+1 (555) 123-{i:04d}',
                'verified': rng.random() > 0.5,
            })
        return records

    # ==================== DETAILS & REVIEWS ====================

    def get_destination_details(self, destination_id):
        """Full record for a destination returned by an earlier search.

        Returns ``None`` when no cached search holds ``destination_id``.
        """
        record = self.get_destination(destination_id)
        if record is None:
            return None

        cache_key = ('details', record['name'])
        cached = self._get_from_cache(cache_key)
        if cached is not None:
            return cached

        amenities, duration = VISIT_DETAILS.get(record['category'], ([], '1-2 hours'))
        details = {
            **record,
            'full_description': (
                f"{record['description']} {record['name']} is one of the best rated "
                f"{record['category']} spots in {record['location']}."
            ),
            'amenities': list(amenities),
            'accessibility': list(ACCESSIBILITY),
            'nearby_transport': 'Public transport stop 5 mins walk',
            'best_time': 'Early morning or late afternoon',
            'duration': duration,
        }
        self._set_cache(cache_key, details)
        return copy.deepcopy(details)

    def get_reviews(self, destination_id, limit=10):
        """Generated reviews for a known destination, newest first.

        Returns ``None`` when the destination is unknown.
        """
        record = self.get_destination(destination_id)
        if record is None:
            return None

        cache_key = ('reviews', record['name'], limit)
        cached = self._get_from_cache(cache_key)
        if cached is not None:
            return cached

        rng = random.Random(f"{record['name'].lower()}:reviews")
        now = self._now()
        reviews = []
        for i in range(limit):
            reviews.append({
                'id': i + 1,
                'author': f'Traveler{i + 1}',
                'rating': rng.randint(4, 5),
                'title': REVIEW_TITLES[i % len(REVIEW_TITLES)],
                'text': 'This was an incredible experience. The destination offers everything and more.',
                'date': now - timedelta(seconds=rng.uniform(0, 30 * 24 * 3600)),
                'helpful': rng.randint(0, 99),
                'verified': rng.random() > 0.3,
            })
        reviews.sort(key=lambda r: r['date'], reverse=True)
        for review in reviews:
            review['date'] = review['date'].isoformat()

        self._set_cache(cache_key, reviews)
        return copy.deepcopy(reviews)

    # ==================== WEATHER ====================

    @staticmethod
    def _check_location(location, units):
        if not location or not location.strip():
            raise ValueError('Location cannot be empty')
        if units not in WEATHER_UNITS:
            raise ValueError(f'Unknown units: {units}')
        return location.strip()

    def get_current_weather(self, location, units='metric'):
        location = self._check_location(location, units)
        today = self._now().date()
        cache_key = ('weather', location.lower(), units)
        cached = self._get_from_cache(cache_key)
        if cached is not None:
            return cached

        rng = random.Random(f'{location.lower()}:{today.isoformat()}')
        temperature = rng.randint(5, 34)
        wind_speed = rng.randint(5, 19)
        weather = {
            'location': location,
            'temperature': temperature,
            'feels_like': temperature - 2,
            'condition': rng.choice(WEATHER_CONDITIONS),
            'humidity': rng.randint(40, 89),
            'wind_speed': wind_speed,
            'pressure': 1013,
            'visibility': 10,
            'uv_index': rng.randint(2, 9),
            'units': units,
            'timestamp': self._now().isoformat(),
        }
        if units == 'imperial':
            weather['temperature'] = to_fahrenheit(temperature)
            weather['feels_like'] = to_fahrenheit(temperature - 2)
            weather['wind_speed'] = round(wind_speed * 0.621371)

        self._set_cache(cache_key, weather)
        return copy.deepcopy(weather)

    def get_weather_forecast(self, location, units='metric', days=5):
        location = self._check_location(location, units)
        today = self._now().date()
        cache_key = ('forecast', location.lower(), units, days)
        cached = self._get_from_cache(cache_key)
        if cached is not None:
            return cached

        rng = random.Random(f'{location.lower()}:{today.isoformat()}:forecast')
        forecast = []
        for day in range(days):
            high = rng.randint(15, 34)
            low = rng.randint(5, 14)
            if units == 'imperial':
                high, low = to_fahrenheit(high), to_fahrenheit(low)
            forecast.append({
                'date': (today + timedelta(days=day)).isoformat(),
                'temp_high': high,
                'temp_low': low,
                'condition': rng.choice(FORECAST_CONDITIONS),
                'humidity': rng.randint(40, 89),
                'wind_speed': rng.randint(5, 19),
                'rain_chance': rng.randint(0, 49),
            })

        result = {'location': location, 'units': units, 'forecast': forecast}
        self._set_cache(cache_key, result)
        return copy.deepcopy(result)

    # ==================== EXPLORE ====================

    def get_top_rated(self, limit=8):
        ranked = sorted(TOP_RATED, key=lambda d: d['rating'], reverse=True)
        return [{**d, 'rank': i} for i, d in enumerate(ranked[:limit], start=1)]

    def get_trending(self, limit=6):
        ranked = sorted(TRENDING, key=lambda d: d['growth'], reverse=True)
        return copy.deepcopy(ranked[:limit])
