import math

EARTH_RADIUS_KM = 6371

CITY_CENTERS = {
    'new york': {'lat': 40.7128, 'lng': -74.0060},
    'london': {'lat': 51.5074, 'lng': -0.1278},
    'paris': {'lat': 48.8566, 'lng': 2.3522},
    'tokyo': {'lat': 35.6762, 'lng': 139.6503},
    'sydney': {'lat': -33.8688, 'lng': 151.2093},
    'barcelona': {'lat': 41.3851, 'lng': 2.1734},
    'rome': {'lat': 41.9028, 'lng': 12.4964},
    'dubai': {'lat': 25.2048, 'lng': 55.2708},
}
DEFAULT_CITY = 'new york'

MARKER_COLORS = {
    'museum': 'yellow',
    'hotel': 'red',
    'restaurant': 'orange',
    'park': 'green',
    'attraction': 'blue',
}
DEFAULT_MARKER_COLOR = 'blue'


def city_center(name):
    return dict(CITY_CENTERS.get((name or '').strip().lower(), CITY_CENTERS[DEFAULT_CITY]))


def calculate_distance(lat1, lon1, lat2, lon2):
    """Great-circle distance in kilometers (haversine)."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)
    a = math.sin(delta_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def marker_color(category):
    return MARKER_COLORS.get((category or '').lower(), DEFAULT_MARKER_COLOR)


def build_map_markers(records):
    """Project destination records onto map markers.

    Records without coordinates are skipped. The map renderer only receives
    these dicts and never reports anything back.
    """
    markers = []
    for record in records:
        coordinates = record.get('coordinates')
        if not coordinates:
            continue
        markers.append({
            'id': record['id'],
            'name': record['name'],
            'category': record.get('category'),
            'lat': coordinates['lat'],
            'lng': coordinates['lng'],
            'color': marker_color(record.get('category')),
        })
    return markers


def marker_bounds(markers):
    if not markers:
        return None
    lats = [m['lat'] for m in markers]
    lngs = [m['lng'] for m in markers]
    return {'north': max(lats), 'south': min(lats), 'east': max(lngs), 'west': min(lngs)}
