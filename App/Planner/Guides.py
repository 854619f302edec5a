import copy

DEFAULT_GUIDE = 'default'

GUIDES = {
    'paris': {
        'name': 'Paris',
        'country': 'France',
        'description': 'The City of Light, known for its art, fashion, and iconic landmarks.',
        'best_time': 'April-May, September-October',
        'currency': 'Euro (€)',
        'language': 'French',
        'time_zone': 'CET (UTC+1)',
        'population': '2.2 million',
        'highlights': [
            {'title': 'Eiffel Tower', 'description': 'Iconic iron lattice tower with panoramic city views'},
            {'title': 'Louvre Museum', 'description': "World's largest art museum housing the Mona Lisa"},
            {'title': 'Notre-Dame Cathedral', 'description': 'Gothic masterpiece on the Île de la Cité'},
            {'title': 'Montmartre', 'description': 'Charming hilltop neighborhood with artistic heritage'},
        ],
        'tips': [
            'Purchase a Paris Museum Pass for unlimited entry to major attractions',
            'Use the metro system, it is efficient and cost-effective',
            'Visit during shoulder seasons to avoid crowds',
            'Book restaurants in advance, especially during peak season',
        ],
        'neighborhoods': [
            {'name': 'Marais', 'vibe': 'Historic, trendy with galleries and boutiques'},
            {'name': 'Latin Quarter', 'vibe': 'Academic atmosphere with bookstores and cafes'},
            {'name': 'Saint-Germain', 'vibe': 'Bohemian charm with literary history'},
        ],
        'transportation': {
            'metro': 'Fast, affordable, covers entire city',
            'bus': 'Good option for sightseeing',
            'bike': 'Vélib bike-sharing system available',
        },
        'cuisine': ['Croissants and café au lait', 'Bistro steaks and duck confit', 'Cheese and wine'],
        'budget': {'budget': '$50-80/day', 'midrange': '$100-200/day', 'luxury': '$250+/day'},
    },
    'london': {
        'name': 'London',
        'country': 'United Kingdom',
        'description': 'Historic capital blending ancient traditions with modern culture.',
        'best_time': 'May-September',
        'currency': 'British Pound (£)',
        'language': 'English',
        'time_zone': 'GMT (UTC+0)',
        'population': '9 million',
        'highlights': [
            {'title': 'Big Ben & Parliament', 'description': 'Iconic Gothic Revival architecture'},
            {'title': 'Tower of London', 'description': 'Historic fortress and royal residence'},
            {'title': 'British Museum', 'description': 'Vast collection of world civilizations'},
        ],
        'tips': [
            'Get an Oyster Card for efficient public transport',
            'Many museums offer free admission',
            'Take a Thames river cruise for unique perspectives',
        ],
        'neighborhoods': [
            {'name': 'Westminster', 'vibe': 'Political center with historic monuments'},
            {'name': 'Soho', 'vibe': 'Vibrant entertainment and dining district'},
            {'name': 'Shoreditch', 'vibe': 'Trendy with street art and indie culture'},
        ],
        'transportation': {
            'underground': 'Extensive tube network covering the city',
            'bus': 'Reliable red buses crisscrossing London',
            'rail': 'Overground and national rail options',
        },
        'cuisine': ['Full English breakfast', 'Fish and chips', 'Sunday roast'],
        'budget': {'budget': '$60-90/day', 'midrange': '$120-250/day', 'luxury': '$300+/day'},
    },
    'tokyo': {
        'name': 'Tokyo',
        'country': 'Japan',
        'description': 'Ultra-modern metropolis where traditional temples meet neon-lit streets.',
        'best_time': 'March-April (Cherry blossoms), October-November',
        'currency': 'Japanese Yen (¥)',
        'language': 'Japanese (English limited)',
        'time_zone': 'JST (UTC+9)',
        'population': '14 million',
        'highlights': [
            {'title': 'Senso-ji Temple', 'description': 'Ancient Buddhist temple in Asakusa district'},
            {'title': 'Shibuya Crossing', 'description': "World's busiest pedestrian intersection"},
            {'title': 'Meiji Shrine', 'description': 'Serene Shinto shrine surrounded by forest'},
        ],
        'tips': [
            'Get a Suica or Pasmo card for seamless transportation',
            'Carry coins and small bills for vending machines',
            'Respect queue etiquette and temple rules',
        ],
        'neighborhoods': [
            {'name': 'Shibuya', 'vibe': 'Youth culture and trendy fashion'},
            {'name': 'Asakusa', 'vibe': 'Traditional Tokyo with temples and markets'},
            {'name': 'Shinjuku', 'vibe': 'Bustling commerce and entertainment'},
        ],
        'transportation': {
            'trains': 'Extensive rail network, punctual and affordable',
            'subway': 'Easy navigation with English signage',
            'taxi': 'Expensive but clean and professional',
        },
        'cuisine': ['Sushi and sashimi', 'Ramen and udon noodles', 'Izakaya dining'],
        'budget': {'budget': '$40-70/day', 'midrange': '$100-180/day', 'luxury': '$250+/day'},
    },
    'new york': {
        'name': 'New York',
        'country': 'United States',
        'description': 'The city that never sleeps, with iconic landmarks and diverse culture.',
        'best_time': 'April-May, September-October',
        'currency': 'US Dollar ($)',
        'language': 'English',
        'time_zone': 'EST (UTC-5)',
        'population': '8.3 million',
        'highlights': [
            {'title': 'Statue of Liberty', 'description': 'Iconic symbol of freedom with Ellis Island views'},
            {'title': 'Central Park', 'description': '843 acres of green space in Manhattan'},
            {'title': 'Empire State Building', 'description': 'Art Deco skyscraper with observation deck'},
        ],
        'tips': [
            'Purchase a MetroCard for subway and bus access',
            'Visit attractions on weekdays to avoid crowds',
            'Walk whenever possible to discover neighborhoods',
        ],
        'neighborhoods': [
            {'name': 'Manhattan', 'vibe': 'Urban energy and iconic landmarks'},
            {'name': 'Brooklyn', 'vibe': 'Cool, creative with local vibe'},
            {'name': 'Greenwich Village', 'vibe': 'Bohemian charm and historic streets'},
        ],
        'transportation': {
            'subway': 'Extensive network, 24/7 service',
            'taxi': 'Yellow cabs plentiful and convenient',
            'walking': 'Best way to explore neighborhoods',
        },
        'cuisine': ['New York pizza slice', 'Bagels with cream cheese and lox', 'Street vendor hot dogs'],
        'budget': {'budget': '$70-100/day', 'midrange': '$150-300/day', 'luxury': '$400+/day'},
    },
    DEFAULT_GUIDE: {
        'name': 'Your Destination',
        'country': 'Unknown',
        'description': 'Explore this destination with general travel advice.',
        'best_time': 'Year-round',
        'currency': 'Local currency',
        'language': 'Local language',
        'time_zone': 'Check local time',
        'population': 'See local info',
        'highlights': [
            {'title': 'Local Attractions', 'description': 'Explore unique sites and landmarks'},
            {'title': 'Museums', 'description': 'Discover art, history, and culture'},
            {'title': 'Markets', 'description': 'Experience local commerce and food'},
        ],
        'tips': [
            'Research the destination before you go',
            'Check visa requirements and travel advisories',
            'Use public transportation to save money',
        ],
        'neighborhoods': [
            {'name': 'City Center', 'vibe': 'Main attractions and urban energy'},
            {'name': 'Old Town', 'vibe': 'Historic charm and heritage'},
        ],
        'transportation': {
            'public': 'Check local public transportation options',
            'taxi': 'Available in most cities',
            'walking': 'Great for exploring at your own pace',
        },
        'cuisine': ['Try local specialties', 'Explore street food markets'],
        'budget': {
            'budget': 'Budget-friendly hostels and street food',
            'midrange': 'Comfortable hotels and casual dining',
            'luxury': 'Premium hotels and fine dining',
        },
    },
}


def get_guide(destination):
    """City guide for ``destination``; unknown cities get the generic guide."""
    key = (destination or '').strip().lower()
    guide = GUIDES.get(key, GUIDES[DEFAULT_GUIDE])
    return {**copy.deepcopy(guide), 'is_default': guide is GUIDES[DEFAULT_GUIDE]}


def search_guides(keyword):
    key = (keyword or '').strip().lower()
    matches = []
    for slug, guide in GUIDES.items():
        if slug == DEFAULT_GUIDE:
            continue
        if any(key in guide[field].lower() for field in ('name', 'country', 'description')):
            matches.append(copy.deepcopy(guide))
    return matches
