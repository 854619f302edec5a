import locale

SORT_ORDERS = ('asc', 'desc')
PRICE_LEVEL_COST = {'$': 25, '$$': 75, '$$$': 150}


def filter_destinations(records, category='all', *, min_rating=None, location=None, price_level=None):
    """Filter destination records; every criterion that is given must match.

    Args:
        records (list): Destination records
        category (str): Category to keep, or 'all'
        min_rating (float, optional): Keep records rated at least this much
        location (str, optional): Case-insensitive substring of location or name
        price_level (str, optional): Exact price level, e.g. '$$'

    Returns:
        list: A new list with the matching records in their original order
    """
    filtered = list(records)

    if category and category.lower() != 'all':
        wanted = category.lower()
        filtered = [r for r in filtered if str(r.get('category', '')).lower() == wanted]

    if min_rating:
        filtered = [r for r in filtered if r.get('rating', 0) >= min_rating]

    if location:
        needle = location.lower()
        filtered = [
            r for r in filtered
            if needle in str(r.get('location', '')).lower() or needle in str(r.get('name', '')).lower()
        ]

    if price_level:
        filtered = [r for r in filtered if r.get('price_level') == price_level]

    return filtered


def _sort_key(value):
    if isinstance(value, str):
        return locale.strxfrm(value.lower())
    return value


def sort_destinations(records, sort_by='rating', order='desc'):
    """Return a stably sorted copy of `records`.

    Strings compare case-insensitively using the current locale's collation,
    numbers numerically. Records without `sort_by` go last.
    """
    if order not in SORT_ORDERS:
        raise ValueError(f"Sort order must be one of {SORT_ORDERS}, got {order!r}")

    present = [r for r in records if r.get(sort_by) is not None]
    missing = [r for r in records if r.get(sort_by) is None]
    present = sorted(present, key=lambda r: _sort_key(r[sort_by]), reverse=(order == 'desc'))
    return present + missing


def filter_by_budget(records, budget):
    """Keep the records whose price level fits within `budget`."""
    return [r for r in records if PRICE_LEVEL_COST.get(r.get('price_level'), 0) <= budget]
