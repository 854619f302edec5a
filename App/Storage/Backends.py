import threading

from sqlalchemy.exc import SQLAlchemyError

from ..Routes.Models.Database import db
from ..Routes.Models.StorageItem import StorageItem


class StorageError(Exception):
    """Raised by a backend when a value cannot be read or written."""


class MemoryStorage:
    """In-process key/value storage with an optional size quota.

    Mirrors the browser's local storage: string keys, string values.
    ``quota`` is the total number of characters allowed across all values.
    """

    def __init__(self, quota=None):
        self.quota = quota
        self._items = {}
        self._lock = threading.Lock()

    def get_item(self, key):
        with self._lock:
            return self._items.get(key)

    def set_item(self, key, value):
        if not isinstance(value, str):
            raise StorageError(f"Storage values must be strings, got {type(value).__name__}")
        with self._lock:
            if self.quota is not None:
                used = sum(len(v) for k, v in self._items.items() if k != key)
                if used + len(value) > self.quota:
                    raise StorageError(f"Quota exceeded while writing '{key}'")
            self._items[key] = value

    def remove_item(self, key):
        with self._lock:
            self._items.pop(key, None)

    def keys(self):
        with self._lock:
            return list(self._items)


class DatabaseStorage:
    """Key/value storage for one client namespace, kept in the storage_items table.

    Must be used inside a Flask application context.
    """

    def __init__(self, namespace):
        if not namespace:
            raise ValueError('A storage namespace is required')
        self.namespace = namespace

    def _find(self, key):
        return StorageItem.query.filter_by(namespace=self.namespace, key=key).first()

    def get_item(self, key):
        try:
            item = self._find(key)
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StorageError(f"Could not read '{key}': {str(e)}") from e
        return item.value if item else None

    def set_item(self, key, value):
        if not isinstance(value, str):
            raise StorageError(f"Storage values must be strings, got {type(value).__name__}")
        try:
            item = self._find(key)
            if item:
                item.value = value
            else:
                db.session.add(StorageItem(namespace=self.namespace, key=key, value=value))
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StorageError(f"Could not write '{key}': {str(e)}") from e

    def remove_item(self, key):
        try:
            StorageItem.query.filter_by(namespace=self.namespace, key=key).delete()
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StorageError(f"Could not remove '{key}': {str(e)}") from e

    def keys(self):
        try:
            return [item.key for item in StorageItem.query.filter_by(namespace=self.namespace).all()]
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StorageError(f"Could not list keys: {str(e)}") from e
