import json
import logging
import os
import secrets
import tempfile
import threading
from datetime import datetime, timezone

from werkzeug.security import check_password_hash, generate_password_hash

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ('first_name', 'last_name', 'email', 'preferences')


class UserStoreError(Exception):
    """The users file could not be read or written."""


class UserExistsError(Exception):
    pass


class UserNotFoundError(Exception):
    pass


class InvalidCredentialsError(Exception):
    pass


def _now():
    return datetime.now(timezone.utc).isoformat()


def public_user(user):
    return {k: v for k, v in user.items() if k != 'password'}


class UserStore:
    """Accounts kept in a flat JSON file: ``{"users": [...]}``.

    Passwords are stored as werkzeug hashes and never returned.
    """

    def __init__(self, path):
        self.path = path
        self._lock = threading.Lock()

    def _load(self):
        """Read the users file; a missing file is an empty store.

        An unreadable or malformed file raises instead of reading as empty,
        so the next write cannot replace every account.
        """
        if not os.path.exists(self.path):
            return {'users': []}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Error loading users: {str(e)}")
            raise UserStoreError('Could not read users') from e
        if not isinstance(data, dict) or not isinstance(data.get('users'), list):
            logger.error(f"Unexpected layout in {self.path}")
            raise UserStoreError('Could not read users')
        return data

    def _save(self, data):
        directory = os.path.dirname(os.path.abspath(self.path))
        fd, tmp_path = tempfile.mkstemp(prefix='.users-', suffix='.json', dir=directory)
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error(f"Error saving users: {str(e)}")
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise UserStoreError('Could not save users') from e

    @staticmethod
    def _find_by_email(data, email):
        return next((u for u in data['users'] if u['email'] == email.lower()), None)

    @staticmethod
    def _find_by_id(data, user_id):
        return next((u for u in data['users'] if u['id'] == user_id), None)

    def register(self, email, password, first_name, last_name):
        with self._lock:
            data = self._load()
            if self._find_by_email(data, email):
                raise UserExistsError('Email already registered')

            user = {
                'id': secrets.token_hex(8),
                'email': email.lower(),
                'password': generate_password_hash(password),
                'first_name': first_name,
                'last_name': last_name,
                'created_at': _now(),
                'updated_at': _now(),
                'favorites': [],
                'preferences': {},
            }
            data['users'].append(user)
            self._save(data)
        return public_user(user)

    def authenticate(self, email, password):
        user = self._find_by_email(self._load(), email)
        if user is None:
            raise UserNotFoundError('User not found')
        if not check_password_hash(user['password'], password):
            raise InvalidCredentialsError('Invalid password')
        return public_user(user)

    def get_user(self, user_id):
        user = self._find_by_id(self._load(), user_id)
        return public_user(user) if user else None

    def update_profile(self, user_id, updates):
        with self._lock:
            data = self._load()
            user = self._find_by_id(data, user_id)
            if user is None:
                raise UserNotFoundError('User not found')

            email = updates.get('email')
            if email and email.lower() != user['email']:
                if any(u['id'] != user_id and u['email'] == email.lower() for u in data['users']):
                    raise UserExistsError('Email already in use')

            for field in PROFILE_FIELDS:
                if field in updates:
                    user[field] = updates[field].lower() if field == 'email' else updates[field]
            user['updated_at'] = _now()
            self._save(data)
        return public_user(user)

    def change_password(self, user_id, old_password, new_password):
        with self._lock:
            data = self._load()
            user = self._find_by_id(data, user_id)
            if user is None:
                raise UserNotFoundError('User not found')
            if not check_password_hash(user['password'], old_password):
                raise InvalidCredentialsError('Current password is incorrect')

            user['password'] = generate_password_hash(new_password)
            user['updated_at'] = _now()
            self._save(data)
