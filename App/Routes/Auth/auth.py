import logging
from functools import wraps

from flask import Blueprint, current_app, request, session
from marshmallow import ValidationError
from werkzeug.exceptions import BadRequest, NotFound

from ...Utils.Response import base_response, error_response
from .authSchema import (ChangePasswordSchema, LoginSchema, ProfileUpdateSchema,
                         RegisterSchema, UserSchema)
from .userStore import (InvalidCredentialsError, UserExistsError, UserNotFoundError,
                        UserStore, UserStoreError)

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__, url_prefix='/api')

user_schema = UserSchema()
register_schema = RegisterSchema()
login_schema = LoginSchema()

USER_STORE_KEY = 'user_store'


def init_user_store(app):
    app.extensions[USER_STORE_KEY] = UserStore(app.config['USERS_FILE'])


def get_user_store():
    return current_app.extensions[USER_STORE_KEY]


def require_auth(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if 'user_id' not in session:
            return error_response(401, 'Please login first', {'auth': 'Not logged in'})
        return view(*args, **kwargs)
    return wrapper


@auth_bp.route('/register', methods=['POST'])
def register():
    try:
        data = register_schema.load(request.get_json(silent=True) or {})
        user = get_user_store().register(
            email=data['email'],
            password=data['password'],
            first_name=data['first_name'],
            last_name=data['last_name'],
        )
        logger.info(f"Registered user {user['id']}")
        return base_response(
            code=201,
            status='success',
            message='User registered successfully',
            data=user_schema.dump(user)
        )
    except ValidationError as e:
        return error_response(400, 'Validation error', e.messages)
    except UserExistsError as e:
        return error_response(400, str(e), {'email': str(e)})
    except UserStoreError as e:
        return error_response(500, str(e))
    except Exception as e:
        logger.exception('Registration failed')
        return error_response(500, 'Internal server error', str(e))


@auth_bp.route('/login', methods=['POST'])
def login():
    try:
        data = login_schema.load(request.get_json(silent=True) or {})
        user = get_user_store().authenticate(data['email'], data['password'])
        session['user_id'] = user['id']
        return base_response(
            code=200,
            status='success',
            message='Login successful',
            data=user_schema.dump(user)
        )
    except ValidationError as e:
        return error_response(400, 'Validation error', e.messages)
    except (UserNotFoundError, InvalidCredentialsError):
        return error_response(401, 'Invalid email or password', {'auth': 'Invalid credentials'})
    except UserStoreError as e:
        return error_response(500, str(e))
    except Exception as e:
        logger.exception('Login failed')
        return error_response(500, 'Internal server error', str(e))


@auth_bp.route('/update-profile', methods=['POST'])
@require_auth
def update_profile():
    try:
        updates = ProfileUpdateSchema().load(request.get_json(silent=True) or {})
        if not updates:
            raise BadRequest(description='No profile fields to update')
        user = get_user_store().update_profile(session['user_id'], updates)
        return base_response(
            code=200,
            status='success',
            message='Profile updated successfully',
            data=user_schema.dump(user)
        )
    except ValidationError as e:
        return error_response(400, 'Validation error', e.messages)
    except BadRequest as e:
        return error_response(400, e.description)
    except UserExistsError as e:
        return error_response(400, str(e), {'email': str(e)})
    except UserNotFoundError as e:
        return error_response(404, str(e), {'user': 'Not found'})
    except UserStoreError as e:
        return error_response(500, str(e))
    except Exception as e:
        logger.exception('Profile update failed')
        return error_response(500, 'Internal server error', str(e))


@auth_bp.route('/change-password', methods=['POST'])
@require_auth
def change_password():
    try:
        data = ChangePasswordSchema().load(request.get_json(silent=True) or {})
        get_user_store().change_password(session['user_id'], data['old_password'], data['new_password'])
        return base_response(
            code=200,
            status='success',
            message='Password changed successfully'
        )
    except ValidationError as e:
        return error_response(400, 'Validation error', e.messages)
    except InvalidCredentialsError as e:
        return error_response(401, str(e), {'old_password': str(e)})
    except UserNotFoundError as e:
        return error_response(404, str(e), {'user': 'Not found'})
    except UserStoreError as e:
        return error_response(500, str(e))
    except Exception as e:
        logger.exception('Password change failed')
        return error_response(500, 'Internal server error', str(e))


@auth_bp.route('/me', methods=['GET'])
@require_auth
def me():
    try:
        user = get_user_store().get_user(session['user_id'])
        if user is None:
            raise NotFound(description='User not found')
        return base_response(
            code=200,
            status='success',
            message='User retrieved successfully',
            data=user_schema.dump(user)
        )
    except NotFound as e:
        return error_response(404, e.description, {'user': 'Not found'})
    except Exception as e:
        logger.exception('Reading user failed')
        return error_response(500, 'Internal server error', str(e))


@auth_bp.route('/logout', methods=['GET'])
def logout():
    session.pop('user_id', None)
    return base_response(
        code=200,
        status='success',
        message='Logout successful'
    )
