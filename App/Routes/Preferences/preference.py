import logging

from flask import Blueprint, request
from marshmallow import ValidationError
from werkzeug.exceptions import InternalServerError

from ...Utils.Response import base_response, error_response
from ..Context import get_storage
from .preferenceSchema import PreferencesUpdateSchema, PreferenceValueSchema

logger = logging.getLogger(__name__)

preferences_bp = Blueprint('preferences', __name__, url_prefix='/preferences')


@preferences_bp.route('', methods=['GET'])
def get_preferences():
    try:
        return base_response(
            code=200,
            status='success',
            message='Preferences retrieved successfully',
            data=get_storage().get_user_preferences()
        )
    except Exception as e:
        logger.exception('Reading preferences failed')
        return error_response(500, 'Internal server error', str(e))


@preferences_bp.route('', methods=['PUT'])
def update_preferences():
    try:
        storage = get_storage()
        updates = PreferencesUpdateSchema().load(request.get_json(silent=True) or {}, partial=True)
        if not storage.update_preferences(updates):
            raise InternalServerError(description='Preferences could not be saved')
        return base_response(
            code=200,
            status='success',
            message='Preferences updated successfully',
            data=storage.get_user_preferences()
        )
    except ValidationError as e:
        return error_response(400, 'Validation error', e.messages)
    except InternalServerError as e:
        return error_response(500, e.description)
    except Exception as e:
        logger.exception('Updating preferences failed')
        return error_response(500, 'Internal server error', str(e))


@preferences_bp.route('', methods=['DELETE'])
def reset_preferences():
    try:
        storage = get_storage()
        if not storage.reset_preferences():
            raise InternalServerError(description='Preferences could not be reset')
        return base_response(
            code=200,
            status='success',
            message='Preferences reset to defaults',
            data=storage.get_user_preferences()
        )
    except InternalServerError as e:
        return error_response(500, e.description)
    except Exception as e:
        logger.exception('Resetting preferences failed')
        return error_response(500, 'Internal server error', str(e))


@preferences_bp.route('/<key>', methods=['GET'])
def get_preference(key):
    try:
        return base_response(
            code=200,
            status='success',
            message='Preference retrieved successfully',
            data={'key': key, 'value': get_storage().get_preference(key)}
        )
    except Exception as e:
        logger.exception('Reading preference failed')
        return error_response(500, 'Internal server error', str(e))


@preferences_bp.route('/<key>', methods=['PUT'])
def set_preference(key):
    try:
        payload = PreferenceValueSchema().load(request.get_json(silent=True) or {})
        # Known keys are checked against the same rules as a bulk update.
        value = PreferencesUpdateSchema().load({key: payload['value']}, partial=True)[key]
        if not get_storage().set_preference(key, value):
            raise InternalServerError(description='Preference could not be saved')
        return base_response(
            code=200,
            status='success',
            message='Preference updated successfully',
            data={'key': key, 'value': value}
        )
    except ValidationError as e:
        return error_response(400, 'Validation error', e.messages)
    except InternalServerError as e:
        return error_response(500, e.description)
    except Exception as e:
        logger.exception('Setting preference failed')
        return error_response(500, 'Internal server error', str(e))
