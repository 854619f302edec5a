import logging

from flask import Blueprint, request
from marshmallow import ValidationError
from werkzeug.exceptions import BadRequest, InternalServerError

from ...Utils.Response import base_response, error_response
from ..Context import discard_controller, get_itineraries, get_storage
from .storageSchema import ImportSchema

logger = logging.getLogger(__name__)

storage_bp = Blueprint('storage', __name__, url_prefix='/storage')


@storage_bp.route('/export', methods=['GET'])
def export_data():
    try:
        return base_response(
            code=200,
            status='success',
            message='Data exported successfully',
            data=get_storage().export_data()
        )
    except Exception as e:
        logger.exception('Exporting data failed')
        return error_response(500, 'Internal server error', str(e))


@storage_bp.route('/import', methods=['POST'])
def import_data():
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise BadRequest(description='Import data must be a JSON object')
        data = ImportSchema().load(data)

        storage = get_storage()
        if not storage.import_data(data):
            raise InternalServerError(description='Data could not be imported')
        return base_response(
            code=200,
            status='success',
            message='Data imported successfully',
            data=storage.get_storage_stats()
        )
    except ValidationError as e:
        return error_response(400, 'Validation error', e.messages)
    except BadRequest as e:
        return error_response(400, e.description, {'body': e.description})
    except InternalServerError as e:
        return error_response(500, e.description)
    except Exception as e:
        logger.exception('Importing data failed')
        return error_response(500, 'Internal server error', str(e))


@storage_bp.route('/stats', methods=['GET'])
def get_stats():
    try:
        return base_response(
            code=200,
            status='success',
            message='Storage statistics retrieved successfully',
            data=get_storage().get_storage_stats()
        )
    except Exception as e:
        logger.exception('Reading storage statistics failed')
        return error_response(500, 'Internal server error', str(e))


@storage_bp.route('', methods=['DELETE'])
def clear_all_data():
    try:
        if not get_storage().clear_all_data() or not get_itineraries().clear_itineraries():
            raise InternalServerError(description='Data could not be cleared')
        discard_controller()
        return base_response(
            code=200,
            status='success',
            message='All data cleared successfully'
        )
    except InternalServerError as e:
        return error_response(500, e.description)
    except Exception as e:
        logger.exception('Clearing data failed')
        return error_response(500, 'Internal server error', str(e))
