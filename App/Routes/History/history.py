import logging

from flask import Blueprint, request
from marshmallow import Schema, ValidationError, fields, validate
from werkzeug.exceptions import InternalServerError

from ...Storage.StorageManager import LocalStorageManager
from ...Utils.Response import base_response, error_response
from ..Context import get_storage

logger = logging.getLogger(__name__)

history_bp = Blueprint('history', __name__, url_prefix='/history')


class HistoryQuerySchema(Schema):
    limit = fields.Int(
        load_default=LocalStorageManager.MAX_HISTORY,
        validate=validate.Range(min=1, max=LocalStorageManager.MAX_HISTORY)
    )


@history_bp.route('', methods=['GET'])
def get_history():
    try:
        params = HistoryQuerySchema().load(request.args.to_dict())
        storage = get_storage()
        history = storage.get_search_history(params['limit'])
        return base_response(
            code=200,
            status='success',
            message='Search history retrieved successfully',
            data={'history': history, 'count': len(history), 'last_query': storage.get_last_search_query()}
        )
    except ValidationError as e:
        return error_response(400, 'Validation error', e.messages)
    except Exception as e:
        logger.exception('Reading search history failed')
        return error_response(500, 'Internal server error', str(e))


@history_bp.route('', methods=['DELETE'])
def clear_history():
    try:
        if not get_storage().clear_search_history():
            raise InternalServerError(description='Search history could not be cleared')
        return base_response(
            code=200,
            status='success',
            message='Search history cleared successfully'
        )
    except InternalServerError as e:
        return error_response(500, e.description)
    except Exception as e:
        logger.exception('Clearing search history failed')
        return error_response(500, 'Internal server error', str(e))
