import logging

from flask import Blueprint, request
from marshmallow import ValidationError
from werkzeug.exceptions import BadRequest, InternalServerError, NotFound

from ...Utils.Response import base_response, error_response
from ..Context import candidate_ids, get_storage
from .favoriteSchema import FavoriteSchema, FavoriteUpdateSchema

logger = logging.getLogger(__name__)

favorites_bp = Blueprint('favorites', __name__, url_prefix='/favorites')


def _find_favorite_id(storage, raw_id):
    for candidate in candidate_ids(raw_id):
        if storage.is_favorited(candidate):
            return candidate
    raise NotFound(description='Favorite not found')


@favorites_bp.route('', methods=['POST'])
def add_favorite():
    try:
        storage = get_storage()
        favorite_data = FavoriteSchema().load(request.get_json(silent=True) or {})

        if storage.is_favorited(favorite_data['id']):
            raise BadRequest(description='Place already in favorites')
        if not storage.add_favorite(favorite_data):
            raise InternalServerError(description='Favorite could not be saved')

        return base_response(
            code=201,
            status='success',
            message='Favorite added successfully',
            data=storage.get_favorite(favorite_data['id'])
        )

    except ValidationError as e:
        return error_response(400, 'Validation error', e.messages)
    except BadRequest as e:
        return error_response(400, e.description, {'favorite': e.description})
    except InternalServerError as e:
        return error_response(500, e.description)
    except Exception as e:
        logger.exception('Adding favorite failed')
        return error_response(500, 'Internal server error', str(e))


@favorites_bp.route('', methods=['GET'])
def get_favorites():
    try:
        favorites = get_storage().get_favorites()
        return base_response(
            code=200,
            status='success',
            message='Favorites retrieved successfully',
            data={'favorites': favorites, 'count': len(favorites)}
        )
    except Exception as e:
        logger.exception('Reading favorites failed')
        return error_response(500, 'Internal server error', str(e))


@favorites_bp.route('/<favorite_id>', methods=['PATCH'])
def update_favorite(favorite_id):
    try:
        storage = get_storage()
        destination_id = _find_favorite_id(storage, favorite_id)
        updates = FavoriteUpdateSchema().load_updates(request.get_json(silent=True) or {})
        if not storage.update_favorite(destination_id, updates):
            raise InternalServerError(description='Favorite could not be updated')

        return base_response(
            code=200,
            status='success',
            message='Favorite updated successfully',
            data=storage.get_favorite(destination_id)
        )

    except ValidationError as e:
        return error_response(400, 'Validation error', e.messages)
    except NotFound as e:
        return error_response(404, e.description, {'favorite': 'Not found'})
    except InternalServerError as e:
        return error_response(500, e.description)
    except Exception as e:
        logger.exception('Updating favorite failed')
        return error_response(500, 'Internal server error', str(e))


@favorites_bp.route('/<favorite_id>', methods=['DELETE'])
def remove_favorite(favorite_id):
    try:
        storage = get_storage()
        if not storage.remove_favorite(_find_favorite_id(storage, favorite_id)):
            raise InternalServerError(description='Favorite could not be removed')
        return base_response(
            code=200,
            status='success',
            message='Favorite removed successfully'
        )

    except NotFound as e:
        return error_response(404, e.description, {'favorite': 'Not found'})
    except InternalServerError as e:
        return error_response(500, e.description)
    except Exception as e:
        logger.exception('Removing favorite failed')
        return error_response(500, 'Internal server error', str(e))


@favorites_bp.route('', methods=['DELETE'])
def clear_favorites():
    try:
        if not get_storage().clear_favorites():
            raise InternalServerError(description='Favorites could not be cleared')
        return base_response(
            code=200,
            status='success',
            message='Favorites cleared successfully'
        )
    except InternalServerError as e:
        return error_response(500, e.description)
    except Exception as e:
        logger.exception('Clearing favorites failed')
        return error_response(500, 'Internal server error', str(e))
