import logging

from flask import Blueprint, request
from marshmallow import ValidationError
from werkzeug.exceptions import BadRequest, NotFound

from ...Utils.Response import base_response, error_response
from ..Context import get_controller, get_itineraries
from .itinerarySchema import ItineraryItemSchema, ItinerarySchema

logger = logging.getLogger(__name__)

itinerary_bp = Blueprint('itinerary', __name__)


@itinerary_bp.route('/itinerary/items', methods=['GET'])
def get_selected_items():
    items = get_controller().selected_items
    return base_response(
        code=200,
        status='success',
        message='Itinerary items retrieved successfully',
        data={'items': items, 'count': len(items)}
    )


@itinerary_bp.route('/itinerary/items', methods=['POST'])
def add_item():
    try:
        data = ItineraryItemSchema().load(request.get_json(silent=True) or {})
        controller = get_controller()
        if not controller.add_to_itinerary(data['id']):
            raise BadRequest(description=controller.message or 'Item could not be added')
        return base_response(
            code=201,
            status='success',
            message=controller.message,
            data={'items': controller.selected_items, 'count': len(controller.selected_items)}
        )
    except ValidationError as e:
        return error_response(400, 'Validation error', e.messages)
    except BadRequest as e:
        return error_response(400, e.description, {'item': e.description})
    except Exception as e:
        logger.exception('Adding itinerary item failed')
        return error_response(500, 'Internal server error', str(e))


@itinerary_bp.route('/itinerary/items/<int:index>', methods=['DELETE'])
def remove_item(index):
    try:
        controller = get_controller()
        if not controller.remove_from_itinerary(index):
            raise NotFound(description='Itinerary item not found')
        return base_response(
            code=200,
            status='success',
            message='Itinerary item removed successfully',
            data={'items': controller.selected_items, 'count': len(controller.selected_items)}
        )
    except NotFound as e:
        return error_response(404, e.description, {'item': 'Not found'})
    except Exception as e:
        logger.exception('Removing itinerary item failed')
        return error_response(500, 'Internal server error', str(e))


@itinerary_bp.route('/itinerary/items', methods=['DELETE'])
def clear_items():
    try:
        get_controller().clear_selection()
        return base_response(
            code=200,
            status='success',
            message='Itinerary cleared',
            data={'items': [], 'count': 0}
        )
    except Exception as e:
        logger.exception('Clearing itinerary items failed')
        return error_response(500, 'Internal server error', str(e))


@itinerary_bp.route('/itinerary', methods=['POST'])
def create_itinerary():
    try:
        controller = get_controller()
        itinerary = controller.create_itinerary()
        if itinerary is None:
            if controller.message_level == 'error':
                return error_response(500, controller.message)
            raise BadRequest(description=controller.message)
        return base_response(
            code=201,
            status='success',
            message=controller.message,
            data=ItinerarySchema().dump(itinerary)
        )
    except BadRequest as e:
        return error_response(400, e.description, {'itinerary': e.description})
    except Exception as e:
        logger.exception('Creating itinerary failed')
        return error_response(500, 'Internal server error', str(e))


@itinerary_bp.route('/itineraries', methods=['GET'])
def get_itineraries_list():
    try:
        itineraries = get_itineraries().get_itineraries()
        return base_response(
            code=200,
            status='success',
            message='Itineraries retrieved successfully',
            data={'itineraries': ItinerarySchema(many=True).dump(itineraries), 'count': len(itineraries)}
        )
    except Exception as e:
        logger.exception('Reading itineraries failed')
        return error_response(500, 'Internal server error', str(e))


@itinerary_bp.route('/itineraries/<itinerary_id>', methods=['GET'])
def get_itinerary(itinerary_id):
    try:
        itinerary = get_itineraries().get_itinerary(itinerary_id)
        if itinerary is None:
            raise NotFound(description='Itinerary not found')
        return base_response(
            code=200,
            status='success',
            message='Itinerary retrieved successfully',
            data=ItinerarySchema().dump(itinerary)
        )
    except NotFound as e:
        return error_response(404, e.description, {'itinerary': 'Not found'})
    except Exception as e:
        logger.exception('Reading itinerary failed')
        return error_response(500, 'Internal server error', str(e))


@itinerary_bp.route('/itineraries/<itinerary_id>', methods=['DELETE'])
def delete_itinerary(itinerary_id):
    try:
        if not get_itineraries().delete_itinerary(itinerary_id):
            raise NotFound(description='Itinerary not found')
        return base_response(
            code=200,
            status='success',
            message='Itinerary deleted successfully'
        )
    except NotFound as e:
        return error_response(404, e.description, {'itinerary': 'Not found'})
    except Exception as e:
        logger.exception('Deleting itinerary failed')
        return error_response(500, 'Internal server error', str(e))
