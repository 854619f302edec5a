import logging

from flask import Blueprint, request
from marshmallow import ValidationError

from ...Planner.Guides import get_guide, search_guides
from ...Utils.Response import base_response, error_response
from .guideSchema import GuideSearchSchema

logger = logging.getLogger(__name__)

guides_bp = Blueprint('guides', __name__, url_prefix='/guides')


@guides_bp.route('', methods=['GET'])
def list_guides():
    try:
        params = GuideSearchSchema().load(request.args.to_dict())
        guides = search_guides(params['q'])
        return base_response(
            code=200,
            status='success',
            message='Guides retrieved successfully',
            data={'guides': guides, 'count': len(guides)}
        )
    except ValidationError as e:
        return error_response(400, 'Validation error', e.messages)
    except Exception as e:
        logger.exception('Searching guides failed')
        return error_response(500, 'Internal server error', str(e))


@guides_bp.route('/<path:city>', methods=['GET'])
def get_city_guide(city):
    try:
        guide = get_guide(city)
        if guide['is_default']:
            logger.info(f"No guide for {city}, using the generic one")
        return base_response(
            code=200,
            status='success',
            message='Guide retrieved successfully',
            data=guide
        )
    except Exception as e:
        logger.exception('Reading guide failed')
        return error_response(500, 'Internal server error', str(e))
