import logging

from flask import Blueprint, request
from marshmallow import ValidationError
from werkzeug.exceptions import BadRequest, Conflict, NotFound

from ...Planner.Controller import InvalidStateError, SearchState
from ...Utils.Response import base_response, error_response
from ...Utils.Validation import validate_destination_input
from ..Context import candidate_ids, get_controller, get_source
from .destinationSchema import (ExploreSchema, MarkerSchema, ResultViewSchema, ReviewsSchema,
                                SearchSchema)

logger = logging.getLogger(__name__)

destinations_bp = Blueprint('destinations', __name__, url_prefix='/destinations')


@destinations_bp.route('/search', methods=['GET'])
def search_destinations():
    try:
        params = SearchSchema().load(request.args.to_dict())
        validation = validate_destination_input(params['query'])
        if not validation.is_valid:
            raise BadRequest(description=validation.error)

        controller = get_controller()
        if not controller.search(params['query'], params['category']):
            if controller.state == SearchState.ERROR_SHOWN:
                return error_response(502, controller.message or 'Error searching destinations')
            raise Conflict(description='Search was superseded by a newer one')

        return base_response(
            code=200,
            status='success',
            message='Destinations retrieved successfully',
            data=controller.snapshot()
        )

    except ValidationError as e:
        return error_response(400, 'Validation error', e.messages)
    except BadRequest as e:
        return error_response(400, e.description, {'query': e.description})
    except Conflict as e:
        return error_response(409, e.description)
    except Exception as e:
        logger.exception('Destination search failed')
        return error_response(500, 'Internal server error', str(e))


@destinations_bp.route('', methods=['GET'])
def get_current_results():
    try:
        params = ResultViewSchema().load(request.args.to_dict())
        controller = get_controller()

        if controller.state != SearchState.RESULTS_SHOWN:
            return base_response(
                code=200,
                status='success',
                message='No results to show',
                data=controller.snapshot()
            )

        if 'budget' in params:
            if controller.apply_budget(params['budget']) is None:
                raise BadRequest(description=controller.message)
        elif any(key in params for key in ('category', 'min_rating', 'location', 'price_level')):
            controller.apply_filter(
                params.get('category', 'all'),
                min_rating=params.get('min_rating'),
                location=params.get('location'),
                price_level=params.get('price_level'),
            )

        if 'sort_by' in params and controller.apply_sort(params['sort_by'], params['order']) is None:
            raise BadRequest(description=controller.message)

        return base_response(
            code=200,
            status='success',
            message='Destinations retrieved successfully',
            data=controller.snapshot()
        )

    except ValidationError as e:
        return error_response(400, 'Validation error', e.messages)
    except BadRequest as e:
        return error_response(400, e.description, {'parameters': e.description})
    except InvalidStateError as e:
        return error_response(409, str(e))
    except Exception as e:
        logger.exception('Reading results failed')
        return error_response(500, 'Internal server error', str(e))


@destinations_bp.route('/markers', methods=['GET'])
def get_markers():
    try:
        overlay = get_controller().map_markers()
        markers = MarkerSchema(many=True).dump(overlay['markers'])
        return base_response(
            code=200,
            status='success',
            message='Markers retrieved successfully',
            data={'markers': markers, 'bounds': overlay['bounds'], 'count': len(markers)}
        )
    except Exception as e:
        logger.exception('Building markers failed')
        return error_response(500, 'Internal server error', str(e))


@destinations_bp.route('/suggestions', methods=['GET'])
def get_suggestions():
    try:
        suggestions = get_controller().suggest(request.args.get('q', ''))
        return base_response(
            code=200,
            status='success',
            message='Suggestions retrieved successfully',
            data={'suggestions': suggestions}
        )
    except Exception as e:
        logger.exception('Building suggestions failed')
        return error_response(500, 'Internal server error', str(e))


@destinations_bp.route('/<destination_id>/favorite', methods=['POST'])
def toggle_favorite(destination_id):
    try:
        controller = get_controller()
        for candidate in candidate_ids(destination_id):
            favorited = controller.toggle_favorite(candidate)
            if favorited is not None:
                return base_response(
                    code=200,
                    status='success',
                    message=controller.message or 'Favorite toggled',
                    data={'id': candidate, 'favorited': favorited}
                )
        raise NotFound(description='Destination not found')

    except NotFound as e:
        return error_response(404, e.description, {'destination': 'Not found'})
    except Exception as e:
        logger.exception('Toggling favorite failed')
        return error_response(500, 'Internal server error', str(e))


@destinations_bp.route('/top-rated', methods=['GET'])
def get_top_rated():
    try:
        params = ExploreSchema().load(request.args.to_dict())
        destinations = get_source().get_top_rated(params['limit'])
        return base_response(
            code=200,
            status='success',
            message='Top rated destinations retrieved successfully',
            data={'destinations': destinations, 'count': len(destinations)}
        )
    except ValidationError as e:
        return error_response(400, 'Validation error', e.messages)
    except Exception as e:
        logger.exception('Reading top rated destinations failed')
        return error_response(500, 'Internal server error', str(e))


@destinations_bp.route('/trending', methods=['GET'])
def get_trending():
    try:
        params = ExploreSchema().load(request.args.to_dict())
        destinations = get_source().get_trending(params['limit'])
        return base_response(
            code=200,
            status='success',
            message='Trending destinations retrieved successfully',
            data={'destinations': destinations, 'count': len(destinations)}
        )
    except ValidationError as e:
        return error_response(400, 'Validation error', e.messages)
    except Exception as e:
        logger.exception('Reading trending destinations failed')
        return error_response(500, 'Internal server error', str(e))


@destinations_bp.route('/<destination_id>', methods=['GET'])
def get_destination_details(destination_id):
    try:
        source = get_source()
        for candidate in candidate_ids(destination_id):
            details = source.get_destination_details(candidate)
            if details is not None:
                return base_response(
                    code=200,
                    status='success',
                    message='Destination retrieved successfully',
                    data=details
                )
        raise NotFound(description='Destination not found')

    except NotFound as e:
        return error_response(404, e.description, {'destination': 'Not found'})
    except Exception as e:
        logger.exception('Reading destination details failed')
        return error_response(500, 'Internal server error', str(e))


@destinations_bp.route('/<destination_id>/reviews', methods=['GET'])
def get_destination_reviews(destination_id):
    try:
        params = ReviewsSchema().load(request.args.to_dict())
        source = get_source()
        for candidate in candidate_ids(destination_id):
            reviews = source.get_reviews(candidate, limit=params['limit'])
            if reviews is not None:
                return base_response(
                    code=200,
                    status='success',
                    message='Reviews retrieved successfully',
                    data={'id': candidate, 'reviews': reviews, 'count': len(reviews)}
                )
        raise NotFound(description='Destination not found')

    except ValidationError as e:
        return error_response(400, 'Validation error', e.messages)
    except NotFound as e:
        return error_response(404, e.description, {'destination': 'Not found'})
    except Exception as e:
        logger.exception('Reading reviews failed')
        return error_response(500, 'Internal server error', str(e))
