import logging

from flask import Blueprint, request
from marshmallow import ValidationError

from ...Utils.Response import base_response, error_response
from ..Context import get_source
from .weatherSchema import ForecastSchema, WeatherSchema

logger = logging.getLogger(__name__)

weather_bp = Blueprint('weather', __name__, url_prefix='/weather')


@weather_bp.route('', methods=['GET'])
def get_current_weather():
    try:
        params = WeatherSchema().load(request.args.to_dict())
        weather = get_source().get_current_weather(params['location'], params['units'])
        return base_response(
            code=200,
            status='success',
            message='Weather retrieved successfully',
            data=weather
        )
    except ValidationError as e:
        return error_response(400, 'Validation error', e.messages)
    except ValueError as e:
        return error_response(400, str(e), {'location': str(e)})
    except Exception as e:
        logger.exception('Reading weather failed')
        return error_response(500, 'Internal server error', str(e))


@weather_bp.route('/forecast', methods=['GET'])
def get_weather_forecast():
    try:
        params = ForecastSchema().load(request.args.to_dict())
        forecast = get_source().get_weather_forecast(params['location'], params['units'], days=params['days'])
        return base_response(
            code=200,
            status='success',
            message='Forecast retrieved successfully',
            data=forecast
        )
    except ValidationError as e:
        return error_response(400, 'Validation error', e.messages)
    except ValueError as e:
        return error_response(400, str(e), {'location': str(e)})
    except Exception as e:
        logger.exception('Reading forecast failed')
        return error_response(500, 'Internal server error', str(e))
