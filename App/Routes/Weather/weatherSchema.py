from marshmallow import Schema, fields, validate

from ...Planner.DataSource import WEATHER_UNITS


class WeatherSchema(Schema):
    location = fields.Str(required=True, validate=validate.Length(min=1))
    units = fields.Str(load_default='metric', validate=validate.OneOf(WEATHER_UNITS))


class ForecastSchema(WeatherSchema):
    days = fields.Int(load_default=5, validate=validate.Range(min=1, max=7))
