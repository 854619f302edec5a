from marshmallow import Schema, fields

from ...Utils.Validation import DestinationId


class ItineraryItemSchema(Schema):
    id = DestinationId(required=True)


class ItinerarySchema(Schema):
    id = fields.Str(dump_only=True)
    location = fields.Str(allow_none=True)
    items = fields.List(fields.Dict())
    created_date = fields.Str()
    estimated_days = fields.Int()
