from marshmallow import Schema, fields, validate

from ...Utils.Destinations import SORT_ORDERS
from ...Utils.Validation import CATEGORIES, PRICE_LEVELS

SORTABLE_FIELDS = ('rating', 'reviews', 'name', 'category', 'distance')


class SearchSchema(Schema):
    query = fields.Str(required=True)
    category = fields.Str(load_default='all', validate=validate.OneOf(('all',) + CATEGORIES))


class ResultViewSchema(Schema):
    category = fields.Str(validate=validate.OneOf(('all',) + CATEGORIES))
    min_rating = fields.Float(validate=validate.Range(min=0, max=5))
    location = fields.Str()
    price_level = fields.Str(validate=validate.OneOf(PRICE_LEVELS))
    sort_by = fields.Str(validate=validate.OneOf(SORTABLE_FIELDS))
    order = fields.Str(load_default='desc', validate=validate.OneOf(SORT_ORDERS))
    budget = fields.Str()


class MarkerSchema(Schema):
    id = fields.Raw(required=True)
    name = fields.Str(required=True)
    category = fields.Str(allow_none=True)
    lat = fields.Float(required=True)
    lng = fields.Float(required=True)
    color = fields.Str(required=True)


class ReviewsSchema(Schema):
    limit = fields.Int(load_default=10, validate=validate.Range(min=1, max=50))


class ExploreSchema(Schema):
    limit = fields.Int(load_default=6, validate=validate.Range(min=1, max=20))
