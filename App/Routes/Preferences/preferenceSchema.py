from marshmallow import INCLUDE, Schema, fields, validate

from ...Utils.Validation import CATEGORIES


class DefaultFiltersSchema(Schema):
    min_rating = fields.Float(validate=validate.Range(min=0.0, max=5.0))
    max_price = fields.Float(allow_none=True, validate=validate.Range(min=0))
    categories = fields.List(fields.Str(validate=validate.OneOf(CATEGORIES)))


class PreferencesUpdateSchema(Schema):
    class Meta:
        unknown = INCLUDE

    theme = fields.Str(validate=validate.OneOf(['light', 'dark']))
    currency = fields.Str(validate=validate.Length(equal=3))
    language = fields.Str(validate=validate.Length(min=2, max=5))
    distance_unit = fields.Str(validate=validate.OneOf(['km', 'mi']))
    default_filters = fields.Nested(DefaultFiltersSchema)
    notifications = fields.Bool()
    auto_save_trips = fields.Bool()
    results_per_page = fields.Int(strict=True, validate=validate.Range(min=1, max=100))


class PreferenceValueSchema(Schema):
    value = fields.Raw(required=True, allow_none=True)
