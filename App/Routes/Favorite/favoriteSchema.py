from marshmallow import INCLUDE, Schema, ValidationError, fields, validate, validates

from ...Utils.Validation import DestinationSchema


class FavoriteSchema(DestinationSchema):
    added_date = fields.Str(dump_only=True)
    updated_date = fields.Str(dump_only=True)


class FavoriteUpdateSchema(Schema):
    class Meta:
        unknown = INCLUDE

    notes = fields.Str(allow_none=True, validate=validate.Length(max=2000))
    visited = fields.Bool()
    visit_date = fields.Date(allow_none=True)
    tags = fields.List(fields.Str(), allow_none=True)

    @validates('tags')
    def validate_tags(self, value, **kwargs):
        if value is not None and len(value) > 20:
            raise ValidationError('At most 20 tags are allowed')

    def load_updates(self, data):
        updates = self.load(data)
        for protected in ('id', 'added_date', 'updated_date'):
            updates.pop(protected, None)
        if updates.get('visit_date') is not None:
            updates['visit_date'] = updates['visit_date'].isoformat()
        return updates
