from marshmallow import Schema, fields


class GuideSearchSchema(Schema):
    q = fields.Str(load_default='')
