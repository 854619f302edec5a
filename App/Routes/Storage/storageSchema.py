from marshmallow import EXCLUDE, Schema, fields


class ImportSchema(Schema):
    """Shape of an exported data file. Every section is optional."""

    class Meta:
        unknown = EXCLUDE

    favorites = fields.List(fields.Dict())
    search_history = fields.List(fields.Dict())
    preferences = fields.Dict(keys=fields.Str())
    export_date = fields.Str()
