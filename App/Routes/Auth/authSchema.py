from marshmallow import Schema, fields, validate

MIN_PASSWORD_LENGTH = 6
PASSWORD_LENGTH_MESSAGE = 'Password must be at least 6 characters'


class RegisterSchema(Schema):
    email = fields.Email(required=True)
    password = fields.Str(required=True, load_only=True,
                          validate=validate.Length(min=MIN_PASSWORD_LENGTH, error=PASSWORD_LENGTH_MESSAGE))
    first_name = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    last_name = fields.Str(required=True, validate=validate.Length(min=1, max=100))


class LoginSchema(Schema):
    email = fields.Email(required=True)
    password = fields.Str(required=True, load_only=True)


class UserSchema(Schema):
    id = fields.Str(dump_only=True)
    email = fields.Email()
    first_name = fields.Str()
    last_name = fields.Str()
    preferences = fields.Dict()
    favorites = fields.List(fields.Raw())
    created_at = fields.Str(dump_only=True)
    updated_at = fields.Str(dump_only=True)


class ProfileUpdateSchema(Schema):
    email = fields.Email()
    first_name = fields.Str(validate=validate.Length(min=1, max=100))
    last_name = fields.Str(validate=validate.Length(min=1, max=100))
    preferences = fields.Dict(keys=fields.Str())


class ChangePasswordSchema(Schema):
    old_password = fields.Str(required=True, load_only=True)
    new_password = fields.Str(required=True, load_only=True,
                              validate=validate.Length(min=MIN_PASSWORD_LENGTH, error=PASSWORD_LENGTH_MESSAGE))
