import logging
import math
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from marshmallow import INCLUDE, Schema, ValidationError, fields, validate

logger = logging.getLogger(__name__)

DESTINATION_PATTERN = re.compile(r"^[a-zA-Z\s\-']+$")
MIN_DESTINATION_LENGTH = 2
MAX_BUDGET = 1000000
CATEGORIES = ('attraction', 'hotel', 'restaurant', 'museum', 'park')
PRICE_LEVELS = ('$', '$$', '$$$')


@dataclass
class ValidationResult:
    is_valid: bool
    error: Optional[str] = None
    data: Any = None


class DestinationId(fields.Field):
    """Identifier that may be either a string or an integer."""

    def _deserialize(self, value, attr, data, **kwargs):
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise ValidationError('Id must be a string or an integer.')
        if isinstance(value, str) and not value.strip():
            raise ValidationError('Id cannot be empty.')
        return value


class CoordinatesSchema(Schema):
    lat = fields.Float(required=True, validate=validate.Range(min=-90, max=90))
    lng = fields.Float(required=True, validate=validate.Range(min=-180, max=180))


class DestinationSchema(Schema):
    class Meta:
        unknown = INCLUDE

    id = DestinationId(required=True)
    name = fields.Str(required=True)
    category = fields.Str(required=True, validate=validate.Length(min=1))
    location = fields.Str(required=True)
    rating = fields.Float(required=True, validate=validate.Range(min=0.0, max=5.0))
    reviews = fields.Int(required=True, strict=True, validate=validate.Range(min=0))
    description = fields.Str(required=True)
    address = fields.Str(required=True)
    price_level = fields.Str(allow_none=True)
    opening_hours = fields.Str(allow_none=True)
    coordinates = fields.Nested(CoordinatesSchema, allow_none=True)


destination_schema = DestinationSchema()


def validate_destination_input(text):
    if not isinstance(text, str) or not text.strip():
        return ValidationResult(False, 'Please enter a destination name')
    if len(text.strip()) < MIN_DESTINATION_LENGTH:
        return ValidationResult(False, 'Destination must be at least 2 characters')
    if not DESTINATION_PATTERN.match(text):
        return ValidationResult(False, 'Destination can only contain letters, spaces, hyphens, and apostrophes')
    return ValidationResult(True)


def validate_budget(value):
    if isinstance(value, bool):
        return ValidationResult(False, 'Please enter a valid budget amount')
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return ValidationResult(False, 'Please enter a valid budget amount')
    if math.isnan(amount) or amount <= 0:
        return ValidationResult(False, 'Please enter a valid budget amount')
    if amount > MAX_BUDGET:
        return ValidationResult(False, 'Budget amount is too high')
    return ValidationResult(True, data=amount)


def _parse_date(value):
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return fields.Date().deserialize(value)
    except ValidationError:
        # Accept full timestamps; the time of day is irrelevant.
        return fields.DateTime().deserialize(value).date()


def validate_date(value, today=None):
    """Check that a travel date is present and not in the past.

    `value` may be a date, a datetime or an ISO 8601 string. `today`
    defaults to the current local date.
    """
    if value is None or value == '':
        return ValidationResult(False, 'Please select a date')
    try:
        travel_date = _parse_date(value)
    except ValidationError:
        return ValidationResult(False, 'Please enter a valid date')

    today = today or date.today()
    if travel_date < today:
        return ValidationResult(False, 'Travel date cannot be in the past')
    return ValidationResult(True, data=travel_date)


def validate_rating(value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return 0 <= value <= 5


def validate_destination_record(record):
    if not isinstance(record, dict):
        return ValidationResult(False, 'Destination must be an object')
    try:
        loaded = destination_schema.load(record)
    except ValidationError as e:
        return ValidationResult(False, 'Destination missing required fields', data=e.messages)
    return ValidationResult(True, data=loaded)


def parse_destination_records(items):
    """Return the well-formed destination records from `items`.

    Malformed records are logged and dropped.
    """
    if not isinstance(items, list):
        logger.error('Destination data must be a list, got %s', type(items).__name__)
        return []

    records = []
    for item in items:
        result = validate_destination_record(item)
        if not result.is_valid:
            logger.warning(f"Skipping malformed destination record: {result.data or result.error}")
            continue
        records.append(result.data)
    return records
