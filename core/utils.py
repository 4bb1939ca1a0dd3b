"""
Shared helpers for the API: body parsing, field validation, value
serialization (camelCase JSON, decimals as strings).
"""
import json
import uuid
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from django.utils import timezone
from django.utils.dateparse import parse_datetime as _parse_datetime

from core.exceptions import ValidationFailed

TWO_PLACES = Decimal('0.01')


def round2(value):
    return Decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


# --- Serialization ---

def money(v):
    """Decimal -> string with 2 places; None stays None."""
    if v is None:
        return None
    return str(round2(v))


def iso(dt):
    return dt.isoformat() if dt else None


# --- Request parsing ---

def parse_json_body(request):
    """Return the JSON object in request.body ({} when empty). Raises ValidationFailed."""
    if not request.body:
        return {}
    try:
        body = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ValidationFailed('Invalid JSON')
    if not isinstance(body, dict):
        raise ValidationFailed('JSON body must be an object')
    return body


def require_text(data, key, label=None):
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValidationFailed(f'{label or key} is required')
    return value.strip()


def parse_decimal(value, field, places=2, max_digits=10, minimum=None, exclusive_minimum=False):
    """
    Parse a JSON number or numeric string into a Decimal quantized to ``places``.
    Rejects booleans, NaN/Infinity and values outside the column's precision.
    """
    if value is None or value == '' or isinstance(value, bool):
        raise ValidationFailed(f'{field} must be a number')
    try:
        d = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationFailed(f'{field} must be a number')
    if not d.is_finite():
        raise ValidationFailed(f'{field} must be a number')
    if abs(d) >= Decimal(10) ** (max_digits - places):
        raise ValidationFailed(f'{field} is too large')
    d = d.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    if minimum is not None:
        if exclusive_minimum and d <= minimum:
            raise ValidationFailed(f'{field} must be greater than {minimum}')
        if not exclusive_minimum and d < minimum:
            raise ValidationFailed(f'{field} must be at least {minimum}')
    return d


def parse_positive_int(value, field, maximum=None):
    if isinstance(value, bool):
        raise ValidationFailed(f'{field} must be a whole number of at least 1')
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if not isinstance(value, int) or value < 1:
        raise ValidationFailed(f'{field} must be a whole number of at least 1')
    if maximum is not None and value > maximum:
        raise ValidationFailed(f'{field} must be at most {maximum}')
    return value


def parse_timestamp(value, field):
    """ISO 8601 string -> aware datetime (naive input is taken as current timezone)."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationFailed(f'{field} is required')
    try:
        dt = _parse_datetime(value.strip().replace('Z', '+00:00'))
    except ValueError:
        dt = None
    if dt is None:
        raise ValidationFailed(f'{field} must be an ISO 8601 datetime')
    if timezone.is_naive(dt):
        dt = timezone.make_aware(dt)
    return dt


def parse_uuid(value, field):
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        raise ValidationFailed(f'{field} must be a valid id')


def parse_bool(value, field):
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ('true', '1'):
        return True
    if isinstance(value, str) and value.lower() in ('false', '0'):
        return False
    raise ValidationFailed(f'{field} must be true or false')


def parse_choice(value, choices, field):
    if value not in choices.values:
        raise ValidationFailed(f'{field} must be one of: {", ".join(choices.values)}')
    return value

