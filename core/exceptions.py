"""
Domain errors raised by services and guards.

Each error carries the HTTP status the API answers with; the error boundary
in posadmin.middleware turns them into ``{"message": ...}`` responses.
"""


class PosError(Exception):
    status_code = 400
    default_message = 'Request failed'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(PosError):
    status_code = 401
    default_message = 'Unauthorized'


class Forbidden(PosError):
    status_code = 403
    default_message = 'Insufficient permissions'


class ValidationFailed(PosError):
    status_code = 400
    default_message = 'Invalid request'


class NotFound(PosError):
    status_code = 404
    default_message = 'Not found'


class Conflict(PosError):
    status_code = 409
    default_message = 'Conflict'


class InvalidTransition(Conflict):
    """Requested state is not a legal successor of the current state."""

    def __init__(self, entity, current, requested):
        self.entity = entity
        self.current = current
        self.requested = requested
        super().__init__(f'Invalid {entity} transition from {current} to {requested}')


class SequenceError(PosError):
    """A stored identifier could not be parsed while seeding a counter."""

    status_code = 500
    default_message = 'Sequence state is corrupt'
